"""Schema drift check: flag and replace, never fail."""

import logging

import pytest

from explorer_harness.schema import compare_schema

SCHEMA = b"type Query {\n  tip: Status!\n}\n"


def _write(path, content: bytes):
    path.write_bytes(content)
    return path


def test_identical_schemas_are_left_alone(tmp_path, caplog):
    actual = _write(tmp_path / "actual.graphql", SCHEMA)
    expected = _write(tmp_path / "expected.graphql", SCHEMA)
    before = expected.stat().st_mtime_ns

    with caplog.at_level(logging.WARNING, logger="explorer_harness.schema"):
        assert compare_schema(actual, expected) is True

    assert expected.stat().st_mtime_ns == before
    assert expected.read_bytes() == SCHEMA
    assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []


def test_one_byte_difference_overwrites_expected(tmp_path, caplog):
    changed = SCHEMA.replace(b"!", b"?")
    actual = _write(tmp_path / "actual.graphql", changed)
    expected = _write(tmp_path / "expected.graphql", SCHEMA)

    with caplog.at_level(logging.WARNING, logger="explorer_harness.schema"):
        assert compare_schema(actual, expected) is False

    assert expected.read_bytes() == changed
    assert any("commit" in r.getMessage() for r in caplog.records)

    # Second run sees no discrepancy.
    assert compare_schema(actual, expected) is True


def test_missing_expected_copy_is_created(tmp_path):
    actual = _write(tmp_path / "actual.graphql", SCHEMA)
    expected = tmp_path / "resources" / "schema.graphql"

    assert compare_schema(str(actual), str(expected)) is False
    assert expected.read_bytes() == SCHEMA


def test_default_expected_path_is_under_working_directory(tmp_path, monkeypatch):
    actual = _write(tmp_path / "actual.graphql", SCHEMA)
    monkeypatch.chdir(tmp_path)

    assert compare_schema(actual) is False
    assert (tmp_path / "resources" / "explorer" / "graphql" / "schema.graphql").read_bytes() == SCHEMA
    assert compare_schema(actual) is True


def test_missing_actual_schema_raises_and_keeps_expected(tmp_path, caplog):
    expected = _write(tmp_path / "expected.graphql", SCHEMA)

    with caplog.at_level(logging.ERROR, logger="explorer_harness.schema"):
        with pytest.raises(FileNotFoundError, match="introspected schema not found"):
            compare_schema(tmp_path / "nowhere.graphql", expected)

    assert expected.read_bytes() == SCHEMA
    assert any("does not exist" in r.getMessage() for r in caplog.records)
