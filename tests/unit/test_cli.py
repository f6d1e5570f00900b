import pytest

from explorer_harness import cli


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    # setup_logging() reconfigures the root logger, which would leak into other tests.
    monkeypatch.setattr(cli, "setup_logging", lambda config=None: None)


def test_check_schema_exit_codes(tmp_path):
    actual = tmp_path / "actual.graphql"
    expected = tmp_path / "expected.graphql"
    actual.write_text("type Query { tip: Status! }\n")
    expected.write_text("type Query { tip: Status }\n")

    assert cli.main(["check-schema", str(actual), "--expected", str(expected)]) == 1
    assert expected.read_text() == actual.read_text()
    assert cli.main(["check-schema", str(actual), "--expected", str(expected)]) == 0


def test_queries_lists_catalog(capsys):
    assert cli.main(["queries"]) == 0

    out = capsys.readouterr().out
    for name in ("stake_pools", "last_block", "vote_plans", "transaction"):
        assert name in out


def test_check_schema_defaults_to_working_directory_copy(tmp_path, monkeypatch):
    actual = tmp_path / "actual.graphql"
    actual.write_text("type Query { tip: Status! }\n")
    monkeypatch.chdir(tmp_path)

    assert cli.main(["check-schema", str(actual)]) == 1
    assert (tmp_path / "resources" / "explorer" / "graphql" / "schema.graphql").read_text() == actual.read_text()


def test_check_schema_missing_actual_exits_2(tmp_path):
    expected = tmp_path / "expected.graphql"
    expected.write_text("type Query { tip: Status }\n")

    assert cli.main(["check-schema", str(tmp_path / "missing.graphql"), "--expected", str(expected)]) == 2
    assert expected.read_text() == "type Query { tip: Status }\n"
