"""
End-to-end lifecycle against a real (fake) explorer process.

The fake binary is a small HTTP server that accepts the explorer's command
line, so these tests exercise spawn, bootstrap, queries, shared ownership
and diagnostics persistence exactly as a ledger test would.
"""

import logging
import random

import pytest

from explorer_harness.errors import ErrorCode, ExplorerLaunchError
from explorer_harness.explorer import Explorer
from explorer_harness.process import LOG_FILE_NAME
from explorer_harness.wrappers import BlockDate

NODE = "127.0.0.1:18080"


def test_launch_query_and_teardown(explorer_config):
    explorer = Explorer.launch(NODE, config=explorer_config)
    process = explorer.process.process
    try:
        assert process.is_running()

        pools = explorer.stake_pools(5).data.all_stake_pools.nodes()
        assert [p.id for p in pools] == ["pool-a", "pool-b", "pool-c"]

        assert explorer.current_time() == BlockDate(2, 7)
        assert explorer.settings().data.settings.epoch_stability_depth == "10"
    finally:
        assert explorer.close() is True

    assert not process.is_running()
    assert b"fake explorer observing 127.0.0.1:18080" in process.output


def test_failing_scope_persists_logs(explorer_config, tmp_path):
    logs_dir = tmp_path / "logs"

    with pytest.raises(AssertionError):
        with Explorer.launch(NODE, logs_dir=logs_dir, config=explorer_config) as explorer:
            explorer.stake_pools(1)
            assert False, "simulated test failure"

    log = (logs_dir / LOG_FILE_NAME).read_bytes()
    assert b"fake explorer observing" in log
    assert b"query AllStakePools" in log


def test_passing_scope_does_not_persist_logs(explorer_config, tmp_path):
    with Explorer.launch(NODE, logs_dir=tmp_path, config=explorer_config) as explorer:
        explorer.settings()

    assert not (tmp_path / LOG_FILE_NAME).exists()


def test_failing_scope_without_logs_dir_writes_nothing(explorer_config, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    explorer = Explorer.launch(NODE, config=explorer_config)
    clones = [explorer.clone() for _ in range(2)]
    process = explorer.process.process

    with pytest.raises(RuntimeError):
        try:
            raise RuntimeError("simulated failure")
        finally:
            for facade in [explorer] + clones:
                facade.close(failed=True)

    assert not process.is_running()
    assert list(tmp_path.rglob(LOG_FILE_NAME)) == []


def test_process_survives_until_last_clone_is_closed(explorer_config):
    explorer = Explorer.launch(NODE, config=explorer_config)
    facades = [explorer] + [explorer.clone() for _ in range(4)]
    process = explorer.process.process
    random.shuffle(facades)

    for facade in facades[:-1]:
        assert facade.close() is False
        assert process.is_running()

    # Survivors can still query.
    assert facades[-1].current_time() == BlockDate(2, 7)
    assert facades[-1].close() is True
    assert not process.is_running()


def test_unwritable_logs_dir_is_reported_not_raised(explorer_config, tmp_path, caplog):
    not_a_dir = tmp_path / "occupied"
    not_a_dir.write_text("a file where the logs directory should be")

    explorer = Explorer.launch(NODE, logs_dir=not_a_dir, config=explorer_config)
    with caplog.at_level(logging.ERROR, logger="explorer_harness.process"):
        assert explorer.close(failed=True) is True

    assert any("Could not write explorer logs" in r.getMessage() for r in caplog.records)
    assert not explorer.process.process.is_running()


def test_missing_binary_fails_fast(explorer_config, tmp_path):
    from dataclasses import replace

    config = replace(explorer_config, binary=str(tmp_path / "no-such-explorer"))

    with pytest.raises(ExplorerLaunchError) as exc_info:
        Explorer.launch(NODE, config=config)

    assert exc_info.value.code is ErrorCode.LAUNCH_BINARY_NOT_FOUND
