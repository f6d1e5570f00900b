"""
pytest integration for the explorer harness.

Enable it from a conftest:

    pytest_plugins = ["explorer_harness.pytest_plugin"]

`launch_explorer` starts explorers for the duration of one test and closes
them afterwards with the test's real outcome, so explorer.log is written to
the diagnostics directory (the test's tmp_path unless configured) only for
failing tests. Clones made inside the test must be closed by the test.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

import pytest

from explorer_harness.config import ExplorerConfig
from explorer_harness.explorer import Explorer

LaunchExplorer = Callable[..., Explorer]


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"explorer_report_{report.when}", report)


def node_failed(node: pytest.Item) -> bool:
    """True if the setup or call phase of `node` failed so far."""
    for when in ("setup", "call"):
        report = getattr(node, f"explorer_report_{when}", None)
        if report is not None and report.failed:
            return True
    return False


@pytest.fixture
def explorer_config() -> ExplorerConfig:
    return ExplorerConfig.from_env()


@pytest.fixture
def launch_explorer(request, explorer_config, tmp_path):
    launched: List[Explorer] = []

    def _launch(node_address: str, logs_dir: Optional[Path] = None) -> Explorer:
        explorer = Explorer.launch(
            node_address,
            logs_dir=logs_dir or explorer_config.logs_dir or tmp_path,
            config=explorer_config,
        )
        launched.append(explorer)
        return explorer

    yield _launch

    failed = node_failed(request.node)
    for explorer in launched:
        explorer.close(failed=failed)
