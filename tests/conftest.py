"""Pytest configuration for the explorer harness."""
import stat
import sys
from pathlib import Path

import pytest

from explorer_harness.config import BootstrapConfig, ExplorerConfig, set_config

pytest_plugins = ["pytester"]

FAKE_EXPLORER_SOURCE = Path(__file__).parent / "fixtures" / "fake_explorer.py"


def pytest_configure():
    # Tests must never pick up a developer's EXPLORER_* environment through the singleton.
    set_config(ExplorerConfig())


@pytest.fixture(scope="session")
def fake_explorer_bin(tmp_path_factory) -> Path:
    """Executable wrapper that runs the fake explorer with this interpreter."""
    path = tmp_path_factory.mktemp("bin") / "fake-explorer"
    path.write_text(f"#!{sys.executable}\n" + FAKE_EXPLORER_SOURCE.read_text())
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def explorer_config(fake_explorer_bin) -> ExplorerConfig:
    return ExplorerConfig(
        binary=str(fake_explorer_bin),
        request_timeout=5.0,
        bootstrap=BootstrapConfig(interval=0.1, max_attempts=100),
    )
