"""Module process: spawn, share and tear down the explorer process."""
#
# PURPOSE:
# Owns the lifecycle of the external explorer binary used by tests.
#
# KEY RESPONSIBILITIES:
# - Spawn the binary pointed at a node, with stdout/stderr captured
# - Share one process between every facade clone via a counted handle
# - Kill it exactly once, when the last reference is released
# - Persist its output to explorer.log when the releasing test failed
#
# INTEGRATION:
# - Used by: explorer_harness.explorer.Explorer
# - Depends on: explorer_harness.errors
#

from __future__ import annotations

import logging
import subprocess
import tempfile
import threading
from pathlib import Path
from typing import IO, List, Optional, Protocol

from explorer_harness.errors import ErrorCode, ExplorerLaunchError, ProcessClosedError

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "explorer.log"


def build_command(binary: str, node_address: str, binding_address: str) -> List[str]:
    """Function build_command."""
    return [
        binary,
        "--node", node_address,
        "--binding-address", binding_address,
        "--log-output", "stdout",
    ]


class Shutdownable(Protocol):
    def shutdown(self, failed: bool) -> bytes: ...


class ExplorerProcess:
    """
    A running explorer binary.

    Output goes to anonymous temporary files rather than pipes, so a chatty
    process can never block on a full pipe buffer while nobody reads it.
    """

    def __init__(
        self,
        popen: subprocess.Popen,
        stdout: IO[bytes],
        stderr: IO[bytes],
        logs_dir: Optional[Path] = None,
    ):
        self.popen = popen
        self.logs_dir = logs_dir
        self._stdout = stdout
        self._stderr = stderr
        self.output: Optional[bytes] = None
        self.errors: Optional[bytes] = None

    @property
    def pid(self) -> int:
        return self.popen.pid

    def is_running(self) -> bool:
        return self.popen.poll() is None

    def shutdown(self, failed: bool) -> bytes:
        """Kill, reap, collect output and persist it if `failed`."""
        if self.output is not None:
            return self.output

        self.popen.kill()
        self.popen.wait()

        self.output = _drain(self._stdout)
        self.errors = _drain(self._stderr)
        logger.info(f"Explorer (pid {self.pid}) terminated with code {self.popen.returncode}")

        if failed and self.logs_dir is not None:
            self._persist(self.output)

        return self.output

    def _persist(self, output: bytes) -> None:
        logger.info(f"persisting explorer logs after failure: {self.logs_dir}")
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            (self.logs_dir / LOG_FILE_NAME).write_bytes(output)
        except OSError as e:
            # Cleanup must never mask the original test failure.
            logger.error(f"Could not write explorer logs to disk: {e}")


def _drain(stream: IO[bytes]) -> bytes:
    try:
        stream.seek(0)
        return stream.read()
    finally:
        stream.close()


class ProcessHandle:
    """
    Reference-counted ownership of one explorer process.

    Starts with one reference. `acquire()` adds one, `release()` drops one;
    the release that brings the count to zero runs the teardown, and only
    that one. The `failed` flag of that final release decides whether
    diagnostics are persisted.
    """

    def __init__(self, process: Shutdownable):
        self._process = process
        self._lock = threading.Lock()
        self._refs = 1
        self._closed = False

    @property
    def process(self) -> Shutdownable:
        return self._process

    @property
    def refs(self) -> int:
        with self._lock:
            return self._refs

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def acquire(self) -> "ProcessHandle":
        with self._lock:
            if self._closed:
                raise ProcessClosedError()
            self._refs += 1
        return self

    def release(self, failed: bool = False) -> bool:
        """Drop one reference. Returns True if this call tore the process down."""
        with self._lock:
            if self._closed:
                logger.warning("release() on an explorer handle that is already closed")
                return False
            self._refs -= 1
            if self._refs > 0:
                return False
            self._closed = True

        self._process.shutdown(failed)
        return True


def launch(
    binary: str,
    node_address: str,
    binding_address: str,
    logs_dir: Optional[Path] = None,
) -> ProcessHandle:
    """
    Start the explorer and return the first reference to it.

    Raises:
        ExplorerLaunchError: the binary is missing or could not be spawned.
    """
    cmd = build_command(binary, node_address, binding_address)
    logger.info(f"Starting explorer: {' '.join(cmd)}")

    stdout = tempfile.TemporaryFile()
    stderr = tempfile.TemporaryFile()
    try:
        popen = subprocess.Popen(cmd, stdout=stdout, stderr=stderr)
    except FileNotFoundError as e:
        stdout.close()
        stderr.close()
        raise ExplorerLaunchError(
            ErrorCode.LAUNCH_BINARY_NOT_FOUND,
            f"failed to execute explorer process: {binary} not found",
            details={"command": cmd},
        ) from e
    except OSError as e:
        stdout.close()
        stderr.close()
        raise ExplorerLaunchError(
            ErrorCode.LAUNCH_SPAWN_FAILED,
            f"failed to execute explorer process: {e}",
            details={"command": cmd},
        ) from e

    logger.info(f"Explorer started. PID: {popen.pid}, binding: {binding_address}")
    return ProcessHandle(ExplorerProcess(popen, stdout, stderr, logs_dir=logs_dir))
