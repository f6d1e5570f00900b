# explorer_harness/bootstrap.py
# Readiness polling for a freshly launched explorer.

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import httpx

from explorer_harness.errors import ErrorCode, ExplorerNotReadyError

logger = logging.getLogger(__name__)

# Lower bound for a single attempt so a zero interval still gets a real attempt.
MIN_ATTEMPT_TIMEOUT = 0.05


class Wait:
    """
    Attempt counter with a wall-clock ceiling of interval * attempts.

    At least one attempt is always allowed; after that the budget ends on
    whichever comes first, the attempt count or the deadline.
    """

    def __init__(
        self,
        interval: float,
        attempts: int,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval = interval
        self.attempts = attempts
        self.current = 0
        self._sleep = sleep
        self._clock = clock
        self.deadline = clock() + interval * attempts

    def remaining(self) -> float:
        return max(0.0, self.deadline - self._clock())

    def timeout_reached(self) -> bool:
        if self.current >= self.attempts:
            return True
        return self.current > 0 and self.remaining() <= 0

    def advance(self) -> None:
        self.current += 1
        if self.timeout_reached():
            return
        pause = min(self.interval, self.remaining())
        if pause > 0:
            self._sleep(pause)


def ping(client: httpx.Client, url: str, timeout: float) -> bool:
    """HEAD `url`; any HTTP response counts as reachable."""
    try:
        client.head(url, timeout=timeout)
    except httpx.HTTPError as e:
        logger.debug(f"Ping {url} failed: {e!r}")
        return False
    return True


def wait_ready(
    url: str,
    interval: float,
    max_attempts: int,
    *,
    strict: bool = False,
    client: Optional[httpx.Client] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """
    Poll `url` until it answers or the attempt budget is spent.

    Returns True as soon as an attempt gets any response. When the budget runs
    out, returns False (best-effort) or, with `strict=True`, raises
    ExplorerNotReadyError.
    """
    owns_client = client is None
    http = client or httpx.Client(trust_env=False)
    wait = Wait(interval, max_attempts, sleep=sleep, clock=clock)

    try:
        while not wait.timeout_reached():
            timeout = max(min(interval, wait.remaining()), MIN_ATTEMPT_TIMEOUT)
            if ping(http, url, timeout):
                logger.info(f"Explorer at {url} ready after {wait.current + 1} attempt(s)")
                return True
            wait.advance()
    finally:
        if owns_client:
            http.close()

    message = f"Explorer at {url} not reachable after {wait.current} attempt(s)"
    if strict:
        raise ExplorerNotReadyError(
            ErrorCode.BOOT_NOT_READY,
            message,
            details={"url": url, "interval": interval, "max_attempts": max_attempts},
        )

    logger.warning(f"{message}; continuing anyway")
    return False
