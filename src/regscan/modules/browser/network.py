"""Network quiescence tracking for a Playwright page."""

from __future__ import annotations

import asyncio
import time
from typing import Any


class NetworkIdleMonitor:
    """Count in-flight requests and wait until the page goes quiet.

    The page counts as idle once no more than ``concurrency`` requests have been
    in flight for ``idle_time`` seconds.
    """

    def __init__(self, page: Any, concurrency: int = 2):
        self._page = page
        self._concurrency = concurrency
        self._inflight = 0
        self._quiet_since: float | None = time.monotonic()
        page.on("request", self._on_request)
        page.on("requestfinished", self._on_done)
        page.on("requestfailed", self._on_done)

    @property
    def inflight(self) -> int:
        return self._inflight

    def _on_request(self, _request: Any) -> None:
        self._inflight += 1
        if self._inflight > self._concurrency:
            self._quiet_since = None

    def _on_done(self, _request: Any) -> None:
        self._inflight = max(0, self._inflight - 1)
        if self._inflight <= self._concurrency and self._quiet_since is None:
            self._quiet_since = time.monotonic()

    def detach(self) -> None:
        for event, handler in (
            ("request", self._on_request),
            ("requestfinished", self._on_done),
            ("requestfailed", self._on_done),
        ):
            self._page.remove_listener(event, handler)

    async def wait_for_idle(
        self,
        idle_time: float = 0.5,
        timeout: float = 10.0,
        poll_interval: float = 0.05,
    ) -> bool:
        """Return True once idle, False if ``timeout`` elapsed first."""
        deadline = time.monotonic() + timeout
        while True:
            now = time.monotonic()
            if self._quiet_since is not None and now - self._quiet_since >= idle_time:
                return True
            if now >= deadline:
                return False
            await asyncio.sleep(poll_interval)
