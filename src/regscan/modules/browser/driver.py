"""Playwright-backed browser session with retrying navigation and guaranteed cleanup."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from playwright.async_api import async_playwright

from regscan.errors import LaunchError, NavigationError

from .models import DriverConfig, SessionState
from .network import NetworkIdleMonitor
from .retry import RetryPolicy, retry_async

logger = logging.getLogger(__name__)


class SessionDriver:
    """Own exactly one browser/context/page triple for the lifetime of a scan.

    Use as ``async with SessionDriver(config) as driver`` so the session is
    released on every exit path. ``release`` is idempotent.
    """

    def __init__(
        self,
        config: DriverConfig | None = None,
        playwright_factory: Callable[[], Any] = async_playwright,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config or DriverConfig()
        self._playwright_factory = playwright_factory
        self._sleep = sleep
        self._state = SessionState.IDLE
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None
        self._page: Any = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def page(self) -> Any:
        """The live Playwright page; only valid between acquire and release."""
        if self._page is None:
            raise RuntimeError(f"No page available in state {self._state.value}")
        return self._page

    async def __aenter__(self) -> SessionDriver:
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()

    async def acquire(self) -> None:
        """Start the browser process and open one page."""
        if self._state is not SessionState.IDLE:
            raise RuntimeError(f"Cannot acquire a session in state {self._state.value}")
        self._state = SessionState.LAUNCHING
        cfg = self.config
        try:
            self._playwright = await self._playwright_factory().start()
            self._browser = await self._playwright.chromium.launch(
                headless=cfg.headless,
                args=list(cfg.launch_args),
            )
            self._context = await self._browser.new_context(
                viewport=cfg.viewport.as_dict(),
                user_agent=cfg.user_agent,
                bypass_csp=cfg.bypass_csp,
            )
            self._page = await self._context.new_page()
        except Exception as exc:
            await self._close_resources()
            self._state = SessionState.CLOSED
            raise LaunchError(f"Could not start browser: {exc}") from exc
        self._state = SessionState.READY
        logger.debug("Browser session ready (viewport %s)", cfg.viewport)

    async def navigate(self, url: str) -> None:
        """Load ``url`` with bounded retries, then wait briefly for network quiet."""
        if self._state not in (
            SessionState.READY,
            SessionState.LOADED,
            SessionState.NAVIGATION_FAILED,
        ):
            raise RuntimeError(f"Cannot navigate in state {self._state.value}")
        cfg = self.config
        page = self.page
        self._state = SessionState.NAVIGATING
        monitor = NetworkIdleMonitor(page, concurrency=cfg.idle_concurrency)

        async def goto(attempt: int) -> None:
            logger.debug("Navigating to %s (attempt %d)", url, attempt)
            await page.goto(
                url,
                wait_until=cfg.wait_until,
                timeout=cfg.navigation_timeout * 1000,
            )

        def log_retry(attempt: int, exc: BaseException) -> None:
            logger.warning(
                "Navigation attempt %d/%d to %s failed: %s; retrying in %.1fs",
                attempt,
                cfg.navigation_attempts,
                url,
                exc,
                cfg.retry_backoff,
            )

        try:
            await retry_async(
                goto,
                RetryPolicy(attempts=cfg.navigation_attempts, backoff=cfg.retry_backoff),
                on_failure=lambda attempts, exc: NavigationError(url, attempts, str(exc)),
                on_retry=log_retry,
                sleep=self._sleep,
            )
        except NavigationError:
            monitor.detach()
            self._state = SessionState.NAVIGATION_FAILED
            raise

        try:
            idle = await monitor.wait_for_idle(
                idle_time=cfg.idle_time,
                timeout=cfg.idle_timeout,
            )
            if not idle:
                logger.warning(
                    "Network did not settle within %.0fs for %s; continuing",
                    cfg.idle_timeout,
                    url,
                )
        finally:
            monitor.detach()
        self._state = SessionState.LOADED

    async def capture_content(self) -> str:
        """Return the current serialized markup of the page."""
        return await self.page.content()

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return await self.page.evaluate(expression, arg)

    async def add_script(self, source: str) -> None:
        await self.page.add_script_tag(content=source)

    async def release(self) -> None:
        """Close page, context, browser and the Playwright driver. Safe to call twice."""
        if self._state is SessionState.CLOSED:
            return
        await self._close_resources()
        self._state = SessionState.CLOSED
        logger.debug("Browser session closed")

    async def _close_resources(self) -> None:
        closers = (
            ("context", self._context, "close"),
            ("browser", self._browser, "close"),
            ("playwright", self._playwright, "stop"),
        )
        for label, resource, method in closers:
            if resource is None:
                continue
            try:
                await getattr(resource, method)()
            except Exception:
                logger.warning("Failed to close %s", label, exc_info=True)
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
