"""Test configuration and fixtures for regscan."""

import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from regscan.modules.audit import EnrichedReport, RawNode, RawViolation, ScanResult
from regscan.modules.audit.resolver import ViolationResolver
from regscan.modules.audit.scoring import compute_compliance, compute_score, compute_stats
from regscan.modules.browser import DriverConfig, SessionDriver, Viewport
from regscan.standards import StandardsDatabase

# ---------------------------------------------------------------------------
# Playwright doubles
# ---------------------------------------------------------------------------


class FakePage:
    """Records calls the driver makes against a Playwright page."""

    def __init__(self, html: str = "<!DOCTYPE html><html lang='en'><body></body></html>"):
        self.html = html
        self.listeners: dict[str, list[Any]] = {}
        self.goto_errors: list[Exception] = []
        self.goto_calls: list[tuple[str, dict[str, Any]]] = []
        self.evaluate_results: list[Any] = []
        self.evaluate_calls: list[tuple[str, Any]] = []
        self.scripts: list[str] = []
        self.set_content_calls: list[str] = []
        self.pdf_calls: list[dict[str, Any]] = []

    def on(self, event: str, handler: Any) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Any) -> None:
        self.listeners[event].remove(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        for handler in list(self.listeners.get(event, [])):
            handler(payload)

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.goto_calls.append((url, kwargs))
        if self.goto_errors:
            raise self.goto_errors.pop(0)

    async def content(self) -> str:
        return self.html

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluate_calls.append((expression, arg))
        return self.evaluate_results.pop(0) if self.evaluate_results else None

    async def add_script_tag(self, content: str) -> None:
        self.scripts.append(content)

    async def set_content(self, html: str, **kwargs: Any) -> None:
        self.set_content_calls.append(html)

    async def pdf(self, path: str, **kwargs: Any) -> bytes:
        self.pdf_calls.append({"path": path, **kwargs})
        Path(path).write_bytes(b"%PDF-1.7\n")
        return b"%PDF-1.7\n"


class FakeContext:
    def __init__(self, page: FakePage):
        self.page = page
        self.close_count = 0

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self) -> None:
        self.close_count += 1


class FakeBrowser:
    def __init__(self, context: FakeContext):
        self.context = context
        self.context_kwargs: dict[str, Any] = {}
        self.close_count = 0

    async def new_context(self, **kwargs: Any) -> FakeContext:
        self.context_kwargs = kwargs
        return self.context

    async def close(self) -> None:
        self.close_count += 1


class FakeChromium:
    def __init__(self, browser: FakeBrowser):
        self.browser = browser
        self.launch_error: Exception | None = None
        self.launch_kwargs: dict[str, Any] = {}

    async def launch(self, **kwargs: Any) -> FakeBrowser:
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    """Stands in for the object returned by ``async_playwright().start()``."""

    def __init__(self, page: FakePage | None = None):
        self.page = page or FakePage()
        self.context = FakeContext(self.page)
        self.browser = FakeBrowser(self.context)
        self.chromium = FakeChromium(self.browser)
        self.stop_count = 0

    async def stop(self) -> None:
        self.stop_count += 1

    def factory(self) -> Any:
        """Callable shaped like ``async_playwright``."""
        playwright = self

        class _Starter:
            async def start(self) -> FakePlaywright:
                return playwright

        return _Starter


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    return FakePlaywright()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fast_config() -> DriverConfig:
    """Driver settings that skip the network-idle grace period."""
    return DriverConfig(idle_time=0.0, idle_timeout=0.2)


@pytest.fixture
def make_driver(fake_playwright: FakePlaywright, recording_sleep: RecordingSleep):
    """Build SessionDrivers wired to the fake Playwright stack."""

    def _make(config: DriverConfig | None = None) -> SessionDriver:
        cfg = config or DriverConfig()
        cfg.idle_time = 0.0
        cfg.idle_timeout = 0.2
        return SessionDriver(
            cfg, playwright_factory=fake_playwright.factory(), sleep=recording_sleep
        )

    return _make


@pytest.fixture
def database() -> StandardsDatabase:
    return StandardsDatabase()


@pytest.fixture
def sample_violations() -> list[RawViolation]:
    """One exact match, one tag match and one unknown rule."""
    return [
        RawViolation(
            id="image-alt",
            tags=("wcag2a", "wcag111"),
            help="Images must have alternate text",
            description="Ensures <img> elements have alternate text",
            impact="critical",
            help_url="https://dequeuniversity.com/rules/axe/4.10/image-alt",
            nodes=(RawNode(html='<img src="logo.png">', target=("img",)),),
        ),
        RawViolation(
            id="scrollable-region-focusable",
            tags=("keyboard", "wcag2a"),
            help="Scrollable region must have keyboard access",
            nodes=(RawNode(html='<div class="scroll">', target=(".scroll",)),),
        ),
        RawViolation(
            id="experimental-rule",
            tags=("experimental",),
            help="Experimental check",
            description="Something new",
        ),
    ]


@pytest.fixture
def sample_reports(
    database: StandardsDatabase, sample_violations: list[RawViolation]
) -> list[EnrichedReport]:
    return ViolationResolver(database).resolve(sample_violations, "en")


@pytest.fixture
def sample_result(sample_reports: list[EnrichedReport]) -> ScanResult:
    stats = compute_stats(sample_reports)
    return ScanResult(
        url="https://example.com",
        timestamp="2026-01-01T00:00:00+00:00",
        reports=tuple(sample_reports),
        stats=stats,
        score=compute_score(stats),
        compliance=compute_compliance(stats),
        viewport=Viewport(1280, 720),
    )
