"""Tests for the scan orchestrator."""

from typing import Any

import pytest

from regscan.errors import LaunchError, NavigationError, RuleEngineError, ScanError
from regscan.modules.audit import FAIL, PASS, ScanConfiguration, ScanOrchestrator
from regscan.modules.browser import DriverConfig, SessionDriver, Viewport
from regscan.modules.dom import FALLBACK_NODE_ID
from regscan.modules.engine import AccessibilityRuleEngine

PAGE = """<!DOCTYPE html>
<html lang="en"><head><title>Shop</title></head>
<body><h1>Shop</h1></body></html>
"""


class FakeEngine(AccessibilityRuleEngine):
    name = "fake-engine"

    def __init__(self, violations=(), error: Exception | None = None):
        self.violations = list(violations)
        self.error = error
        self.runs = 0

    async def run(self, driver):
        self.runs += 1
        if self.error is not None:
            raise self.error
        return self.violations


class FakeSessionDriver:
    """Driver double with per-step failure injection."""

    def __init__(self, config: DriverConfig):
        self.config = config
        self.calls: list[str] = []
        self.acquire_error: Exception | None = None
        self.navigate_error: Exception | None = None
        self.capture_error: Exception | None = None
        self.evaluate_result: Any = None
        self.evaluate_error: Exception | None = None
        self.evaluate_args: list[Any] = []
        self.release_count = 0

    async def acquire(self) -> None:
        self.calls.append("acquire")
        if self.acquire_error:
            raise self.acquire_error

    async def navigate(self, url: str) -> None:
        self.calls.append(f"navigate {url}")
        if self.navigate_error:
            raise self.navigate_error

    async def capture_content(self) -> str:
        self.calls.append("capture")
        if self.capture_error:
            raise self.capture_error
        return PAGE

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluate_args.append(arg)
        if self.evaluate_error:
            raise self.evaluate_error
        return self.evaluate_result

    async def release(self) -> None:
        self.release_count += 1


class BrokenValidator:
    def validate(self, markup: str):
        raise RuntimeError("parser exploded")


@pytest.fixture
def drivers() -> list[FakeSessionDriver]:
    return []


@pytest.fixture
def driver_factory(drivers):
    def _factory(config: DriverConfig) -> FakeSessionDriver:
        driver = FakeSessionDriver(config)
        drivers.append(driver)
        return driver

    return _factory


def _configure_next(drivers: list[FakeSessionDriver], **attrs):
    """Build a factory whose driver gets ``attrs`` applied on creation."""

    def _factory(config: DriverConfig) -> FakeSessionDriver:
        driver = FakeSessionDriver(config)
        for key, value in attrs.items():
            setattr(driver, key, value)
        drivers.append(driver)
        return driver

    return _factory


class TestScanConfiguration:
    def test_defaults(self) -> None:
        config = ScanConfiguration(url="https://example.com")
        assert config.headless
        assert config.standard == "national"
        assert config.viewport == Viewport(1280, 720)
        assert not config.silent

    def test_unknown_standard_rejected(self) -> None:
        with pytest.raises(ValueError):
            ScanConfiguration(url="https://example.com", standard="ada")


class TestScan:
    async def test_full_pipeline(self, database, sample_violations, driver_factory, drivers):
        orchestrator = ScanOrchestrator(
            FakeEngine(sample_violations), database, driver_factory=driver_factory
        )
        messages: list[str] = []
        config = ScanConfiguration(
            url="https://example.com", locale="sv-SE", viewport=Viewport(375, 667)
        )

        result = await orchestrator.scan(config, progress=messages.append)

        driver = drivers[0]
        assert driver.calls == ["acquire", "navigate https://example.com", "capture"]
        assert driver.release_count == 1
        assert driver.config.viewport == Viewport(375, 667)
        assert result.url == "https://example.com"
        assert result.locale == "sv"
        assert [r.rule_id for r in result.reports] == [
            "image-alt",
            "keyboard-accessible",
            "experimental-rule",
        ]
        assert result.stats.total == 3
        assert result.score == 45
        assert result.compliance == FAIL
        assert not result.passed
        assert result.html_validation is not None and result.html_validation.valid
        assert result.dom.node_id == FALLBACK_NODE_ID
        assert result.degradations == ()
        assert result.viewport == Viewport(375, 667)
        assert "● [fake-engine] started" in messages
        assert any(m.startswith("✓ [fake-engine] completed: 3 violations") for m in messages)

    async def test_no_violations_passes(self, database, driver_factory) -> None:
        orchestrator = ScanOrchestrator(FakeEngine(), database, driver_factory=driver_factory)
        result = await orchestrator.scan(ScanConfiguration(url="https://example.com"))
        assert result.compliance == PASS
        assert result.passed
        assert result.score == 100
        assert result.timestamp.endswith("+00:00")

    async def test_silent_suppresses_progress(self, database, driver_factory) -> None:
        messages: list[str] = []
        orchestrator = ScanOrchestrator(FakeEngine(), database, driver_factory=driver_factory)
        await orchestrator.scan(
            ScanConfiguration(url="https://example.com", silent=True), progress=messages.append
        )
        assert messages == []

    async def test_flattened_dom_is_attached(self, database, drivers) -> None:
        dom = {"tag": "BODY", "attributes": {"class": "shop"}, "children": [], "shadow": None}
        factory = _configure_next(drivers, evaluate_result=dom)
        orchestrator = ScanOrchestrator(FakeEngine(), database, driver_factory=factory)
        result = await orchestrator.scan(ScanConfiguration(url="https://example.com"))
        assert result.dom.node_id == "vn-0"
        assert result.dom.attributes == {"class": "shop"}

    async def test_flatten_captures_colors_by_default(self, database, driver_factory, drivers):
        orchestrator = ScanOrchestrator(FakeEngine(), database, driver_factory=driver_factory)
        await orchestrator.scan(ScanConfiguration(url="https://example.com"))
        assert drivers[0].evaluate_args == [{"styleProperties": ["color", "background-color"]}]


class TestDegradation:
    async def test_validation_failure_is_recorded(self, database, driver_factory, caplog):
        orchestrator = ScanOrchestrator(
            FakeEngine(), database, driver_factory=driver_factory, validator=BrokenValidator()
        )
        result = await orchestrator.scan(ScanConfiguration(url="https://example.com"))

        assert result.html_validation is None
        assert [(d.stage, d.message) for d in result.degradations] == [
            ("validation", "parser exploded")
        ]
        assert result.compliance == PASS
        assert "validation stage failed" in caplog.text

    async def test_flatten_failure_is_recorded(self, database, drivers) -> None:
        factory = _configure_next(drivers, evaluate_error=RuntimeError("detached frame"))
        orchestrator = ScanOrchestrator(FakeEngine(), database, driver_factory=factory)
        result = await orchestrator.scan(ScanConfiguration(url="https://example.com"))

        assert result.dom is None
        assert result.html_validation is not None
        assert [d.stage for d in result.degradations] == ["dom"]


class TestFailures:
    @pytest.mark.parametrize(
        ("attribute", "error"),
        [
            ("acquire_error", LaunchError("Could not start browser: missing executable")),
            ("navigate_error", NavigationError("https://example.com", 3, "Timeout 60000ms")),
        ],
    )
    async def test_session_errors_become_scan_errors(
        self, database, drivers, attribute, error
    ) -> None:
        factory = _configure_next(drivers, **{attribute: error})
        engine = FakeEngine()
        orchestrator = ScanOrchestrator(engine, database, driver_factory=factory)

        with pytest.raises(ScanError) as excinfo:
            await orchestrator.scan(ScanConfiguration(url="https://example.com"))

        assert excinfo.value.cause is error
        assert str(excinfo.value) == str(error)
        assert drivers[0].release_count == 1
        assert engine.runs == 0

    async def test_rule_engine_error(self, database, driver_factory, drivers) -> None:
        engine = FakeEngine(error=RuleEngineError("axe-core evaluation failed"))
        orchestrator = ScanOrchestrator(engine, database, driver_factory=driver_factory)

        with pytest.raises(ScanError) as excinfo:
            await orchestrator.scan(ScanConfiguration(url="https://example.com"))

        assert isinstance(excinfo.value.cause, RuleEngineError)
        assert drivers[0].release_count == 1

    async def test_unexpected_error_is_wrapped(self, database, drivers) -> None:
        factory = _configure_next(drivers, capture_error=ValueError("bad markup"))
        orchestrator = ScanOrchestrator(FakeEngine(), database, driver_factory=factory)

        with pytest.raises(ScanError, match="Scan of https://example.com failed: bad markup"):
            await orchestrator.scan(ScanConfiguration(url="https://example.com"))
        assert drivers[0].release_count == 1

    async def test_real_driver_navigation_exhaustion(
        self, database, fake_playwright, recording_sleep
    ) -> None:
        fake_playwright.page.goto_errors = [RuntimeError("net::ERR_TIMED_OUT")] * 3

        def factory(config: DriverConfig) -> SessionDriver:
            return SessionDriver(
                config, playwright_factory=fake_playwright.factory(), sleep=recording_sleep
            )

        orchestrator = ScanOrchestrator(FakeEngine(), database, driver_factory=factory)
        with pytest.raises(ScanError) as excinfo:
            await orchestrator.scan(ScanConfiguration(url="https://unreachable.example"))

        assert isinstance(excinfo.value.cause, NavigationError)
        assert excinfo.value.cause.attempts == 3
        assert recording_sleep.delays == [2.0, 2.0]
        assert fake_playwright.stop_count == 1
        assert fake_playwright.browser.close_count == 1
