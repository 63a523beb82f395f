"""Coordinator for one end-to-end accessibility scan."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from regscan.errors import LaunchError, NavigationError, RuleEngineError, ScanError
from regscan.modules.browser import DriverConfig, SessionDriver
from regscan.modules.dom import DOMFlattener, FlattenConfig
from regscan.modules.engine.base import AccessibilityRuleEngine
from regscan.modules.validation import StructuralValidator
from regscan.standards.database import RuleDatabase, normalize_locale

from .models import Degradation, ScanConfiguration, ScanResult
from .resolver import resolve_violations
from .scoring import compute_compliance, compute_score, compute_stats

logger = logging.getLogger(__name__)

DEFAULT_STYLE_PROPERTIES = ("color", "background-color")


class ScanOrchestrator:
    """Acquire a session, audit the page, map findings, and always release."""

    def __init__(
        self,
        engine: AccessibilityRuleEngine,
        database: RuleDatabase,
        driver_factory: Callable[[DriverConfig], SessionDriver] = SessionDriver,
        validator: StructuralValidator | None = None,
        flattener_factory: Callable[[Any], DOMFlattener] = DOMFlattener,
        flatten_config: FlattenConfig | None = None,
    ):
        self._engine = engine
        self._database = database
        self._driver_factory = driver_factory
        self._validator = validator or StructuralValidator()
        self._flattener_factory = flattener_factory
        self._flatten_config = flatten_config or FlattenConfig(
            style_properties=DEFAULT_STYLE_PROPERTIES
        )

    async def scan(
        self,
        config: ScanConfiguration,
        progress: Callable[[str], None] | None = None,
    ) -> ScanResult:
        """Run the full pipeline for ``config.url``.

        Raises ``ScanError`` wrapping the specific failure when the browser
        cannot start, navigation is exhausted or the rule engine fails.
        Validation and flattening failures are recorded as degradations.
        """
        emit = progress if progress and not config.silent else None
        driver = self._driver_factory(
            DriverConfig(headless=config.headless, viewport=config.viewport)
        )
        try:
            return await self._run(driver, config, emit)
        except ScanError:
            raise
        except (LaunchError, NavigationError, RuleEngineError) as exc:
            raise ScanError(str(exc), cause=exc) from exc
        except Exception as exc:
            raise ScanError(f"Scan of {config.url} failed: {exc}", cause=exc) from exc
        finally:
            await driver.release()

    async def _run(
        self,
        driver: SessionDriver,
        config: ScanConfiguration,
        emit: Callable[[str], None] | None,
    ) -> ScanResult:
        started = time.perf_counter()
        locale = normalize_locale(config.locale)

        if emit:
            emit("● Launching browser")
        await driver.acquire()

        if emit:
            emit(f"● Loading {config.url}")
        await driver.navigate(config.url)
        markup = await driver.capture_content()

        if emit:
            emit("● Validating markup and flattening DOM")
        validation, dom = await asyncio.gather(
            asyncio.to_thread(self._validator.validate, markup),
            self._flattener_factory(driver).build(self._flatten_config),
            return_exceptions=True,
        )
        degradations: list[Degradation] = []
        if isinstance(validation, BaseException):
            validation = self._degrade("validation", validation, degradations)
        if isinstance(dom, BaseException):
            dom = self._degrade("dom", dom, degradations)

        engine_started = time.perf_counter()
        if emit:
            emit(f"● [{self._engine.name}] started")
        violations = await self._engine.run(driver)
        if emit:
            elapsed = time.perf_counter() - engine_started
            emit(
                f"✓ [{self._engine.name}] completed: {len(violations)} violations "
                f"({elapsed:.1f}s)"
            )

        reports = resolve_violations(violations, self._database, locale)
        stats = compute_stats(reports)
        result = ScanResult(
            url=config.url,
            timestamp=datetime.now(UTC).isoformat(),
            reports=tuple(reports),
            stats=stats,
            score=compute_score(stats),
            compliance=compute_compliance(stats),
            html_validation=validation,
            dom=dom,
            degradations=tuple(degradations),
            viewport=config.viewport,
            locale=locale,
            standard=config.standard,
        )
        if emit:
            elapsed = time.perf_counter() - started
            emit(f"✓ Scan completed in {elapsed:.1f}s")
        return result

    @staticmethod
    def _degrade(stage: str, exc: BaseException, degradations: list[Degradation]) -> None:
        if not isinstance(exc, Exception):
            raise exc
        logger.warning("%s stage failed; continuing without it: %s", stage, exc, exc_info=exc)
        degradations.append(Degradation(stage=stage, message=str(exc)))
        return None
