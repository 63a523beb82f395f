"""Individual health-check functions for ``regscan doctor``."""

from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from regscan.config import get_axe_source_path, get_axe_version, get_cache_dir
from regscan.standards import SUPPORTED_LOCALES, StandardsDatabase

# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class CheckResult:
    """Outcome of a single diagnostic check."""

    name: str
    status: str  # "pass", "fail", "warn"
    message: str
    fix: str = ""


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_python_version() -> CheckResult:
    """Verify Python >= 3.12."""
    v = sys.version_info
    ver = f"{v.major}.{v.minor}.{v.micro}"
    if (v.major, v.minor) >= (3, 12):
        return CheckResult("Python version", "pass", f"Python {ver}")
    return CheckResult(
        "Python version", "fail", f"Python {ver} (requires >= 3.12)", fix="Install Python 3.12+"
    )


def check_playwright() -> CheckResult:
    """Verify the Playwright package is installed."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        installed = version("playwright")
    except PackageNotFoundError:
        return CheckResult(
            "Playwright", "fail", "Playwright not installed", fix="pip install playwright"
        )
    return CheckResult("Playwright", "pass", f"Playwright {installed}")


def check_chromium(browsers_dir: Path | None = None) -> CheckResult:
    """Look for a Playwright-managed Chromium build."""
    if browsers_dir is None:
        if sys.platform == "darwin":
            browsers_dir = Path.home() / "Library" / "Caches" / "ms-playwright"
        elif sys.platform == "win32":
            browsers_dir = Path.home() / "AppData" / "Local" / "ms-playwright"
        else:
            browsers_dir = Path.home() / ".cache" / "ms-playwright"
    builds = sorted(browsers_dir.glob("chromium*")) if browsers_dir.is_dir() else []
    if builds:
        return CheckResult("Chromium", "pass", f"Chromium: {builds[-1].name}")
    system = shutil.which("chromium") or shutil.which("google-chrome")
    if system:
        return CheckResult(
            "Chromium",
            "warn",
            f"Only a system browser was found ({system})",
            fix="playwright install chromium",
        )
    return CheckResult(
        "Chromium", "fail", "No Chromium build found", fix="playwright install chromium"
    )


def check_axe_source() -> CheckResult:
    """Check that an axe-core script is configured or cached."""
    configured = get_axe_source_path()
    if configured is not None:
        if configured.is_file():
            return CheckResult("axe-core", "pass", f"axe-core: {configured}")
        return CheckResult(
            "axe-core",
            "fail",
            f"REGSCAN_AXE_SOURCE points to a missing file: {configured}",
            fix="Fix the path or unset REGSCAN_AXE_SOURCE",
        )
    version = get_axe_version()
    cached = get_cache_dir() / f"axe-core-{version}.min.js"
    if cached.is_file():
        return CheckResult("axe-core", "pass", f"axe-core {version} cached")
    return CheckResult(
        "axe-core",
        "warn",
        f"axe-core {version} not cached; it will be downloaded on first scan",
    )


def check_rule_tables() -> CheckResult:
    """Load every bundled rule table."""
    database = StandardsDatabase()
    counts: list[str] = []
    try:
        for locale in SUPPORTED_LOCALES:
            counts.append(f"{locale}={len(database.rules(locale))}")
    except (OSError, ValueError) as exc:
        return CheckResult(
            "Rule tables", "fail", f"Rule table failed to load: {exc}", fix="Reinstall regscan"
        )
    return CheckResult("Rule tables", "pass", f"Rule tables: {', '.join(counts)}")
