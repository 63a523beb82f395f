"""Helpers for the scan command."""

from urllib.parse import urlparse

from regscan.config import get_axe_source_path, get_axe_version, get_cache_dir, get_verbose
from regscan.modules.audit import ScanOrchestrator
from regscan.modules.browser import Viewport
from regscan.modules.engine import AxeRuleEngine, AxeSourceLoader
from regscan.standards import StandardsDatabase

VIEWPORT_PRESETS = {
    "mobile": Viewport(375, 667),
    "tablet": Viewport(768, 1024),
    "desktop": Viewport(1920, 1080),
}
DEFAULT_VIEWPORT = Viewport(1280, 720)


def is_valid_url(value: str) -> bool:
    """Accept only absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def parse_viewport(raw: str | None) -> Viewport:
    """Resolve a preset name or ``WxH`` string; empty gives the default.

    Raises ``ValueError`` for anything else.
    """
    if not raw:
        return DEFAULT_VIEWPORT
    name = raw.strip().lower()
    if name in VIEWPORT_PRESETS:
        return VIEWPORT_PRESETS[name]
    width, sep, height = name.partition("x")
    if not sep:
        raise ValueError(f"Invalid viewport {raw!r}; use mobile, tablet, desktop or WxH")
    try:
        parsed = Viewport(int(width), int(height))
    except ValueError as exc:
        raise ValueError(f"Invalid viewport {raw!r}; use mobile, tablet, desktop or WxH") from exc
    if parsed.width <= 0 or parsed.height <= 0:
        raise ValueError(f"Viewport dimensions must be positive: {raw!r}")
    return parsed


def normalize_verbose(verbose: bool) -> bool:
    """Resolve effective verbose flag from CLI arg and config."""
    effective = verbose if isinstance(verbose, bool) else False
    return effective or get_verbose()


def classify_scan_error(exc: BaseException, url: str) -> tuple[str, str]:
    """Map a scan failure to a user-facing headline and hint."""
    message = str(exc)
    cause = getattr(exc, "cause", None)
    if cause is not None:
        message = f"{message} {cause}"
    if "ERR_NAME_NOT_RESOLVED" in message:
        return (
            f"Could not resolve domain for '{url}'",
            "Please check that the URL is correct and the site is accessible.",
        )
    if "ERR_CONNECTION_REFUSED" in message:
        return (
            f"Connection refused for '{url}'",
            "The server may be down or blocking automated access.",
        )
    if "timeout" in message.lower():
        return (
            f"Connection timed out for '{url}'",
            "The page took too long to respond.",
        )
    return (str(exc), "Run again with --verbose for details.")


def create_orchestrator() -> ScanOrchestrator:
    """Wire the default orchestrator from configuration."""
    loader = AxeSourceLoader(
        cache_dir=get_cache_dir(),
        source_path=get_axe_source_path(),
        version=get_axe_version(),
    )
    return ScanOrchestrator(engine=AxeRuleEngine(loader), database=StandardsDatabase())
