"""Data models for browser sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
)


@dataclass(frozen=True, slots=True)
class Viewport:
    """Browser viewport in CSS pixels."""

    width: int = 1280
    height: int = 720

    def as_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class SessionState(str, Enum):
    """Lifecycle states of a SessionDriver."""

    IDLE = "idle"
    LAUNCHING = "launching"
    READY = "ready"
    NAVIGATING = "navigating"
    LOADED = "loaded"
    NAVIGATION_FAILED = "navigation_failed"
    CLOSED = "closed"


@dataclass
class DriverConfig:
    """Launch and navigation settings for one browser session."""

    headless: bool = True
    viewport: Viewport = field(default_factory=Viewport)
    user_agent: str = DESKTOP_USER_AGENT
    bypass_csp: bool = True
    launch_args: tuple[str, ...] = CHROMIUM_ARGS
    navigation_timeout: float = 60.0
    navigation_attempts: int = 3
    retry_backoff: float = 2.0
    wait_until: str = "domcontentloaded"
    idle_time: float = 0.5
    idle_timeout: float = 10.0
    idle_concurrency: int = 2
