"""Browser session management."""

from .driver import SessionDriver
from .models import CHROMIUM_ARGS, DESKTOP_USER_AGENT, DriverConfig, SessionState, Viewport
from .network import NetworkIdleMonitor
from .retry import RetryPolicy, retry_async

__all__ = [
    "CHROMIUM_ARGS",
    "DESKTOP_USER_AGENT",
    "DriverConfig",
    "NetworkIdleMonitor",
    "RetryPolicy",
    "SessionDriver",
    "SessionState",
    "Viewport",
    "retry_async",
]
