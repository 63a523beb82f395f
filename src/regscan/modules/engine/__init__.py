"""Accessibility rule engine adapters."""

from .axe import AXE_RUN_SCRIPT, DEFAULT_RUN_OPTIONS, AxeRuleEngine
from .base import AccessibilityRuleEngine
from .loader import AXE_CDN_URL, AxeSourceLoader

__all__ = [
    "AXE_CDN_URL",
    "AXE_RUN_SCRIPT",
    "DEFAULT_RUN_OPTIONS",
    "AccessibilityRuleEngine",
    "AxeRuleEngine",
    "AxeSourceLoader",
]
