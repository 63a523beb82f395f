"""Base contract for accessibility rule engines."""

from abc import ABC, abstractmethod

from regscan.modules.audit.models import RawViolation
from regscan.modules.browser import SessionDriver


class AccessibilityRuleEngine(ABC):
    """Evaluates a loaded page and reports raw rule failures."""

    name: str

    @abstractmethod
    async def run(self, driver: SessionDriver) -> list[RawViolation]:
        """Evaluate the page currently loaded in ``driver``."""
