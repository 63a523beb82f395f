"""axe-core adapter."""

from __future__ import annotations

import logging
from typing import Any

from regscan.errors import RuleEngineError
from regscan.modules.audit.models import RawViolation
from regscan.modules.browser import SessionDriver

from .base import AccessibilityRuleEngine
from .loader import AxeSourceLoader

logger = logging.getLogger(__name__)

HAS_DOCUMENT_SCRIPT = "() => !!document.documentElement"

# Only the fields RawViolation needs cross the page boundary.
AXE_RUN_SCRIPT = """
async (options) => {
  if (!document.documentElement) return { violations: [] };
  const results = await axe.run(document, options);
  return {
    violations: results.violations.map((v) => ({
      id: v.id,
      tags: v.tags,
      help: v.help,
      description: v.description,
      impact: v.impact,
      helpUrl: v.helpUrl,
      nodes: v.nodes.map((n) => ({
        html: n.html,
        target: n.target,
        failureSummary: n.failureSummary,
      })),
    })),
  };
}
"""

DEFAULT_RUN_OPTIONS: dict[str, Any] = {"iframes": False}


class AxeRuleEngine(AccessibilityRuleEngine):
    """Inject axe-core into the page and collect its violations."""

    name = "axe-core"

    def __init__(self, loader: AxeSourceLoader, run_options: dict[str, Any] | None = None):
        self.loader = loader
        self.run_options = {**DEFAULT_RUN_OPTIONS, **(run_options or {})}

    async def run(self, driver: SessionDriver) -> list[RawViolation]:
        source = await self.loader.load()
        try:
            if not await driver.evaluate(HAS_DOCUMENT_SCRIPT):
                logger.debug("Document has no root element; nothing to evaluate")
                return []
            # Page CSP does not apply to evaluate(); an inline <script> tag would be blocked
            await driver.evaluate(source)
            results = await driver.evaluate(AXE_RUN_SCRIPT, self.run_options)
        except Exception as exc:
            raise RuleEngineError(f"axe-core evaluation failed: {exc}") from exc

        raw = (results or {}).get("violations", [])
        try:
            violations = [RawViolation.from_axe(item) for item in raw]
        except (KeyError, TypeError, AttributeError) as exc:
            raise RuleEngineError(f"Unexpected axe-core result shape: {exc}") from exc
        logger.debug("axe-core reported %d violation(s)", len(violations))
        return violations
