"""Generate test skeletons and checklists for findings that need a human."""

from __future__ import annotations

import re
import textwrap

from regscan.modules.audit.models import EnrichedReport

# Interaction steps per rule id, written into the generated test body.
INTERACTION_STEPS: dict[str, str] = {
    "keyboard-accessible": """\
for _ in range(10):
    page.keyboard.press("Tab")
    focused = page.evaluate("() => document.activeElement && document.activeElement.tagName")
    assert focused not in (None, "BODY"), "Focus was lost while tabbing"
""",
    "focus-visible": """\
page.keyboard.press("Tab")
outline = page.evaluate(
    "() => getComputedStyle(document.activeElement).outlineStyle"
)
assert outline != "none", "Focused element has no visible outline"
""",
    "bypass": """\
page.keyboard.press("Tab")
href = page.evaluate("() => document.activeElement.getAttribute('href')")
assert href and href.startswith("#"), "First focusable element is not a skip link"
""",
}

GENERIC_STEPS = """\
for selector in SELECTORS:
    expect(page.locator(selector).first).to_be_attached()
# Manually verify the behaviour described in the docstring.
"""


def _test_name(report: EnrichedReport) -> str:
    slug = re.sub(r"[^0-9a-zA-Z]+", "_", f"{report.rule_id}_{report.wcag_criteria}").strip("_")
    return f"test_verify_{slug.lower()}"


class PseudoAutomationEngine:
    """Turn reports into pytest-playwright scripts and markdown checklists."""

    def generate_test_script(self, report: EnrichedReport, url: str) -> str:
        selectors = [target for node in report.failing_nodes for target in node.target]
        steps = INTERACTION_STEPS.get(report.rule_id, GENERIC_STEPS)
        return (
            f'"""Generated check for {report.rule_id}.\n'
            "\n"
            f"WCAG: {report.wcag_criteria}\n"
            f"EN 301 549: {report.en301549_criteria}\n"
            f"Risk: {report.risk}\n"
            "\n"
            "Manual verification required:\n"
            f"{report.remediation.description}\n"
            '"""\n'
            "\n"
            "from playwright.sync_api import Page, expect\n"
            "\n"
            f"URL = {url!r}\n"
            f"SELECTORS = {selectors!r}\n"
            "\n"
            "\n"
            f"def {_test_name(report)}(page: Page) -> None:\n"
            "    page.goto(URL)\n"
            f"{textwrap.indent(steps, '    ')}"
        )

    def generate_manual_checklist(self, report: EnrichedReport) -> str:
        lines = [
            f"### Manual verification: {report.rule_id}",
            "",
            "**Regulatory context**",
            f"- **WCAG**: {report.wcag_criteria}",
            f"- **EN 301 549**: {report.en301549_criteria}",
            f"- **National law**: {report.national_law_reference}",
            f"- **Risk**: {report.risk.upper()}",
            "",
            "**Instructions**",
            f"1. [ ] {report.remediation.description}",
            f"2. [ ] Verify against technical guidance: {report.remediation.technical_guidance}",
        ]
        for index, node in enumerate(report.failing_nodes, start=3):
            where = ", ".join(node.target) or node.html
            lines.append(f"{index}. [ ] Re-check `{where}`")
        if report.insight.interpretation:
            lines += ["", "**Interpretation**", f"> {report.insight.interpretation}"]
        return "\n".join(lines) + "\n"

    def scripts_for(self, reports: list[EnrichedReport], url: str) -> dict[str, str]:
        """Scripts keyed by rule id for every report flagged for pseudo-automation."""
        return {
            report.rule_id: self.generate_test_script(report, url)
            for report in reports
            if report.testability.pseudo_automation
        }
