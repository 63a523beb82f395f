"""Machine-readable regulatory rule database (WCAG, EN 301 549, national law)."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any, Protocol

from .models import (
    RISK_TIERS,
    WCAG_LEVELS,
    ComponentRecommendation,
    ConvergenceRule,
    EN301549Mapping,
    ICTManualCheck,
    Insight,
)

logger = logging.getLogger(__name__)

SUPPORTED_LOCALES = ("en", "sv", "de", "fr", "es")
FALLBACK_LOCALE = "en"


class RuleDatabase(Protocol):
    """Read-only lookups consumed by the violation resolver."""

    def lookup_by_id(self, rule_id: str, locale: str) -> ConvergenceRule | None:
        """Return the rule with exactly this id, or None."""
        ...

    def lookup_by_tags(self, tags: Iterable[str], locale: str) -> list[ConvergenceRule]:
        """Return rules sharing at least one tag, best match first."""
        ...


def normalize_locale(locale: str | None) -> str:
    """Map a locale code such as ``sv-SE`` onto a bundled table name."""
    if not locale:
        return FALLBACK_LOCALE
    code = locale.strip().lower().replace("_", "-").split("-", 1)[0]
    if code in SUPPORTED_LOCALES:
        return code
    logger.warning("Locale %r not available, falling back to %r", locale, FALLBACK_LOCALE)
    return FALLBACK_LOCALE


class StandardsDatabase:
    """Per-locale rule tables loaded once and never mutated."""

    def __init__(self, data_dir: Path | None = None):
        self._data_dir = data_dir
        self._tables: dict[str, tuple[ConvergenceRule, ...]] = {}
        self._ict_checks: tuple[ICTManualCheck, ...] | None = None

    # -- loading ---------------------------------------------------------

    def _read_json(self, filename: str) -> Any:
        if self._data_dir is not None:
            text = (self._data_dir / filename).read_text(encoding="utf-8")
        else:
            text = resources.files("regscan.standards").joinpath("data", filename).read_text(
                encoding="utf-8"
            )
        return json.loads(text)

    def rules(self, locale: str = FALLBACK_LOCALE) -> tuple[ConvergenceRule, ...]:
        """Return the full rule table for a locale, in table order."""
        code = normalize_locale(locale)
        table = self._tables.get(code)
        if table is None:
            table = self._load_table(code)
            self._tables[code] = table
        return table

    def _load_table(self, locale: str) -> tuple[ConvergenceRule, ...]:
        raw = self._read_json(f"rules.{locale}.json")
        rules = tuple(ConvergenceRule.from_dict(item) for item in raw)
        seen: set[str] = set()
        for rule in rules:
            if rule.rule_id in seen:
                raise ValueError(f"Duplicate rule id {rule.rule_id!r} in {locale} table")
            seen.add(rule.rule_id)
        logger.debug("Loaded %d rules for locale %s", len(rules), locale)
        return rules

    # -- resolver lookups ------------------------------------------------

    def lookup_by_id(self, rule_id: str, locale: str = FALLBACK_LOCALE) -> ConvergenceRule | None:
        for rule in self.rules(locale):
            if rule.rule_id == rule_id:
                return rule
        return None

    def lookup_by_tags(
        self, tags: Iterable[str], locale: str = FALLBACK_LOCALE
    ) -> list[ConvergenceRule]:
        """Rules sharing >= 1 tag, ordered by overlap count, then table order."""
        wanted = set(tags)
        if not wanted:
            return []
        scored: list[tuple[int, int, ConvergenceRule]] = []
        for position, rule in enumerate(self.rules(locale)):
            overlap = len(wanted.intersection(rule.tags))
            if overlap:
                scored.append((-overlap, position, rule))
        scored.sort(key=lambda item: (item[0], item[1]))
        return [rule for _, _, rule in scored]

    # -- catalogue queries -----------------------------------------------

    def all_rules(self, locale: str = FALLBACK_LOCALE) -> list[ConvergenceRule]:
        return list(self.rules(locale))

    def rules_by_level(self, level: str, locale: str = FALLBACK_LOCALE) -> list[ConvergenceRule]:
        if level not in WCAG_LEVELS:
            raise ValueError(f"Unknown WCAG level: {level!r}")
        return [rule for rule in self.rules(locale) if rule.wcag_level == level]

    def rules_by_risk(self, risk: str, locale: str = FALLBACK_LOCALE) -> list[ConvergenceRule]:
        if risk not in RISK_TIERS:
            raise ValueError(f"Unknown risk tier: {risk!r}")
        return [rule for rule in self.rules(locale) if rule.insight.risk == risk]

    def en301549_mapping(
        self, wcag_criteria: str, locale: str = FALLBACK_LOCALE
    ) -> EN301549Mapping | None:
        rule = self._first_for_criteria(wcag_criteria, locale)
        if rule is None:
            return None
        return EN301549Mapping(
            wcag_criteria=rule.wcag_criteria,
            wcag_title=rule.wcag_title,
            wcag_level=rule.wcag_level,
            en301549_criteria=rule.en301549_criteria,
            en301549_title=rule.en301549_title,
            national_law_applies=rule.national_law_applies,
            national_law_reference=rule.national_law_reference,
        )

    def national_law_reference(
        self, wcag_criteria: str, locale: str = FALLBACK_LOCALE
    ) -> str | None:
        rule = self._first_for_criteria(wcag_criteria, locale)
        if rule is None or not rule.national_law_applies:
            return None
        return rule.national_law_reference

    def recommended_component(
        self, rule_id: str, locale: str = FALLBACK_LOCALE
    ) -> ComponentRecommendation | None:
        rule = self.lookup_by_id(rule_id, locale)
        if rule is None or not rule.remediation.component:
            return None
        return ComponentRecommendation(
            component=rule.remediation.component,
            description=rule.remediation.description,
            code_example=rule.remediation.code_example,
            wcag_criteria=(rule.wcag_criteria,),
        )

    def insight(self, rule_id: str, locale: str = FALLBACK_LOCALE) -> Insight | None:
        rule = self.lookup_by_id(rule_id, locale)
        return rule.insight if rule else None

    def all_tags(self, locale: str = FALLBACK_LOCALE) -> list[str]:
        return sorted({tag for rule in self.rules(locale) for tag in rule.tags})

    def is_wcag_criteria_supported(self, wcag_criteria: str, locale: str = FALLBACK_LOCALE) -> bool:
        return self._first_for_criteria(wcag_criteria, locale) is not None

    def _first_for_criteria(self, wcag_criteria: str, locale: str) -> ConvergenceRule | None:
        for rule in self.rules(locale):
            if rule.wcag_criteria == wcag_criteria:
                return rule
        return None

    # -- ICT manual checklist --------------------------------------------

    def ict_manual_checks(
        self, category: str | None = None, chapter: int | None = None
    ) -> list[ICTManualCheck]:
        """Return locale-independent ICT checks, optionally filtered."""
        if self._ict_checks is None:
            raw = self._read_json("ict-manual-checks.json")
            self._ict_checks = tuple(ICTManualCheck.from_dict(item) for item in raw)
        checks = list(self._ict_checks)
        if category is not None:
            checks = [check for check in checks if category in check.applicable_for]
        if chapter is not None:
            checks = [check for check in checks if check.chapter == chapter]
        return checks

    def stats(self, locale: str = FALLBACK_LOCALE) -> dict[str, Any]:
        """Summarize table contents."""
        rules = self.rules(locale)
        return {
            "total_rules": len(rules),
            "total_ict_checks": len(self.ict_manual_checks()),
            "rules_by_level": {
                level: sum(1 for rule in rules if rule.wcag_level == level)
                for level in WCAG_LEVELS
            },
            "rules_by_risk": {
                risk: sum(1 for rule in rules if rule.insight.risk == risk) for risk in RISK_TIERS
            },
            "automated_rules": sum(1 for rule in rules if rule.testability.automated),
            "manual_rules": sum(1 for rule in rules if rule.testability.requires_manual_check),
            "pseudo_automation_rules": sum(
                1 for rule in rules if rule.testability.pseudo_automation
            ),
        }
