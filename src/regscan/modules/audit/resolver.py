"""Map raw rule-engine violations onto regulatory reports."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import fields

from regscan.standards.database import RuleDatabase
from regscan.standards.models import ConvergenceRule, Insight, Remediation, Testability

from .models import (
    RESOLUTION_EXACT,
    RESOLUTION_SYNTHETIC,
    RESOLUTION_TAG,
    BaseReport,
    EnrichedReport,
    RawViolation,
)

logger = logging.getLogger(__name__)

UNKNOWN_REFERENCE = "Unknown"
MANUAL_ASSESSMENT = "Requires manual assessment"
SYNTHETIC_RATIONALE = "No regulatory mapping available; review manually."


class ViolationResolver:
    """Resolve each violation by exact id, then shared tags, then a synthetic report.

    Pure: the only collaborator is a read-only ``RuleDatabase``.
    """

    def __init__(self, database: RuleDatabase):
        self._database = database

    def resolve(self, violations: Iterable[RawViolation], locale: str) -> list[EnrichedReport]:
        """Return one report per violation, in input order."""
        return [self.resolve_one(violation, locale) for violation in violations]

    def resolve_one(self, violation: RawViolation, locale: str) -> EnrichedReport:
        rule = self._database.lookup_by_id(violation.id, locale)
        if rule is not None:
            return _from_rule(rule, violation, RESOLUTION_EXACT)

        candidates = self._database.lookup_by_tags(violation.tags, locale)
        if candidates:
            logger.debug(
                "No rule for %s; using tag match %s", violation.id, candidates[0].rule_id
            )
            return _from_rule(candidates[0], violation, RESOLUTION_TAG)

        logger.debug("No rule or tag match for %s; using synthetic report", violation.id)
        return synthetic_report(violation)


def resolve_violations(
    violations: Iterable[RawViolation], database: RuleDatabase, locale: str
) -> list[EnrichedReport]:
    return ViolationResolver(database).resolve(violations, locale)


def _from_rule(rule: ConvergenceRule, violation: RawViolation, resolution: str) -> EnrichedReport:
    base = BaseReport.from_rule(rule)
    return EnrichedReport(
        **{f.name: getattr(base, f.name) for f in fields(BaseReport)},
        reasoning=violation.help,
        failing_nodes=violation.nodes,
        resolution=resolution,
        help_url=violation.help_url,
    )


def synthetic_report(violation: RawViolation) -> EnrichedReport:
    """Generic medium-risk report for a violation the database does not know."""
    return EnrichedReport(
        rule_id=violation.id,
        wcag_criteria=UNKNOWN_REFERENCE,
        en301549_criteria=UNKNOWN_REFERENCE,
        national_law_reference=MANUAL_ASSESSMENT,
        risk="medium",
        impact="medium",
        remediation=Remediation(
            description=violation.help,
            technical_guidance=violation.description,
        ),
        insight=Insight(
            risk="medium",
            impact="medium",
            interpretation=violation.description,
            priority_rationale=SYNTHETIC_RATIONALE,
        ),
        testability=Testability(
            automated=True,
            requires_manual_check=True,
            pseudo_automation=False,
        ),
        reasoning=violation.help,
        failing_nodes=violation.nodes,
        resolution=RESOLUTION_SYNTHETIC,
        help_url=violation.help_url,
    )
