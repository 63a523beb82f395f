"""Data models for scans, raw findings and regulatory reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from regscan.modules.browser.models import Viewport
from regscan.modules.dom.models import VirtualNode
from regscan.modules.validation.models import ValidationResult
from regscan.standards.models import ConvergenceRule, Insight, Remediation, Testability

STANDARDS = ("wcag", "en301549", "national")
PASS = "PASS"
FAIL = "FAIL"

RESOLUTION_EXACT = "exact"
RESOLUTION_TAG = "tag"
RESOLUTION_SYNTHETIC = "synthetic"


@dataclass(frozen=True, slots=True)
class ScanConfiguration:
    """Immutable input to one scan; every option carries its default here."""

    url: str
    headless: bool = True
    standard: str = "national"
    viewport: Viewport = field(default_factory=Viewport)
    fail_on_critical: bool = False
    silent: bool = False
    locale: str = "en"

    def __post_init__(self) -> None:
        if self.standard not in STANDARDS:
            raise ValueError(f"Unknown standard {self.standard!r}; expected one of {STANDARDS}")


@dataclass(frozen=True, slots=True)
class RawNode:
    """One failing element as reported by the rule engine."""

    html: str
    target: tuple[str, ...] = ()
    failure_summary: str = ""

    @classmethod
    def from_axe(cls, data: dict[str, Any]) -> RawNode:
        target = data.get("target") or ()
        return cls(
            html=str(data.get("html", "")),
            # axe nests selectors for iframes/shadow hosts; keep the outermost chain readable
            target=tuple(" >>> ".join(t) if isinstance(t, list) else str(t) for t in target),
            failure_summary=str(data.get("failureSummary") or ""),
        )


@dataclass(frozen=True, slots=True)
class RawViolation:
    """One rule failure from the rule engine, before regulatory mapping."""

    id: str
    tags: tuple[str, ...] = ()
    help: str = ""
    description: str = ""
    impact: str | None = None
    help_url: str = ""
    nodes: tuple[RawNode, ...] = ()

    @classmethod
    def from_axe(cls, data: dict[str, Any]) -> RawViolation:
        return cls(
            id=str(data["id"]),
            tags=tuple(data.get("tags") or ()),
            help=str(data.get("help", "")),
            description=str(data.get("description", "")),
            impact=data.get("impact"),
            help_url=str(data.get("helpUrl", "")),
            nodes=tuple(RawNode.from_axe(node) for node in data.get("nodes") or ()),
        )


@dataclass(frozen=True, slots=True)
class BaseReport:
    """Canonical regulatory projection of one database rule."""

    rule_id: str
    wcag_criteria: str
    en301549_criteria: str
    national_law_reference: str
    risk: str
    impact: str
    remediation: Remediation
    insight: Insight
    testability: Testability

    @classmethod
    def from_rule(cls, rule: ConvergenceRule) -> BaseReport:
        return cls(
            rule_id=rule.rule_id,
            wcag_criteria=rule.wcag_criteria,
            en301549_criteria=rule.en301549_criteria,
            national_law_reference=rule.national_law_reference,
            risk=rule.insight.risk,
            impact=rule.insight.impact,
            remediation=rule.remediation,
            insight=rule.insight,
            testability=rule.testability,
        )


@dataclass(frozen=True, slots=True)
class EnrichedReport(BaseReport):
    """A BaseReport tied to the violation that produced it."""

    reasoning: str = ""
    failing_nodes: tuple[RawNode, ...] = ()
    resolution: str = RESOLUTION_EXACT
    help_url: str = ""


@dataclass(frozen=True, slots=True)
class ScanStats:
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0


@dataclass(frozen=True, slots=True)
class Degradation:
    """A non-fatal stage failure recorded on the result."""

    stage: str
    message: str


@dataclass(frozen=True)
class ScanResult:
    """Everything one scan produced."""

    url: str
    timestamp: str
    reports: tuple[EnrichedReport, ...]
    stats: ScanStats
    score: int
    compliance: str
    html_validation: ValidationResult | None = None
    dom: VirtualNode | None = None
    degradations: tuple[Degradation, ...] = ()
    viewport: Viewport = field(default_factory=Viewport)
    locale: str = "en"
    standard: str = "national"

    @property
    def passed(self) -> bool:
        return self.compliance == PASS
