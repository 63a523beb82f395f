"""Data models for the regulatory rule database."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

RISK_TIERS = ("low", "medium", "high", "critical")
IMPACT_TIERS = ("none", "low", "medium", "high", "critical")
WCAG_LEVELS = ("A", "AA", "AAA")


@dataclass(frozen=True, slots=True)
class Remediation:
    """Prescribed fix for a rule."""

    description: str
    technical_guidance: str
    component: str | None = None
    code_example: str = ""
    wcag_technique: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Remediation:
        return cls(
            description=str(data.get("description", "")),
            technical_guidance=str(data.get("technical_guidance", "")),
            component=data.get("component") or None,
            code_example=str(data.get("code_example", "")),
            wcag_technique=tuple(data.get("wcag_technique", ())),
        )


@dataclass(frozen=True, slots=True)
class Insight:
    """Expert risk assessment attached to a rule."""

    risk: str
    impact: str
    interpretation: str = ""
    common_mistakes: tuple[str, ...] = ()
    precedent: str = ""
    priority_rationale: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Insight:
        risk = str(data.get("risk", "")).lower()
        if risk not in RISK_TIERS:
            raise ValueError(f"Unknown risk tier: {risk!r}")
        impact = str(data.get("impact", "")).lower()
        if impact not in IMPACT_TIERS:
            raise ValueError(f"Unknown impact tier: {impact!r}")
        return cls(
            risk=risk,
            impact=impact,
            interpretation=str(data.get("interpretation", "")),
            common_mistakes=tuple(data.get("common_mistakes", ())),
            precedent=str(data.get("precedent", "")),
            priority_rationale=str(data.get("priority_rationale", "")),
        )


@dataclass(frozen=True, slots=True)
class Testability:
    """How far a rule can be verified automatically."""

    automated: bool
    requires_manual_check: bool
    pseudo_automation: bool
    complexity: str = "moderate"  # simple | moderate | complex

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Testability:
        return cls(
            automated=bool(data.get("automated", False)),
            requires_manual_check=bool(data.get("requires_manual_check", False)),
            pseudo_automation=bool(data.get("pseudo_automation", False)),
            complexity=str(data.get("complexity", "moderate")),
        )


@dataclass(frozen=True, slots=True)
class ConvergenceRule:
    """One technical criterion mapped to WCAG, EN 301 549 and national law."""

    rule_id: str
    wcag_criteria: str
    wcag_level: str
    wcag_title: str
    wcag_version: str
    en301549_criteria: str
    en301549_title: str
    en301549_chapter: int
    national_law_applies: bool
    national_law_reference: str
    remediation: Remediation
    insight: Insight
    testability: Testability
    tags: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConvergenceRule:
        level = str(data.get("wcag_level", "A"))
        if level not in WCAG_LEVELS:
            raise ValueError(f"Unknown WCAG level for {data.get('rule_id')}: {level!r}")
        return cls(
            rule_id=str(data["rule_id"]),
            wcag_criteria=str(data.get("wcag_criteria", "")),
            wcag_level=level,
            wcag_title=str(data.get("wcag_title", "")),
            wcag_version=str(data.get("wcag_version", "2.1")),
            en301549_criteria=str(data.get("en301549_criteria", "")),
            en301549_title=str(data.get("en301549_title", "")),
            en301549_chapter=int(data.get("en301549_chapter", 0)),
            national_law_applies=bool(data.get("national_law_applies", False)),
            national_law_reference=str(data.get("national_law_reference", "")),
            remediation=Remediation.from_dict(data.get("remediation", {})),
            insight=Insight.from_dict(data.get("insight", {})),
            testability=Testability.from_dict(data.get("testability", {})),
            tags=tuple(data.get("tags", ())),
        )


@dataclass(frozen=True, slots=True)
class EN301549Mapping:
    """Cross-reference from a WCAG criterion to EN 301 549 and national law."""

    wcag_criteria: str
    wcag_title: str
    wcag_level: str
    en301549_criteria: str
    en301549_title: str
    national_law_applies: bool
    national_law_reference: str


@dataclass(frozen=True, slots=True)
class ComponentRecommendation:
    """Accessible component prescribed as the fix for a rule."""

    component: str
    description: str
    code_example: str
    wcag_criteria: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ICTManualCheck:
    """An EN 301 549 checklist item that needs a human reviewer."""

    id: str
    chapter: int
    title: str
    description: str
    applicable_for: tuple[str, ...]
    manual_verification: bool
    checklist_item: str
    guidance: str
    risk: str
    impact: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ICTManualCheck:
        return cls(
            id=str(data["id"]),
            chapter=int(data.get("chapter", 0)),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            applicable_for=tuple(data.get("applicable_for", ())),
            manual_verification=bool(data.get("manual_verification", True)),
            checklist_item=str(data.get("checklist_item", "")),
            guidance=str(data.get("guidance", "")),
            risk=str(data.get("risk", "medium")),
            impact=str(data.get("impact", "medium")),
        )
