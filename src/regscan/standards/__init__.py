"""Regulatory rule database for WCAG, EN 301 549 and national accessibility law."""

from .database import (
    FALLBACK_LOCALE,
    SUPPORTED_LOCALES,
    RuleDatabase,
    StandardsDatabase,
    normalize_locale,
)
from .models import (
    IMPACT_TIERS,
    RISK_TIERS,
    ComponentRecommendation,
    ConvergenceRule,
    EN301549Mapping,
    ICTManualCheck,
    Insight,
    Remediation,
    Testability,
)

__all__ = [
    "FALLBACK_LOCALE",
    "IMPACT_TIERS",
    "RISK_TIERS",
    "SUPPORTED_LOCALES",
    "ComponentRecommendation",
    "ConvergenceRule",
    "EN301549Mapping",
    "ICTManualCheck",
    "Insight",
    "Remediation",
    "RuleDatabase",
    "StandardsDatabase",
    "Testability",
    "normalize_locale",
]
