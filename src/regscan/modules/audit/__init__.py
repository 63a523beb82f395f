"""Scan pipeline: resolution, scoring and orchestration."""

from .models import (
    FAIL,
    PASS,
    RESOLUTION_EXACT,
    RESOLUTION_SYNTHETIC,
    RESOLUTION_TAG,
    STANDARDS,
    BaseReport,
    Degradation,
    EnrichedReport,
    RawNode,
    RawViolation,
    ScanConfiguration,
    ScanResult,
    ScanStats,
)
from .orchestrator import ScanOrchestrator
from .resolver import ViolationResolver, resolve_violations, synthetic_report
from .scoring import RISK_WEIGHTS, compute_compliance, compute_score, compute_stats

__all__ = [
    "FAIL",
    "PASS",
    "RESOLUTION_EXACT",
    "RESOLUTION_SYNTHETIC",
    "RESOLUTION_TAG",
    "RISK_WEIGHTS",
    "STANDARDS",
    "BaseReport",
    "Degradation",
    "EnrichedReport",
    "RawNode",
    "RawViolation",
    "ScanConfiguration",
    "ScanOrchestrator",
    "ScanResult",
    "ScanStats",
    "ViolationResolver",
    "compute_compliance",
    "compute_score",
    "compute_stats",
    "resolve_violations",
    "synthetic_report",
]
