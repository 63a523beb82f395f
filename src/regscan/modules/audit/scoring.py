"""Aggregate counts, weighted score and compliance verdict."""

from collections.abc import Iterable

from .models import FAIL, PASS, BaseReport, ScanStats

RISK_WEIGHTS = {"critical": 25, "high": 15, "medium": 5, "low": 1}


def compute_stats(reports: Iterable[BaseReport]) -> ScanStats:
    counts = dict.fromkeys(RISK_WEIGHTS, 0)
    total = 0
    for report in reports:
        total += 1
        if report.risk in counts:
            counts[report.risk] += 1
    return ScanStats(total=total, **counts)


def compute_score(stats: ScanStats) -> int:
    """100 minus weighted penalties, floored at 0."""
    penalty = (
        stats.critical * RISK_WEIGHTS["critical"]
        + stats.high * RISK_WEIGHTS["high"]
        + stats.medium * RISK_WEIGHTS["medium"]
        + stats.low * RISK_WEIGHTS["low"]
    )
    return max(0, 100 - penalty)


def compute_compliance(stats: ScanStats) -> str:
    return PASS if stats.total == 0 else FAIL
