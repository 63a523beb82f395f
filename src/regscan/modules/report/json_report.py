"""JSON report rendering."""

import json
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from regscan.modules.audit.models import EnrichedReport, ScanResult


def _tool_version() -> str:
    try:
        return version("regscan")
    except PackageNotFoundError:
        return "0.0.0+unknown"


def report_to_dict(report: EnrichedReport) -> dict[str, Any]:
    return {
        "rule_id": report.rule_id,
        "resolution": report.resolution,
        "risk": report.risk,
        "impact": report.impact,
        "wcag_criteria": report.wcag_criteria,
        "en301549_criteria": report.en301549_criteria,
        "national_law_reference": report.national_law_reference,
        "help_url": report.help_url,
        "remediation": {
            "description": report.remediation.description,
            "technical_guidance": report.remediation.technical_guidance,
            "component": report.remediation.component,
            "code_example": report.remediation.code_example,
            "wcag_technique": list(report.remediation.wcag_technique),
        },
        "insight": {
            "risk": report.insight.risk,
            "impact": report.insight.impact,
            "interpretation": report.insight.interpretation,
            "common_mistakes": list(report.insight.common_mistakes),
            "precedent": report.insight.precedent,
            "priority_rationale": report.insight.priority_rationale,
            "reasoning": report.reasoning,
        },
        "testability": {
            "automated": report.testability.automated,
            "requires_manual_check": report.testability.requires_manual_check,
            "pseudo_automation": report.testability.pseudo_automation,
            "complexity": report.testability.complexity,
        },
        "failing_nodes": [
            {
                "html": node.html,
                "target": list(node.target),
                "failure_summary": node.failure_summary,
            }
            for node in report.failing_nodes
        ],
    }


def result_to_dict(result: ScanResult, include_dom: bool = False) -> dict[str, Any]:
    """Convert a scan result into plain JSON-serializable data."""
    validation = result.html_validation
    data: dict[str, Any] = {
        "report_metadata": {
            "tool": "regscan",
            "version": _tool_version(),
            "generated_at": result.timestamp,
        },
        "url": result.url,
        "timestamp": result.timestamp,
        "locale": result.locale,
        "standard": result.standard,
        "viewport": {"width": result.viewport.width, "height": result.viewport.height},
        "score": result.score,
        "compliance": result.compliance,
        "stats": {
            "critical": result.stats.critical,
            "high": result.stats.high,
            "medium": result.stats.medium,
            "low": result.stats.low,
            "total": result.stats.total,
        },
        "reports": [report_to_dict(report) for report in result.reports],
        "html_validation": None
        if validation is None
        else {
            "valid": validation.valid,
            "errors": [
                {
                    "rule": issue.rule,
                    "message": issue.message,
                    "line": issue.line,
                    "column": issue.column,
                    "selector": issue.selector,
                }
                for issue in validation.errors
            ],
        },
        "degradations": [
            {"stage": item.stage, "message": item.message} for item in result.degradations
        ],
    }
    if include_dom:
        data["dom"] = result.dom.to_dict() if result.dom is not None else None
    return data


def result_to_json(result: ScanResult, include_dom: bool = False) -> str:
    return json.dumps(result_to_dict(result, include_dom=include_dom), indent=2, ensure_ascii=False)
