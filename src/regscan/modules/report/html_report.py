"""Standalone, print-ready HTML report."""

from __future__ import annotations

from html import escape

from regscan.modules.audit.models import PASS, EnrichedReport, ScanResult

from .labels import label

MAX_LISTED_NODES = 5

RISK_COLORS = {
    "critical": "#dc2626",
    "high": "#ea580c",
    "medium": "#ca8a04",
    "low": "#2563eb",
}

STYLE = """
@page { margin: 0; }
body { font-family: system-ui, sans-serif; color: #0f172a; margin: 0; padding: 40px;
       -webkit-print-color-adjust: exact; }
.header { display: flex; justify-content: space-between; align-items: center;
          border-bottom: 2px solid #f1f5f9; padding-bottom: 2rem; margin-bottom: 2rem; }
.meta { text-align: right; color: #64748b; font-size: 0.875rem; }
.summary { display: grid; grid-template-columns: repeat(4, 1fr); gap: 1rem; margin-bottom: 2rem; }
.card { background: #f8fafc; border: 1px solid #e2e8f0; border-radius: 12px; padding: 1.25rem; }
.metric-label { font-size: 0.875rem; color: #64748b; }
.metric-value { font-size: 2rem; font-weight: 700; }
.violation { border: 1px solid #e2e8f0; border-radius: 8px; padding: 1.25rem;
             margin-bottom: 1rem; page-break-inside: avoid; }
.badge { display: inline-block; padding: 0.2rem 0.7rem; border-radius: 9999px; color: #fff;
         font-size: 0.75rem; font-weight: 600; text-transform: uppercase; }
.refs { color: #475569; font-size: 0.875rem; }
code, pre { background: #f1f5f9; border-radius: 4px; font-size: 0.8rem; }
pre { padding: 0.75rem; white-space: pre-wrap; }
"""


def _score_color(score: int) -> str:
    if score > 90:
        return "#16a34a"
    if score > 70:
        return "#eab308"
    return "#dc2626"


def render_report_card(report: EnrichedReport, locale: str) -> str:
    """Render one finding as an HTML block."""
    color = RISK_COLORS.get(report.risk, "#64748b")
    parts = [
        '<section class="violation">',
        f'<span class="badge" style="background:{color}">'
        f"{escape(label(report.risk, locale))}</span> ",
        f"<strong>{escape(report.rule_id)}</strong>",
        f"<p>{escape(report.reasoning)}</p>",
        '<p class="refs">'
        f"{label('wcag', locale)} {escape(report.wcag_criteria)} · "
        f"{label('en301549', locale)} {escape(report.en301549_criteria)} · "
        f"{escape(label('national_law', locale))}: {escape(report.national_law_reference)}"
        "</p>",
        f"<h4>{escape(label('remediation', locale))}</h4>",
        f"<p>{escape(report.remediation.description)}</p>",
        f"<p>{escape(report.remediation.technical_guidance)}</p>",
    ]
    if report.remediation.component:
        parts.append(
            f"<p>{escape(label('component', locale))}: "
            f"<code>{escape(report.remediation.component)}</code></p>"
        )
    if report.remediation.code_example:
        parts.append(f"<pre><code>{escape(report.remediation.code_example)}</code></pre>")
    if report.testability.requires_manual_check:
        parts.append(f"<p><em>{escape(label('manual_check', locale))}</em></p>")
    if report.failing_nodes:
        parts.append(f"<h4>{escape(label('affected', locale))}</h4><ul>")
        for node in report.failing_nodes[:MAX_LISTED_NODES]:
            parts.append(f"<li><code>{escape(node.html)}</code></li>")
        hidden = len(report.failing_nodes) - MAX_LISTED_NODES
        if hidden > 0:
            parts.append(f"<li>{escape(label('more_nodes', locale, count=hidden))}</li>")
        parts.append("</ul>")
    parts.append("</section>")
    return "\n".join(parts)


def render_report_html(result: ScanResult, locale: str | None = None) -> str:
    """Render a complete HTML document for ``result``."""
    lang = locale or result.locale
    stats = result.stats
    status = label("pass" if result.compliance == PASS else "fail", lang)

    summary = "\n".join(
        f'<div class="card"><div class="metric-label">{escape(text)}</div>'
        f'<div class="metric-value"{style}>{value}</div></div>'
        for text, value, style in (
            (label("score", lang), result.score, f' style="color:{_score_color(result.score)}"'),
            (label("status", lang), escape(status), ""),
            (label("critical", lang), stats.critical, ""),
            (label("total", lang), stats.total, ""),
        )
    )

    if result.reports:
        findings = "\n".join(render_report_card(report, lang) for report in result.reports)
    else:
        findings = f"<p>{escape(label('no_findings', lang))}</p>"

    structural = ""
    if result.html_validation is not None and result.html_validation.errors:
        items = "\n".join(
            f"<li><code>{escape(issue.rule)}</code> "
            f"{escape(issue.message)} ({issue.line}:{issue.column})</li>"
            for issue in result.html_validation.errors
        )
        structural = f"<h2>{escape(label('structural', lang))}</h2>\n<ul>\n{items}\n</ul>"

    title = escape(label("title", lang, url=result.url))
    return f"""<!DOCTYPE html>
<html lang="{escape(lang)}">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
<style>{STYLE}</style>
</head>
<body>
<header class="header">
<h1>{title}</h1>
<div class="meta">
<div>{escape(label("scanned_at", lang))}: {escape(result.timestamp)}</div>
<div>{escape(label("viewport", lang))}: {result.viewport}</div>
</div>
</header>
<div class="summary">
{summary}
</div>
<h2>{escape(label("findings", lang))}</h2>
{findings}
{structural}
</body>
</html>
"""
