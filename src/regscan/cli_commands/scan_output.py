"""Human-readable rendering of scan results."""

from rich.console import Console
from rich.markup import escape

from regscan.modules.audit import PASS, ScanResult
from regscan.modules.automation import PseudoAutomationEngine
from regscan.modules.report import MAX_LISTED_NODES, label

RISK_STYLES = {"critical": "bold red", "high": "bold yellow", "medium": "yellow", "low": "cyan"}
RULE = "─" * 40


def print_scan_result(
    console: Console, result: ScanResult, locale: str, show_viewport: bool = False
) -> None:
    status_style = "bold green" if result.compliance == PASS else "bold red"
    console.print(f"[bold]{label('score', locale)}: {result.score}/100[/bold]")
    console.print(
        f"[{status_style}]{label('status', locale)}: "
        f"{label('pass' if result.compliance == PASS else 'fail', locale)}[/{status_style}]"
    )
    console.print(f"[dim]{RULE}[/dim]")

    if show_viewport:
        console.print(f"[blue]{label('viewport', locale)}: {result.viewport}[/blue]")

    validation = result.html_validation
    if validation is not None and not validation.valid:
        console.print(f"\n[bold red]! {label('structural', locale)}[/bold red]")
        for issue in validation.errors:
            console.print(f"    [red][{escape(issue.rule)}] {escape(issue.message)}[/red]")
            if issue.selector:
                console.print(f"    [dim]{escape(issue.selector)}[/dim]")
            console.print(f"    [dim]Line: {issue.line}, Col: {issue.column}[/dim]")
        console.print(f"[dim]{RULE}[/dim]")

    for degradation in result.degradations:
        console.print(f"[yellow]! {degradation.stage}: {escape(degradation.message)}[/yellow]")

    for report in result.reports:
        style = RISK_STYLES.get(report.risk, "white")
        console.print(f"\n[{style}]\\[{report.risk.upper()}] {escape(report.rule_id)}[/{style}]")
        console.print(
            f"WCAG: {escape(report.wcag_criteria)} | EN 301 549: {escape(report.en301549_criteria)}"
        )
        console.print(
            f"[dim]{label('national_law', locale)}: {escape(report.national_law_reference)}[/dim]"
        )
        if report.remediation.component:
            console.print(
                f"[green]{label('component', locale)}:[/green] "
                f"[bold]{escape(report.remediation.component)}[/bold]"
            )
        if report.failing_nodes:
            console.print(f"[dim]{label('affected', locale)}:[/dim]")
            for node in report.failing_nodes[:MAX_LISTED_NODES]:
                console.print(f"[cyan]➜ {escape(', '.join(node.target))}[/cyan]")
                console.print(f"  [dim]{escape(node.html)}[/dim]")
            hidden = len(report.failing_nodes) - MAX_LISTED_NODES
            if hidden > 0:
                console.print(f"  [dim]{label('more_nodes', locale, count=hidden)}[/dim]")

    stats = result.stats
    console.print(f"\n[dim]{RULE}[/dim]")
    console.print(
        f"{label('critical', locale)}: {stats.critical} | {label('high', locale)}: {stats.high} | "
        f"{label('medium', locale)}: {stats.medium} | {label('low', locale)}: {stats.low} | "
        f"{label('total', locale)}: {stats.total}"
    )


def print_generated_tests(console: Console, result: ScanResult) -> None:
    scripts = PseudoAutomationEngine().scripts_for(list(result.reports), result.url)
    console.print("\n[bold magenta]Pseudo-automation tests[/bold magenta]")
    if not scripts:
        console.print("[dim]No findings flagged for pseudo-automation.[/dim]")
        return
    for rule_id, script in scripts.items():
        console.print(f"[cyan]# Test for {escape(rule_id)}[/cyan]")
        console.print(escape(script), highlight=False)
