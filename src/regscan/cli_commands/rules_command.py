"""``regscan rules`` - browse the bundled regulatory rule tables."""

import typer
from rich.table import Table

from regscan.config import get_locale
from regscan.standards import RISK_TIERS, normalize_locale

from .shared import app, console, facade


@app.command()
def rules(
    lang: str | None = typer.Option(None, "--lang", help="Rule table language"),
    tag: str | None = typer.Option(None, "--tag", help="Only rules carrying this tag"),
    risk: str | None = typer.Option(None, "--risk", help="Only rules with this risk tier"),
    stats: bool = typer.Option(False, "--stats", help="Show database statistics instead"),
) -> None:
    """List regulatory rules or database statistics."""
    database = facade().StandardsDatabase()
    locale = normalize_locale(lang or get_locale())

    if stats:
        summary = database.stats(locale)
        console.print(f"[bold]Rules:[/bold] {summary['total_rules']}")
        console.print(f"[bold]ICT manual checks:[/bold] {summary['total_ict_checks']}")
        levels = ", ".join(f"{k}={v}" for k, v in summary["rules_by_level"].items())
        risks = ", ".join(f"{k}={v}" for k, v in summary["rules_by_risk"].items())
        console.print(f"[bold]By level:[/bold] {levels}")
        console.print(f"[bold]By risk:[/bold] {risks}")
        console.print(
            f"[bold]Testability:[/bold] automated={summary['automated_rules']}, "
            f"manual={summary['manual_rules']}, "
            f"pseudo-automation={summary['pseudo_automation_rules']}"
        )
        return

    if risk is not None and risk.lower() not in RISK_TIERS:
        console.print(f"[red]Unknown risk tier '{risk}'. Use {', '.join(RISK_TIERS)}.[/red]")
        raise typer.Exit(1)

    selected = database.rules_by_risk(risk.lower(), locale) if risk else database.all_rules(locale)
    if tag:
        selected = [rule for rule in selected if tag in rule.tags]

    if not selected:
        console.print("[dim]No rules match.[/dim]")
        return

    table = Table(title=f"Regulatory rules ({locale})")
    table.add_column("Rule")
    table.add_column("WCAG")
    table.add_column("Level")
    table.add_column("EN 301 549")
    table.add_column("Risk")
    table.add_column("Component")
    for rule in selected:
        table.add_row(
            rule.rule_id,
            rule.wcag_criteria,
            rule.wcag_level,
            rule.en301549_criteria,
            rule.insight.risk,
            rule.remediation.component or "-",
        )
    console.print(table)
