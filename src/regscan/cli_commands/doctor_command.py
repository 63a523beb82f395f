"""``regscan doctor``: can this machine run a scan?"""

from __future__ import annotations

from collections import Counter

import typer

from .shared import app, console

STATUS_ICONS = {
    "pass": "[green]✓[/green]",
    "fail": "[red]✗[/red]",
    "warn": "[yellow]![/yellow]",
}


@app.command()
def doctor() -> None:
    """Check the browser, axe-core source and rule tables."""
    from . import doctor_checks as checks

    console.print("\n[bold]regscan doctor[/bold]")
    console.print("─" * 36)
    console.print()

    results = [
        checks.check_python_version(),
        checks.check_playwright(),
        checks.check_chromium(),
        checks.check_axe_source(),
        checks.check_rule_tables(),
    ]

    for result in results:
        console.print(f"  {STATUS_ICONS.get(result.status, '?')} {result.message}")
        if result.status != "pass" and result.fix:
            console.print(f"    [dim]fix:[/dim] {result.fix}")

    counts = Counter(result.status for result in results)
    console.print()
    console.print(
        f"  Summary: {counts['pass']} passed, {counts['warn']} warnings, {counts['fail']} failed"
    )
    console.print()

    if counts["fail"]:
        raise typer.Exit(1)
