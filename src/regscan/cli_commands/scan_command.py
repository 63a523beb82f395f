"""Scan CLI command."""

from pathlib import Path

import typer
from rich.markup import escape

from regscan.config import get_headless, get_locale
from regscan.modules.audit import STANDARDS, ScanConfiguration
from regscan.modules.report import render_report_html, result_to_json
from regscan.standards import normalize_locale

from .scan_helpers import classify_scan_error, is_valid_url, normalize_verbose, parse_viewport
from .scan_output import print_generated_tests, print_scan_result
from .shared import app, configure_logging, console, err_console, facade


@app.command()
def scan(
    url: str = typer.Argument(..., help="URL to scan (http or https)"),
    lang: str | None = typer.Option(None, "--lang", help="Report language: en, sv, de, fr, es"),
    ci: bool = typer.Option(False, "--ci", help="Exit with code 1 on critical findings"),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON only"),
    pdf: Path | None = typer.Option(None, "--pdf", help="Write an A4 PDF report to this path"),
    viewport: str | None = typer.Option(
        None, "--viewport", help="mobile, tablet, desktop or WxH (default 1280x720)"
    ),
    generate_tests: bool = typer.Option(
        False, "--generate-tests", help="Print pseudo-automation test scripts"
    ),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window"),
    standard: str = typer.Option(
        "national", "--standard", help="Reference standard: wcag, en301549, national"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Scan a page and report regulatory accessibility compliance."""
    cli = facade()
    configure_logging(normalize_verbose(verbose))

    if not is_valid_url(url):
        err_console.print(f"[red]Error: Invalid URL format '{escape(url)}'[/red]")
        err_console.print("[dim]URL must start with http:// or https://[/dim]")
        raise typer.Exit(1)
    try:
        effective_viewport = parse_viewport(viewport)
    except ValueError as exc:
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
    effective_standard = standard.strip().lower()
    if effective_standard not in STANDARDS:
        err_console.print(
            f"[red]Error: Unknown standard '{standard}'. Use {', '.join(STANDARDS)}.[/red]"
        )
        raise typer.Exit(1)

    locale = normalize_locale(lang or get_locale())
    config = ScanConfiguration(
        url=url,
        headless=False if headed else get_headless(),
        standard=effective_standard,
        viewport=effective_viewport,
        fail_on_critical=ci,
        silent=json_output,
        locale=locale,
    )

    if not json_output:
        console.print("[bold blue]Regulatory accessibility scan[/bold blue]")
        console.print(f"[dim]Scanning {url}...[/dim]")

    def show_progress(message: str) -> None:
        console.print(f"[dim]{escape(message)}[/dim]")

    orchestrator = cli.create_orchestrator()
    try:
        result = cli.safe_async_run(orchestrator.scan(config, progress=show_progress))
    except Exception as exc:
        headline, hint = classify_scan_error(exc, url)
        err_console.print(f"[red]Error: {escape(headline)}[/red]")
        err_console.print(f"[dim]{hint}[/dim]")
        raise typer.Exit(1) from exc

    if pdf is not None:
        try:
            cli.safe_async_run(cli.export_pdf(render_report_html(result, locale), pdf))
        except Exception as exc:
            err_console.print(f"[red]PDF export failed: {escape(str(exc))}[/red]")
            raise typer.Exit(1) from exc
        if not json_output:
            console.print(f"[green]PDF report saved to {pdf}[/green]")

    if json_output:
        typer.echo(result_to_json(result))
    else:
        print_scan_result(console, result, locale, show_viewport=viewport is not None)
        if generate_tests:
            print_generated_tests(console, result)

    if config.fail_on_critical and result.stats.critical > 0:
        if not json_output:
            err_console.print(
                f"[red]CI failure: {result.stats.critical} critical issue(s) found.[/red]"
            )
        raise typer.Exit(1)
