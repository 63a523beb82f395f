"""Tests for CLI commands."""

import json
from dataclasses import replace
from pathlib import Path

import pytest
from typer.testing import CliRunner

import regscan.cli as cli
from regscan.cli_commands import scan_command, shared
from regscan.errors import NavigationError, ScanError
from regscan.modules.audit import ScanConfiguration
from regscan.modules.audit.scoring import compute_stats
from regscan.modules.browser import Viewport

runner = CliRunner()


class FakeOrchestrator:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.configs: list[ScanConfiguration] = []

    async def scan(self, config, progress=None):
        self.configs.append(config)
        if progress and not config.silent:
            progress("● [fake] started")
        if self.error is not None:
            raise self.error
        return replace(self.result, viewport=config.viewport)


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(scan_command, "configure_logging", lambda verbose: None)
    monkeypatch.setattr(shared.console, "width", 200)
    monkeypatch.setattr(shared.err_console, "width", 200)
    for key in ("REGSCAN_LOCALE", "REGSCAN_HEADLESS", "REGSCAN_VERBOSE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def orchestrator(monkeypatch: pytest.MonkeyPatch, sample_result) -> FakeOrchestrator:
    fake = FakeOrchestrator(result=sample_result)
    monkeypatch.setattr(cli, "create_orchestrator", lambda: fake)
    return fake


class TestScanCommand:
    def test_invalid_url(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "example.com"])
        assert result.exit_code == 1
        assert "Invalid URL format" in result.output
        assert orchestrator.configs == []

    def test_invalid_viewport(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com", "--viewport", "huge"])
        assert result.exit_code == 1
        assert "Invalid viewport" in result.output

    def test_unknown_standard(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com", "--standard", "ada"])
        assert result.exit_code == 1
        assert "Unknown standard" in result.output

    def test_scan_prints_summary(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com"])

        assert result.exit_code == 0, result.output
        assert "45/100" in result.output
        assert "FAIL" in result.output
        assert "[CRITICAL] image-alt" in result.output
        assert "● [fake] started" in result.output
        config = orchestrator.configs[0]
        assert config.url == "https://example.com"
        assert config.headless
        assert config.viewport == Viewport(1280, 720)
        assert config.locale == "en"
        assert config.standard == "national"

    def test_options_reach_configuration(self, orchestrator) -> None:
        result = runner.invoke(
            cli.app,
            [
                "scan",
                "https://example.com",
                "--lang",
                "sv",
                "--viewport",
                "mobile",
                "--headed",
                "--standard",
                "WCAG",
            ],
        )
        assert result.exit_code == 0, result.output
        config = orchestrator.configs[0]
        assert config.locale == "sv"
        assert config.viewport == Viewport(375, 667)
        assert not config.headless
        assert config.standard == "wcag"
        assert "375x667" in result.output

    def test_custom_viewport(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com", "--viewport", "800x600"])
        assert result.exit_code == 0, result.output
        assert orchestrator.configs[0].viewport == Viewport(800, 600)

    def test_json_output(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["score"] == 45
        assert len(data["reports"]) == 3
        assert orchestrator.configs[0].silent

    def test_ci_fails_on_critical(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com", "--ci"])
        assert result.exit_code == 1
        assert "2 critical issue(s)" in result.output
        assert orchestrator.configs[0].fail_on_critical

    def test_critical_findings_exit_zero_without_ci(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com"])
        assert result.exit_code == 0, result.output
        assert not orchestrator.configs[0].fail_on_critical
        assert "CI failure" not in result.output

    def test_ci_passes_without_critical(self, orchestrator, sample_result) -> None:
        medium_only = tuple(r for r in sample_result.reports if r.risk != "critical")
        orchestrator.result = replace(
            sample_result, reports=medium_only, stats=compute_stats(medium_only)
        )
        result = runner.invoke(cli.app, ["scan", "https://example.com", "--ci"])
        assert result.exit_code == 0, result.output

    def test_scan_error_is_classified(self, orchestrator) -> None:
        cause = NavigationError("https://nope.invalid", 3, "net::ERR_NAME_NOT_RESOLVED")
        orchestrator.error = ScanError(str(cause), cause=cause)

        result = runner.invoke(cli.app, ["scan", "https://nope.invalid"])

        assert result.exit_code == 1
        assert "Could not resolve domain" in result.output

    def test_pdf_export(self, orchestrator, monkeypatch, temp_dir: Path) -> None:
        exported: list[tuple[str, Path]] = []

        async def fake_export(html: str, path: Path) -> Path:
            exported.append((html, path))
            return path

        monkeypatch.setattr(cli, "export_pdf", fake_export)
        target = temp_dir / "report.pdf"

        result = runner.invoke(cli.app, ["scan", "https://example.com", "--pdf", str(target)])

        assert result.exit_code == 0, result.output
        html, path = exported[0]
        assert path == target
        assert html.startswith("<!DOCTYPE html>")
        assert "PDF report saved" in result.output

    def test_pdf_failure_exits(self, orchestrator, monkeypatch, temp_dir: Path) -> None:
        async def broken_export(html: str, path: Path) -> Path:
            raise OSError("disk full")

        monkeypatch.setattr(cli, "export_pdf", broken_export)
        result = runner.invoke(
            cli.app, ["scan", "https://example.com", "--pdf", str(temp_dir / "r.pdf")]
        )
        assert result.exit_code == 1
        assert "disk full" in result.output

    def test_generate_tests(self, orchestrator) -> None:
        result = runner.invoke(cli.app, ["scan", "https://example.com", "--generate-tests"])
        assert result.exit_code == 0, result.output
        assert "Pseudo-automation tests" in result.output
        assert "test_verify_keyboard_accessible_2_1_1" in result.output


class TestRulesCommand:
    def test_lists_rules(self) -> None:
        result = runner.invoke(cli.app, ["rules"])
        assert result.exit_code == 0, result.output
        assert "image-alt" in result.output
        assert "video-caption" in result.output

    def test_filters(self) -> None:
        result = runner.invoke(cli.app, ["rules", "--risk", "low"])
        assert result.exit_code == 0, result.output
        assert "page-has-heading-one" in result.output
        assert "image-alt" not in result.output

        result = runner.invoke(cli.app, ["rules", "--tag", "keyboard"])
        assert "bypass" in result.output
        assert "color-contrast" not in result.output

    def test_unknown_risk(self) -> None:
        result = runner.invoke(cli.app, ["rules", "--risk", "severe"])
        assert result.exit_code == 1

    def test_stats(self) -> None:
        result = runner.invoke(cli.app, ["rules", "--stats"])
        assert result.exit_code == 0, result.output
        assert "Rules: 12" in result.output
        assert "ICT manual checks: 6" in result.output


class TestVersionCommand:
    def test_version(self) -> None:
        result = runner.invoke(cli.app, ["version"])
        assert result.exit_code == 0
        assert result.output.startswith("regscan ")
