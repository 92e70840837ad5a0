"""Tests for the CLI module."""

import json
from datetime import datetime
from unittest.mock import patch

from typer.testing import CliRunner

from exactspec import __version__
from exactspec.cli import _build_config, app
from exactspec.core.errors import TransportError
from exactspec.core.models import ScrapeReport
from exactspec.synthesis.builder import build_specification

runner = CliRunner()


class TestBuildConfig:
    """Tests for option to configuration mapping."""

    def test_options(self):
        """Test CLI options end up in the scrape configuration."""
        config = _build_config(["CRMAccounts"], 5, 8, 0.1, True)
        assert config.include_names == ["CRMAccounts"]
        assert config.max_endpoints == 5
        assert config.concurrency == 8
        assert config.request_delay == 0.1
        assert config.fail_fast is True

    def test_no_names(self):
        """Test a missing name filter selects everything."""
        assert _build_config(None, 0, 4, 0.5, False).include_names == []


class TestCommands:
    """Tests for the typer commands."""

    def test_version(self):
        """Test the version flag."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_generate_rejects_unknown_format(self, temp_dir):
        """Test format validation happens before any network access."""
        result = runner.invoke(app, ["generate", "-o", str(temp_dir / "x.yaml"), "--format", "toml"])
        assert result.exit_code == 2

    def test_generate(self, temp_dir, widget_endpoint, spec_info):
        """Test generate writes the document produced by the pipeline."""
        document = build_specification([widget_endpoint], spec_info)
        output = temp_dir / "spec.json"

        async def fake_run(self, info):
            report = ScrapeReport(base_url="https://x", started_at=datetime(2024, 1, 1))
            return document, report

        with patch("exactspec.cli.SpecificationPipeline.run", fake_run):
            result = runner.invoke(app, ["generate", "-o", str(output)])

        assert result.exit_code == 0, result.stdout
        assert json.loads(output.read_text(encoding="utf-8"))["paths"].keys() == {"/Widgets"}

    def test_generate_reports_errors(self, temp_dir):
        """Test pipeline errors exit with status 1."""

        async def failing_run(self, info):
            raise TransportError("https://x", "connection refused")

        with patch("exactspec.cli.SpecificationPipeline.run", failing_run):
            result = runner.invoke(app, ["generate", "-o", str(temp_dir / "spec.yaml")])

        assert result.exit_code == 1
        assert "connection refused" in result.stdout
