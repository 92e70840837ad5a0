"""Tests for the specification writer."""

import json
from datetime import datetime
from pathlib import Path

import pytest
import yaml

from exactspec.core.models import PageResult, ScrapeReport, ScrapeStatus
from exactspec.storage.filesystem import SpecificationWriter
from exactspec.synthesis.builder import build_specification


@pytest.fixture
def document(spec_info, widget_endpoint, full_endpoint):
    return build_specification([widget_endpoint, full_endpoint], spec_info)


class TestSpecificationWriter:
    """Tests for SpecificationWriter."""

    def test_encode_yaml(self, document):
        """Test YAML output keeps the Swagger header first."""
        text = SpecificationWriter().encode(document, "yaml")
        assert text.startswith("swagger: '2.0'")
        assert yaml.safe_load(text) == document.to_dict()

    def test_encode_json(self, document):
        """Test JSON output."""
        text = SpecificationWriter().encode(document, "json")
        assert json.loads(text) == document.to_dict()

    def test_encode_is_stable(self, spec_info, widget_endpoint, full_endpoint):
        """Test regenerating from reordered input gives identical text."""
        writer = SpecificationWriter()
        first = build_specification([widget_endpoint, full_endpoint], spec_info)
        second = build_specification([full_endpoint, widget_endpoint], spec_info)
        assert writer.encode(first) == writer.encode(second)

    def test_unknown_format(self, document):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValueError, match="Unknown format"):
            SpecificationWriter().encode(document, "toml")

    def test_format_for(self):
        """Test format detection from file suffixes."""
        writer = SpecificationWriter()
        assert writer.format_for(Path("spec.json")) == "json"
        assert writer.format_for(Path("spec.YML")) == "yaml"
        assert writer.format_for(Path("spec")) == "yaml"

    def test_save(self, document, temp_dir):
        """Test saving picks the encoding from the suffix."""
        target = temp_dir / "out" / "spec.json"
        SpecificationWriter().save(document, target)
        assert json.loads(target.read_text(encoding="utf-8"))["swagger"] == "2.0"

    def test_save_report(self, temp_dir, widget_endpoint):
        """Test writing the run report."""
        report = ScrapeReport(
            base_url="https://start.exactonline.nl/docs/",
            started_at=datetime(2024, 1, 1, 12, 0, 0),
            total_urls=1,
            results=[
                PageResult(url="https://x", status=ScrapeStatus.SUCCESS, endpoint=widget_endpoint)
            ],
        )
        target = temp_dir / "report.json"
        SpecificationWriter().save_report(report, target)
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["stats"]["successful"] == 1
        assert data["endpoints"][0]["name"] == "WidgetItems"
