"""Filesystem storage for generated specifications."""

import json
from pathlib import Path

import yaml

from exactspec.core.models import ScrapeReport, SpecificationDocument


class SpecificationWriter:
    """Encode specification documents and write them to disk."""

    FORMATS = ("yaml", "json")
    SUFFIXES = {".yaml": "yaml", ".yml": "yaml", ".json": "json"}

    def encode(self, document: SpecificationDocument, fmt: str = "yaml") -> str:
        """Encode a document.

        Args:
            document: Document to encode.
            fmt: ``yaml`` or ``json``.

        Returns:
            Encoded text.

        Raises:
            ValueError: If the format is unknown.
        """
        data = document.to_dict()

        if fmt == "yaml":
            # Tables are already sorted; keep the Swagger key order on top
            return yaml.safe_dump(
                data,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
            )
        if fmt == "json":
            return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

        raise ValueError(f"Unknown format: {fmt} (expected one of {', '.join(self.FORMATS)})")

    def format_for(self, filepath: Path) -> str:
        """Pick an encoding from a file suffix, defaulting to YAML."""
        return self.SUFFIXES.get(filepath.suffix.lower(), "yaml")

    def save(
        self,
        document: SpecificationDocument,
        filepath: Path,
        fmt: str | None = None,
    ) -> None:
        """Write a document to ``filepath``.

        Args:
            document: Document to save.
            filepath: Target file.
            fmt: Encoding; derived from the suffix when omitted.
        """
        filepath.parent.mkdir(parents=True, exist_ok=True)
        content = self.encode(document, fmt or self.format_for(filepath))
        filepath.write_text(content, encoding="utf-8")

    def save_report(self, report: ScrapeReport, filepath: Path) -> None:
        """Write the run report as JSON."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(
            json.dumps(report.to_dict(), indent=2),
            encoding="utf-8",
        )
