"""Extraction of endpoint models from documentation markup."""

from exactspec.extraction.detail import DetailPageExtractor, extract_endpoint
from exactspec.extraction.query import parse_markup

__all__ = [
    "DetailPageExtractor",
    "extract_endpoint",
    "parse_markup",
]
