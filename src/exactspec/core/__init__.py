"""Core models and interfaces for exactspec."""

from exactspec.core.errors import (
    ExactSpecError,
    PageParseError,
    PropertyParseError,
    TransportError,
    UnrecognizedMethodError,
)
from exactspec.core.interfaces import DocumentFetcher
from exactspec.core.models import (
    EdmType,
    EndpointModel,
    HttpMethod,
    PageResult,
    ParseFailure,
    PropertyModel,
    ScrapeConfig,
    ScrapeReport,
    ScrapeStatus,
    SpecificationDocument,
    SpecInfo,
)

__all__ = [
    "EdmType",
    "EndpointModel",
    "HttpMethod",
    "PageResult",
    "ParseFailure",
    "PropertyModel",
    "ScrapeConfig",
    "ScrapeReport",
    "ScrapeStatus",
    "SpecificationDocument",
    "SpecInfo",
    "DocumentFetcher",
    "ExactSpecError",
    "PageParseError",
    "PropertyParseError",
    "TransportError",
    "UnrecognizedMethodError",
]
