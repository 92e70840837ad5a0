"""
exactspec - Generate a Swagger specification from the Exact Online docs.

Scrapes the Exact Online REST API reference pages and compiles the
documented endpoints into a Swagger 2.0 document.

Usage:
    exactspec generate
    exactspec generate -o exact-online.json -n AccountancyAccountOwners
"""

__version__ = "0.1.0"

from exactspec.core.errors import (
    ExactSpecError,
    PageParseError,
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
    "__version__",
    # Models
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
    # Interfaces
    "DocumentFetcher",
    # Errors
    "ExactSpecError",
    "PageParseError",
    "TransportError",
    "UnrecognizedMethodError",
]
