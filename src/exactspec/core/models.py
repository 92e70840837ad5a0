"""Data models for exactspec."""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from exactspec.core.errors import PropertyParseError


class ScrapeStatus(Enum):
    """Outcome of processing a single detail page."""

    SUCCESS = "success"
    FAILED = "failed"


class HttpMethod(Enum):
    """HTTP methods the documentation describes."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class EdmType(Enum):
    """Abstract primitive types of the OData v2 type system.

    See http://www.odata.org/documentation/odata-version-2-0/overview/#AbstractTypeSystem
    """

    NULL = "Edm.Null"
    BINARY = "Edm.Binary"
    BOOLEAN = "Edm.Boolean"
    BYTE = "Edm.Byte"
    DATETIME = "Edm.DateTime"
    DECIMAL = "Edm.Decimal"
    DOUBLE = "Edm.Double"
    SINGLE = "Edm.Single"
    GUID = "Edm.Guid"
    INT16 = "Edm.Int16"
    INT32 = "Edm.Int32"
    INT64 = "Edm.Int64"
    SBYTE = "Edm.SByte"
    STRING = "Edm.String"
    TIME = "Edm.Time"
    DATETIMEOFFSET = "Edm.DateTimeOffset"

    @classmethod
    def from_token(cls, token: Optional[str]) -> "EdmType":
        """Resolve a documentation type token such as ``Edm.Int32``.

        Raises:
            PropertyParseError: If the token is missing or not part of the
                vocabulary.
        """
        if not token:
            raise PropertyParseError("could not find property type")
        try:
            return cls(token.strip())
        except ValueError:
            raise PropertyParseError(f"Unknown type: {token}") from None


@dataclass(frozen=True)
class ParseFailure:
    """A property row that could not be extracted."""

    cause: str
    property_name: Optional[str] = None
    row: Optional[int] = None

    def __str__(self) -> str:
        if self.property_name:
            return f"{self.property_name}: {self.cause}"
        if self.row is not None:
            return f"row {self.row}: {self.cause}"
        return self.cause


@dataclass(frozen=True)
class PropertyModel:
    """One field of a documented resource."""

    name: str
    edm_type: EdmType
    description: Optional[str] = None
    is_key: bool = False
    methods: frozenset[HttpMethod] = frozenset()


@dataclass(frozen=True)
class EndpointModel:
    """One REST resource as described by its detail page."""

    name: str
    uri: str
    properties: tuple[PropertyModel, ...] = ()
    failed_properties: tuple[ParseFailure, ...] = ()
    methods: frozenset[HttpMethod] = frozenset()

    DIVISION_PLACEHOLDER = "{division}"

    def supports(self, *methods: HttpMethod) -> bool:
        """Return True if the endpoint declares any of the given methods."""
        return any(m in self.methods for m in methods)

    def properties_for(self, method: HttpMethod) -> list[PropertyModel]:
        """Properties applicable to a method, in document order."""
        return [p for p in self.properties if method in p.methods]

    @property
    def key_properties(self) -> list[PropertyModel]:
        return [p for p in self.properties if p.is_key]

    @property
    def has_division(self) -> bool:
        return self.DIVISION_PLACEHOLDER in self.uri


@dataclass(frozen=True)
class SpecificationDocument:
    """A synthesized Swagger 2.0 document.

    Every table is key-sorted at construction time. Use ``to_dict`` to get
    an independent, encodable mapping.
    """

    info: dict[str, Any]
    host: str
    base_path: str
    schemes: tuple[str, ...]
    consumes: tuple[str, ...]
    produces: tuple[str, ...]
    paths: dict[str, dict[str, Any]]
    definitions: dict[str, dict[str, Any]]
    parameters: dict[str, dict[str, Any]]
    security_definitions: dict[str, dict[str, Any]]
    security: tuple[dict[str, list[str]], ...]

    SWAGGER_VERSION = "2.0"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a Swagger 2.0 mapping for encoding."""
        return copy.deepcopy(
            {
                "swagger": self.SWAGGER_VERSION,
                "info": self.info,
                "host": self.host,
                "basePath": self.base_path,
                "schemes": list(self.schemes),
                "consumes": list(self.consumes),
                "produces": list(self.produces),
                "paths": self.paths,
                "definitions": self.definitions,
                "parameters": self.parameters,
                "securityDefinitions": self.security_definitions,
                "security": list(self.security),
            }
        )


@dataclass
class ScrapeConfig:
    """Configuration for a scrape and synthesis run."""

    base_url: str = "https://start.exactonline.nl/docs/"
    overview_page: str = "HlpRestAPIResources.aspx"
    detail_prefix: str = "HlpRestAPIResourcesDetails.aspx"
    timeout: float = 30.0
    max_retries: int = 3
    request_delay: float = 0.5
    concurrency: int = 4
    include_names: list[str] = field(default_factory=list)
    max_endpoints: int = 0  # 0 = unlimited
    fail_fast: bool = False
    # Diagnostic thresholds
    max_keyless_ratio: float = 0.01
    max_descriptionless_per_page: float = 1.0
    max_failed_page_ratio: float = 0.02
    max_failed_properties_per_page: float = 1.0

    @property
    def overview_url(self) -> str:
        return self.base_url + self.overview_page


@dataclass
class SpecInfo:
    """Metadata placed in the generated document's ``info`` block."""

    version: str
    title: str = "Exact Online REST API"
    description: str = "Autogenerated using exactspec"
    contact_name: Optional[str] = "exactspec"
    contact_url: Optional[str] = None
    contact_email: Optional[str] = None
    license_name: str = "MIT"
    host: str = "start.exactonline.nl"
    base_path: str = "/"
    schemes: tuple[str, ...] = ("https",)
    media_types: tuple[str, ...] = ("application/json",)


@dataclass
class PageResult:
    """Result of fetching and extracting a single detail page."""

    url: str
    status: ScrapeStatus
    endpoint: Optional[EndpointModel] = None
    error: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class ScrapeReport:
    """Per-page outcomes of a run plus the diagnostics derived from them."""

    base_url: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_urls: int = 0
    results: list[PageResult] = field(default_factory=list)

    @property
    def endpoints(self) -> list[EndpointModel]:
        return [r.endpoint for r in self.results if r.endpoint is not None]

    @property
    def failed(self) -> list[PageResult]:
        return [r for r in self.results if r.status == ScrapeStatus.FAILED]

    @property
    def keyless_endpoints(self) -> list[str]:
        return [e.name for e in self.endpoints if not e.key_properties]

    @property
    def descriptionless_properties(self) -> list[tuple[str, str]]:
        return [
            (e.name, p.name)
            for e in self.endpoints
            for p in e.properties
            if p.description is None
        ]

    @property
    def failed_properties(self) -> list[tuple[str, ParseFailure]]:
        return [(e.name, f) for e in self.endpoints for f in e.failed_properties]

    def _per_page(self, count: int) -> float:
        if not self.total_urls:
            return 0.0
        return count / self.total_urls

    def warnings(self, config: ScrapeConfig) -> list[str]:
        """Describe every diagnostic that exceeds its configured threshold."""
        messages = []

        keyless = self.keyless_endpoints
        if self._per_page(len(keyless)) > config.max_keyless_ratio:
            messages.append(
                f"{len(keyless)} endpoints have no primary key: {', '.join(keyless)}"
            )

        descriptionless = self.descriptionless_properties
        if self._per_page(len(descriptionless)) > config.max_descriptionless_per_page:
            names = ", ".join(f"{e}>{p}" for e, p in descriptionless)
            messages.append(
                f"{len(descriptionless)} properties have no description: {names}"
            )

        failed = self.failed
        if self._per_page(len(failed)) > config.max_failed_page_ratio:
            details = "; ".join(f"{r.url} failed with: {r.error}" for r in failed)
            messages.append(f"{len(failed)} endpoints could not be parsed: {details}")

        failed_properties = self.failed_properties
        if self._per_page(len(failed_properties)) > config.max_failed_properties_per_page:
            details = "; ".join(f"in {e} failed with: {f}" for e, f in failed_properties)
            messages.append(
                f"{len(failed_properties)} properties could not be parsed: {details}"
            )

        return messages

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "base_url": self.base_url,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "stats": {
                "total_urls": self.total_urls,
                "successful": len(self.endpoints),
                "failed": len(self.failed),
                "keyless_endpoints": len(self.keyless_endpoints),
                "descriptionless_properties": len(self.descriptionless_properties),
                "failed_properties": len(self.failed_properties),
            },
            "endpoints": [
                {
                    "url": r.url,
                    "name": r.endpoint.name,
                    "uri": r.endpoint.uri,
                    "methods": sorted(m.value for m in r.endpoint.methods),
                    "properties": len(r.endpoint.properties),
                    "failed_properties": [str(f) for f in r.endpoint.failed_properties],
                }
                for r in self.results
                if r.endpoint is not None
            ],
            "failed_urls": [{"url": r.url, "error": r.error} for r in self.failed],
        }
