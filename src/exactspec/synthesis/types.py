"""Mapping from EDM types to Swagger primitive types."""

from dataclasses import dataclass
from typing import Any, Optional

from exactspec.core.models import EdmType, PropertyModel


@dataclass(frozen=True)
class OpenApiType:
    """A Swagger primitive type with an optional format."""

    type: str
    format: Optional[str] = None


# Formats prefixed with ``edm-`` have no standard Swagger equivalent.
EDM_TYPE_MAP: dict[EdmType, OpenApiType] = {
    EdmType.NULL: OpenApiType("null"),
    EdmType.BINARY: OpenApiType("string", "edm-binary"),
    EdmType.BOOLEAN: OpenApiType("boolean"),
    EdmType.BYTE: OpenApiType("string", "edm-byte"),
    EdmType.DATETIME: OpenApiType("string", "edm-datetime"),
    EdmType.DECIMAL: OpenApiType("string", "edm-decimal"),
    EdmType.DOUBLE: OpenApiType("number", "double"),
    EdmType.SINGLE: OpenApiType("number", "float"),
    EdmType.GUID: OpenApiType("string", "guid"),
    EdmType.INT16: OpenApiType("integer", "int16"),
    EdmType.INT32: OpenApiType("integer", "int32"),
    EdmType.INT64: OpenApiType("integer", "int64"),
    EdmType.SBYTE: OpenApiType("integer", "edm-int8"),
    EdmType.STRING: OpenApiType("string"),
    EdmType.TIME: OpenApiType("string", "edm-time"),
    EdmType.DATETIMEOFFSET: OpenApiType("string", "edm-date-time-offset"),
}


def openapi_type(edm_type: EdmType) -> OpenApiType:
    """Return the Swagger type for an EDM type."""
    return EDM_TYPE_MAP[edm_type]


def property_schema(prop: PropertyModel) -> dict[str, Any]:
    """Build the schema describing a single property."""
    mapped = openapi_type(prop.edm_type)
    schema: dict[str, Any] = {"type": mapped.type}
    if mapped.format:
        schema["format"] = mapped.format
    if prop.description:
        schema["description"] = prop.description
    return schema
