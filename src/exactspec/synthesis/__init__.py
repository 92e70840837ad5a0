"""Synthesis of the API specification document."""

from exactspec.synthesis.builder import build_specification
from exactspec.synthesis.types import OpenApiType, openapi_type, property_schema

__all__ = [
    "OpenApiType",
    "build_specification",
    "openapi_type",
    "property_schema",
]
