"""Synthesis of a Swagger 2.0 document from extracted endpoints.

The builder is a pure fold over the complete endpoint collection. Endpoints
are processed in (name, uri) order and every generated table is sorted by
key, so the same input always yields the same document regardless of the
order pages were fetched in.
"""

from typing import Any, Iterable, Optional

from exactspec.core.models import (
    EndpointModel,
    HttpMethod,
    SpecificationDocument,
    SpecInfo,
)
from exactspec.synthesis.types import property_schema

ITEM_SUFFIX = "(guid'{id}')"
SECURITY_SCHEME = "ApiKey"

SUCCESS_STATUS = {
    HttpMethod.GET: "200",
    HttpMethod.POST: "201",
    HttpMethod.PUT: "204",
    HttpMethod.DELETE: "200",
}

BODY_DEFINITION_SUFFIX = {
    HttpMethod.POST: "Post",
    HttpMethod.PUT: "Put",
}


def _ref(section: str, name: str) -> dict[str, str]:
    return {"$ref": f"#/{section}/{name}"}


def _sorted(mapping: dict[str, Any]) -> dict[str, Any]:
    return dict(sorted(mapping.items()))


def build_paths(endpoints: Iterable[EndpointModel]) -> dict[str, dict[str, Any]]:
    """Build the ``paths`` table.

    Item operations (PUT, DELETE) live on ``uri`` plus the item suffix;
    collection operations (GET, POST) on the bare ``uri``.
    """
    paths: dict[str, dict[str, Any]] = {}
    for endpoint in endpoints:
        if endpoint.supports(HttpMethod.PUT, HttpMethod.DELETE):
            paths[endpoint.uri + ITEM_SUFFIX] = _operations(
                endpoint, (HttpMethod.PUT, HttpMethod.DELETE)
            )
        if endpoint.supports(HttpMethod.GET, HttpMethod.POST):
            paths[endpoint.uri] = _operations(
                endpoint, (HttpMethod.GET, HttpMethod.POST)
            )
    return _sorted(paths)


def _operations(
    endpoint: EndpointModel, methods: tuple[HttpMethod, ...]
) -> dict[str, Any]:
    operations = {}
    for method in methods:
        operation = build_operation(method, endpoint)
        if operation is not None:
            operations[method.value.lower()] = operation
    return operations


def build_operation(
    method: HttpMethod, endpoint: EndpointModel
) -> Optional[dict[str, Any]]:
    """Build one operation, or None if the endpoint does not declare ``method``."""
    if method not in endpoint.methods:
        return None

    success: dict[str, Any] = {"description": "Command successful"}
    if method != HttpMethod.DELETE:
        success["schema"] = _ref("definitions", f"{endpoint.name}Response")

    responses = {
        SUCCESS_STATUS[method]: success,
        "400": {"description": "Bad request (syntax invalid)"},
        "401": {"description": "Unauthorized"},
        "404": {"description": "Not found"},
        "500": {"description": "Error", "schema": _ref("definitions", "Error")},
    }

    parameters: list[dict[str, Any]] = []
    if method == HttpMethod.GET:
        parameters.append(_ref("parameters", "filter"))
        parameters.append(_ref("parameters", "select"))
    if endpoint.has_division:
        parameters.append(_ref("parameters", "Division"))
    if method in BODY_DEFINITION_SUFFIX:
        parameters.append(
            {
                "name": "body",
                "in": "body",
                "required": True,
                "schema": _ref(
                    "definitions", endpoint.name + BODY_DEFINITION_SUFFIX[method]
                ),
            }
        )
    if method in (HttpMethod.PUT, HttpMethod.DELETE):
        parameters.append(
            {
                "name": "id",
                "in": "path",
                "required": True,
                "type": "string",
                "description": "ID of the entity to modify/delete",
            }
        )

    return {
        "tags": [endpoint.name],
        "operationId": f"{method.value.lower()}{endpoint.name}",
        "parameters": parameters,
        "responses": _sorted(responses),
    }


def build_definition(method: HttpMethod, endpoint: EndpointModel) -> dict[str, Any]:
    """Build the schema of the properties applicable to ``method``.

    GET schemas are wrapped in the ``{"d": {"results": [...]}}`` envelope.
    POST and PUT schemas require every key property.
    """
    schema: dict[str, Any] = {
        "type": "object",
        "properties": _sorted(
            {p.name: property_schema(p) for p in endpoint.properties_for(method)}
        ),
    }

    if method in (HttpMethod.POST, HttpMethod.PUT):
        required = [p.name for p in endpoint.key_properties]
        if required:
            schema["required"] = required
        return schema

    return {
        "type": "object",
        "required": ["d"],
        "properties": {
            "d": {
                "type": "object",
                "required": ["d"],
                "properties": {
                    "results": {"type": "array", "items": schema},
                },
            },
        },
    }


def build_error_schema() -> dict[str, Any]:
    """Schema of the OData error payload."""
    return {
        "type": "object",
        "properties": {
            "error": {
                "type": "object",
                "properties": {
                    "code": {"type": "string"},
                    "message": {
                        "type": "object",
                        "properties": {
                            "value": {"type": "string", "description": "Error cause"},
                        },
                    },
                },
            },
        },
    }


def build_definitions(endpoints: Iterable[EndpointModel]) -> dict[str, dict[str, Any]]:
    """Build the ``definitions`` table."""
    definitions = {"Error": build_error_schema()}
    for endpoint in endpoints:
        if endpoint.supports(HttpMethod.GET, HttpMethod.POST):
            definitions[f"{endpoint.name}Response"] = build_definition(
                HttpMethod.GET, endpoint
            )
        if endpoint.supports(HttpMethod.POST):
            definitions[f"{endpoint.name}Post"] = build_definition(
                HttpMethod.POST, endpoint
            )
        if endpoint.supports(HttpMethod.PUT):
            definitions[f"{endpoint.name}Put"] = build_definition(
                HttpMethod.PUT, endpoint
            )
    return _sorted(definitions)


def build_parameters() -> dict[str, dict[str, Any]]:
    """Build the reusable ``parameters`` table."""
    return _sorted(
        {
            "Division": {
                "name": "division",
                "in": "path",
                "required": True,
                "type": "integer",
                "format": "int32",
                "description": "Division code of the administration",
            },
            "filter": {
                "name": "$filter",
                "in": "query",
                "required": False,
                "type": "string",
                "description": "OData filter expression",
            },
            "select": {
                "name": "$select",
                "in": "query",
                "required": False,
                "type": "string",
                "description": "Comma separated list of properties to return",
            },
        }
    )


def build_info(info: SpecInfo) -> dict[str, Any]:
    """Build the ``info`` block."""
    contact = {
        key: value
        for key, value in (
            ("name", info.contact_name),
            ("url", info.contact_url),
            ("email", info.contact_email),
        )
        if value
    }
    block: dict[str, Any] = {
        "title": info.title,
        "description": info.description,
    }
    if contact:
        block["contact"] = contact
    block["license"] = {"name": info.license_name}
    block["version"] = info.version
    return block


def build_specification(
    endpoints: Iterable[EndpointModel], info: SpecInfo
) -> SpecificationDocument:
    """Fold a complete endpoint collection into a specification document.

    Args:
        endpoints: Every extracted endpoint. Must be complete; the document
            is not built incrementally.
        info: Document metadata.

    Returns:
        The synthesized document.
    """
    ordered = sorted(endpoints, key=lambda e: (e.name, e.uri))
    return SpecificationDocument(
        info=build_info(info),
        host=info.host,
        base_path=info.base_path,
        schemes=tuple(info.schemes),
        consumes=tuple(info.media_types),
        produces=tuple(info.media_types),
        paths=build_paths(ordered),
        definitions=build_definitions(ordered),
        parameters=build_parameters(),
        security_definitions={
            SECURITY_SCHEME: {
                "type": "apiKey",
                "name": "Authorization",
                "in": "header",
            }
        },
        security=({SECURITY_SCHEME: []},),
    )
