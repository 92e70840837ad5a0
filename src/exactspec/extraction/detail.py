"""Extraction of endpoint models from detail pages."""

import logging
from typing import Optional, Union

from bs4 import Tag

from exactspec.core.errors import (
    PageParseError,
    PropertyParseError,
    UnrecognizedMethodError,
)
from exactspec.core.models import (
    EdmType,
    EndpointModel,
    HttpMethod,
    ParseFailure,
    PropertyModel,
)
from exactspec.extraction.query import (
    attr,
    child_elements,
    contains,
    find_all,
    find_first,
    has_class,
    tag,
    text_of,
)

logger = logging.getLogger(__name__)

RowResult = Union[PropertyModel, ParseFailure]


class DetailPageExtractor:
    """Turn one endpoint detail page into an ``EndpointModel``.

    Page-level anchors (name, URI, reference table, supported methods) must
    be present or the whole page fails. Property rows are converted one by
    one; a row that fails is recorded as a ``ParseFailure`` and its siblings
    are still extracted.
    """

    def __init__(
        self,
        name_id: str = "endpoint",
        uri_id: str = "serviceUri",
        table_id: str = "referencetable",
        methods_control: str = "supportedmethods",
        key_literal: str = "True",
        description_class: str = "description",
        method_classes: Optional[dict[HttpMethod, str]] = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            name_id: ``id`` of the element holding the endpoint name.
            uri_id: ``id`` of the element holding the service URI.
            table_id: ``id`` of the property reference table.
            methods_control: ``name`` of the supported-methods inputs.
            key_literal: ``data-key`` value marking a key property.
            description_class: Class of a row cell holding the description.
                Rows without such a cell fall back to the second-to-last cell.
            method_classes: Marker class per method on property rows.
        """
        self._name_id = name_id
        self._uri_id = uri_id
        self._table_id = table_id
        self._methods_control = methods_control
        self._key_literal = key_literal
        self._description_class = description_class
        self._method_classes = method_classes or {
            HttpMethod.GET: "showget",
            HttpMethod.POST: "showpost",
            HttpMethod.PUT: "showput",
            HttpMethod.DELETE: "showdelete",
        }

    def extract(self, document: Tag) -> EndpointModel:
        """Extract the endpoint described by ``document``.

        Raises:
            PageParseError: If a required anchor element is missing or the
                page declares an unknown HTTP method.
        """
        name = self._required_text(document, self._name_id, "EndpointName not found")
        uri = self._required_text(
            document, self._uri_id, f"Endpoint {name} - service URI not found"
        )

        results = [
            self._convert_row(row, index)
            for index, row in enumerate(self._property_rows(document, name), 1)
        ]
        properties = tuple(r for r in results if isinstance(r, PropertyModel))
        failed = tuple(r for r in results if isinstance(r, ParseFailure))

        for failure in failed:
            logger.debug("Endpoint %s: skipped property (%s)", name, failure)

        return EndpointModel(
            name=name,
            uri=uri,
            properties=properties,
            failed_properties=failed,
            methods=self._endpoint_methods(document, name),
        )

    def _required_text(self, document: Tag, element_id: str, message: str) -> str:
        node = find_first(document, attr("id", element_id))
        text = text_of(node) if node is not None else ""
        if not text:
            raise PageParseError(message)
        return text

    def _property_rows(self, document: Tag, name: str) -> list[Tag]:
        table = find_first(document, attr("id", self._table_id))
        if table is None:
            raise PageParseError(f"Endpoint {name} - referencetable not found")

        body = find_first(table, tag("tbody"))
        if body is None:
            raise PageParseError(f"Endpoint {name} - table body not found")

        # First row is the header
        rows = [child for child in child_elements(body) if child.name == "tr"]
        return rows[1:]

    def _convert_row(self, row: Tag, index: int) -> RowResult:
        try:
            return self._parse_property(row)
        except PropertyParseError as e:
            control = find_first(row, tag("input"))
            property_name = control.get("name") if control is not None else None
            return ParseFailure(cause=str(e), property_name=property_name or None, row=index)

    def _parse_property(self, row: Tag) -> PropertyModel:
        control = find_first(row, tag("input"))
        if control is None:
            raise PropertyParseError("could not find name and type of property")

        name = control.get("name")
        if not name:
            raise PropertyParseError("could not find property name")

        try:
            edm_type = EdmType.from_token(control.get("data-type"))
        except PropertyParseError as e:
            raise PropertyParseError(f"While parsing property {name}: {e}") from e

        return PropertyModel(
            name=name,
            edm_type=edm_type,
            description=self._description(row),
            is_key=control.get("data-key") == self._key_literal,
            methods=frozenset(
                method
                for method, marker in self._method_classes.items()
                if contains(row, has_class(marker))
            ),
        )

    def _description(self, row: Tag) -> Optional[str]:
        cell = find_first(row, has_class(self._description_class))
        if cell is None:
            cells = child_elements(row)
            if len(cells) < 2:
                raise PropertyParseError("could not find property description")
            cell = cells[-2]
        return text_of(cell) or None

    def _endpoint_methods(self, document: Tag, name: str) -> frozenset[HttpMethod]:
        control = attr("name", self._methods_control)
        methods = set()
        for node in find_all(document, control):
            value = (node.get("value") or "").strip()
            if not value:
                continue
            try:
                methods.add(HttpMethod(value))
            except ValueError:
                raise UnrecognizedMethodError(name, value) from None
        return frozenset(methods)


def extract_endpoint(document: Tag) -> EndpointModel:
    """Extract an endpoint using the default page layout."""
    return DetailPageExtractor().extract(document)
