"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path
from typing import Optional

import pytest

from exactspec.core.models import (
    EdmType,
    EndpointModel,
    HttpMethod,
    PropertyModel,
    SpecInfo,
)

GET, POST, PUT, DELETE = HttpMethod.GET, HttpMethod.POST, HttpMethod.PUT, HttpMethod.DELETE

HEADER_ROW = "<tr><th>Name</th><th>Type</th><th>Description</th><th></th></tr>"


def property_row(
    name: str,
    data_type: str = "Edm.String",
    description: str = "",
    key: bool = False,
    classes: str = "showget showpost",
) -> str:
    """Render one reference table row the way the documentation does."""
    key_attr = ' data-key="True"' if key else ' data-key="False"'
    return (
        f'<tr class="{classes}">'
        f'<td><input type="hidden" name="{name}" data-type="{data_type}"{key_attr} />{name}</td>'
        f"<td>{data_type}</td>"
        f"<td>{description}</td>"
        f"<td></td>"
        f"</tr>"
    )


def detail_page(
    name: Optional[str] = "WidgetItems",
    uri: Optional[str] = "/Widgets",
    methods: tuple[str, ...] = ("GET", "POST"),
    rows: tuple[str, ...] = (),
) -> str:
    """Render an endpoint detail page."""
    controls = "\n".join(
        f'<input type="checkbox" name="supportedmethods" value="{m}" checked />'
        for m in methods
    )
    name_elem = f'<span id="endpoint">{name}</span>' if name is not None else ""
    uri_elem = f'<span id="serviceUri">{uri}</span>' if uri is not None else ""
    return f"""
    <!DOCTYPE html>
    <html>
    <head><title>{name}</title></head>
    <body>
        <h1>Endpoint: {name_elem}</h1>
        <p>Uri: {uri_elem}</p>
        <div class="methods">
            {controls}
        </div>
        <table id="referencetable">
            <tbody>
                {HEADER_ROW}
                {"".join(rows)}
            </tbody>
        </table>
    </body>
    </html>
    """


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def widget_html():
    """Detail page of a GET/POST endpoint with one key and one plain property."""
    return detail_page(
        rows=(
            property_row("ID", "Edm.Int32", "Primary key", key=True),
            property_row("Name", "Edm.String", "Widget name"),
        )
    )


@pytest.fixture
def overview_html():
    """Sample overview page listing detail pages."""
    return """
    <html>
    <body>
        <a href="HlpRestAPIResources.aspx">Home</a>
        <a href="HlpRestAPIResourcesDetails.aspx?name=CRMAccounts">CRM Accounts</a>
        <a href="HlpRestAPIResourcesDetails.aspx?name=CRMAccounts">CRM Accounts</a>
        <a href="HlpRestAPIResourcesDetails.aspx?name=SalesInvoices">Sales Invoices</a>
        <a href="https://other.example.com/HlpRestAPIResourcesDetails.aspx?name=Nope">External</a>
        <a href="#top">Top</a>
        <a href="HlpRestAPIResourcesDetails.aspx?name=CRMAccounts">CRM Accounts again</a>
        <a>No target</a>
    </body>
    </html>
    """


@pytest.fixture
def spec_info():
    """Document metadata for synthesis tests."""
    return SpecInfo(version="0.0.0-test")


@pytest.fixture
def widget_endpoint():
    """The endpoint described by ``widget_html``."""
    return EndpointModel(
        name="WidgetItems",
        uri="/Widgets",
        properties=(
            PropertyModel("ID", EdmType.INT32, "Primary key", True, frozenset({GET, POST})),
            PropertyModel("Name", EdmType.STRING, "Widget name", False, frozenset({GET, POST})),
        ),
        methods=frozenset({GET, POST}),
    )


@pytest.fixture
def full_endpoint():
    """An endpoint supporting every method inside a division."""
    return EndpointModel(
        name="CRMAccounts",
        uri="/api/v1/{division}/crm/Accounts",
        properties=(
            PropertyModel("ID", EdmType.GUID, "Primary key", True, frozenset({GET, PUT, DELETE})),
            PropertyModel("Code", EdmType.STRING, None, False, frozenset({GET, POST})),
            PropertyModel("Created", EdmType.DATETIME, "Creation date", False, frozenset({GET})),
            PropertyModel("Status", EdmType.INT16, "Status", False, frozenset({POST, PUT})),
        ),
        methods=frozenset({GET, POST, PUT, DELETE}),
    )


@pytest.fixture
def make_detail_page():
    """Factory rendering detail pages."""
    return detail_page


@pytest.fixture
def make_row():
    """Factory rendering reference table rows."""
    return property_row
