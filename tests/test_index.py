"""Tests for endpoint discovery from the overview page."""

from exactspec.discovery.index import (
    endpoint_name_from_url,
    extract_endpoint_urls,
    select_endpoint_urls,
)
from exactspec.extraction.query import parse_markup

BASE_URL = "https://start.exactonline.nl/docs/"
DETAIL = BASE_URL + "HlpRestAPIResourcesDetails.aspx?name="


class TestExtractEndpointUrls:
    """Tests for extract_endpoint_urls."""

    def test_keeps_detail_links_in_order(self, overview_html):
        """Test filtering, resolution and adjacent de-duplication."""
        urls = extract_endpoint_urls(parse_markup(overview_html), BASE_URL)
        assert urls == [
            DETAIL + "CRMAccounts",
            DETAIL + "SalesInvoices",
            DETAIL + "CRMAccounts",
        ]

    def test_absolute_links(self):
        """Test that absolute links to the docs are accepted."""
        html = f'<a href="{DETAIL}Items#props">Items</a>'
        assert extract_endpoint_urls(parse_markup(html), BASE_URL) == [DETAIL + "Items"]

    def test_root_relative_links(self):
        """Test links relative to the host root."""
        html = '<a href="/docs/HlpRestAPIResourcesDetails.aspx?name=Items">Items</a>'
        assert extract_endpoint_urls(parse_markup(html), BASE_URL) == [DETAIL + "Items"]

    def test_empty_when_nothing_qualifies(self):
        """Test that no qualifying links yields an empty list, not an error."""
        html = '<a href="HlpRestAPIResources.aspx">Home</a><a href="mailto:x@y.z">Mail</a>'
        assert extract_endpoint_urls(parse_markup(html), BASE_URL) == []


class TestEndpointSelection:
    """Tests for name-based selection of detail URLs."""

    urls = [DETAIL + "CRMAccounts", DETAIL + "SalesInvoices", DETAIL + "Items"]

    def test_endpoint_name_from_url(self):
        """Test reading the name query parameter."""
        assert endpoint_name_from_url(DETAIL + "CRMAccounts") == "CRMAccounts"
        assert endpoint_name_from_url(BASE_URL + "HlpRestAPIResources.aspx") is None

    def test_select_all(self):
        """Test that no filters keeps every URL."""
        assert select_endpoint_urls(self.urls) == self.urls

    def test_select_by_name(self):
        """Test case-insensitive name filtering."""
        assert select_endpoint_urls(self.urls, ["items", "CRMAccounts"]) == [
            DETAIL + "CRMAccounts",
            DETAIL + "Items",
        ]

    def test_limit(self):
        """Test the endpoint count limit."""
        assert select_endpoint_urls(self.urls, max_endpoints=2) == self.urls[:2]
