"""Discovery of endpoint detail pages."""

from exactspec.discovery.index import (
    endpoint_name_from_url,
    extract_endpoint_urls,
    select_endpoint_urls,
)

__all__ = [
    "endpoint_name_from_url",
    "extract_endpoint_urls",
    "select_endpoint_urls",
]
