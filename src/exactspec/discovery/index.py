"""Discovery of endpoint detail pages from the documentation overview."""

import logging
from typing import Optional
from urllib.parse import parse_qs, urldefrag, urljoin, urlparse

from bs4 import Tag

from exactspec.extraction.query import attr, find_all

logger = logging.getLogger(__name__)


def extract_endpoint_urls(
    document: Tag,
    base_url: str,
    detail_prefix: str = "HlpRestAPIResourcesDetails.aspx",
) -> list[str]:
    """Collect detail page URLs linked from the overview page.

    Links are resolved against ``base_url`` and kept only when they point
    at a detail page. Adjacent duplicates are dropped; first-seen order is
    preserved.

    Args:
        document: Parsed overview page.
        base_url: Documentation base URL, e.g. ``https://host/docs/``.
        detail_prefix: Page name that every detail link starts with.

    Returns:
        Absolute detail page URLs, possibly empty.
    """
    target = urljoin(base_url, detail_prefix)
    urls: list[str] = []

    for link in find_all(document, attr("href")):
        href = link["href"].strip()

        # Skip javascript, mailto and in-page anchors
        if not href or href.startswith(("javascript:", "mailto:", "#")):
            continue

        url, _ = urldefrag(urljoin(base_url, href))
        if not url.startswith(target):
            continue

        if urls and urls[-1] == url:
            continue
        urls.append(url)

    logger.debug("Found %d endpoint detail links", len(urls))
    return urls


def endpoint_name_from_url(url: str) -> Optional[str]:
    """Return the endpoint name a detail URL refers to (its ``name`` query)."""
    values = parse_qs(urlparse(url).query).get("name")
    return values[0] if values else None


def select_endpoint_urls(
    urls: list[str],
    include_names: Optional[list[str]] = None,
    max_endpoints: int = 0,
) -> list[str]:
    """Narrow discovered URLs by endpoint name and count.

    Args:
        urls: Detail page URLs.
        include_names: Endpoint names to keep (case-insensitive). Empty
            keeps all.
        max_endpoints: Maximum number of URLs to keep (0 = unlimited).
    """
    if include_names:
        wanted = {n.lower() for n in include_names}
        urls = [
            u for u in urls if (endpoint_name_from_url(u) or "").lower() in wanted
        ]
    if max_endpoints > 0:
        urls = urls[:max_endpoints]
    return urls
