"""HTTP document fetcher using httpx and BeautifulSoup."""

import asyncio
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from exactspec.core.errors import TransportError
from exactspec.core.interfaces import DocumentFetcher
from exactspec.extraction.query import parse_markup

logger = logging.getLogger(__name__)


class HttpDocumentFetcher(DocumentFetcher):
    """Fetch documentation pages over HTTP."""

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds.
            max_retries: Attempts per URL (404s are never retried).
            retry_delay: Base delay between attempts, grows linearly.
            transport: Optional httpx transport, mainly for tests.
        """
        self._max_retries = max(1, max_retries)
        self._retry_delay = retry_delay
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def fetch(self, url: str) -> BeautifulSoup:
        """Fetch ``url`` and parse it.

        Raises:
            TransportError: If every attempt failed.
        """
        last_error: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                response = await self._client.get(url)
                response.raise_for_status()
                return parse_markup(response.text)

            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    raise TransportError(url, "page not found (404)") from e
                last_error = e

            except httpx.RequestError as e:
                last_error = e

            logger.debug("Attempt %d for %s failed: %s", attempt + 1, url, last_error)
            if attempt < self._max_retries - 1:
                await asyncio.sleep(self._retry_delay * (attempt + 1))

        raise TransportError(url, str(last_error)) from last_error

    async def aclose(self) -> None:
        await self._client.aclose()
