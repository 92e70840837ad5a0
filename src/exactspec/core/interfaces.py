"""Abstract interfaces for exactspec."""

from abc import ABC, abstractmethod

from bs4 import BeautifulSoup


class DocumentFetcher(ABC):
    """Abstract base class for retrieving documentation pages."""

    @abstractmethod
    async def fetch(self, url: str) -> BeautifulSoup:
        """Fetch a page and parse its markup.

        Args:
            url: Absolute URL of the page.

        Returns:
            Parsed document.

        Raises:
            TransportError: If the page could not be retrieved.
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the fetcher."""
        return None

    async def __aenter__(self) -> "DocumentFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
