"""Scrape-and-synthesize pipeline.

Detail pages are independent, so they are fetched and extracted
concurrently under a semaphore. Results are gathered in discovery order
and synthesis only starts once every page has been processed.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from exactspec.core.errors import PageParseError, TransportError
from exactspec.core.interfaces import DocumentFetcher
from exactspec.core.models import (
    PageResult,
    ScrapeConfig,
    ScrapeReport,
    ScrapeStatus,
    SpecificationDocument,
    SpecInfo,
)
from exactspec.discovery.index import extract_endpoint_urls, select_endpoint_urls
from exactspec.extraction.detail import DetailPageExtractor
from exactspec.synthesis.builder import build_specification

logger = logging.getLogger(__name__)


class SpecificationPipeline:
    """Discover, extract and synthesize the API specification."""

    def __init__(
        self,
        fetcher: DocumentFetcher,
        config: ScrapeConfig,
        extractor: Optional[DetailPageExtractor] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            fetcher: Document fetcher used for every page.
            config: Scrape configuration.
            extractor: Detail page extractor (default layout if omitted).
        """
        self._fetcher = fetcher
        self._config = config
        self._extractor = extractor or DetailPageExtractor()

    async def discover(self) -> list[str]:
        """Return the selected detail page URLs.

        Raises:
            TransportError: If the overview page could not be fetched.
            PageParseError: If the overview page links to no detail pages.
        """
        logger.info("Discovering endpoints from %s", self._config.overview_url)
        document = await self._fetcher.fetch(self._config.overview_url)
        urls = extract_endpoint_urls(
            document, self._config.base_url, self._config.detail_prefix
        )
        if not urls:
            raise PageParseError(
                f"No endpoint detail links found on {self._config.overview_url}"
            )

        selected = select_endpoint_urls(
            urls, self._config.include_names, self._config.max_endpoints
        )
        logger.info("Selected %d of %d endpoints", len(selected), len(urls))
        return selected

    async def extract_pages(self, urls: list[str]) -> list[PageResult]:
        """Fetch and extract every URL, preserving input order.

        Raises:
            TransportError, PageParseError: Only when ``fail_fast`` is set.
                Pages still in flight are cancelled before the error
                propagates.
        """
        semaphore = asyncio.Semaphore(max(1, self._config.concurrency))
        total = len(urls)
        tasks = [
            asyncio.ensure_future(self._process(url, index, total, semaphore))
            for index, url in enumerate(urls, 1)
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _process(
        self, url: str, index: int, total: int, semaphore: asyncio.Semaphore
    ) -> PageResult:
        async with semaphore:
            logger.info("[%d/%d] Extracting: %s", index, total, url)
            start_time = time.time()

            try:
                document = await self._fetcher.fetch(url)
                endpoint = self._extractor.extract(document)
                result = PageResult(
                    url=url,
                    status=ScrapeStatus.SUCCESS,
                    endpoint=endpoint,
                    duration_ms=(time.time() - start_time) * 1000,
                )

            except (TransportError, PageParseError) as e:
                if self._config.fail_fast:
                    raise
                logger.info("  -> FAILED: %s", e)
                result = PageResult(
                    url=url,
                    status=ScrapeStatus.FAILED,
                    error=str(e),
                    duration_ms=(time.time() - start_time) * 1000,
                )

            # Rate limiting
            await asyncio.sleep(self._config.request_delay)
            return result

    async def collect(self) -> ScrapeReport:
        """Discover and extract every selected endpoint."""
        report = ScrapeReport(
            base_url=self._config.base_url,
            started_at=datetime.now(timezone.utc),
        )
        urls = await self.discover()
        report.total_urls = len(urls)
        report.results = await self.extract_pages(urls)
        report.completed_at = datetime.now(timezone.utc)

        for message in report.warnings(self._config):
            logger.warning(message)

        return report

    async def run(self, info: SpecInfo) -> tuple[SpecificationDocument, ScrapeReport]:
        """Run the full pipeline.

        Returns:
            The synthesized document and the report it was built from.
        """
        report = await self.collect()
        document = build_specification(report.endpoints, info)
        logger.info(
            "Synthesized %d paths and %d definitions",
            len(document.paths),
            len(document.definitions),
        )
        return document, report
