"""
harvester/services/catalog_harvest_service.py

Service orchestration for one merchant catalog harvest.
"""

from __future__ import annotations

from pathlib import Path

from harvester.domain.harvest import HarvestSummary
from harvester.domain.products import CrawlState
from harvester.scraping.config import HarvestSettings, get_harvest_settings
from harvester.scraping.crawler import PaginationCrawler
from harvester.scraping.enricher import DetailEnricher
from harvester.scraping.http_client import FetchClient, HttpxFetchClient
from harvester.scraping.rate_limiter import JitterRateLimiter
from harvester.scraping.storage import PRODUCT_DETAILS_FILE, PRODUCTS_FILE, ProductStorage


class CatalogHarvestService:
    """
    Crawls a merchant catalog, persists it, then enriches and persists again.

    One fetch client serves the whole run; it is built here unless injected.
    """

    def __init__(
        self,
        *,
        storage: ProductStorage,
        settings: HarvestSettings | None = None,
        client: FetchClient | None = None,
    ) -> None:
        self._settings = settings or get_harvest_settings()
        self._storage = storage
        self._client = client

    async def harvest(
        self,
        merchant_id: int,
        *,
        fetch_details: bool = True,
        state: CrawlState | None = None,
    ) -> HarvestSummary:
        if self._client is not None:
            return await self._run(self._client, merchant_id, fetch_details, state)

        async with HttpxFetchClient.build(self._settings) as client:
            return await self._run(client, merchant_id, fetch_details, state)

    async def _run(
        self,
        client: FetchClient,
        merchant_id: int,
        fetch_details: bool,
        state: CrawlState | None,
    ) -> HarvestSummary:
        crawler = PaginationCrawler(
            client=client,
            settings=self._settings,
            rate_limiter=self._page_limiter(),
        )
        products = await crawler.crawl(merchant_id, state=state)

        written: list[Path] = [self._storage.save_products(products, name=PRODUCTS_FILE)]
        if not fetch_details or not products:
            return HarvestSummary(
                merchant_id=merchant_id,
                products=products,
                written_files=written,
            )

        enricher = DetailEnricher(
            client=client,
            settings=self._settings,
            rate_limiter=self._detail_limiter(),
        )
        report = await enricher.enrich(products)

        written.append(self._storage.save_products(products, name=PRODUCT_DETAILS_FILE))
        failed_path = self._storage.save_failed_products(report.failed)
        if failed_path is not None:
            written.append(failed_path)

        return HarvestSummary(
            merchant_id=merchant_id,
            products=products,
            failed=report.failed,
            details_fetched=True,
            written_files=written,
        )

    def _page_limiter(self) -> JitterRateLimiter:
        return JitterRateLimiter(
            min_seconds=self._settings.page_delay_min_seconds,
            max_seconds=self._settings.page_delay_max_seconds,
            seed=self._settings.jitter_seed,
        )

    def _detail_limiter(self) -> JitterRateLimiter:
        return JitterRateLimiter(
            min_seconds=self._settings.detail_delay_min_seconds,
            max_seconds=self._settings.detail_delay_max_seconds,
            seed=self._settings.jitter_seed,
        )
