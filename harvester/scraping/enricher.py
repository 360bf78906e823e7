"""
Per-product detail enrichment.

Each product is enriched independently and sequentially: attributes and a
bullet description come from the JSON embedded in the product page, the
long-form description from the rich-content API. A failure on one product is
recorded and never stops the batch.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from harvester.domain.products import (
    EnrichmentReport,
    FailedProduct,
    ProductDetails,
    ProductRecord,
)
from harvester.scraping.config.models import HarvestSettings
from harvester.scraping.embedded_json import extract_product_json
from harvester.scraping.errors import (
    FetchFailure,
    HarvestError,
    MalformedApiResponseError,
)
from harvester.scraping.http_client import FetchClient
from harvester.scraping.logging_utils import log_event
from harvester.scraping.parsing import (
    extract_text_from_html,
    parse_description_entries,
    process_attributes,
    process_descriptions,
)
from harvester.scraping.rate_limiter import JitterRateLimiter

logger = logging.getLogger(__name__)

ISOLATED_ERRORS = (HarvestError, ValueError, KeyError, TypeError)


def parse_product_details(product_json: str) -> ProductDetails:
    """
    Build `ProductDetails` from the embedded product object.
    """

    try:
        product = json.loads(product_json)
    except json.JSONDecodeError as exc:
        raise MalformedApiResponseError(f"Embedded product JSON is invalid: {exc}") from exc
    if not isinstance(product, dict):
        raise MalformedApiResponseError("Embedded product data is not a JSON object.")

    entries = parse_description_entries(product.get("descriptions") or [])
    return ProductDetails(
        attributes=process_attributes(product.get("attributes") or []),
        description=process_descriptions(entries),
    )


def parse_description_envelope(text: str) -> str:
    """
    Return the HTML fragment carried by a description API response.
    """

    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedApiResponseError(f"Description response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedApiResponseError("Description response must be a JSON object.")

    if payload.get("isSuccess") is not True or payload.get("statusCode") != 200:
        raise MalformedApiResponseError(f"Description API error: {payload.get('error')}")

    result = payload.get("result")
    if not isinstance(result, dict):
        return ""
    content = result.get("content")
    return content if isinstance(content, str) else ""


class DetailEnricher:
    """
    Enriches crawled products in place, one at a time.
    """

    def __init__(
        self,
        *,
        client: FetchClient,
        settings: HarvestSettings,
        rate_limiter: JitterRateLimiter,
    ) -> None:
        self._client = client
        self._settings = settings
        self._rate_limiter = rate_limiter

    async def enrich(self, products: Sequence[ProductRecord]) -> EnrichmentReport:
        """
        Enrich every product and report the ones that had to be skipped.
        """

        enriched: list[ProductRecord] = []
        failed: list[FailedProduct] = []
        total = len(products)

        for position, product in enumerate(products, start=1):
            try:
                await self.enrich_one(product)
            except ISOLATED_ERRORS as exc:
                failed.append(
                    FailedProduct(
                        product_id=product.id,
                        product_name=product.name,
                        url=product.url,
                        error=str(exc),
                        error_type=type(exc).__name__,
                    )
                )
                log_event(
                    logger,
                    logging.WARNING,
                    "product_enrichment_failed",
                    product_id=product.id,
                    url=product.url,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    progress=f"{position}/{total}",
                )
            else:
                enriched.append(product)
                log_event(
                    logger,
                    logging.DEBUG,
                    "product_enriched",
                    product_id=product.id,
                    attributes=len(product.details.attributes) if product.details else 0,
                    progress=f"{position}/{total}",
                )

            if position < total:
                await self._rate_limiter.wait()

        log_event(
            logger,
            logging.INFO,
            "enrichment_completed",
            total=total,
            enriched=len(enriched),
            failed=len(failed),
        )
        return EnrichmentReport(enriched=enriched, failed=failed)

    async def enrich_one(self, product: ProductRecord) -> ProductRecord:
        """
        Fetch both detail sources, then update `product`; a failure leaves it untouched.
        """

        details = await self.fetch_details(product.url)
        description = await self.fetch_description(product.id)
        product.details = details
        product.description = description
        return product

    async def fetch_details(self, url: str) -> ProductDetails:
        response = await self._client.get(url)
        if not response.is_success:
            raise FetchFailure(
                f"Product page returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return parse_product_details(extract_product_json(response.text, url))

    async def fetch_description(self, product_id: int) -> str:
        """
        Return the plain-text rich description, or "" when the endpoint is
        unreachable. An error envelope raises.
        """

        url = self._settings.description_url_for(product_id)
        try:
            response = await self._client.get(url)
        except FetchFailure as exc:
            self._log_description_unavailable(product_id, url, str(exc))
            return ""

        if not response.is_success:
            self._log_description_unavailable(
                product_id,
                url,
                f"HTTP {response.status_code}",
            )
            return ""

        fragment = parse_description_envelope(response.text)
        if not fragment.strip():
            return ""
        return extract_text_from_html(fragment)

    @staticmethod
    def _log_description_unavailable(product_id: int, url: str, reason: str) -> None:
        log_event(
            logger,
            logging.WARNING,
            "description_unavailable",
            product_id=product_id,
            url=url,
            reason=reason,
        )
