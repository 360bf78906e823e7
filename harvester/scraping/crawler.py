"""
Price-windowed pagination crawler for the merchant catalog search API.

The search API serves only a bounded number of pages per filter. Results are
requested in ascending price order; when the ceiling is hit, a new window is
opened with a price floor just below the last accepted product, which gives
the server a fresh filter (and a fresh ceiling) to paginate.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from harvester.domain.products import (
    Brand,
    CrawlState,
    PriceDetails,
    ProductRecord,
)
from harvester.scraping.config.models import HarvestSettings
from harvester.scraping.errors import (
    FetchFailure,
    HarvestError,
    MalformedApiResponseError,
    PageCeilingError,
)
from harvester.scraping.http_client import FetchClient, FetchResponse
from harvester.scraping.logging_utils import log_event
from harvester.scraping.rate_limiter import JitterRateLimiter

logger = logging.getLogger(__name__)

PAGE_CEILING_STATUS = 404
PAGE_CEILING_PHRASE = "Page index cannot be higher than"
PRICE_FLOOR_STEP = Decimal("0.01")

BASE_QUERY_PARAMS: dict[str, str] = {
    "os": "1",
    "culture": "tr-TR",
    "userGenderId": "1",
    "pId": "0",
    "isLegalRequirementConfirmed": "false",
    "searchStrategyType": "DEFAULT",
    "productStampType": "TypeA",
    "scoringAlgorithmId": "2",
    "fixSlotProductAdsIncluded": "true",
    "channelId": "1",
    "sst": "PRICE_BY_ASC",
}


def is_page_ceiling(response: FetchResponse) -> bool:
    """
    Both the status and the body phrase must match; the same status is also
    used for unrelated, fatal errors.
    """

    return response.status_code == PAGE_CEILING_STATUS and PAGE_CEILING_PHRASE in response.text


def find_next_min_price(products: Sequence[ProductRecord], last_price: Decimal) -> Decimal:
    """
    Scan backwards for the nearest original price strictly below `last_price`.

    Falls back to `last_price` itself when no lower price exists.
    """

    for product in reversed(products):
        if product.price.original_price < last_price:
            return product.price.original_price
    return last_price


def format_price_filter(min_price: Decimal) -> str:
    return f"{format(min_price + PRICE_FLOOR_STEP, 'f')}-*"


def build_search_params(
    merchant_id: int,
    page: int,
    min_price: Decimal | None = None,
) -> dict[str, str]:
    params = {"mid": str(merchant_id), **BASE_QUERY_PARAMS}
    if min_price is not None:
        params["prc"] = format_price_filter(min_price)
    params["pi"] = str(page)
    return params


def parse_search_page(text: str) -> list[dict[str, Any]]:
    """
    Return the raw product entries of one search response.

    A missing `result` or `products` counts as an empty page.
    """

    try:
        payload = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        raise MalformedApiResponseError(f"Search response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedApiResponseError("Search response must be a JSON object.")

    result = payload.get("result")
    if result is None:
        return []
    if not isinstance(result, dict):
        raise MalformedApiResponseError("Search response 'result' must be an object.")

    products = result.get("products")
    if products is None:
        return []
    if not isinstance(products, list):
        raise MalformedApiResponseError("Search response 'products' must be a list.")
    return [entry for entry in products if isinstance(entry, dict)]


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Expected a number, got {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Expected a number, got {value!r}") from exc


def convert_product(
    raw: dict[str, Any],
    *,
    product_base_url: str,
    image_base_url: str,
) -> ProductRecord:
    """
    Convert one raw search entry into a `ProductRecord`.
    """

    try:
        brand = raw["brand"]
        price = raw["price"]
        return ProductRecord(
            id=int(raw["id"]),
            brand=Brand(id=int(brand["id"]), name=str(brand["name"])),
            category_hierarchy=str(raw["categoryHierarchy"]),
            category_name=str(raw["categoryName"]),
            category_id=int(raw["categoryId"]),
            url=product_base_url + str(raw["url"]),
            name=str(raw["name"]),
            image_urls=[image_base_url + str(path) for path in raw["images"]],
            price=PriceDetails(
                discounted_price=_to_decimal(price["discountedPrice"]),
                original_price=_to_decimal(price["originalPrice"]),
                currency_code=str(price["currencyCode"]),
            ),
            tax=_to_decimal(raw["tax"]),
        )
    except KeyError as exc:
        raise MalformedApiResponseError(
            f"Product entry {raw.get('id')!r} is missing field {exc.args[0]!r}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise MalformedApiResponseError(
            f"Product entry {raw.get('id')!r} has an invalid value: {exc}"
        ) from exc


@dataclass(frozen=True)
class WindowOutcome:
    """
    How one price window ended.
    """

    limit_reached: bool
    last_product: ProductRecord | None
    accepted: int


class PaginationCrawler:
    """
    Collects a merchant's full, duplicate-free catalog in fetch order.
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

    async def crawl(
        self,
        merchant_id: int,
        *,
        state: CrawlState | None = None,
    ) -> list[ProductRecord]:
        """
        Crawl every price window until the API reports no more products.

        Pass `state` to keep access to partial results if the task is
        cancelled; any fetch error other than the page ceiling propagates.
        """

        state = state if state is not None else CrawlState()
        min_price: Decimal | None = None

        while True:
            state.windows += 1
            outcome = await self._crawl_window(merchant_id, min_price, state)
            if not outcome.limit_reached:
                break

            if outcome.accepted == 0:
                log_event(
                    logger,
                    logging.WARNING,
                    "window_made_no_progress",
                    merchant_id=merchant_id,
                    min_price=min_price,
                    total_products=len(state.products),
                )
                break

            last_price = outcome.last_product.price.original_price
            min_price = find_next_min_price(state.products, last_price)
            log_event(
                logger,
                logging.INFO,
                "window_advanced",
                merchant_id=merchant_id,
                accepted=outcome.accepted,
                last_price=last_price,
                min_price=min_price,
                floor_reused=min_price == last_price,
            )

        log_event(
            logger,
            logging.INFO,
            "crawl_completed",
            merchant_id=merchant_id,
            total_products=len(state.products),
            windows=state.windows,
            pages_fetched=state.pages_fetched,
        )
        return state.products

    async def _crawl_window(
        self,
        merchant_id: int,
        min_price: Decimal | None,
        state: CrawlState,
    ) -> WindowOutcome:
        page = 1
        accepted = 0
        last_product: ProductRecord | None = None

        while True:
            try:
                page_products = await self._fetch_page(merchant_id, page, min_price)
            except PageCeilingError:
                log_event(
                    logger,
                    logging.INFO,
                    "page_ceiling_hit",
                    merchant_id=merchant_id,
                    min_price=min_price,
                    page=page,
                )
                return WindowOutcome(
                    limit_reached=True,
                    last_product=last_product,
                    accepted=accepted,
                )
            except HarvestError as exc:
                log_event(
                    logger,
                    logging.ERROR,
                    "page_fetch_failed",
                    merchant_id=merchant_id,
                    min_price=min_price,
                    page=page,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise

            if not page_products:
                log_event(
                    logger,
                    logging.INFO,
                    "window_exhausted",
                    merchant_id=merchant_id,
                    min_price=min_price,
                    page=page,
                )
                return WindowOutcome(
                    limit_reached=False,
                    last_product=last_product,
                    accepted=accepted,
                )

            for product in page_products:
                if product.id in state.seen_ids:
                    continue
                state.products.append(product)
                state.seen_ids.add(product.id)
                accepted += 1
                last_product = product

            state.pages_fetched += 1
            log_event(
                logger,
                logging.INFO,
                "page_fetched",
                merchant_id=merchant_id,
                min_price=min_price,
                page=page,
                total_products=len(state.products),
            )
            page += 1
            await self._rate_limiter.wait()

    async def _fetch_page(
        self,
        merchant_id: int,
        page: int,
        min_price: Decimal | None,
    ) -> list[ProductRecord]:
        params = build_search_params(merchant_id, page, min_price)
        response = await self._client.get(self._settings.search_api_url, params=params)
        if not response.is_success:
            if is_page_ceiling(response):
                raise PageCeilingError(page=page, status_code=response.status_code)
            raise FetchFailure(
                f"Search page {page} returned HTTP {response.status_code}",
                url=response.url,
                status_code=response.status_code,
                body=response.text[:500],
            )
        return [
            convert_product(
                raw,
                product_base_url=self._settings.product_base_url,
                image_base_url=self._settings.image_base_url,
            )
            for raw in parse_search_page(response.text)
        ]
