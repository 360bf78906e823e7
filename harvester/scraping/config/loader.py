"""
Environment-driven settings loader for catalog harvesting.
"""

from __future__ import annotations

from functools import lru_cache

from harvester.config import (
    get_float_env,
    get_int_env,
    get_optional_int_env,
    get_str_env,
)
from harvester.scraping.config.models import HarvestSettings

DEFAULT_SEARCH_API_URL = (
    "https://apigw.trendyol.com/discovery-web-searchgw-service/v2/api/infinite-scroll/sr"
)
DEFAULT_DESCRIPTION_API_URL = (
    "https://apigw.trendyol.com/discovery-web-productgw-service/api/product-detail/"
    "{product_id}/html-content"
)
DEFAULT_PRODUCT_BASE_URL = "https://www.trendyol.com"
DEFAULT_IMAGE_BASE_URL = "https://cdn.dsmcdn.com"


def _delay_range(prefix: str, default_min: float, default_max: float) -> tuple[float, float]:
    low = max(0.0, get_float_env(f"{prefix}_MIN_SECONDS", default_min))
    high = max(0.0, get_float_env(f"{prefix}_MAX_SECONDS", default_max))
    if high < low:
        high = low
    return low, high


@lru_cache(maxsize=1)
def get_harvest_settings() -> HarvestSettings:
    """
    Return cached harvest settings from environment variables.
    """

    page_min, page_max = _delay_range("HARVEST_PAGE_DELAY", 0.2, 0.7)
    detail_min, detail_max = _delay_range("HARVEST_DETAIL_DELAY", 0.0, 0.3)
    return HarvestSettings(
        search_api_url=get_str_env("HARVEST_SEARCH_API_URL", DEFAULT_SEARCH_API_URL),
        description_api_url=get_str_env(
            "HARVEST_DESCRIPTION_API_URL",
            DEFAULT_DESCRIPTION_API_URL,
        ),
        product_base_url=get_str_env(
            "HARVEST_PRODUCT_BASE_URL",
            DEFAULT_PRODUCT_BASE_URL,
        ).rstrip("/"),
        image_base_url=get_str_env(
            "HARVEST_IMAGE_BASE_URL",
            DEFAULT_IMAGE_BASE_URL,
        ).rstrip("/"),
        timeout_seconds=max(1.0, get_float_env("HARVEST_TIMEOUT_SECONDS", 30.0)),
        max_connections=max(1, get_int_env("HARVEST_MAX_CONNECTIONS", 10)),
        page_delay_min_seconds=page_min,
        page_delay_max_seconds=page_max,
        detail_delay_min_seconds=detail_min,
        detail_delay_max_seconds=detail_max,
        output_dir=get_str_env("HARVEST_OUTPUT_DIR", "testing"),
        jitter_seed=get_optional_int_env("HARVEST_JITTER_SEED"),
    )
