"""
Harvest configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HarvestSettings:
    """
    Runtime settings for catalog crawling and detail enrichment.
    """

    search_api_url: str
    description_api_url: str
    product_base_url: str
    image_base_url: str
    timeout_seconds: float
    max_connections: int
    page_delay_min_seconds: float
    page_delay_max_seconds: float
    detail_delay_min_seconds: float
    detail_delay_max_seconds: float
    output_dir: str
    jitter_seed: int | None = None

    def description_url_for(self, product_id: int) -> str:
        return self.description_api_url.format(product_id=product_id)
