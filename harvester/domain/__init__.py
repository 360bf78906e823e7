"""
Domain model exports.
"""

from harvester.domain.harvest import HarvestSummary
from harvester.domain.products import (
    Brand,
    CrawlState,
    EnrichmentReport,
    FailedProduct,
    PriceDetails,
    ProductAttribute,
    ProductDetails,
    ProductRecord,
)

__all__ = [
    "Brand",
    "CrawlState",
    "EnrichmentReport",
    "FailedProduct",
    "HarvestSummary",
    "PriceDetails",
    "ProductAttribute",
    "ProductDetails",
    "ProductRecord",
]
