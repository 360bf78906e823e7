"""
harvester/domain/products.py

Domain models for harvested catalog products and run outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class Brand:
    id: int
    name: str


@dataclass(frozen=True)
class PriceDetails:
    """
    Price block as served by the search API.
    """

    discounted_price: Decimal
    original_price: Decimal
    currency_code: str


@dataclass(frozen=True)
class ProductAttribute:
    key: str
    value: str


@dataclass(frozen=True)
class ProductDetails:
    """
    Attributes and bullet description read from the product detail page.
    """

    attributes: list[ProductAttribute]
    description: str


@dataclass
class ProductRecord:
    """
    One catalog product. Created by the crawler, enriched in place by the
    detail enricher.
    """

    id: int
    brand: Brand
    category_hierarchy: str
    category_name: str
    category_id: int
    url: str
    name: str
    image_urls: list[str]
    price: PriceDetails
    tax: Decimal
    details: ProductDetails | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        details: dict[str, Any] | None = None
        if self.details is not None:
            details = {
                "attributes": [
                    {"key": attribute.key, "value": attribute.value}
                    for attribute in self.details.attributes
                ],
                "description": self.details.description,
            }
        return {
            "id": self.id,
            "brand": {"id": self.brand.id, "name": self.brand.name},
            "category_hierarchy": self.category_hierarchy,
            "category_name": self.category_name,
            "category_id": self.category_id,
            "url": self.url,
            "name": self.name,
            "image_urls": list(self.image_urls),
            "price": {
                "discounted_price": self.price.discounted_price,
                "original_price": self.price.original_price,
                "currency_code": self.price.currency_code,
            },
            "tax": self.tax,
            "details": details,
            "description": self.description,
        }


@dataclass
class CrawlState:
    """
    Mutable crawl progress shared with the caller.

    `products` is always a valid, duplicate-free prefix of the final result,
    including after the crawl task is cancelled.
    """

    products: list[ProductRecord] = field(default_factory=list)
    seen_ids: set[int] = field(default_factory=set)
    windows: int = 0
    pages_fetched: int = 0


@dataclass(frozen=True)
class FailedProduct:
    """
    One product whose enrichment was skipped.
    """

    product_id: int
    product_name: str
    url: str
    error: str
    error_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "url": self.url,
            "error": self.error,
            "error_type": self.error_type,
        }


@dataclass(frozen=True)
class EnrichmentReport:
    enriched: list[ProductRecord]
    failed: list[FailedProduct] = field(default_factory=list)

    @property
    def failed_ids(self) -> list[int]:
        return [item.product_id for item in self.failed]
