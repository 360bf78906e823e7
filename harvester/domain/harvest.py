"""
harvester/domain/harvest.py

Domain models for harvest run orchestration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from harvester.domain.products import FailedProduct, ProductRecord


@dataclass(frozen=True)
class HarvestSummary:
    """
    Outcome of one merchant harvest run.
    """

    merchant_id: int
    products: list[ProductRecord]
    failed: list[FailedProduct] = field(default_factory=list)
    details_fetched: bool = False
    written_files: list[Path] = field(default_factory=list)

    @property
    def status(self) -> str:
        if not self.failed:
            return "success"
        return "partial_success" if len(self.failed) < len(self.products) else "failed"

    def report(self) -> dict[str, object]:
        first = self.products[0] if self.products else None
        last = self.products[-1] if self.products else None
        return {
            "merchant_id": self.merchant_id,
            "total_products": len(self.products),
            "first_product": _brief(first),
            "last_product": _brief(last),
            "details_fetched": self.details_fetched,
            "failed_products": len(self.failed),
            "status": self.status,
            "files": [str(path) for path in self.written_files],
        }


def _brief(product: ProductRecord | None) -> dict[str, object] | None:
    if product is None:
        return None
    return {
        "id": product.id,
        "name": product.name,
        "discounted_price": str(product.price.discounted_price),
        "currency": product.price.currency_code,
    }
