"""
Storage layer interface for harvested products.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from harvester.domain.products import FailedProduct, ProductRecord


class ProductStorage(ABC):
    """
    Storage abstraction for crawl and enrichment outputs.
    """

    @abstractmethod
    def save_products(self, products: Sequence[ProductRecord], *, name: str) -> Path:
        """
        Persist products under `name` and return where they were written.
        """

    @abstractmethod
    def save_failed_products(self, failed: Sequence[FailedProduct]) -> Path | None:
        """
        Persist failed enrichment items; return None when there is nothing to write.
        """
