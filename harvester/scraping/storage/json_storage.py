"""
On-disk JSON persistence for harvested products.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path
from typing import Any

from harvester.domain.products import FailedProduct, ProductRecord
from harvester.scraping.logging_utils import log_event
from harvester.scraping.storage.base import ProductStorage

logger = logging.getLogger(__name__)

CONTROL_CHARS_REGEX = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

PRODUCTS_FILE = "products.json"
PRODUCT_DETAILS_FILE = "product_details.json"
FAILED_PRODUCTS_FILE = "failed_products.json"


def sanitize_string(value: object) -> str:
    """
    Drop ASCII control characters other than tab, newline and carriage return.
    """

    if value is None:
        return ""
    return CONTROL_CHARS_REGEX.sub("", str(value))


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {key: _clean(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_clean(item) for item in value]
    return value


class JsonProductStorage(ProductStorage):
    """
    Writes indented UTF-8 JSON files into one output directory.
    """

    def __init__(self, *, output_dir: str | Path) -> None:
        self._output_dir = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def save_products(self, products: Sequence[ProductRecord], *, name: str = PRODUCTS_FILE) -> Path:
        path = self._write(name, [product.to_dict() for product in products])
        log_event(logger, logging.INFO, "products_saved", path=path, count=len(products))
        return path

    def save_failed_products(self, failed: Sequence[FailedProduct]) -> Path | None:
        if not failed:
            return None
        path = self._write(FAILED_PRODUCTS_FILE, [item.to_dict() for item in failed])
        log_event(logger, logging.WARNING, "failed_products_saved", path=path, count=len(failed))
        return path

    def _write(self, name: str, payload: Any) -> Path:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / name
        path.write_text(
            json.dumps(_clean(payload), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        return path
