"""
Storage layer exports.
"""

from harvester.scraping.storage.base import ProductStorage
from harvester.scraping.storage.json_storage import (
    FAILED_PRODUCTS_FILE,
    PRODUCT_DETAILS_FILE,
    PRODUCTS_FILE,
    JsonProductStorage,
    sanitize_string,
)

__all__ = [
    "FAILED_PRODUCTS_FILE",
    "PRODUCT_DETAILS_FILE",
    "PRODUCTS_FILE",
    "JsonProductStorage",
    "ProductStorage",
    "sanitize_string",
]
