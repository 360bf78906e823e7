"""
tests/test_storage.py

Pytest unit tests for JSON product persistence.
"""

from __future__ import annotations

import json
from decimal import Decimal

from harvester.domain.products import FailedProduct, ProductAttribute, ProductDetails
from harvester.scraping.crawler import convert_product
from harvester.scraping.storage import (
    FAILED_PRODUCTS_FILE,
    PRODUCT_DETAILS_FILE,
    PRODUCTS_FILE,
    JsonProductStorage,
    sanitize_string,
)
from tests.fakes import make_settings, raw_product

SETTINGS = make_settings()


def _product(product_id: int, price: str = "129.99"):
    return convert_product(
        raw_product(product_id, Decimal(price)),
        product_base_url=SETTINGS.product_base_url,
        image_base_url=SETTINGS.image_base_url,
    )


class TestSanitizeString:
    def test_strips_control_characters(self) -> None:
        assert sanitize_string("a\x00b\x1fc\x7f") == "abc"

    def test_keeps_whitespace_controls(self) -> None:
        assert sanitize_string("line\tone\nline two\r") == "line\tone\nline two\r"

    def test_none_becomes_empty(self) -> None:
        assert sanitize_string(None) == ""


class TestJsonProductStorage:
    def test_writes_products_file(self, tmp_path) -> None:
        storage = JsonProductStorage(output_dir=tmp_path / "nested")
        product = _product(1)
        product.name = "Dress\x07 One"

        assert storage.output_dir == tmp_path / "nested"

        path = storage.save_products([product])

        assert path == tmp_path / "nested" / PRODUCTS_FILE
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload[0]["id"] == 1
        assert payload[0]["name"] == "Dress One"
        assert payload[0]["price"]["original_price"] == 129.99
        assert payload[0]["url"] == "https://shop.test/acme/dress-1-p-1"
        assert payload[0]["details"] is None

    def test_writes_details_with_unicode(self, tmp_path) -> None:
        storage = JsonProductStorage(output_dir=tmp_path)
        product = _product(2)
        product.details = ProductDetails(
            attributes=[ProductAttribute(key="Renk", value="Yeşil")],
            description="- Kumaş",
        )
        product.description = "Uzun açıklama"

        path = storage.save_products([product], name=PRODUCT_DETAILS_FILE)

        text = path.read_text(encoding="utf-8")
        assert "Yeşil" in text
        payload = json.loads(text)
        assert payload[0]["details"]["attributes"] == [{"key": "Renk", "value": "Yeşil"}]
        assert payload[0]["description"] == "Uzun açıklama"

    def test_failed_file_only_when_needed(self, tmp_path) -> None:
        storage = JsonProductStorage(output_dir=tmp_path)

        assert storage.save_failed_products([]) is None
        assert not (tmp_path / FAILED_PRODUCTS_FILE).exists()

        failed = FailedProduct(
            product_id=3,
            product_name="Dress 3",
            url="https://shop.test/acme/dress-3-p-3",
            error="No embedded JSON found for product id 3",
            error_type="MissingAnchorError",
        )
        path = storage.save_failed_products([failed])

        assert path == tmp_path / FAILED_PRODUCTS_FILE
        assert json.loads(path.read_text(encoding="utf-8")) == [failed.to_dict()]
