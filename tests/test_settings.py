"""
tests/test_settings.py

Pytest unit tests for environment-driven harvest settings.
"""

from __future__ import annotations

import pytest

from harvester.scraping.config import get_harvest_settings
from harvester.scraping.config.loader import DEFAULT_PRODUCT_BASE_URL

HARVEST_ENV_VARS = (
    "HARVEST_SEARCH_API_URL",
    "HARVEST_DESCRIPTION_API_URL",
    "HARVEST_PRODUCT_BASE_URL",
    "HARVEST_IMAGE_BASE_URL",
    "HARVEST_TIMEOUT_SECONDS",
    "HARVEST_MAX_CONNECTIONS",
    "HARVEST_PAGE_DELAY_MIN_SECONDS",
    "HARVEST_PAGE_DELAY_MAX_SECONDS",
    "HARVEST_DETAIL_DELAY_MIN_SECONDS",
    "HARVEST_DETAIL_DELAY_MAX_SECONDS",
    "HARVEST_OUTPUT_DIR",
    "HARVEST_JITTER_SEED",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in HARVEST_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_harvest_settings.cache_clear()
    yield
    get_harvest_settings.cache_clear()


class TestHarvestSettings:
    def test_defaults(self) -> None:
        settings = get_harvest_settings()

        assert settings.product_base_url == DEFAULT_PRODUCT_BASE_URL
        assert settings.image_base_url == "https://cdn.dsmcdn.com"
        assert settings.timeout_seconds == 30.0
        assert settings.max_connections == 10
        assert (settings.page_delay_min_seconds, settings.page_delay_max_seconds) == (0.2, 0.7)
        assert (settings.detail_delay_min_seconds, settings.detail_delay_max_seconds) == (0.0, 0.3)
        assert settings.output_dir == "testing"
        assert settings.jitter_seed is None
        assert settings.description_url_for(55).endswith("/product-detail/55/html-content")

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HARVEST_PRODUCT_BASE_URL", "https://shop.example/")
        monkeypatch.setenv("HARVEST_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("HARVEST_MAX_CONNECTIONS", "4")
        monkeypatch.setenv("HARVEST_OUTPUT_DIR", "out/run")
        monkeypatch.setenv("HARVEST_JITTER_SEED", "99")

        settings = get_harvest_settings()

        assert settings.product_base_url == "https://shop.example"
        assert settings.timeout_seconds == 12.5
        assert settings.max_connections == 4
        assert settings.output_dir == "out/run"
        assert settings.jitter_seed == 99

    def test_invalid_values_fall_back_or_clamp(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HARVEST_TIMEOUT_SECONDS", "0.1")
        monkeypatch.setenv("HARVEST_MAX_CONNECTIONS", "many")
        monkeypatch.setenv("HARVEST_PAGE_DELAY_MIN_SECONDS", "2")
        monkeypatch.setenv("HARVEST_PAGE_DELAY_MAX_SECONDS", "1")
        monkeypatch.setenv("HARVEST_JITTER_SEED", "not-a-seed")

        settings = get_harvest_settings()

        assert settings.timeout_seconds == 1.0
        assert settings.max_connections == 10
        assert settings.page_delay_min_seconds == 2.0
        assert settings.page_delay_max_seconds == 2.0
        assert settings.jitter_seed is None

    def test_settings_are_cached(self) -> None:
        assert get_harvest_settings() is get_harvest_settings()
