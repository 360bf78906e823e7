"""
Config helpers for catalog harvesting.
"""

from harvester.scraping.config.loader import get_harvest_settings
from harvester.scraping.config.models import HarvestSettings

__all__ = ["HarvestSettings", "get_harvest_settings"]
