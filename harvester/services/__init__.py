"""
Service layer exports.
"""

from harvester.services.catalog_harvest_service import CatalogHarvestService

__all__ = ["CatalogHarvestService"]
