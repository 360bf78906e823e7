"""
Run one merchant catalog harvest from CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from harvester.config import configure_logging
from harvester.scraping.config import get_harvest_settings
from harvester.scraping.errors import HarvestError
from harvester.scraping.storage import JsonProductStorage
from harvester.services import CatalogHarvestService

logger = logging.getLogger(__name__)


def _parse_merchant_id(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Harvest a merchant's full product catalog.")
    parser.add_argument(
        "merchant_id",
        nargs="?",
        default=None,
        help="Merchant id; prompted for when omitted.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory for JSON outputs (defaults to HARVEST_OUTPUT_DIR).",
    )
    parser.add_argument(
        "--skip-details",
        dest="skip_details",
        action="store_true",
        help="Only crawl the catalog; do not fetch product details.",
    )
    args = parser.parse_args(argv)

    configure_logging()

    raw_merchant_id = args.merchant_id
    if raw_merchant_id is None:
        try:
            raw_merchant_id = input("Merchant id: ")
        except EOFError:
            print("No merchant id given.")
            return 2
    merchant_id = _parse_merchant_id(raw_merchant_id)
    if merchant_id is None:
        print(f"Invalid merchant id: {raw_merchant_id!r}")
        return 2

    settings = get_harvest_settings()
    storage = JsonProductStorage(output_dir=args.output_dir or settings.output_dir)
    service = CatalogHarvestService(storage=storage, settings=settings)

    try:
        summary = asyncio.run(
            service.harvest(merchant_id, fetch_details=not args.skip_details)
        )
    except HarvestError as exc:
        logger.error("Harvest failed for merchant %s: %s", merchant_id, exc)
        return 1

    print(json.dumps(summary.report(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
