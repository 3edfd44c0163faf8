#!/usr/bin/env python3
"""Send a test sighting alert to the configured Slack webhook.

⚠️  WARNING: This script sends a REAL notification to the configured channel!

This script creates a synthetic sighting near the scan location and sends it
using the same formatting as production alerts. A [TEST] marker is added.

Usage:
    # Dry run (preview only, no send)
    python scripts/send_test_alert.py --dry-run

    # Send a Dratini 250m north of the scan location
    python scripts/send_test_alert.py --species-id 147 --north-meters 250

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    GCP_PROJECT: GCP project ID for Secret Manager access
"""

import argparse
import logging
import math
import os
import sys
import time
from datetime import datetime

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pokewatch.core.config import is_valid_webhook_url
from pokewatch.core.formatter import format_sighting_line
from pokewatch.core.geo import EARTH_RADIUS_KM, ReferenceLocation
from pokewatch.core.sighting import RawSighting, SightingRecord, build_record
from pokewatch.core.species import build_pokedex
from pokewatch.shell.config_loader import load_config
from pokewatch.shell.slack_client import SlackClient

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def create_test_sighting(
    location: ReferenceLocation,
    species_id: int = 25,
    north_meters: float = 150.0,
    minutes_left: int = 12,
    pokedex: dict[int, str] | None = None,
) -> SightingRecord:
    """Create a synthetic sighting due north of the scan location.

    Args:
        location: Scan location
        species_id: National Pokédex number
        north_meters: Offset north of the scan location
        minutes_left: Minutes until the sighting despawns
        pokedex: Species lookup

    Returns:
        Synthetic SightingRecord
    """
    # Arc length along a meridian
    degrees_per_meter = math.degrees(1 / (EARTH_RADIUS_KM * 1000))
    latitude = location.latitude + north_meters * degrees_per_meter

    raw = RawSighting(
        species_id=species_id,
        latitude_text=f"{latitude:.10f}",
        longitude_text=repr(location.longitude),
        expires_at=int(time.time()) + minutes_left * 60,
    )
    return build_record(raw, location, pokedex or build_pokedex())


def main():
    parser = argparse.ArgumentParser(
        description="Send a test sighting alert to the configured webhook",
        epilog="⚠️  WARNING: This sends a REAL notification! Use --dry-run first.",
    )
    parser.add_argument(
        "--species-id",
        type=int,
        default=25,
        help="Pokédex number of the test sighting (default: 25)",
    )
    parser.add_argument(
        "--north-meters",
        type=float,
        default=150.0,
        help="Distance north of the scan location (default: 150)",
    )
    parser.add_argument(
        "--minutes-left",
        type=int,
        default=12,
        help="Minutes until the test sighting despawns (default: 12)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be sent without actually sending",
    )
    args = parser.parse_args()

    config = load_config(os.environ.get("CONFIG_PATH"))

    if config.scan_location is None:
        logger.error("No scan_location configured")
        return 1

    record = create_test_sighting(
        config.scan_location,
        species_id=args.species_id,
        north_meters=args.north_meters,
        minutes_left=args.minutes_left,
        pokedex=build_pokedex(config.species),
    )
    message = "[TEST] " + format_sighting_line(
        record,
        datetime.now().astimezone(),
        config.map_url_template,
    )

    logger.info("Test message: %s", message)

    if args.dry_run:
        logger.info("DRY RUN - nothing sent")
        return 0

    if not is_valid_webhook_url(config.webhook_url):
        logger.error("Webhook URL is invalid or missing")
        return 1

    response = SlackClient().send_text(config.webhook_url, message)
    if response.success:
        logger.info("  ✓ Slack alert sent successfully")
        return 0

    logger.error("  ✗ Failed to send Slack alert: %s", response.error)
    return 1


if __name__ == "__main__":
    sys.exit(main())
