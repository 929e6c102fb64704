"""CLI job that asks Gemini for current venue data and stores a snapshot."""

import argparse
import json
import logging
from typing import Optional, Sequence

from market_intel.core.config import ConfigError, get_settings
from market_intel.core.db import append_snapshot, ensure_schema
from market_intel.core.models import Snapshot, TargetVenue
from market_intel.core.targets import load_targets
from market_intel.etl.resolver import reconcile_response
from market_intel.etl.snapshot import NoVenueDataError, assemble_snapshot
from market_intel.vendors import gemini

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_NO_DATA = 3


def run_sync_job(
    *,
    targets: Sequence[TargetVenue],
    location: Optional[str] = None,
    persist: bool = True,
) -> Snapshot:
    """Fetch, reconcile and (optionally) store one market snapshot.

    Raises NoVenueDataError when the model reply holds no usable rows; in that
    case nothing is written.
    """
    settings = get_settings()
    if not settings.gemini_api_key:
        raise ConfigError("GEMINI_API_KEY is required")
    if not targets:
        raise ValueError("At least one target venue is required")

    location = location or settings.market_location
    prompt = gemini.build_prompt(targets, location)
    logger.info("Requesting market data for %d targets in %s", len(targets), location)

    payload = gemini.generate_grounded(
        prompt,
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        lat=settings.market_lat,
        lng=settings.market_lng,
        timeout=settings.gemini_timeout,
    )
    text = gemini.extract_text(payload)
    citations = gemini.extract_citations(payload)
    logger.info("Model returned %d characters and %d map citations", len(text), len(citations))

    venues = reconcile_response(text, citations, settings.fallback_address)
    snapshot = assemble_snapshot(venues)

    if persist:
        append_snapshot(snapshot)
    logger.info("Completed sync: venues=%d persisted=%s", len(snapshot.venues), persist)
    return snapshot


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Sync casino market data into the snapshot store")
    parser.add_argument("--location", dest="location", default=settings.market_location, help="Market to query")
    parser.add_argument(
        "--targets-file",
        dest="targets_file",
        default=settings.targets_file,
        help="JSON list of {name, placeId} entries (defaults to the built-in venue list)",
    )
    parser.add_argument("--dry-run", dest="dry_run", action="store_true", help="Print the snapshot instead of storing it")
    parser.add_argument("--init-db", dest="init_db", action="store_true", help="Create the snapshot table first")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    try:
        parser = build_parser()
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG
    args = parser.parse_args(argv)

    try:
        if args.init_db:
            ensure_schema()
        targets = load_targets(args.targets_file)
        snapshot = run_sync_job(targets=targets, location=args.location, persist=not args.dry_run)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG
    except NoVenueDataError as exc:
        logger.warning("Sync produced no data: %s", exc)
        return EXIT_NO_DATA
    except Exception as exc:  # noqa: BLE001
        logger.error("Market sync failed: %s", exc, exc_info=True)
        return EXIT_FAILURE

    if args.dry_run:
        print(json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
