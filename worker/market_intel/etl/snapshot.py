"""Snapshot assembly for resolved venue sets."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, Optional

from market_intel.core.models import Snapshot, VenueRecord

logger = logging.getLogger(__name__)


class NoVenueDataError(ValueError):
    """Raised when a model response yields no usable venues."""


def assemble_snapshot(venues: Iterable[VenueRecord], timestamp: Optional[datetime] = None) -> Snapshot:
    # Copies detach the snapshot from records the caller still holds.
    records = tuple(replace(venue) for venue in venues)
    if not records:
        raise NoVenueDataError("No venue data could be extracted from the model response")

    stamp = timestamp or datetime.now(timezone.utc)
    logger.debug("Assembled snapshot at %s with %d venues", stamp.isoformat(), len(records))
    return Snapshot(timestamp=stamp, venues=records)
