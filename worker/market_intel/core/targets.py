"""Target venue list that every market sync must cover."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from market_intel.core.models import TargetVenue

logger = logging.getLogger(__name__)

DEFAULT_TARGETS: Tuple[TargetVenue, ...] = (
    TargetVenue("Casino International", "ChIJr4Sl22uGZ0ARAIlIlZkhxqo"),
    TargetVenue("Casino Iveria Batumi", "ChIJH42730aGZ0ARsDS-v-Q9FWU"),
    TargetVenue("Casino Peace", "ChIJ1a-bwkGGZ0ARzveIn7rXwdM"),
    TargetVenue("Princess Casino", "ChIJyWDgcECGZ0ARdSusE3b96pw"),
    TargetVenue("Eclipse Casino", "ChIJT7S5CJyFZ0AROGvduE06fIw"),
    TargetVenue("Casino Otium", "ChIJ7bPMpg2HZ0AR7w95mwJxPfE"),
    TargetVenue("Casino Soho", "ChIJTR0cAQCHZ0ARE7aWIZhZGuU"),
    TargetVenue("Royal Casino", "ChIJVQe4payHZ0ARKyGENU8w5OE"),
    TargetVenue("Empire Casino", "ChIJ0Y4pXKSHZ0ARN7prcblZQ8Q"),
    TargetVenue("Grand Bellagio", "ChIJCz76Zk-FZ0ARz1T95QGgJA8"),
    TargetVenue("Billionaire Casino", "ChIJ7fA7A36HZ0AR-HJobLqNnQo"),
    TargetVenue("Casino Colosseum", "ChIJYYGQeIuFZ0ARmkcRZU1VJOA"),
)


def parse_targets(items: Iterable[Any]) -> List[TargetVenue]:
    """Convert ``[{"name": ..., "placeId": ...}]`` entries into TargetVenue objects."""
    targets: List[TargetVenue] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"target #{index} must be an object")
        name = str(item.get("name") or "").strip()
        if not name:
            raise ValueError(f"target #{index} is missing a name")
        place_id = str(item.get("placeId") or item.get("place_id") or "").strip()
        targets.append(TargetVenue(name=name, place_id=place_id))
    return targets


def load_targets(path: Optional[str] = None) -> List[TargetVenue]:
    """Return targets from a JSON file, or the built-in Batumi list when no path is given."""
    if not path:
        return list(DEFAULT_TARGETS)

    with Path(path).open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON list of targets")

    targets = parse_targets(payload)
    logger.info("Loaded %d targets from %s", len(targets), path)
    return targets
