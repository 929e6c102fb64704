"""Core data models shared by the market sync pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(slots=True)
class VenueRecord:
    """One venue's rating and review volume as of a single observation.

    ``place_id`` and ``map_link`` are the only fields enrichment may touch
    after construction.
    """

    id: str
    name: str
    rating: float
    review_count: int
    address: str
    map_link: str
    place_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the keys stored in the snapshot table."""
        return {
            "id": self.id,
            "placeId": self.place_id,
            "name": self.name,
            "rating": self.rating,
            "userRatingsTotal": self.review_count,
            "vicinity": self.address,
            "googleMapsUri": self.map_link,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VenueRecord":
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            rating=float(data.get("rating") or 0),
            review_count=int(data.get("userRatingsTotal") or 0),
            address=str(data.get("vicinity") or ""),
            map_link=str(data.get("googleMapsUri") or ""),
            place_id=data.get("placeId") or None,
        )


@dataclass(frozen=True)
class Snapshot:
    """Immutable, timestamped set of resolved venues from one model query."""

    timestamp: datetime
    venues: Tuple[VenueRecord, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "casinos": [venue.to_dict() for venue in self.venues],
        }


@dataclass(frozen=True)
class GroundingCitation:
    """Map grounding fact used to corroborate a parsed venue."""

    title: Optional[str] = None
    place_id: Optional[str] = None
    uri: Optional[str] = None


@dataclass(frozen=True)
class TargetVenue:
    name: str
    place_id: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "placeId": self.place_id}
