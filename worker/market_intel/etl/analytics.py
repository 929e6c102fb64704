"""Benchmark aggregations over snapshots, consumed by the dashboard API."""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from market_intel.core.models import Snapshot, VenueRecord
from market_intel.etl.colors import venue_color


def find_subject(venues: Iterable[VenueRecord], marker: str) -> Optional[VenueRecord]:
    marker = marker.lower()
    for venue in venues:
        if marker and marker in venue.name.lower():
            return venue
    return None


def rank_by_quality(venues: Iterable[VenueRecord]) -> List[VenueRecord]:
    return sorted(venues, key=lambda v: (-v.rating, -v.review_count))


def rank_by_presence(venues: Iterable[VenueRecord]) -> List[VenueRecord]:
    return sorted(venues, key=lambda v: -v.review_count)


def _rank_of(ranking: Sequence[VenueRecord], venue: VenueRecord) -> int:
    for index, candidate in enumerate(ranking):
        if candidate.id == venue.id:
            return index + 1
    raise ValueError(f"{venue.id} is not part of the ranking")


def market_summary(venues: Sequence[VenueRecord], marker: str) -> Dict[str, Any]:
    """Subject score deltas and rank positions against the rest of the market."""
    by_quality = rank_by_quality(venues)
    by_presence = rank_by_presence(venues)
    leader = by_quality[0] if by_quality else None
    subject = find_subject(venues, marker)
    average = sum(v.rating for v in venues) / len(venues) if venues else 0.0

    summary: Dict[str, Any] = {
        "competitor_count": max(len(venues) - 1, 0),
        "average_rating": average,
        "leader": leader.to_dict() if leader else None,
        "subject": subject.to_dict() if subject else None,
        "presence_rank": None,
        "quality_rank": None,
        "vs_average": 0.0,
        "vs_leader": 0.0,
    }
    if subject is not None:
        summary["presence_rank"] = _rank_of(by_presence, subject)
        summary["quality_rank"] = _rank_of(by_quality, subject)
        summary["vs_average"] = subject.rating - average
        summary["vs_leader"] = subject.rating - leader.rating
    return summary


def review_share(venues: Sequence[VenueRecord], top: int = 10) -> Dict[str, Any]:
    # Venues without reviews are excluded from totals and the average.
    counted = [v for v in venues if v.review_count > 0]
    total = sum(v.review_count for v in counted)
    average = sum(v.rating for v in counted) / len(counted) if counted else 0.0

    rows = []
    for venue in rank_by_presence(venues)[:top]:
        share = (venue.review_count / total * 100) if total else 0.0
        rows.append({
            "id": venue.id,
            "name": venue.name,
            "reviews": venue.review_count,
            "rating": venue.rating,
            "share": share,
            "color": venue_color(venue.name),
        })
    return {"total_reviews": total, "average_rating": average, "venues": rows}


def history_series(snapshots: Iterable[Snapshot]) -> Dict[str, Any]:
    """Review-volume points per snapshot, oldest first, keyed by venue id.

    Each series carries the most recent display name seen for its id.
    """
    ordered = sorted(snapshots, key=lambda s: s.timestamp)
    latest_names: Dict[str, str] = {}
    points = []
    for snapshot in ordered:
        point: Dict[str, Any] = {"timestamp": snapshot.timestamp.isoformat(), "values": {}}
        for venue in snapshot.venues:
            point["values"][venue.id] = venue.review_count
            latest_names[venue.id] = venue.name
        points.append(point)

    return {
        "points": points,
        "series": [
            {"id": venue_id, "name": name, "color": venue_color(name)}
            for venue_id, name in latest_names.items()
        ],
    }
