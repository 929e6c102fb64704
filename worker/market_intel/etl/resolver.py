"""Identity resolution for parsed venue rows and grounding citations."""

import logging
import re
from typing import Callable, Dict, Iterable, List, Optional
from urllib.parse import quote

from market_intel.core.models import GroundingCitation, VenueRecord
from market_intel.etl.table_parser import ParsedRow, parse_venue_rows

logger = logging.getLogger(__name__)

MIN_PLACE_ID_LENGTH = 5
MAPS_SEARCH_URL = "https://www.google.com/maps/search/"

NameMatcher = Callable[[str, str], bool]

_NON_SLUG = re.compile(r"[^a-z0-9]")


def slugify(name: str) -> str:
    return _NON_SLUG.sub("", name.lower())


def derive_key(name: str, place_id: Optional[str]) -> str:
    """Use the place id when it is long enough to be real, else the name slug."""
    if place_id and len(place_id) > MIN_PLACE_ID_LENGTH:
        return place_id
    return slugify(name)


def contains_match(candidate: str, record_name: str) -> bool:
    """Substring containment in either direction on already-normalized names."""
    return record_name in candidate or candidate in record_name


def maps_search_link(name: str) -> str:
    return MAPS_SEARCH_URL + quote(name, safe="")


def _fold_rows(rows: Iterable[ParsedRow]) -> Dict[str, VenueRecord]:
    venues: Dict[str, VenueRecord] = {}
    for row in rows:
        key = derive_key(row.name, row.place_id)
        if not key or row.review_count <= 0:
            logger.debug("Dropping row without review volume: %s", row.name)
            continue
        if key in venues:
            logger.debug("Row for %s replaces earlier entry %s", row.name, key)
        venues[key] = VenueRecord(
            id=key,
            name=row.name,
            rating=row.rating,
            review_count=row.review_count,
            address=row.address,
            map_link=maps_search_link(row.name),
            place_id=row.place_id,
        )
    return venues


def _find_match(
    venues: Dict[str, VenueRecord],
    citation: GroundingCitation,
    matcher: NameMatcher,
) -> Optional[VenueRecord]:
    if citation.place_id and citation.place_id in venues:
        return venues[citation.place_id]

    title = slugify(citation.title or "")
    for venue in venues.values():
        if matcher(title, slugify(venue.name)):
            return venue
    return None


def apply_citations(
    venues: Dict[str, VenueRecord],
    citations: Iterable[GroundingCitation],
    matcher: NameMatcher = contains_match,
) -> None:
    """Enrich matched venues in place; unmatched citations are dropped."""
    for citation in citations:
        if not citation.title:
            continue

        venue = _find_match(venues, citation, matcher)
        if venue is None:
            logger.debug("No venue matches citation %r; discarding", citation.title)
            continue

        if citation.uri:
            venue.map_link = citation.uri
        if not venue.place_id and citation.place_id:
            venue.place_id = citation.place_id


def resolve_venues(
    rows: Iterable[ParsedRow],
    citations: Iterable[GroundingCitation] = (),
    matcher: NameMatcher = contains_match,
) -> List[VenueRecord]:
    """Collapse rows into one record per venue and enrich them with citations.

    Later rows win over earlier rows with the same key, and rows reporting no
    reviews are treated as not found. Citations never add venues.
    """
    venues = _fold_rows(rows)
    apply_citations(venues, citations, matcher)
    logger.info("Resolved %d venues", len(venues))
    return list(venues.values())


def reconcile_response(
    text: str,
    citations: Iterable[GroundingCitation],
    fallback_address: str,
    matcher: NameMatcher = contains_match,
) -> List[VenueRecord]:
    """Parse the model's table text and resolve it against its grounding citations."""
    return resolve_venues(parse_venue_rows(text, fallback_address), citations, matcher)
