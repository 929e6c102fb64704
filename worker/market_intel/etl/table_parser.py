"""Utilities for extracting venue rows from pipe-delimited model output."""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MIN_PIPES = 4
MIN_CELLS = 4

_NUMBER_RUN = re.compile(r"[\d.]+")
_FLOAT_PREFIX = re.compile(r"\d*\.?\d*")
_DIGIT_RUN = re.compile(r"\d+")


@dataclass(frozen=True)
class ParsedRow:
    name: str
    rating: float
    review_count: int
    place_id: Optional[str]
    address: str


def iter_table_rows(text: str) -> Iterator[Tuple[str, ...]]:
    """Yield the non-empty, trimmed cells of every table-like line in ``text``.

    Header rows (first cell mentions "name") and Markdown separator rows are
    skipped. Rows come out in the order they appear.
    """
    for line in (text or "").split("\n"):
        if line.count("|") < MIN_PIPES:
            continue

        cells = tuple(piece.strip() for piece in line.split("|") if piece.strip())
        if len(cells) < MIN_CELLS:
            continue

        first = cells[0]
        if "name" in first.lower() or "---" in first:
            logger.debug("Skipping header/separator row: %s", first)
            continue

        yield cells


def _parse_rating(value: str) -> float:
    match = _NUMBER_RUN.search(value)
    if not match:
        return 0.0
    prefix = _FLOAT_PREFIX.match(match.group(0)).group(0)
    try:
        return float(prefix)
    except ValueError:
        return 0.0


def _parse_review_count(value: str) -> int:
    match = _DIGIT_RUN.search(value.replace(",", ""))
    return int(match.group(0)) if match else 0


def normalize_row(cells: Sequence[str], fallback_address: str) -> ParsedRow:
    """Map cells positionally onto venue fields; bad numbers degrade to zero."""
    address = cells[4] if len(cells) > 4 else fallback_address
    return ParsedRow(
        name=cells[0],
        rating=_parse_rating(cells[1]),
        review_count=_parse_review_count(cells[2]),
        place_id=cells[3] or None,
        address=address,
    )


def parse_venue_rows(text: str, fallback_address: str) -> Iterator[ParsedRow]:
    for cells in iter_table_rows(text):
        yield normalize_row(cells, fallback_address)
