from datetime import datetime, timedelta, timezone

import pytest

from market_intel.core.models import Snapshot, VenueRecord
from market_intel.etl import analytics


def _venue(name, rating, reviews):
    return VenueRecord(
        id=name.lower().replace(" ", ""),
        name=name,
        rating=rating,
        review_count=reviews,
        address="Batumi",
        map_link="",
    )


@pytest.fixture
def venues():
    return [
        _venue("Casino International", 4.2, 900),
        _venue("Casino Otium", 4.6, 1200),
        _venue("Royal Casino", 4.6, 300),
        _venue("Casino Soho", 3.9, 0),
    ]


def test_rankings(venues):
    assert [v.name for v in analytics.rank_by_quality(venues)] == [
        "Casino Otium",
        "Royal Casino",
        "Casino International",
        "Casino Soho",
    ]
    assert analytics.rank_by_presence(venues)[0].name == "Casino Otium"


def test_market_summary_for_subject(venues):
    summary = analytics.market_summary(venues, "international")

    assert summary["competitor_count"] == 3
    assert summary["average_rating"] == pytest.approx((4.2 + 4.6 + 4.6 + 3.9) / 4)
    assert summary["leader"]["name"] == "Casino Otium"
    assert summary["subject"]["name"] == "Casino International"
    assert summary["presence_rank"] == 2
    assert summary["quality_rank"] == 3
    assert summary["vs_leader"] == pytest.approx(-0.4)


def test_market_summary_without_subject(venues):
    summary = analytics.market_summary(venues, "bellagio")
    assert summary["subject"] is None
    assert summary["presence_rank"] is None
    assert summary["vs_average"] == 0.0


def test_market_summary_empty():
    summary = analytics.market_summary([], "international")
    assert summary["competitor_count"] == 0
    assert summary["average_rating"] == 0.0
    assert summary["leader"] is None


def test_review_share_ignores_zero_volume_in_totals(venues):
    share = analytics.review_share(venues, top=2)
    assert share["total_reviews"] == 2400
    assert share["average_rating"] == pytest.approx((4.2 + 4.6 + 4.6) / 3)
    assert [row["name"] for row in share["venues"]] == ["Casino Otium", "Casino International"]
    assert share["venues"][0]["share"] == pytest.approx(50.0)


def test_history_series_orders_oldest_first():
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    newer = Snapshot(now, (_venue("Casino Otium", 4.6, 1250), _venue("Royal Casino", 4.5, 310)))
    older = Snapshot(now - timedelta(days=1), (_venue("Casino Otium", 4.6, 1200),))

    series = analytics.history_series([newer, older])

    assert [p["values"].get("casinootium") for p in series["points"]] == [1200, 1250]
    assert [s["name"] for s in series["series"]] == ["Casino Otium", "Royal Casino"]
    assert series["series"][1]["color"] == "#f59e0b"


def test_history_series_joins_renamed_venue_by_id():
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    otium_id = "ChIJ7bPMpg2HZ0AR7w95mwJxPfE"
    older_venue = VenueRecord(otium_id, "Casino Otium", 4.6, 1200, "Batumi", "")
    newer_venue = VenueRecord(otium_id, "Otium Casino Batumi", 4.6, 1250, "Batumi", "")

    series = analytics.history_series([
        Snapshot(now, (newer_venue,)),
        Snapshot(now - timedelta(days=1), (older_venue,)),
    ])

    assert series["series"] == [{"id": otium_id, "name": "Otium Casino Batumi", "color": "#10b981"}]
    assert [p["values"][otium_id] for p in series["points"]] == [1200, 1250]
