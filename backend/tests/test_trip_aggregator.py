# backend/tests/test_trip_aggregator.py
from datetime import date, datetime, timezone

import pytest

from models.routes import Coordinate, Place, RouteCandidate, TravelMode
from models.trips import CarbonSummary, EmissionSavings, InsightKind, ModeStats, Trip
from services.trip_aggregator import environmental_insights, summarize

TODAY = date(2025, 3, 15)
PLACE = Place(name="Somewhere", coordinates=Coordinate(lon=0, lat=0))


def _trip(i, mode, distance, emission, eco, savings=None, created=datetime(2025, 3, 10, 12, tzinfo=timezone.utc)):
    return Trip(
        id=i,
        owner_id=1,
        origin=PLACE,
        destination=PLACE,
        selected_route=RouteCandidate(
            id="route_1",
            distance=distance,
            duration=600,
            mode=mode,
            emission=emission,
            eco_score=eco,
        ),
        emission_savings=EmissionSavings(amount=savings, percentage=10) if savings is not None else None,
        created_at=created,
    )


TRIPS = [
    _trip(1, TravelMode.DRIVING, 10000, 2.0, 80, savings=0.5),
    _trip(2, TravelMode.WALKING, 2000, 0.005, 100),
    _trip(3, TravelMode.DRIVING, 30000, 6.0, 60, savings=1.0, created=datetime(2025, 1, 5, 12, tzinfo=timezone.utc)),
]


def test_summarize_empty():
    s = summarize([], today=TODAY)
    assert s.trip_count == 0
    assert s.total_distance == 0
    assert s.total_emission == 0
    assert s.total_emission_savings == 0
    assert s.average_eco_score == 0
    assert s.per_mode == {}
    assert s.current_month.count == 0


def test_summarize_totals_and_modes():
    s = summarize(TRIPS, today=TODAY)
    assert s.trip_count == 3
    assert s.total_distance == pytest.approx(42000)
    assert s.total_emission == pytest.approx(8.005)
    # missing savings count as zero
    assert s.total_emission_savings == pytest.approx(1.5)
    assert s.average_eco_score == pytest.approx(80.0)

    assert set(s.per_mode) == {"driving", "walking"}
    driving = s.per_mode["driving"]
    assert driving.count == 2
    assert driving.distance == pytest.approx(40000)
    assert driving.emission == pytest.approx(8.0)
    assert driving.savings == pytest.approx(1.5)


def test_summarize_current_month_only():
    s = summarize(TRIPS, today=TODAY)
    assert s.current_month.count == 2
    assert s.current_month.distance == pytest.approx(12000)
    assert s.current_month.savings == pytest.approx(0.5)


def test_summarize_month_needs_same_year():
    s = summarize(TRIPS, today=date(2024, 3, 20))
    assert s.current_month.count == 0


def test_summarize_order_independent():
    forward = summarize(TRIPS, today=TODAY)
    backward = summarize(list(reversed(TRIPS)), today=TODAY)
    assert forward.trip_count == backward.trip_count
    assert forward.total_distance == pytest.approx(backward.total_distance)
    assert forward.total_emission == pytest.approx(backward.total_emission)
    assert forward.per_mode.keys() == backward.per_mode.keys()
    assert forward.current_month == backward.current_month


def _titles(insights):
    return [i.title for i in insights]


def test_insights_none_for_empty_history():
    assert environmental_insights(summarize([], today=TODAY)) == []


@pytest.mark.parametrize(
    "score, title, kind",
    [
        (80.0, "Excellent Eco-Score", InsightKind.SUCCESS),
        (60.0, "Good Eco-Score", InsightKind.WARNING),
        (59.9, "Improve Eco-Score", InsightKind.INFO),
    ],
)
def test_insights_eco_score_tiers(score, title, kind):
    summary = CarbonSummary(trip_count=2, average_eco_score=score, per_mode={"driving": ModeStats(count=2)})
    insights = environmental_insights(summary)
    assert _titles(insights) == [title]
    assert insights[0].kind == kind
    assert f"{score:.1f}/100" in insights[0].message


def test_insights_savings_and_green_modes():
    insights = environmental_insights(summarize(TRIPS, today=TODAY))
    assert _titles(insights) == ["Carbon Savings", "Excellent Eco-Score", "Eco-Friendly Travel"]
    assert insights[0].message == "You've saved 1.50 kg CO2 emissions!"
    assert insights[2].message == "You've used walking for some trips!"


def test_insights_list_green_modes_in_fixed_order():
    summary = CarbonSummary(
        trip_count=3,
        average_eco_score=95,
        per_mode={"transit": ModeStats(count=1), "driving": ModeStats(count=1), "bicycling": ModeStats(count=1)},
    )
    assert environmental_insights(summary)[-1].message == "You've used bicycling, transit for some trips!"
