# backend/tests/test_scoring.py
import pytest

from models.routes import RouteCandidate, TravelMode
from services.scoring import comparison, eco_score, emission_savings, sort_routes


def _route(i: int, emission: float, distance: float = 1000.0, duration: float = 60.0) -> RouteCandidate:
    return RouteCandidate(
        id=f"route_{i}",
        distance=distance,
        duration=duration,
        mode=TravelMode.DRIVING,
        emission=emission,
    )


def test_eco_score_clamps_at_both_ends():
    assert eco_score(0, 0, "walking") == 100
    assert eco_score(200000, 36000, "driving") == 50
    # penalties saturate at 30 + 20, the worst vehicle bonus is -2
    assert eco_score(10_000_000, 1_000_000, "driving", "diesel_large") == 48


def test_eco_score_vehicle_bonus_replaces_mode_bonus():
    # 10 km, 30 min: 100 - 5 - 5 = 90
    assert eco_score(10000, 1800, "driving") == 90
    assert eco_score(10000, 1800, "driving", "hybrid") == 100
    assert eco_score(10000, 1800, "walking", "diesel_large") == 88
    # unknown profile keeps the mode bonus
    assert eco_score(10000, 1800, "bicycling", "unicycle") == 100


def test_eco_score_rounds_half_up():
    # 1 km -> -0.5; 100 - 0.5 = 99.5 -> 100 for driving
    assert eco_score(1000, 0, "driving") == 100
    # 3 km -> -1.5; 98.5 -> 99
    assert eco_score(3000, 0, "driving") == 99


def test_eco_score_monotonic_in_distance():
    scores = [eco_score(d, d / 10, "transit") for d in (80000, 40000, 20000, 5000, 0)]
    assert scores == sorted(scores)


def test_emission_savings_against_worst_route():
    routes = emission_savings([_route(1, 1.0), _route(2, 2.0), _route(3, 3.0)])
    assert [r.emission_savings for r in routes] == pytest.approx([2.0, 1.0, 0.0])
    assert [r.emission_savings_percent for r in routes] == pytest.approx([66.7, 33.3, 0.0], abs=0.1)


def test_emission_savings_single_route_untouched():
    routes = emission_savings([_route(1, 1.0)])
    assert routes[0].emission_savings is None
    assert routes[0].emission_savings_percent is None


def test_emission_savings_all_zero_emissions():
    routes = emission_savings([_route(1, 0.0), _route(2, 0.0)])
    assert [r.emission_savings_percent for r in routes] == [0.0, 0.0]


def test_emission_savings_does_not_mutate_input():
    routes = [_route(1, 1.0), _route(2, 4.0)]
    emission_savings(routes)
    assert routes[0].emission_savings is None


def test_comparison():
    assert comparison([]) is None
    result = comparison([_route(1, 3.0), _route(2, 1.0), _route(3, 2.0)])
    assert result.most_eco_friendly.id == "route_2"
    assert result.least_eco_friendly.id == "route_1"
    assert result.total_savings == pytest.approx(2.0)
    assert result.savings_percent == pytest.approx(66.7)


def test_sort_routes():
    routes = [_route(1, 3.0, distance=500), _route(2, 1.0, distance=900), _route(3, 2.0, distance=100)]
    assert [r.id for r in sort_routes(routes)] == ["route_3", "route_1", "route_2"]
    assert [r.id for r in sort_routes(routes, "emission")] == ["route_2", "route_3", "route_1"]
    with pytest.raises(ValueError):
        sort_routes(routes, "colour")
