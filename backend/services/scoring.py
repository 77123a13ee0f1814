# services/scoring.py
from __future__ import annotations
import math
from typing import Dict, List, Literal, Optional, Sequence

from models.routes import EmissionComparison, RouteCandidate

MODE_BONUSES: Dict[str, int] = {
    "walking": 20,
    "bicycling": 15,
    "transit": 10,
    "driving": 0,
}

VEHICLE_BONUSES: Dict[str, int] = {
    "electric": 20,
    "hybrid": 15,
    "petrol_small": 10,
    "diesel_small": 8,
    "petrol_medium": 5,
    "diesel_medium": 3,
    "petrol_large": 0,
    "diesel_large": -2,
    "electric_scooter": 25,
    "petrol_scooter": 12,
    "petrol_motorcycle": 8,
    "city_bus": 15,
    "intercity_bus": 12,
    "electric_bus": 20,
}

SortKey = Literal["distance", "duration", "emission"]


def _bonus(mode: str, vehicle_type: Optional[str]) -> int:
    # vehicle-aware whenever a known profile is given; never both
    if vehicle_type and vehicle_type in VEHICLE_BONUSES:
        return VEHICLE_BONUSES[vehicle_type]
    return MODE_BONUSES.get(mode, 0)


def eco_score(
    distance: float,
    duration: float,
    mode: str,
    vehicle_type: Optional[str] = None,
) -> int:
    """
    0-100 environmental desirability of a route.
    distance in meters, duration in seconds.
    """
    distance_km = distance / 1000.0
    duration_h = duration / 3600.0

    score = 100.0
    score -= min(distance_km * 0.5, 30.0)
    score -= min(duration_h * 10.0, 20.0)
    score += _bonus(str(getattr(mode, "value", mode)), vehicle_type)

    # round half up, then clamp
    return int(max(0, min(100, math.floor(score + 0.5))))


def emission_savings(routes: Sequence[RouteCandidate]) -> List[RouteCandidate]:
    """
    Annotate each route with savings against the worst emitter of the set.
    Fewer than two routes: returned unchanged, savings stay unset.
    """
    if len(routes) < 2:
        return list(routes)

    worst = max(r.emission for r in routes)
    out: List[RouteCandidate] = []
    for r in routes:
        saved = max(0.0, worst - r.emission)
        percent = (saved / worst * 100.0) if worst > 0 else 0.0
        out.append(
            r.model_copy(
                update={
                    "emission_savings": saved,
                    "emission_savings_percent": round(percent, 1),
                }
            )
        )
    return out


def comparison(routes: Sequence[RouteCandidate]) -> Optional[EmissionComparison]:
    if not routes:
        return None

    ordered = sorted(routes, key=lambda r: r.emission)
    best, worst = ordered[0], ordered[-1]
    total = worst.emission - best.emission
    percent = (total / worst.emission * 100.0) if worst.emission > 0 else 0.0
    return EmissionComparison(
        most_eco_friendly=best,
        least_eco_friendly=worst,
        total_savings=total,
        savings_percent=round(percent, 1),
    )


def sort_routes(
    routes: Sequence[RouteCandidate], key: SortKey = "distance"
) -> List[RouteCandidate]:
    """Stable sort by distance, duration or emission."""
    if key not in ("distance", "duration", "emission"):
        raise ValueError(f"cannot sort routes by {key!r}")
    return sorted(routes, key=lambda r: getattr(r, key))
