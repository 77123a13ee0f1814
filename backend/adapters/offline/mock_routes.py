"""Synthetic demo route-set used when geocoding or routing is unavailable."""

from __future__ import annotations

import random
from typing import Optional

from models.routes import (
    Coordinate,
    Place,
    Provenance,
    RouteCandidate,
    RouteSet,
    TravelMode,
)
from services.emissions.calculator import Leg, unadjusted_emissions
from services.emissions.emissions_factory import get_factors
from services.scoring import eco_score

# Mumbai -> Pune, shown when a query could not be resolved
DEFAULT_ORIGIN = Coordinate(lon=72.8777, lat=19.0760)
DEFAULT_DESTINATION = Coordinate(lon=73.8567, lat=18.5204)

# minutes per km for the 1st, 2nd and 3rd candidate
PACE_MIN_PER_KM = (1.2, 1.5, 1.8)


def mock_route_set(
    origin: str,
    destination: str,
    mode: TravelMode,
    vehicle_type: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> RouteSet:
    """
    Three candidates around a random base distance in [10, 60] km.
    Distance, duration and emission strictly increase from first to last.
    """
    rng = rng or random.Random()
    factors = get_factors()

    base_km = rng.uniform(10.0, 60.0)
    second_km = base_km + rng.uniform(2.0, 6.0)
    third_km = second_km + rng.uniform(3.0, 8.0)

    routes = []
    for i, (km, pace) in enumerate(zip((base_km, second_km, third_km), PACE_MIN_PER_KM)):
        distance = km * 1000.0
        duration = km * pace * 60.0
        leg = Leg(distance_m=distance, mode=mode.value, vehicle_type=vehicle_type)
        routes.append(
            RouteCandidate(
                id=f"route_{i + 1}",
                distance=distance,
                duration=duration,
                mode=mode,
                vehicle_type=vehicle_type,
                profile=mode.value,
                emission=unadjusted_emissions(leg, factors),
                emission_source=Provenance.LOCAL,
                eco_score=eco_score(distance, duration, mode.value, vehicle_type),
            )
        )

    return RouteSet(
        origin=Place(name=origin, coordinates=DEFAULT_ORIGIN),
        destination=Place(name=destination, coordinates=DEFAULT_DESTINATION),
        mode=mode,
        routes=sorted(routes, key=lambda r: r.distance),
        provenance=Provenance.MOCK,
        degraded=True,
    )
