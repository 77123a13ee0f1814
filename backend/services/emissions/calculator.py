from dataclasses import dataclass
from typing import Optional

from .factors import EmissionFactors, is_electric

COLD_START_KM = 5.0
HIGHWAY_KM = 50.0

MODE_ADJUSTMENTS = {
    "driving": 1.1,  # congestion
    "transit": 0.7,  # partial occupancy
}
ELECTRIC_ADJUSTMENT = 0.8  # partial renewable mix


@dataclass(frozen=True)
class Leg:
    distance_m: float
    mode: str
    vehicle_type: Optional[str] = None

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000.0


def distance_adjustment(distance_km: float) -> float:
    if distance_km < COLD_START_KM:
        return 1.2
    if distance_km > HIGHWAY_KM:
        return 0.9
    return 1.0


def mode_adjustment(mode: str, vehicle_type: Optional[str] = None) -> float:
    # An electric vehicle profile replaces the mode adjustment; keyed on the
    # profile because no travel mode is itself "electric"
    if is_electric(vehicle_type):
        return ELECTRIC_ADJUSTMENT
    return MODE_ADJUSTMENTS.get(mode, 1.0)


def adjusted_factor(leg: Leg, factors: EmissionFactors) -> float:
    base = factors.per_km(leg.mode, leg.vehicle_type)
    return (
        base
        * distance_adjustment(leg.distance_km)
        * mode_adjustment(leg.mode, leg.vehicle_type)
    )


def emissions_for_leg(leg: Leg, factors: EmissionFactors) -> float:
    """kg CO2 for one leg using the local factor table and adjustments."""
    return leg.distance_km * adjusted_factor(leg, factors)


def unadjusted_emissions(leg: Leg, factors: EmissionFactors) -> float:
    """Plain distance x factor, used for synthetic demo routes."""
    return leg.distance_km * factors.per_km(leg.mode, leg.vehicle_type)
