# services/emissions/factors.py
from __future__ import annotations
from typing import Dict, List, Optional

from models.emissions import VehicleCategory, VehicleMapping, VehicleProfile

# Fallback when neither the vehicle nor the mode is known: average petrol car.
DEFAULT_FACTOR_KG_PER_KM = 0.192

VEHICLE_PROFILES: Dict[VehicleCategory, List[VehicleProfile]] = {
    "car": [
        VehicleProfile(id="petrol_small", name="Petrol - Small Car", description="Hatchback, compact car", emission_factor=0.120, category="car"),
        VehicleProfile(id="petrol_medium", name="Petrol - Medium Car", description="Sedan, SUV", emission_factor=0.192, category="car"),
        VehicleProfile(id="petrol_large", name="Petrol - Large Car", description="Large SUV, luxury car", emission_factor=0.250, category="car"),
        VehicleProfile(id="diesel_small", name="Diesel - Small Car", description="Diesel hatchback", emission_factor=0.110, category="car"),
        VehicleProfile(id="diesel_medium", name="Diesel - Medium Car", description="Diesel sedan, SUV", emission_factor=0.170, category="car"),
        VehicleProfile(id="diesel_large", name="Diesel - Large Car", description="Large diesel SUV", emission_factor=0.220, category="car"),
        VehicleProfile(id="hybrid", name="Hybrid Car", description="Petrol-electric hybrid", emission_factor=0.120, category="car"),
        VehicleProfile(id="electric", name="Electric Car", description="Battery electric vehicle", emission_factor=0.053, category="car"),
    ],
    "motorcycle": [
        VehicleProfile(id="petrol_scooter", name="Petrol Scooter", description="100-150cc scooter", emission_factor=0.045, category="motorcycle"),
        VehicleProfile(id="petrol_motorcycle", name="Petrol Motorcycle", description="150cc+ motorcycle", emission_factor=0.103, category="motorcycle"),
        VehicleProfile(id="electric_scooter", name="Electric Scooter", description="Electric scooter", emission_factor=0.020, category="motorcycle"),
    ],
    "bus": [
        VehicleProfile(id="city_bus", name="City Bus", description="Urban public bus", emission_factor=0.089, category="bus"),
        VehicleProfile(id="intercity_bus", name="Intercity Bus", description="Long-distance bus", emission_factor=0.070, category="bus"),
        VehicleProfile(id="electric_bus", name="Electric Bus", description="Electric public bus", emission_factor=0.030, category="bus"),
    ],
}

# Mode-level factors used when no vehicle profile applies (kg CO2 / km)
MODE_FACTORS: Dict[str, float] = {
    "driving": DEFAULT_FACTOR_KG_PER_KM,
    "transit": 0.041,
    "bicycling": 0.004,
    "walking": 0.002,
    "motorcycle": 0.103,
    "bus": 0.089,
}

# Which vehicle category the selector shows for a travel mode
MODE_CATEGORY: Dict[str, VehicleCategory] = {
    "driving": "car",
    "motorcycle": "motorcycle",
    "bus": "bus",
}

# Labels for the remote estimation API, by vehicle id then by mode
VEHICLE_MAPPINGS: Dict[str, VehicleMapping] = {
    "petrol_small": VehicleMapping(vehicle_type="car", fuel_type="petrol"),
    "petrol_medium": VehicleMapping(vehicle_type="car", fuel_type="petrol"),
    "petrol_large": VehicleMapping(vehicle_type="car", fuel_type="petrol"),
    "diesel_small": VehicleMapping(vehicle_type="car", fuel_type="diesel"),
    "diesel_medium": VehicleMapping(vehicle_type="car", fuel_type="diesel"),
    "diesel_large": VehicleMapping(vehicle_type="car", fuel_type="diesel"),
    "hybrid": VehicleMapping(vehicle_type="car", fuel_type="hybrid"),
    "electric": VehicleMapping(vehicle_type="car", fuel_type="electric"),
    "petrol_scooter": VehicleMapping(vehicle_type="motorcycle", fuel_type="petrol"),
    "petrol_motorcycle": VehicleMapping(vehicle_type="motorcycle", fuel_type="petrol"),
    "electric_scooter": VehicleMapping(vehicle_type="motorcycle", fuel_type="electric"),
    "city_bus": VehicleMapping(vehicle_type="bus", fuel_type="diesel"),
    "intercity_bus": VehicleMapping(vehicle_type="bus", fuel_type="diesel"),
    "electric_bus": VehicleMapping(vehicle_type="bus", fuel_type="electric"),
}

MODE_MAPPINGS: Dict[str, VehicleMapping] = {
    "driving": VehicleMapping(vehicle_type="car", fuel_type="petrol"),
    "transit": VehicleMapping(vehicle_type="bus", fuel_type="diesel"),
    "bicycling": VehicleMapping(vehicle_type="bicycle", fuel_type="none"),
    "walking": VehicleMapping(vehicle_type="walking", fuel_type="none"),
    "motorcycle": VehicleMapping(vehicle_type="motorcycle", fuel_type="petrol"),
    "bus": VehicleMapping(vehicle_type="bus", fuel_type="diesel"),
}


class EmissionFactors:
    """
    Per-km factor lookup in kg CO2 / km.
    Keys are normalized lower-case ids; vehicle ids win over modes.
    """

    def __init__(
        self,
        vehicle_table: Optional[Dict[str, float]] = None,
        mode_table: Optional[Dict[str, float]] = None,
        default: float = DEFAULT_FACTOR_KG_PER_KM,
    ) -> None:
        self.vehicle_table = vehicle_table or {}
        self.mode_table = mode_table or {}
        self.default = default

    @staticmethod
    def _norm(key: Optional[str]) -> str:
        return (key or "").strip().lower()

    def has_vehicle(self, vehicle_id: Optional[str]) -> bool:
        return self._norm(vehicle_id) in self.vehicle_table

    def for_vehicle(self, vehicle_id: str) -> float:
        key = self._norm(vehicle_id)
        if key not in self.vehicle_table:
            raise KeyError(f"No factor for vehicle {vehicle_id!r}")
        return float(self.vehicle_table[key])

    def for_mode(self, mode: str) -> float:
        return float(self.mode_table.get(self._norm(mode), self.default))

    def per_km(self, mode: str, vehicle_id: Optional[str] = None) -> float:
        if self.has_vehicle(vehicle_id):
            return self.for_vehicle(vehicle_id)  # type: ignore[arg-type]
        return self.for_mode(mode)

    @classmethod
    def builtin(cls) -> "EmissionFactors":
        vehicles = {
            p.id: p.emission_factor for group in VEHICLE_PROFILES.values() for p in group
        }
        return cls(vehicle_table=vehicles, mode_table=dict(MODE_FACTORS))


def get_vehicle(vehicle_id: Optional[str]) -> Optional[VehicleProfile]:
    if not vehicle_id:
        return None
    for group in VEHICLE_PROFILES.values():
        for p in group:
            if p.id == vehicle_id:
                return p
    return None


def is_electric(vehicle_id: Optional[str]) -> bool:
    mapping = VEHICLE_MAPPINGS.get(vehicle_id or "")
    return mapping is not None and mapping.fuel_type == "electric"


def vehicles_for_mode(mode: Optional[str]) -> List[VehicleProfile]:
    """Vehicle choices for a mode; no mode lists every category."""
    if not mode:
        return [p for group in VEHICLE_PROFILES.values() for p in group]
    category = MODE_CATEGORY.get(mode)
    return list(VEHICLE_PROFILES[category]) if category else []


def mapping_for(vehicle_id: Optional[str], mode: str) -> Optional[VehicleMapping]:
    """Remote API labels: vehicle id first, then the mode default."""
    if vehicle_id and vehicle_id in VEHICLE_MAPPINGS:
        return VEHICLE_MAPPINGS[vehicle_id]
    return MODE_MAPPINGS.get(mode)
