# models/emissions.py
from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel, Field

from models.routes import Provenance, TravelMode

VehicleCategory = Literal["car", "motorcycle", "bus"]


class VehicleProfile(BaseModel):
    """Reference data for the vehicle selector. Factors are kg CO2 per km."""

    model_config = {"frozen": True}

    id: str
    name: str
    description: str = ""
    emission_factor: float = Field(..., gt=0)
    category: VehicleCategory


class VehicleMapping(BaseModel):
    """Vehicle/fuel labels understood by the remote emission API."""

    vehicle_type: str
    fuel_type: str


class EmissionsRequest(BaseModel):
    distance: float = Field(..., ge=0, description="meters")
    mode: TravelMode = TravelMode.DRIVING
    vehicle_type: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None


class EmissionEstimate(BaseModel):
    emission_kg: float = Field(..., ge=0)
    source: Provenance
    distance_km: float
    factor_used: Optional[float] = None  # only for local estimates
    vehicle_type: Optional[str] = None
    fuel_type: Optional[str] = None
