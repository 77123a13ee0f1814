# models/routes.py
from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class TravelMode(str, Enum):
    DRIVING = "driving"
    TRANSIT = "transit"
    BICYCLING = "bicycling"
    WALKING = "walking"
    MOTORCYCLE = "motorcycle"
    BUS = "bus"


class Provenance(str, Enum):
    """Where a value came from: live provider, local formula, or synthetic demo data."""

    REMOTE = "remote"
    LOCAL = "local"
    MOCK = "mock"


class Coordinate(BaseModel):
    lon: float = Field(..., ge=-180, le=180)
    lat: float = Field(..., ge=-90, le=90)


class Place(BaseModel):
    name: str
    coordinates: Coordinate


class RouteCandidate(BaseModel):
    id: str
    distance: float = Field(..., ge=0)  # meters
    duration: float = Field(..., ge=0)  # seconds
    mode: TravelMode
    vehicle_type: Optional[str] = None
    profile: Optional[str] = None
    geometry: Optional[Dict[str, Any]] = None  # GeoJSON LineString
    instructions: List[Dict[str, Any]] = Field(default_factory=list)
    emission: float = Field(0.0, ge=0)  # kg CO2
    emission_source: Provenance = Provenance.LOCAL
    eco_score: int = Field(0, ge=0, le=100)
    # unset until at least two routes are compared
    emission_savings: Optional[float] = Field(None, ge=0)
    emission_savings_percent: Optional[float] = Field(None, ge=0, le=100)


class RouteSet(BaseModel):
    origin: Optional[Place] = None
    destination: Optional[Place] = None
    mode: TravelMode
    routes: List[RouteCandidate] = Field(default_factory=list)
    provenance: Provenance = Provenance.REMOTE
    degraded: bool = False


class EmissionComparison(BaseModel):
    most_eco_friendly: RouteCandidate
    least_eco_friendly: RouteCandidate
    total_savings: float
    savings_percent: float


class RoutePlan(RouteSet):
    """Route-set plus savings annotation and comparison, as served by GET /routes."""

    comparison: Optional[EmissionComparison] = None


class ProviderRoute(BaseModel):
    """One path as returned by a routing provider, before scoring."""

    distance: float  # meters
    duration: float  # seconds
    profile: str
    geometry: Optional[Dict[str, Any]] = None
    instructions: List[Dict[str, Any]] = Field(default_factory=list)
