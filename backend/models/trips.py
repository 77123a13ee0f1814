# models/trips.py
from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from models.routes import Place, RouteCandidate, TravelMode


class TripStatus(str, Enum):
    PLANNED = "planned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AlternativeRoute(BaseModel):
    """Abbreviated candidate kept on a trip for later comparison."""

    id: str
    distance: float = Field(..., ge=0)
    duration: float = Field(..., ge=0)
    emission: float = Field(0.0, ge=0)
    eco_score: int = Field(0, ge=0, le=100)
    mode: TravelMode
    profile: Optional[str] = None


class EmissionSavings(BaseModel):
    amount: float = 0.0  # kg CO2
    percentage: float = 0.0


class TripCreate(BaseModel):
    # Optional here so the store can answer a 400 naming the missing fields
    origin: Optional[Place] = None
    destination: Optional[Place] = None
    selected_route: Optional[RouteCandidate] = None
    alternative_routes: List[AlternativeRoute] = Field(default_factory=list)
    emission_savings: Optional[EmissionSavings] = None


class TripStatusUpdate(BaseModel):
    # checked by the store so a bad value answers 400 like other field errors
    status: Optional[str] = None


class Trip(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    owner_id: int
    origin: Place
    destination: Place
    selected_route: RouteCandidate
    alternative_routes: List[AlternativeRoute] = Field(default_factory=list)
    emission_savings: Optional[EmissionSavings] = None
    created_at: datetime
    status: TripStatus = TripStatus.PLANNED


class TripPage(BaseModel):
    trips: List[Trip]
    total_trips: int
    current_page: int
    total_pages: int


class ModeStats(BaseModel):
    count: int = 0
    distance: float = 0.0
    emission: float = 0.0
    savings: float = 0.0


class CarbonSummary(BaseModel):
    trip_count: int = 0
    total_distance: float = 0.0  # meters
    total_emission: float = 0.0  # kg
    total_emission_savings: float = 0.0  # kg
    average_eco_score: float = 0.0
    per_mode: Dict[str, ModeStats] = Field(default_factory=dict)
    current_month: ModeStats = Field(default_factory=ModeStats)


class InsightKind(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


class Insight(BaseModel):
    kind: InsightKind
    title: str
    message: str
