# api/routes_api.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.exceptions import ValidationFailure
from models.routes import RoutePlan, TravelMode
from services.route_source import RouteSource
from services.scoring import SortKey, comparison, emission_savings, sort_routes
from api.deps import route_source

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("", response_model=RoutePlan)
async def find_routes(
    origin: Optional[str] = Query(None),
    destination: Optional[str] = Query(None),
    mode: TravelMode = Query(TravelMode.DRIVING),
    vehicle: Optional[str] = Query(None, description="vehicle profile id"),
    sort: SortKey = Query("distance"),
    source: RouteSource = Depends(route_source),
):
    """
    Candidate routes with emissions, eco-scores and savings.
    Always answers with routes; `provenance` and `degraded` flag fallbacks.
    """
    if not (origin or "").strip() or not (destination or "").strip():
        raise ValidationFailure("origin and destination are required")

    route_set = await source.find_routes(origin.strip(), destination.strip(), mode, vehicle)
    routes = sort_routes(emission_savings(route_set.routes), sort)
    return RoutePlan(
        **route_set.model_dump(exclude={"routes"}),
        routes=routes,
        comparison=comparison(routes),
    )
