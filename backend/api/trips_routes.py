# api/trips_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from api._resp import ok
from core.security import Credentials
from models.trips import CarbonSummary, Insight, TripCreate, TripPage, TripStatusUpdate
from services.trip_aggregator import environmental_insights
from services.trip_store import TripStore
from api.deps import current_credentials, trip_store

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("/save", status_code=status.HTTP_201_CREATED)
async def save_trip(
    payload: TripCreate,
    creds: Credentials = Depends(current_credentials),
    store: TripStore = Depends(trip_store),
):
    trip = await store.save_trip(creds, payload)
    return ok(message="Trip saved successfully", trip=trip.model_dump(mode="json"))


@router.get("/user/{user_id}", response_model=TripPage)
async def user_trips(
    user_id: int,
    status: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    page: int = Query(1, ge=1),
    creds: Credentials = Depends(current_credentials),
    store: TripStore = Depends(trip_store),
):
    return await store.list_trips(creds, user_id, status=status, limit=limit, page=page)


@router.get("/carbon-summary/{user_id}", response_model=CarbonSummary)
async def carbon_summary(
    user_id: int,
    creds: Credentials = Depends(current_credentials),
    store: TripStore = Depends(trip_store),
):
    return await store.carbon_summary(creds, user_id)


@router.get("/insights/{user_id}", response_model=List[Insight])
async def insights(
    user_id: int,
    creds: Credentials = Depends(current_credentials),
    store: TripStore = Depends(trip_store),
):
    return environmental_insights(await store.carbon_summary(creds, user_id))


@router.patch("/{trip_id}/status")
async def update_trip_status(
    trip_id: int,
    body: TripStatusUpdate,
    creds: Credentials = Depends(current_credentials),
    store: TripStore = Depends(trip_store),
):
    trip = await store.update_status(creds, trip_id, body.status)
    return ok(message="Trip status updated successfully", trip=trip.model_dump(mode="json"))


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    creds: Credentials = Depends(current_credentials),
    store: TripStore = Depends(trip_store),
):
    await store.delete_trip(creds, trip_id)
    return ok(message="Trip deleted successfully")
