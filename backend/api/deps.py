# api/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.online.mapbox_directions_adapter import MapboxDirectionsAdapter
from adapters.online.mapbox_geocoder import MapboxGeocoder
from config import settings
from core.exceptions import AuthenticationError
from core.security import Credentials, decode_access_token
from db.session import get_db
from services.emissions.emissions_factory import EmissionModel, get_emission_model
from services.route_source import RouteSource
from services.trip_store import TripStore, UserStore

# auto_error=False so a missing header goes through our own 401 envelope
bearer = HTTPBearer(auto_error=False)


def emission_model() -> EmissionModel:
    return get_emission_model()


def route_source(model: EmissionModel = Depends(emission_model)) -> RouteSource:
    return RouteSource(
        geocoder=MapboxGeocoder(
            api_key=settings.MAPBOX_TOKEN or None,
            country=settings.GEOCODE_COUNTRY,
            base_url=settings.MAPBOX_BASE,
            timeout=settings.HTTP_TIMEOUT_S,
        ),
        directions=MapboxDirectionsAdapter(
            api_key=settings.MAPBOX_TOKEN or None,
            base_url=settings.MAPBOX_BASE,
            timeout=settings.HTTP_TIMEOUT_S,
        ),
        emission_model=model,
    )


def current_credentials(
    auth: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Credentials:
    if auth is None or not auth.credentials:
        raise AuthenticationError("No token, authorization denied")
    return decode_access_token(auth.credentials)


def user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserStore(db)


def trip_store(db: AsyncSession = Depends(get_db)) -> TripStore:
    return TripStore(db)
