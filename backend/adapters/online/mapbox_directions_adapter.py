# adapters/online/mapbox_directions_adapter.py
from __future__ import annotations
from typing import Optional
import os

import httpx

from core.exceptions import ProviderFailure
from core.interfaces import DirectionsAdapter
from models.routes import Coordinate, ProviderRoute


class MapboxDirectionsAdapter(DirectionsAdapter):
    """
    Directions adapter backed by Mapbox Directions v5.
    - `profile` is a Mapbox profile: driving, driving-traffic, walking, cycling.
    - Asks for alternatives, full GeoJSON overview and steps; keeps the first route.
    - Distances in meters, durations in seconds (Mapbox defaults).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://api.mapbox.com",
        timeout: float = 10.0,
    ):
        self.api_key = (
            api_key
            or os.getenv("MAPBOX_TOKEN")
            or os.getenv("MAPBOX_ACCESS_TOKEN")
            or "test-token"
        )
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, origin: Coordinate, destination: Coordinate, profile: str) -> str:
        path = f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
        return f"{self.base_url}/directions/v5/mapbox/{profile}/{path}"

    async def get_route(
        self, origin: Coordinate, destination: Coordinate, profile: str
    ) -> ProviderRoute:
        params = {
            "access_token": self.api_key,
            "alternatives": "true",
            "geometries": "geojson",
            "overview": "full",
            "steps": "true",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.get(
                    self._url(origin, destination, profile), params=params
                )
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as e:
            raise ProviderFailure(
                f"Mapbox directions ({profile}) HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderFailure(f"Mapbox directions ({profile}) error: {e}") from e

        return self._parse(data, profile)

    @staticmethod
    def _parse(data, profile: str) -> ProviderRoute:
        if not isinstance(data, dict):
            raise ProviderFailure(f"Mapbox directions ({profile}) returned a non-object body")
        try:
            routes = data.get("routes") or []
            if not routes or not routes[0].get("distance"):
                raise ProviderFailure(f"Mapbox directions ({profile}) returned no route")

            best = routes[0]
            legs = best.get("legs") or [{}]
            return ProviderRoute(
                distance=float(best["distance"]),
                duration=float(best.get("duration") or 0.0),
                profile=profile,
                geometry=best.get("geometry"),
                instructions=list(legs[0].get("steps") or []),
            )
        except (AttributeError, TypeError, KeyError, IndexError, ValueError) as e:
            raise ProviderFailure(
                f"Mapbox directions ({profile}) returned a malformed route: {e}"
            ) from e
