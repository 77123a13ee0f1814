# adapters/online/mapbox_geocoder.py
from __future__ import annotations
from typing import Optional
from urllib.parse import quote
import os

import httpx

from core.cache import geocode_cache
from core.exceptions import ProviderFailure
from core.interfaces import Geocoder
from models.routes import Coordinate, Place


class MapboxGeocoder(Geocoder):
    """
    Forward geocoding via Mapbox Geocoding v5.
    - One country only (`country`), top match only (`limit=1`).
    - Returns None when nothing matches; raises ProviderFailure on transport errors.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        country: str = "IN",
        base_url: str = "https://api.mapbox.com",
        timeout: float = 10.0,
    ):
        self.api_key = (
            api_key
            or os.getenv("MAPBOX_TOKEN")
            or os.getenv("MAPBOX_ACCESS_TOKEN")
            or "test-token"
        )
        self.country = country
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _lookup(self, query: str) -> Optional[Place]:
        url = f"{self.base_url}/geocoding/v5/mapbox.places/{quote(query, safe='')}.json"
        params = {
            "access_token": self.api_key,
            "country": self.country,
            "limit": "1",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.get(url, params=params)
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as e:
            raise ProviderFailure(
                f"Mapbox geocoding HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderFailure(f"Mapbox geocoding error: {e}") from e

        return self._parse(data, query)

    @staticmethod
    def _parse(data, query: str) -> Optional[Place]:
        if not isinstance(data, dict):
            raise ProviderFailure("Mapbox geocoding returned a non-object body")
        try:
            features = data.get("features") or []
            if not features:
                return None
            top = features[0]
            center = top.get("center") or []
            if len(center) < 2:
                return None
            lon, lat = float(center[0]), float(center[1])
            return Place(
                name=top.get("place_name") or query,
                coordinates=Coordinate(lon=lon, lat=lat),
            )
        except (AttributeError, TypeError, KeyError, IndexError, ValueError) as e:
            # pydantic ValidationError is a ValueError (out-of-range coordinates)
            raise ProviderFailure(f"Mapbox geocoding returned a malformed feature: {e}") from e

    async def geocode(self, query: str) -> Optional[Place]:
        q = (query or "").strip()
        if not q:
            return None
        key = f"mapbox|{self.country}|{q.lower()}"
        hit = geocode_cache.get(key)
        if hit is not None:
            return hit
        place = await self._lookup(q)
        # misses are not cached so a later retry can still resolve
        if place is not None:
            geocode_cache.set(key, place)
        return place
