# services/route_source.py
from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional, Sequence

from adapters.offline.mock_routes import mock_route_set
from core.exceptions import AppError, ProviderFailure, ResolutionFailure
from core.interfaces import DirectionsAdapter, Geocoder
from models.routes import (
    Place,
    Provenance,
    ProviderRoute,
    RouteCandidate,
    RouteSet,
    TravelMode,
)
from services.emissions.emissions_factory import EmissionModel
from services.scoring import eco_score

logger = logging.getLogger(__name__)

# Base Mapbox profile per travel mode (Mapbox has no transit profile)
MODE_PROFILES = {
    "driving": "driving",
    "transit": "walking",
    "bicycling": "cycling",
    "walking": "walking",
}

# Several profiles per mode so the set has distinct alternatives; repeating
# a profile relies on the provider answering differently on a second call.
PROFILE_SETS = {
    "driving": ["driving", "driving-traffic", "driving"],
    "transit": ["walking", "cycling", "driving"],
    "bicycling": ["cycling", "walking", "driving"],
    "walking": ["walking", "cycling", "driving"],
}


def profiles_for_mode(mode: TravelMode | str) -> List[str]:
    key = getattr(mode, "value", mode)
    if key in PROFILE_SETS:
        return list(PROFILE_SETS[key])
    base = MODE_PROFILES.get(key, "driving")
    return [base, base, base]


RouteTier = Callable[[str, str, TravelMode, Optional[str]], Awaitable[Optional[RouteSet]]]


class RouteSource:
    """
    Candidate routes for an origin/destination pair.
    Tiers: live provider routes, then synthetic mock routes. Never raises.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        directions: DirectionsAdapter,
        emission_model: EmissionModel,
        rng: Optional[random.Random] = None,
    ):
        self.geocoder = geocoder
        self.directions = directions
        self.emission_model = emission_model
        self.rng = rng
        self.tiers: Sequence[RouteTier] = (self._live_routes, self._mock_routes)

    async def find_routes(
        self,
        origin: str,
        destination: str,
        mode: TravelMode | str = TravelMode.DRIVING,
        vehicle_type: Optional[str] = None,
    ) -> RouteSet:
        mode = TravelMode(mode)
        for tier in self.tiers:
            result = await tier(origin, destination, mode, vehicle_type)
            if result is not None:
                return result
        # the mock tier always answers; kept for custom tier chains
        return await self._mock_routes(origin, destination, mode, vehicle_type)

    # ───────────────────────── tiers ─────────────────────────

    async def _live_routes(
        self,
        origin: str,
        destination: str,
        mode: TravelMode,
        vehicle_type: Optional[str],
    ) -> Optional[RouteSet]:
        try:
            return await self._resolve_and_route(origin, destination, mode, vehicle_type)
        except (AppError, ValueError) as e:
            logger.warning(
                "live routing failed for %r -> %r (%s), using demo routes: %s",
                origin,
                destination,
                mode.value,
                e,
            )
            return None

    async def _mock_routes(
        self,
        origin: str,
        destination: str,
        mode: TravelMode,
        vehicle_type: Optional[str],
    ) -> RouteSet:
        return mock_route_set(origin, destination, mode, vehicle_type, rng=self.rng)

    # ───────────────────────── pipeline ─────────────────────────

    async def _geocode(self, origin: str, destination: str) -> tuple[Place, Place]:
        o, d = await asyncio.gather(
            self.geocoder.geocode(origin), self.geocoder.geocode(destination)
        )
        if o is None:
            raise ResolutionFailure(f"Could not find coordinates for origin {origin!r}")
        if d is None:
            raise ResolutionFailure(
                f"Could not find coordinates for destination {destination!r}"
            )
        return o, d

    async def _fetch_all(
        self, o: Place, d: Place, profiles: List[str]
    ) -> List[ProviderRoute]:
        """Fan out one request per profile; failures are dropped, order is kept."""
        results = await asyncio.gather(
            *(
                self.directions.get_route(o.coordinates, d.coordinates, p)
                for p in profiles
            ),
            return_exceptions=True,
        )
        routes: List[ProviderRoute] = []
        for profile, res in zip(profiles, results):
            if isinstance(res, ProviderRoute):
                routes.append(res)
            elif isinstance(res, (AppError, ValueError)):
                logger.info("dropping %s route: %s", profile, res)
            elif isinstance(res, BaseException):
                raise res
        return routes

    async def _score(
        self,
        index: int,
        raw: ProviderRoute,
        mode: TravelMode,
        vehicle_type: Optional[str],
        origin: str,
        destination: str,
    ) -> RouteCandidate:
        estimate = await self.emission_model.estimate_emission(
            raw.distance, mode, vehicle_type, origin, destination
        )
        return RouteCandidate(
            id=f"route_{index + 1}",
            distance=raw.distance,
            duration=raw.duration,
            mode=mode,
            vehicle_type=vehicle_type,
            profile=raw.profile,
            geometry=raw.geometry,
            instructions=raw.instructions,
            emission=estimate.emission_kg,
            emission_source=estimate.source,
            eco_score=eco_score(raw.distance, raw.duration, mode.value, vehicle_type),
        )

    async def _resolve_and_route(
        self,
        origin: str,
        destination: str,
        mode: TravelMode,
        vehicle_type: Optional[str],
    ) -> RouteSet:
        o, d = await self._geocode(origin, destination)

        raw_routes = await self._fetch_all(o, d, profiles_for_mode(mode))
        if not raw_routes:
            raise ProviderFailure("every routing profile request failed")

        candidates = await asyncio.gather(
            *(
                self._score(i, raw, mode, vehicle_type, origin, destination)
                for i, raw in enumerate(raw_routes)
            )
        )
        # stable: equal distances keep profile-request order
        ordered = sorted(candidates, key=lambda r: r.distance)
        degraded = any(r.emission_source != Provenance.REMOTE for r in ordered)
        if degraded:
            logger.info("route-set for %r -> %r uses local emission estimates", origin, destination)

        return RouteSet(
            origin=o,
            destination=d,
            mode=mode,
            routes=ordered,
            provenance=Provenance.REMOTE,
            degraded=degraded,
        )
