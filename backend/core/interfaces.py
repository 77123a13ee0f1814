from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from models.emissions import EmissionEstimate, EmissionsRequest
from models.routes import Coordinate, Place, ProviderRoute, Provenance


class Geocoder(ABC):
    """Free-text query -> best-match place, or None when nothing matches."""

    @abstractmethod
    async def geocode(self, query: str) -> Optional[Place]: ...


class DirectionsAdapter(ABC):
    """All routing providers must implement this. Raise ProviderFailure on errors."""

    @abstractmethod
    async def get_route(
        self, origin: Coordinate, destination: Coordinate, profile: str
    ) -> ProviderRoute: ...


class EmissionTier(ABC):
    """
    One link of the emission chain. Returns None to hand over to the next tier;
    the last tier must always answer.
    """

    provenance: Provenance

    @abstractmethod
    async def estimate(self, request: EmissionsRequest) -> Optional[EmissionEstimate]: ...
