# services/emissions/emissions_factory.py
from __future__ import annotations
import logging
from functools import lru_cache
from typing import List, Optional, Sequence

from config import settings
from core.interfaces import EmissionTier
from models.emissions import EmissionEstimate, EmissionsRequest
from models.routes import TravelMode
from .factors import EmissionFactors
from .tiers import LocalEmissionTier, RemoteEmissionTier

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_factors() -> EmissionFactors:
    """Return the cached built-in factor table."""
    return EmissionFactors.builtin()


class EmissionModel:
    """
    Walks the tiers in order (remote, then local) and returns the first answer.
    The result's `source` tells which tier produced it.
    """

    def __init__(self, tiers: Sequence[EmissionTier]):
        if not tiers:
            raise ValueError("EmissionModel needs at least one tier")
        self.tiers: List[EmissionTier] = list(tiers)
        self._local = LocalEmissionTier(get_factors())

    async def estimate(self, request: EmissionsRequest) -> EmissionEstimate:
        for tier in self.tiers:
            result = await tier.estimate(request)
            if result is not None:
                return result
            logger.debug("%s emission tier passed", tier.provenance.value)
        # Chain configured without an always-answering tier
        logger.warning("no emission tier answered; using local formula")
        return self._local.compute(request)

    async def estimate_emission(
        self,
        distance: float,
        mode: TravelMode | str,
        vehicle_type: Optional[str] = None,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> EmissionEstimate:
        return await self.estimate(
            EmissionsRequest(
                distance=distance,
                mode=TravelMode(mode),
                vehicle_type=vehicle_type,
                origin=origin,
                destination=destination,
            )
        )


def get_emission_model(
    api_url: Optional[str] = None, timeout: Optional[float] = None
) -> EmissionModel:
    url = settings.EMISSION_API_URL if api_url is None else api_url
    return EmissionModel(
        [
            RemoteEmissionTier(url, timeout=timeout or settings.HTTP_TIMEOUT_S),
            LocalEmissionTier(get_factors()),
        ]
    )
