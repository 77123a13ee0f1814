# services/emissions/tiers.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from core.exceptions import ProviderFailure
from core.interfaces import EmissionTier
from models.emissions import EmissionEstimate, EmissionsRequest
from models.routes import Provenance
from .calculator import Leg, adjusted_factor, emissions_for_leg
from .factors import EmissionFactors, mapping_for

logger = logging.getLogger(__name__)


def _extract_emission(data: Any) -> float:
    """Accept `emission_kg` (current) or `emission` (legacy); must be a positive number."""
    if not isinstance(data, dict):
        raise ProviderFailure("emission API returned a non-object body")
    raw = data.get("emission_kg", data.get("emission"))
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ProviderFailure(f"emission API returned no numeric emission: {raw!r}")
    value = float(raw)
    if value <= 0:
        raise ProviderFailure(f"emission API returned non-positive emission: {value}")
    return value


class RemoteEmissionTier(EmissionTier):
    """POST {base_url}/calculate; any failure hands over to the next tier."""

    provenance = Provenance.REMOTE

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self._client = client

    def build_payload(self, request: EmissionsRequest) -> Dict[str, Any]:
        mode = request.mode.value
        mapping = mapping_for(request.vehicle_type, mode)
        if mapping is None:
            raise ProviderFailure(
                f"no remote vehicle mapping for vehicle={request.vehicle_type!r} mode={mode!r}"
            )
        return {
            "distance_km": request.distance / 1000.0,
            "vehicle_type": mapping.vehicle_type,
            "fuel_type": mapping.fuel_type,
            "origin": request.origin,
            "destination": request.destination,
            "mode": mode,
        }

    async def _post(self, payload: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/calculate"
        if self._client is not None:
            resp = await self._client.post(url, json=payload, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload)
        resp.raise_for_status()
        return resp.json()

    async def fetch(self, request: EmissionsRequest) -> EmissionEstimate:
        """Raise ProviderFailure on anything short of a usable estimate."""
        payload = self.build_payload(request)
        try:
            data = await self._post(payload)
        except httpx.HTTPStatusError as e:
            raise ProviderFailure(
                f"emission API HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderFailure(f"emission API error: {e}") from e

        return EmissionEstimate(
            emission_kg=_extract_emission(data),
            source=self.provenance,
            distance_km=payload["distance_km"],
            vehicle_type=payload["vehicle_type"],
            fuel_type=payload["fuel_type"],
        )

    async def estimate(self, request: EmissionsRequest) -> Optional[EmissionEstimate]:
        if not self.base_url:
            logger.debug("remote emission tier disabled (no EMISSION_API_URL)")
            return None
        try:
            return await self.fetch(request)
        except ProviderFailure as e:
            logger.warning("remote emission estimate failed, falling back: %s", e)
            return None


class LocalEmissionTier(EmissionTier):
    """Deterministic factor-table formula. Always answers."""

    provenance = Provenance.LOCAL

    def __init__(self, factors: Optional[EmissionFactors] = None):
        self.factors = factors or EmissionFactors.builtin()

    def compute(self, request: EmissionsRequest) -> EmissionEstimate:
        leg = Leg(
            distance_m=request.distance,
            mode=request.mode.value,
            vehicle_type=request.vehicle_type,
        )
        return EmissionEstimate(
            emission_kg=emissions_for_leg(leg, self.factors),
            source=self.provenance,
            distance_km=leg.distance_km,
            factor_used=adjusted_factor(leg, self.factors),
            vehicle_type=request.vehicle_type,
        )

    async def estimate(self, request: EmissionsRequest) -> Optional[EmissionEstimate]:
        return self.compute(request)
