# api/emissions_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from models.emissions import EmissionEstimate, EmissionsRequest, VehicleProfile
from models.routes import TravelMode
from services.emissions.emissions_factory import EmissionModel
from services.emissions.factors import vehicles_for_mode
from api.deps import emission_model

router = APIRouter(prefix="/emissions", tags=["emissions"])


@router.post("/estimate", response_model=EmissionEstimate)
async def estimate_emissions(
    req: EmissionsRequest, model: EmissionModel = Depends(emission_model)
):
    # never fails: the local formula answers when the remote API does not
    return await model.estimate(req)


@router.get("/vehicles", response_model=List[VehicleProfile])
def list_vehicles(mode: Optional[TravelMode] = Query(None)):
    return vehicles_for_mode(mode.value if mode else None)
