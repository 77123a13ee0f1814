from fastapi import APIRouter

from api._resp import ok

router = APIRouter(tags=["status"])


@router.get("/health")
def health():
    return ok(service="greenroute")
