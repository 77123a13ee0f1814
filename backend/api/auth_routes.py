# api/auth_routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.security import Credentials, create_access_token
from db.tables import UserRecord
from models.users import TokenResponse, UserLogin, UserPublic, UserSignup
from services.trip_store import UserStore
from api.deps import user_store

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(message: str, user: UserRecord) -> TokenResponse:
    token = create_access_token(Credentials(user_id=user.id, email=user.email))
    return TokenResponse(message=message, user=UserPublic.model_validate(user), token=token)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: UserSignup, store: UserStore = Depends(user_store)):
    user = await store.create_user(payload)
    return _token_response("User created successfully", user)


@router.post("/login", response_model=TokenResponse)
async def login(payload: UserLogin, store: UserStore = Depends(user_store)):
    user = await store.authenticate(payload)
    return _token_response("Login successful", user)
