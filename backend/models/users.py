# models/users.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field


class UserSignup(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str


class TokenResponse(BaseModel):
    message: str
    user: UserPublic
    token: str
    token_type: str = "bearer"
