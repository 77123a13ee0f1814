"""
Persistence for users and trips.

Every trip operation takes the caller's ``Credentials`` explicitly and checks
ownership before touching a row. Failures propagate as ``AppError`` subclasses;
the API layer renders them.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import (
    AuthenticationError,
    DuplicateUserError,
    PermissionDenied,
    TripNotFound,
    ValidationFailure,
)
from core.security import Credentials, hash_password, verify_password
from db.tables import TripRecord, UserRecord
from models.trips import (
    CarbonSummary,
    EmissionSavings,
    Trip,
    TripCreate,
    TripPage,
    TripStatus,
)
from models.users import UserLogin, UserSignup
from services.trip_aggregator import summarize

logger = logging.getLogger(__name__)

# statuses that count towards the carbon summary
SUMMARY_STATUSES = (TripStatus.PLANNED.value, TripStatus.COMPLETED.value)


def _missing(**fields) -> List[str]:
    return [name for name, value in fields.items() if not value]


def _parse_status(status: Optional[str]) -> TripStatus:
    try:
        return TripStatus(status)
    except ValueError as e:
        raise ValidationFailure(
            "Invalid status. Must be: planned, completed, or cancelled"
        ) from e


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        result = await self.session.execute(
            select(UserRecord).where(UserRecord.email == _normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create_user(self, payload: UserSignup) -> UserRecord:
        missing = _missing(name=payload.name, email=payload.email, password=payload.password)
        if missing:
            raise ValidationFailure(f"Missing required fields: {', '.join(missing)}")

        if await self.get_by_email(payload.email) is not None:
            raise DuplicateUserError("User already exists")

        user = UserRecord(
            name=payload.name.strip(),
            email=_normalize_email(payload.email),
            password_hash=hash_password(payload.password),
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info("registered user id=%s", user.id)
        return user

    async def authenticate(self, payload: UserLogin) -> UserRecord:
        missing = _missing(email=payload.email, password=payload.password)
        if missing:
            raise ValidationFailure(f"Missing required fields: {', '.join(missing)}")

        user = await self.get_by_email(payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return user


class TripStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    # ───────────────────────── helpers ─────────────────────────

    @staticmethod
    def _require_owner(credentials: Credentials, owner_id: int) -> None:
        if credentials.user_id != owner_id:
            raise PermissionDenied("Not allowed to access another user's trips")

    async def _owned_trip(self, credentials: Credentials, trip_id: int) -> TripRecord:
        record = await self.session.get(TripRecord, trip_id)
        if record is None:
            raise TripNotFound(trip_id)
        self._require_owner(credentials, record.owner_id)
        return record

    # ───────────────────────── operations ─────────────────────────

    async def save_trip(self, credentials: Credentials, payload: TripCreate) -> Trip:
        missing = _missing(
            origin=payload.origin,
            destination=payload.destination,
            selected_route=payload.selected_route,
        )
        if missing:
            raise ValidationFailure(f"Missing required fields: {', '.join(missing)}")

        savings = payload.emission_savings or EmissionSavings()
        record = TripRecord(
            owner_id=credentials.user_id,
            origin=payload.origin.model_dump(mode="json"),
            destination=payload.destination.model_dump(mode="json"),
            selected_route=payload.selected_route.model_dump(mode="json"),
            alternative_routes=[a.model_dump(mode="json") for a in payload.alternative_routes],
            emission_savings=savings.model_dump(mode="json"),
            mode=payload.selected_route.mode.value,
            distance=payload.selected_route.distance,
            status=TripStatus.PLANNED.value,
        )
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        logger.info("saved trip id=%s for user id=%s", record.id, credentials.user_id)
        return Trip.model_validate(record)

    async def list_trips(
        self,
        credentials: Credentials,
        owner_id: int,
        status: Optional[str] = None,
        limit: int = 50,
        page: int = 1,
    ) -> TripPage:
        """Newest first, `limit` per page (pages start at 1)."""
        self._require_owner(credentials, owner_id)
        if limit < 1 or page < 1:
            raise ValidationFailure("limit and page must be positive")

        filters = [TripRecord.owner_id == owner_id]
        if status:
            filters.append(TripRecord.status == _parse_status(status).value)

        total = await self.session.scalar(
            select(func.count()).select_from(TripRecord).where(*filters)
        )
        result = await self.session.execute(
            select(TripRecord)
            .where(*filters)
            .order_by(TripRecord.created_at.desc(), TripRecord.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        trips = [Trip.model_validate(r) for r in result.scalars().all()]
        total = total or 0
        return TripPage(
            trips=trips,
            total_trips=total,
            current_page=page,
            total_pages=math.ceil(total / limit),
        )

    async def update_status(
        self, credentials: Credentials, trip_id: int, status: Optional[str]
    ) -> Trip:
        new_status = _parse_status(status)
        record = await self._owned_trip(credentials, trip_id)
        record.status = new_status.value
        await self.session.commit()
        await self.session.refresh(record)
        logger.info("trip id=%s -> %s", trip_id, new_status.value)
        return Trip.model_validate(record)

    async def delete_trip(self, credentials: Credentials, trip_id: int) -> None:
        record = await self._owned_trip(credentials, trip_id)
        await self.session.delete(record)
        await self.session.commit()
        logger.info("deleted trip id=%s", trip_id)

    async def carbon_summary(self, credentials: Credentials, owner_id: int) -> CarbonSummary:
        self._require_owner(credentials, owner_id)
        result = await self.session.execute(
            select(TripRecord).where(
                TripRecord.owner_id == owner_id,
                TripRecord.status.in_(SUMMARY_STATUSES),
            )
        )
        return summarize(Trip.model_validate(r) for r in result.scalars().all())
