"""User and trip tables. Route payloads are stored as JSON documents."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String

from db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<UserRecord(id={self.id}, email='{self.email}')>"


class TripRecord(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    origin = Column(JSON, nullable=False)
    destination = Column(JSON, nullable=False)
    selected_route = Column(JSON, nullable=False)
    alternative_routes = Column(JSON, nullable=False, default=list)
    emission_savings = Column(JSON, nullable=True)

    # denormalized from selected_route for filtering
    mode = Column(String(32), nullable=False, index=True)
    distance = Column(Float, nullable=False, default=0.0)

    status = Column(String(16), nullable=False, default="planned", index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<TripRecord(id={self.id}, owner_id={self.owner_id}, status='{self.status}')>"
