"""ABOUTME: SQLAlchemy table definitions for PlanIt
ABOUTME: Defines the schema, including the uniqueness constraints that back up the service layer's checks"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy import (
    JSON,
    TIMESTAMP,
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
)
from sqlalchemy.engine.interfaces import Dialect
from sqlalchemy.orm import registry

from planit.domain.value_objects import LocationType, Visibility


def aware_utcnow() -> datetime:  # pragma: no cover
    return datetime.now(UTC)


class EnumAsString(TypeDecorator):
    """Custom type for storing Python Enums as strings."""

    impl = String
    cache_ok = True

    def __init__(self, enum_class: type[Enum], *args: Any, **kwargs: Any) -> None:
        self.enum_class = enum_class
        super().__init__(*args, **kwargs)

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return value
        return value.value if hasattr(value, "value") else str(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return value
        return self.enum_class(value)


class TZAwareDatetime(TypeDecorator):
    """Custom type for timezone-aware datetime objects."""

    impl = TIMESTAMP
    cache_ok = True

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("timezone", True)
        super().__init__(*args, **kwargs)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return value

        # If the datetime is naive, assume it's UTC and make it aware
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)

        return value


# Create a registry for imperative mapping
mapper_registry = registry()
metadata = mapper_registry.metadata

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(20), nullable=False, unique=True),
    Column("name", String(20), nullable=False),
    Column("email", String(255), nullable=False, unique=True, index=True),
    Column("password_hash", String(255), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("interests", JSON, nullable=False, default=list),
    Column("created_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
    Column("is_active", Boolean, nullable=False, default=True),
)

events = Table(
    "events",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(25), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("category", String(50), nullable=False, index=True),
    Column("subcategory", String(50), nullable=False, default=""),
    Column("location_type", EnumAsString(LocationType, 20), nullable=True),
    Column("location", String(255), nullable=True),
    Column("latitude", Float, nullable=False, default=0.0),
    Column("longitude", Float, nullable=False, default=0.0),
    Column("visibility", EnumAsString(Visibility, 10), nullable=False),
    # 'YYYY-MM-DD HH:MM', so string order is time order
    Column("date", String(16), nullable=False),
    Column("end_date", String(16), nullable=False, default=""),
    Column("price_amount", Float, nullable=False, default=0.0),
    Column("price_currency", String(10), nullable=False, default=""),
    Column("password", String(255), nullable=False, default=""),
    Column("code", String(6), nullable=False, unique=True),
    Column("created_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
)

event_participants = Table(
    "event_participants",
    metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role", String(20), nullable=False),
    Column("joined_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
    UniqueConstraint("event_id", "user_id", name="uq_event_participant"),
)

polls = Table(
    "polls",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("title", String(255), nullable=False),
    Column("duration_hours", Integer, nullable=False),
    Column("created_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
)

poll_options = Table(
    "poll_options",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("poll_id", Integer, ForeignKey("polls.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("text", String(50), nullable=False),
)

poll_votes = Table(
    "poll_votes",
    metadata,
    Column("poll_id", Integer, ForeignKey("polls.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("option_id", Integer, ForeignKey("poll_options.id", ondelete="CASCADE"), nullable=False),
    Column("voted_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
    UniqueConstraint("poll_id", "user_id", name="uq_poll_vote_per_user"),
)

feedback = Table(
    "feedback",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("text", Text, nullable=False),
    Column("created_at", TZAwareDatetime(), nullable=False, default=aware_utcnow),
)
