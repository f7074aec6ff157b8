"""ABOUTME: Shared builders for service and API tests
ABOUTME: Creates users, event inputs and future timestamps without going through the HTTP layer"""

from datetime import UTC, datetime, timedelta

from planit.domain.events import TIMESTAMP_FORMAT
from planit.domain.users import User
from planit.domain.validators import EventInput
from planit.service_layer.security import hash_password
from planit.service_layer.unit_of_work import AbstractUnitOfWork


def timestamp(days: int = 0, hours: int = 0) -> str:
    """A 'YYYY-MM-DD HH:MM' timestamp relative to now; negative values are in the past."""
    return (datetime.now(UTC) + timedelta(days=days, hours=hours)).strftime(TIMESTAMP_FORMAT)


def add_user(uow: AbstractUnitOfWork, username: str, password: str = "Secr3t!") -> User:
    user = User(
        username=username,
        name=username.capitalize(),
        email=f"{username}@example.com",
        password_hash=hash_password(password),
    )
    uow.users.add(user)
    return user


def event_input(**overrides) -> EventInput:
    fields = {
        "title": "Five-a-side",
        "category": "Sports and Fitness",
        "subcategory": "Football",
        "date": timestamp(days=7),
        "end_date": timestamp(days=7, hours=2),
        "price": "5 EUR",
        "description": "Friendly match, all levels welcome",
    }
    fields.update(overrides)
    return EventInput(**fields)
