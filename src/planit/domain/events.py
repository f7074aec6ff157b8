"""ABOUTME: Event domain model and event membership
ABOUTME: Plain Python objects mapped imperatively by the ORM; membership carries the member's role"""

import secrets
import string
from datetime import UTC, datetime

from .value_objects import EVENT_CODE_LENGTH, EventRole, LocationType, Visibility

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def generate_event_code(length: int = EVENT_CODE_LENGTH) -> str:
    """Generate a random join code of uppercase letters and digits."""
    alphabet = string.ascii_uppercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def now_timestamp() -> str:
    """The current UTC time in the same 'YYYY-MM-DD HH:MM' format event dates use."""
    return datetime.now(UTC).strftime(TIMESTAMP_FORMAT)


class EventParticipant:
    """A user's membership of an event, together with the role they hold in it."""

    def __init__(
        self,
        user_id: int,
        role: str = EventRole.PARTICIPANT,
        event_id: int | None = None,
        joined_at: datetime | None = None,
    ):
        self.user_id = user_id
        self.event_id = event_id
        self.role = role
        self.joined_at = joined_at or datetime.now(UTC)

    @property
    def is_organizer(self) -> bool:
        return self.role == EventRole.ORGANIZER

    def create_detached_copy(self) -> "EventParticipant":
        return EventParticipant(
            user_id=self.user_id,
            role=self.role,
            event_id=self.event_id,
            joined_at=self.joined_at,
        )


class Event:
    """Event domain model.

    Field values are expected to have been validated already, normally through
    `planit.domain.validators.validate_event_input`. Dates are 'YYYY-MM-DD HH:MM'
    strings and an empty end date means the event has no end.
    """

    def __init__(
        self,
        title: str,
        category: str,
        date: str,
        description: str = "",
        subcategory: str = "",
        location_type: LocationType | None = None,
        location: str | None = None,
        latitude: float = 0.0,
        longitude: float = 0.0,
        visibility: Visibility = Visibility.PUBLIC,
        end_date: str = "",
        price_amount: float = 0.0,
        price_currency: str = "",
        password: str = "",
        code: str | None = None,
        event_id: int | None = None,
        created_at: datetime | None = None,
    ):
        if not title or not title.strip():
            raise ValueError("Event title is required")

        self.id = event_id
        self.title = title
        self.description = description
        self.category = category
        self.subcategory = subcategory
        self.location_type = location_type
        self.location = location
        self.latitude = latitude
        self.longitude = longitude
        self.visibility = visibility
        self.date = date
        self.end_date = end_date
        self.price_amount = price_amount
        self.price_currency = price_currency
        self.password = password
        self.code = code or generate_event_code()
        self.created_at = created_at or datetime.now(UTC)
        self.participants: list[EventParticipant] = []

    @property
    def is_private(self) -> bool:
        return self.visibility == Visibility.PRIVATE

    @property
    def price(self) -> str:
        return f"{self.price_amount:.2f} {self.price_currency}".strip()

    def has_ended(self, now: str | None = None) -> bool:
        return bool(self.end_date) and self.end_date < (now or now_timestamp())

    def get_participant(self, user_id: int) -> EventParticipant | None:
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None

    def is_participant(self, user_id: int) -> bool:
        return self.get_participant(user_id) is not None

    def organizer_ids(self) -> list[int]:
        return [p.user_id for p in self.participants if p.is_organizer]

    def is_organizer(self, user_id: int) -> bool:
        return user_id in self.organizer_ids()

    def add_participant(self, user_id: int, role: str = EventRole.PARTICIPANT) -> EventParticipant:
        if self.is_participant(user_id):
            raise ValueError(f"User {user_id} is already in event {self.id}")
        participant = EventParticipant(user_id=user_id, role=role, event_id=self.id)
        self.participants.append(participant)
        return participant

    def remove_participant(self, user_id: int) -> None:
        participant = self.get_participant(user_id)
        if participant is None:
            raise ValueError(f"User {user_id} is not in event {self.id}")
        self.participants.remove(participant)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):  # pragma: no cover
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return id(self) if self.id is None else hash(("event", self.id))

    def create_detached_copy(self) -> "Event":
        """Create a detached copy of this event for use outside SQLAlchemy sessions"""
        detached_event = Event(
            title=self.title,
            category=self.category,
            date=self.date,
            description=self.description,
            subcategory=self.subcategory,
            location_type=self.location_type,
            location=self.location,
            latitude=self.latitude,
            longitude=self.longitude,
            visibility=self.visibility,
            end_date=self.end_date,
            price_amount=self.price_amount,
            price_currency=self.price_currency,
            password=self.password,
            code=self.code,
            event_id=self.id,
            created_at=self.created_at,
        )
        detached_event.participants = [p.create_detached_copy() for p in self.participants]
        return detached_event
