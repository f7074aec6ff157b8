"""ABOUTME: Validated value objects for events, polls and users
ABOUTME: Each create() turns raw input into an immutable value or a PlanItError, never raising for bad input"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Self

from planit.domain.categories import SIMPLE_MEETING, CategoryCatalogue
from planit.domain.errors import ErrorKind, PlanItError
from planit.domain.result import Err, Ok, Result

TITLE_MAX_LENGTH = 25
DESCRIPTION_MAX_LENGTH = 400
NO_DESCRIPTION = "No description yet!"
USERNAME_MIN_LENGTH = 5
NAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 5
EVENT_CODE_LENGTH = 6
OPTION_MAX_LENGTH = 50
DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

PASSWORD_TOO_SHORT = f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
PASSWORD_NO_NUMBER = "Password must contain at least one number"
PASSWORD_NO_UPPERCASE = "Password must contain at least one uppercase letter"
PASSWORD_NO_SPECIAL_CHAR = "Password must contain at least one special character"

_MONEY_RE = re.compile(r"(\d+(\.\d+)?)\s*([A-Za-z]+)")
_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2}) (\d{2}:\d{2})")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.com")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _not_text(raw: object) -> bool:
    """True for JSON values that should have been a string but were a number, list, object or bool."""
    return raw is not None and not isinstance(raw, str)


def _is_number(raw: object) -> bool:
    return isinstance(raw, int | float) and not isinstance(raw, bool)


class Visibility(Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"

    @classmethod
    def parse(cls, raw: str | None) -> Result[Self, PlanItError]:
        for member in cls:
            if member.value == raw:
                return Ok(member)
        return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "visibility"))


class LocationType(Enum):
    PHYSICAL = "Physical"
    ONLINE = "Online"

    @classmethod
    def parse(cls, raw: str | None) -> Result[Self | None, PlanItError]:
        """Parse a location type; None means the event has no location type."""
        if raw is None:
            return Ok(None)
        for member in cls:
            if member.value == raw:
                return Ok(member)
        return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "locationType"))


class EventRole:
    """Role names every event understands. Any other role name is a task assigned by an organizer."""

    ORGANIZER = "Organizer"
    PARTICIPANT = "Participant"


@dataclass(frozen=True)
class Category:
    name: str

    @classmethod
    def create(cls, raw: str | None, catalogue: CategoryCatalogue) -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "category"))
        canonical = catalogue.find(raw)
        if canonical is None:
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "category"))
        return Ok(cls(canonical))


@dataclass(frozen=True)
class Subcategory:
    name: str

    @classmethod
    def create(cls, category: str | None, raw: str | None, catalogue: CategoryCatalogue) -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "subcategory"))
        canonical = None if _not_text(category) else catalogue.find(category)
        if canonical == SIMPLE_MEETING or _is_blank(raw):
            return Ok(cls(""))
        if canonical is not None and raw in catalogue.subcategories(canonical):
            return Ok(cls(raw))
        return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "subcategory"))


@dataclass(frozen=True)
class Title:
    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "title"))
        if raw is None or _is_blank(raw):
            return Err(PlanItError.of(ErrorKind.VALUE_IS_BLANK, "title"))
        if not 1 <= len(raw) <= TITLE_MAX_LENGTH:
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE_LENGTH, "title"))
        return Ok(cls(raw))


@dataclass(frozen=True)
class Description:
    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "description"))
        if not raw:
            return Ok(cls(NO_DESCRIPTION))
        if len(raw) > DESCRIPTION_MAX_LENGTH:
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE_LENGTH, "description"))
        return Ok(cls(raw))


@dataclass(frozen=True)
class Money:
    amount: float
    currency: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_PRICE_FORMAT, "price"))
        match = _MONEY_RE.search(raw or "")
        if match is None:
            return Err(PlanItError.of(ErrorKind.INVALID_PRICE_FORMAT, "price"))
        return Ok(cls(amount=float(match.group(1)), currency=match.group(3)))

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


@dataclass(frozen=True)
class DateFormat:
    """A 'YYYY-MM-DD HH:MM' timestamp. The empty string means the date is not set."""

    value: str

    @classmethod
    def create(cls, raw: str | None, field: str = "date") -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_TIMESTAMP, field))
        if raw is None or _is_blank(raw):
            return Ok(cls(""))
        match = _DATE_RE.fullmatch(raw)
        if match is None or not 1 <= int(match.group(2)) <= 12 or not 1 <= int(match.group(3)) <= 31:
            return Err(PlanItError.of(ErrorKind.INVALID_TIMESTAMP, field))
        return Ok(cls(raw))

    @property
    def is_set(self) -> bool:
        return self.value != ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Coordinates:
    latitude: float = 0.0
    longitude: float = 0.0

    @classmethod
    def create(cls, latitude: float | None, longitude: float | None) -> Result[Self, PlanItError]:
        if any(value is not None and not _is_number(value) for value in (latitude, longitude)):
            return Err(PlanItError.of(ErrorKind.INVALID_COORDINATES, "coordinates"))
        if latitude is None or longitude is None:
            return Ok(cls())
        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            return Err(PlanItError.of(ErrorKind.INVALID_COORDINATES, "coordinates"))
        return Ok(cls(float(latitude), float(longitude)))

    @property
    def is_origin(self) -> bool:
        return self.latitude == 0.0 and self.longitude == 0.0


@dataclass(frozen=True)
class Email:
    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        if not isinstance(raw, str) or not _EMAIL_RE.fullmatch(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE_FORMAT, "email"))
        return Ok(cls(raw))


def _validate_name_like(raw: str | None, field: str, min_length: int) -> PlanItError | None:
    if _not_text(raw):
        return PlanItError.of(ErrorKind.INVALID_VALUE, field)
    if raw is None or _is_blank(raw):
        return PlanItError.of(ErrorKind.VALUE_IS_BLANK, field)
    if "@" in raw:
        return PlanItError.of(ErrorKind.INVALID_VALUE, field)
    if not min_length <= len(raw) <= NAME_MAX_LENGTH:
        return PlanItError.of(ErrorKind.INVALID_VALUE_LENGTH, field)
    return None


@dataclass(frozen=True)
class Username:
    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        error = _validate_name_like(raw, "username", USERNAME_MIN_LENGTH)
        if error is not None:
            return Err(error)
        return Ok(cls(raw))  # type: ignore[arg-type]


@dataclass(frozen=True)
class Name:
    value: str

    @classmethod
    def create(cls, raw: str | None, field: str = "name") -> Result[Self, PlanItError]:
        error = _validate_name_like(raw, field, 1)
        if error is not None:
            return Err(error)
        return Ok(cls(raw))  # type: ignore[arg-type]


@dataclass(frozen=True, repr=False)
class Password:
    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "password"))
        raw = raw or ""
        problems = []
        if len(raw) < PASSWORD_MIN_LENGTH:
            problems.append(PASSWORD_TOO_SHORT)
        if not any(c.isdigit() for c in raw):
            problems.append(PASSWORD_NO_NUMBER)
        if not any(c.isupper() for c in raw):
            problems.append(PASSWORD_NO_UPPERCASE)
        if all(c.isalnum() for c in raw):
            problems.append(PASSWORD_NO_SPECIAL_CHAR)
        if problems:
            return Err(PlanItError.of(ErrorKind.UNSAFE_PASSWORD, "password", details=problems))
        return Ok(cls(raw))

    def __repr__(self) -> str:
        return "Password(********)"


@dataclass(frozen=True)
class Code:
    """Six character code that lets a user join an event without knowing its id."""

    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        if not isinstance(raw, str) or _is_blank(raw) or len(raw) != EVENT_CODE_LENGTH:
            return Err(PlanItError.of(ErrorKind.INVALID_EVENT_CODE, "code"))
        return Ok(cls(raw))


@dataclass(frozen=True)
class Option:
    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        if _not_text(raw):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "option"))
        if raw is None or _is_blank(raw):
            return Err(PlanItError.of(ErrorKind.VALUE_IS_BLANK, "option"))
        if len(raw) > OPTION_MAX_LENGTH:
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE_LENGTH, "option"))
        return Ok(cls(raw))


@dataclass(frozen=True)
class PollDuration:
    hours: int

    @classmethod
    def create(cls, raw: str | int | None) -> Result[Self, PlanItError]:
        if not isinstance(raw, int | str) or isinstance(raw, bool):
            return Err(PlanItError.of(ErrorKind.INVALID_DURATION, "duration"))
        try:
            hours = int(str(raw).strip())
        except (TypeError, ValueError):
            return Err(PlanItError.of(ErrorKind.INVALID_DURATION, "duration"))
        if hours <= 0:
            return Err(PlanItError.of(ErrorKind.INVALID_DURATION, "duration"))
        return Ok(cls(hours))


@dataclass(frozen=True)
class EmailOrUsername:
    """Login identifier: anything containing '@' is treated as an email, anything else as a username."""

    value: Email | Username

    @classmethod
    def create(cls, raw: str | None) -> Result[Self, PlanItError]:
        parsed: Result[Email, PlanItError] | Result[Username, PlanItError]
        parsed = Email.create(raw) if isinstance(raw, str) and "@" in raw else Username.create(raw)
        if isinstance(parsed, Err):
            return parsed
        return Ok(cls(parsed.value))

    @property
    def is_email(self) -> bool:
        return isinstance(self.value, Email)


@dataclass(frozen=True)
class LimitAndOffset:
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET

    @classmethod
    def create(cls, limit: int | None = None, offset: int | None = None) -> Result[Self, PlanItError]:
        limit = DEFAULT_LIMIT if limit is None else limit
        offset = DEFAULT_OFFSET if offset is None else offset
        bad_limit, bad_offset = limit < 0, offset < 0
        if bad_limit or bad_offset:
            if bad_limit and bad_offset:
                message = "Invalid limit and offset."
            elif bad_limit:
                message = "Invalid limit."
            else:
                message = "Invalid offset."
            return Err(PlanItError(kind=ErrorKind.INVALID_LIMIT_AND_OFFSET, message=message))
        return Ok(cls(limit, offset))


@dataclass(frozen=True)
class Id:
    value: int

    @classmethod
    def create(cls, raw: int | float | str | None) -> Result[Self, PlanItError]:
        if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "id"))
        try:
            value = int(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "id"))
        if value <= 0:
            return Err(PlanItError.of(ErrorKind.INVALID_VALUE, "id"))
        return Ok(cls(value))
