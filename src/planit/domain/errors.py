"""ABOUTME: Flat catalogue of PlanIt error kinds with their HTTP-style status codes
ABOUTME: PlanItError values travel inside Err results from validators and services"""

from collections.abc import Iterable
from dataclasses import dataclass, field as dataclass_field
from enum import Enum

BAD_REQUEST = 400
NOT_FOUND = 404
INTERNAL_SERVER_ERROR = 500


class ErrorKind(Enum):
    # validation
    INVALID_INPUT = "invalid_input"
    INVALID_VALUE = "invalid_value"
    INVALID_VALUE_LENGTH = "invalid_value_length"
    INVALID_VALUE_FORMAT = "invalid_value_format"
    VALUE_IS_BLANK = "value_is_blank"
    INVALID_COORDINATES = "invalid_coordinates"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_PRICE_FORMAT = "invalid_price_format"
    INVALID_EVENT_CODE = "invalid_event_code"
    INVALID_DURATION = "invalid_duration"
    INVALID_LIMIT_AND_OFFSET = "invalid_limit_and_offset"
    UNSAFE_PASSWORD = "unsafe_password"
    INTERESTS_ARE_DUPLICATED = "interests_are_duplicated"
    # events
    EVENT_NOT_FOUND = "event_not_found"
    FAILED_TO_CREATE_EVENT = "failed_to_create_event"
    PRIVATE_EVENT = "private_event"
    INCORRECT_PASSWORD = "incorrect_password"
    USER_NOT_IN_EVENT = "user_not_in_event"
    USER_ALREADY_IN_EVENT = "user_already_in_event"
    EVENT_HAS_ENDED = "event_has_ended"
    PAST_DATE = "past_date"
    END_DATE_BEFORE_DATE = "end_date_before_date"
    MUST_SPECIFY_LOCATION_TYPE = "must_specify_location_type"
    ONLINE_EVENT_WITH_LOCATION = "online_event_with_location"
    USER_IS_NOT_ORGANIZER = "user_is_not_organizer"
    ONLY_ORGANIZER = "only_organizer"
    CANT_KICK_YOURSELF = "cant_kick_yourself"
    # roles
    ROLE_NOT_FOUND = "role_not_found"
    FAILED_TO_ASSIGN_ROLE = "failed_to_assign_role"
    # polls
    INVALID_NUMBER_OF_OPTIONS = "invalid_number_of_options"
    FAILED_TO_CREATE_POLL = "failed_to_create_poll"
    POLL_NOT_FOUND = "poll_not_found"
    POLL_HAS_ENDED = "poll_has_ended"
    OPTION_NOT_FOUND = "option_not_found"
    USER_ALREADY_VOTED = "user_already_voted"
    # users
    EXISTING_EMAIL = "existing_email"
    EXISTING_USERNAME = "existing_username"
    USER_REGISTER_ERROR = "user_register_error"
    INCORRECT_LOGIN = "incorrect_login"
    USER_NOT_FOUND = "user_not_found"
    # anything unexpected
    INTERNAL = "internal"

    @property
    def status(self) -> int:
        if self in _NOT_FOUND_KINDS:
            return NOT_FOUND
        if self in _INTERNAL_KINDS:
            return INTERNAL_SERVER_ERROR
        return BAD_REQUEST


_NOT_FOUND_KINDS = frozenset({
    ErrorKind.EVENT_NOT_FOUND,
    ErrorKind.USER_NOT_FOUND,
    ErrorKind.POLL_NOT_FOUND,
    ErrorKind.OPTION_NOT_FOUND,
    ErrorKind.ROLE_NOT_FOUND,
})

_INTERNAL_KINDS = frozenset({ErrorKind.USER_REGISTER_ERROR, ErrorKind.INTERNAL})

# {field} is the field name, {Field} the same name capitalised
_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_INPUT: "Invalid input",
    ErrorKind.INVALID_VALUE: "Invalid {field}",
    ErrorKind.INVALID_VALUE_LENGTH: "Invalid {field} length",
    ErrorKind.INVALID_VALUE_FORMAT: "Invalid {field} format",
    ErrorKind.VALUE_IS_BLANK: "{Field} is blank",
    ErrorKind.INVALID_COORDINATES: "Invalid coordinates",
    ErrorKind.INVALID_TIMESTAMP: "{Field} has invalid timestamp. The correct format is 'YYYY-MM-DD HH:MM'",
    ErrorKind.INVALID_PRICE_FORMAT: (
        "Invalid price format. The correct format is 'amount currency'. Example: '10.00 USD'"
    ),
    ErrorKind.INVALID_EVENT_CODE: "Invalid event code",
    ErrorKind.INVALID_DURATION: "Invalid duration, must be a positive whole number of hours",
    ErrorKind.INVALID_LIMIT_AND_OFFSET: "Invalid limit and offset.",
    ErrorKind.UNSAFE_PASSWORD: "Password must follow the following parameters: ",
    ErrorKind.INTERESTS_ARE_DUPLICATED: "Interests cannot contain duplicate categories",
    ErrorKind.EVENT_NOT_FOUND: "Event not found",
    ErrorKind.FAILED_TO_CREATE_EVENT: "Failed to create event",
    ErrorKind.PRIVATE_EVENT: "Event is private. Password is required",
    ErrorKind.INCORRECT_PASSWORD: "Incorrect password",
    ErrorKind.USER_NOT_IN_EVENT: "User is not in the event",
    ErrorKind.USER_ALREADY_IN_EVENT: "User is already in the event",
    ErrorKind.EVENT_HAS_ENDED: "Event has ended",
    ErrorKind.PAST_DATE: "Date not available, must be later than the current date",
    ErrorKind.END_DATE_BEFORE_DATE: "End date must be later than the date chosen",
    ErrorKind.MUST_SPECIFY_LOCATION_TYPE: "If location is specified, then locationType must be specified as well",
    ErrorKind.ONLINE_EVENT_WITH_LOCATION: "Online events cannot have coordinates",
    ErrorKind.USER_IS_NOT_ORGANIZER: "User is not the organizer of the event",
    ErrorKind.ONLY_ORGANIZER: "User is the only organizer of the event",
    ErrorKind.CANT_KICK_YOURSELF: "You can't kick yourself out of the event",
    ErrorKind.ROLE_NOT_FOUND: "Role not found",
    ErrorKind.FAILED_TO_ASSIGN_ROLE: "Failed to assign role",
    ErrorKind.INVALID_NUMBER_OF_OPTIONS: "Invalid number of options, must be between 2 and 5",
    ErrorKind.FAILED_TO_CREATE_POLL: "Failed to create poll",
    ErrorKind.POLL_NOT_FOUND: "Poll not found",
    ErrorKind.POLL_HAS_ENDED: "Poll has ended",
    ErrorKind.OPTION_NOT_FOUND: "Option not found",
    ErrorKind.USER_ALREADY_VOTED: "You have already voted",
    ErrorKind.EXISTING_EMAIL: "Email is already being used.",
    ErrorKind.EXISTING_USERNAME: "Username is already being used.",
    ErrorKind.USER_REGISTER_ERROR: "Error registering user.",
    ErrorKind.INCORRECT_LOGIN: "Email or username not found.",
    ErrorKind.USER_NOT_FOUND: "User not found.",
    ErrorKind.INTERNAL: "Internal server error",
}


@dataclass(frozen=True, slots=True)
class PlanItError:
    """A failure with a machine-checkable kind, a human-readable message and the field it concerns."""

    kind: ErrorKind
    message: str
    field: str = ""
    details: tuple[str, ...] = dataclass_field(default=())

    @property
    def status(self) -> int:
        return self.kind.status

    @classmethod
    def of(cls, kind: ErrorKind, field: str = "", details: Iterable[str] = ()) -> "PlanItError":
        message = _DEFAULT_MESSAGES[kind].format(field=field, Field=field[:1].upper() + field[1:])
        details = tuple(details)
        if details:
            message += ", ".join(details)
        return cls(kind=kind, message=message, field=field, details=details)

    def __str__(self) -> str:
        return self.message


def combine(errors: Iterable[PlanItError]) -> PlanItError:
    """Merge several errors into one, joining their messages with ", "."""
    errors = list(errors)
    if not errors:
        raise ValueError("combine() needs at least one error")
    if len(errors) == 1:
        return errors[0]
    return PlanItError(
        kind=ErrorKind.INVALID_INPUT,
        message=", ".join(error.message for error in errors),
        details=tuple(error.message for error in errors),
    )
