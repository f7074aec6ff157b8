"""ABOUTME: Event service layer: creating, finding, joining, leaving, editing and deleting events
ABOUTME: Every operation returns a Result; rule violations roll back the unit of work and become an Err"""

import math
from dataclasses import dataclass

import structlog

from planit.domain.categories import CategoryCatalogue, default_catalogue
from planit.domain.errors import ErrorKind
from planit.domain.events import Event, generate_event_code, now_timestamp
from planit.domain.validators import EventInput, ValidatedEventInput, validate_event_input
from planit.domain.value_objects import (
    DEFAULT_LIMIT,
    Code,
    Coordinates,
    EventRole,
    LimitAndOffset,
    LocationType,
    Visibility,
)

from .exceptions import fail, returns_result, unwrap_or_raise
from .permissions import (
    can_view_event,
    get_event_or_fail,
    get_user_or_fail,
    require_not_ended,
    require_organizer,
    require_participant,
)
from .security import event_password_matches, hash_password
from .unit_of_work import AbstractUnitOfWork

log = structlog.get_logger(__name__)

EARTH_RADIUS_KM = 6371.0
SEARCH_ALL = "All"


@dataclass(frozen=True)
class EventSummary:
    """An event as it appears in search results. Private events keep their details to themselves."""

    id: int
    title: str
    visibility: str
    price: str
    end_date: str | None
    description: str | None
    category: str | None
    subcategory: str | None
    location: str | None
    latitude: float | None
    longitude: float | None
    date: str | None

    @classmethod
    def from_event(cls, event: Event, hide_private: bool = True) -> "EventSummary":
        hidden = hide_private and event.is_private
        return cls(
            id=event.id,  # type: ignore[arg-type]
            title=event.title,
            visibility=event.visibility.value,
            price=event.price,
            end_date=event.end_date or None,
            description=None if hidden else event.description,
            category=None if hidden else event.category,
            subcategory=None if hidden else event.subcategory,
            location=None if hidden else event.location,
            latitude=None if hidden else event.latitude,
            longitude=None if hidden else event.longitude,
            date=None if hidden else event.date,
        )


@dataclass(frozen=True)
class EventCreated:
    id: int
    title: str
    code: str


@dataclass(frozen=True)
class EventMember:
    user_id: int
    username: str
    name: str
    role: str


@dataclass(frozen=True)
class NearbyEvent:
    event: EventSummary
    distance_km: float


def _check_dates_and_location(validated: ValidatedEventInput) -> None:
    if validated.date.is_set and validated.date.value < now_timestamp():
        raise fail(ErrorKind.PAST_DATE)
    if validated.date.is_set and validated.end_date.is_set and validated.end_date.value < validated.date.value:
        raise fail(ErrorKind.END_DATE_BEFORE_DATE)
    if validated.location is not None and validated.location_type is None:
        raise fail(ErrorKind.MUST_SPECIFY_LOCATION_TYPE)
    if validated.location_type == LocationType.ONLINE and not validated.coordinates.is_origin:
        raise fail(ErrorKind.ONLINE_EVENT_WITH_LOCATION)


def _unique_event_code(uow: AbstractUnitOfWork) -> str:
    while True:
        code = generate_event_code()
        if uow.events.get_by_code(code) is None:
            return code


@returns_result
def create_event(
    uow: AbstractUnitOfWork,
    user_id: int,
    event_input: EventInput,
    catalogue: CategoryCatalogue | None = None,
) -> EventCreated:
    """
    Create a new event, making the creator its organizer.

    Args:
        uow: Unit of Work for database operations
        user_id: ID of the user creating the event
        event_input: Raw event fields; every field is validated before anything is checked
        catalogue: Category configuration, defaults to the process-wide catalogue

    Returns:
        Ok with the new event's id, title and join code, or Err with:
        the combined validation error, FAILED_TO_CREATE_EVENT for a private event
        without password, PAST_DATE, END_DATE_BEFORE_DATE, MUST_SPECIFY_LOCATION_TYPE,
        ONLINE_EVENT_WITH_LOCATION or USER_NOT_FOUND
    """
    validated = unwrap_or_raise(validate_event_input(event_input, catalogue or default_catalogue()))
    if validated.visibility == Visibility.PRIVATE and not validated.password.strip():
        raise fail(ErrorKind.FAILED_TO_CREATE_EVENT)
    _check_dates_and_location(validated)

    with uow:
        get_user_or_fail(uow, user_id)

        event = Event(
            title=validated.title.value,
            description=validated.description.value,
            category=validated.category.name,
            subcategory=validated.subcategory.name,
            location_type=validated.location_type,
            location=validated.location,
            latitude=validated.coordinates.latitude,
            longitude=validated.coordinates.longitude,
            visibility=validated.visibility,
            date=validated.date.value,
            end_date=validated.end_date.value,
            price_amount=validated.price.amount,
            price_currency=validated.price.currency,
            password=hash_password(validated.password) if validated.visibility == Visibility.PRIVATE else "",
            code=_unique_event_code(uow),
        )
        event.add_participant(user_id, EventRole.ORGANIZER)
        uow.events.add(event)
        uow.commit()

        log.info("event created", event_id=event.id, organizer_id=user_id, visibility=event.visibility.value)
        return EventCreated(id=event.id, title=event.title, code=event.code)  # type: ignore[arg-type]


@returns_result
def get_event(uow: AbstractUnitOfWork, user_id: int | None, event_id: int) -> Event:
    """Get an event. Private events are only shown to their participants."""
    with uow:
        event = get_event_or_fail(uow, event_id)
        if not can_view_event(event, user_id):
            raise fail(ErrorKind.USER_NOT_IN_EVENT)
        return event.create_detached_copy()


@returns_result
def get_users_in_event(uow: AbstractUnitOfWork, user_id: int | None, event_id: int) -> list[EventMember]:
    with uow:
        event = get_event_or_fail(uow, event_id)
        if not can_view_event(event, user_id):
            raise fail(ErrorKind.USER_NOT_IN_EVENT)
        users_by_id = {user.id: user for user in uow.users.get_many(p.user_id for p in event.participants)}
        return [
            EventMember(
                user_id=participant.user_id,
                username=users_by_id[participant.user_id].username,
                name=users_by_id[participant.user_id].name,
                role=participant.role,
            )
            for participant in event.participants
            if participant.user_id in users_by_id
        ]


@returns_result
def search_events(
    uow: AbstractUnitOfWork,
    query: str | None,
    limit_and_offset: LimitAndOffset | None = None,
    catalogue: CategoryCatalogue | None = None,
) -> list[EventSummary]:
    """
    Search events.

    A blank query or "All" lists every event, a category name lists that category,
    anything else is matched against titles and descriptions. "+" in the query is
    read as a space. Private events are returned without their details.
    """
    page = limit_and_offset or LimitAndOffset()
    catalogue = catalogue or default_catalogue()

    with uow:
        if query is None or not query.strip() or query == SEARCH_ALL:
            events = uow.events.list_page(page.limit, page.offset)
        else:
            text = query.replace("+", " ")
            category = catalogue.find(text)
            if category is not None:
                events = uow.events.search_by_category(category, page.limit, page.offset)
            else:
                events = uow.events.search_by_text(text, page.limit, page.offset)
        return [EventSummary.from_event(event) for event in events]


def _haversine_km(a: Coordinates, b: Coordinates) -> float:
    lat1, lon1, lat2, lon2 = map(math.radians, (a.latitude, a.longitude, b.latitude, b.longitude))
    h = math.sin((lat2 - lat1) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


@returns_result
def find_nearby_events(
    uow: AbstractUnitOfWork,
    user_id: int | None,
    coordinates: Coordinates,
    radius_km: float,
    limit: int = DEFAULT_LIMIT,
) -> list[NearbyEvent]:
    """List events within `radius_km` of the given point, nearest first.

    Private events are left out unless the user takes part in them.
    """
    if radius_km < 0:
        raise fail(ErrorKind.INVALID_VALUE, "radius")
    page = unwrap_or_raise(LimitAndOffset.create(limit))

    with uow:
        nearby = []
        for event in uow.events.get_events_with_coordinates():
            if not can_view_event(event, user_id):
                continue
            distance = _haversine_km(coordinates, Coordinates(event.latitude, event.longitude))
            if distance <= radius_km:
                nearby.append(NearbyEvent(EventSummary.from_event(event, hide_private=False), round(distance, 3)))
        nearby.sort(key=lambda item: item.distance_km)
        return nearby[: page.limit]


@returns_result
def join_event(uow: AbstractUnitOfWork, user_id: int, event_id: int, password: str | None = "") -> Event:
    """
    Join an event as a participant.

    Returns:
        Ok with the joined Event, or Err with EVENT_NOT_FOUND, EVENT_HAS_ENDED,
        INCORRECT_PASSWORD (private events only) or USER_ALREADY_IN_EVENT
    """
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_not_ended(event)
        if event.is_private and not event_password_matches(password, event.password):
            raise fail(ErrorKind.INCORRECT_PASSWORD)
        if event.is_participant(user_id):
            raise fail(ErrorKind.USER_ALREADY_IN_EVENT)

        event.add_participant(user_id)
        uow.commit()
        log.info("user joined event", event_id=event_id, user_id=user_id)
        return event.create_detached_copy()


@returns_result
def join_event_by_code(uow: AbstractUnitOfWork, user_id: int, code: str | None) -> Event:
    """Join an event with its six character code. Knowing the code stands in for the password."""
    valid_code = unwrap_or_raise(Code.create(code))
    with uow:
        event = uow.events.get_by_code(valid_code.value)
        if event is None:
            raise fail(ErrorKind.EVENT_NOT_FOUND)
        require_not_ended(event)
        if event.is_participant(user_id):
            raise fail(ErrorKind.USER_ALREADY_IN_EVENT)

        event.add_participant(user_id)
        uow.commit()
        log.info("user joined event by code", event_id=event.id, user_id=user_id)
        return event.create_detached_copy()


@returns_result
def leave_event(uow: AbstractUnitOfWork, user_id: int, event_id: int) -> None:
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_participant(event, user_id)
        event.remove_participant(user_id)
        uow.commit()
        if not event.organizer_ids():
            log.warning("event left without organizers", event_id=event_id, user_id=user_id)
        else:
            log.info("user left event", event_id=event_id, user_id=user_id)


@returns_result
def delete_event(uow: AbstractUnitOfWork, user_id: int, event_id: int) -> None:
    """Delete an event along with its memberships, roles, polls, options and votes. Organizers only."""
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_organizer(event, user_id)

        for poll in uow.polls.get_polls_for_event(event_id):
            uow.polls.delete(poll)
        uow.events.delete(event)
        uow.commit()
        log.info("event deleted", event_id=event_id, user_id=user_id)


@returns_result
def edit_event(
    uow: AbstractUnitOfWork,
    user_id: int,
    event_id: int,
    event_input: EventInput,
    catalogue: CategoryCatalogue | None = None,
) -> Event:
    """
    Replace every field of an event. Organizers only.

    The whole field set is validated again, exactly as on creation. A private event
    edited without a password keeps its current one, if it has one.

    Returns:
        Ok with the updated Event, or Err with the combined validation error,
        EVENT_NOT_FOUND, EVENT_HAS_ENDED, USER_IS_NOT_ORGANIZER, PRIVATE_EVENT,
        PAST_DATE, END_DATE_BEFORE_DATE, MUST_SPECIFY_LOCATION_TYPE or ONLINE_EVENT_WITH_LOCATION
    """
    validated = unwrap_or_raise(validate_event_input(event_input, catalogue or default_catalogue()))

    with uow:
        event = get_event_or_fail(uow, event_id)
        require_not_ended(event)
        require_organizer(event, user_id)

        if validated.visibility == Visibility.PRIVATE:
            if validated.password.strip():
                password = hash_password(validated.password)
            elif event.is_private and event.password:
                password = event.password
            else:
                raise fail(ErrorKind.PRIVATE_EVENT)
        else:
            password = ""
        _check_dates_and_location(validated)

        event.title = validated.title.value
        event.description = validated.description.value
        event.category = validated.category.name
        event.subcategory = validated.subcategory.name
        event.location_type = validated.location_type
        event.location = validated.location
        event.latitude = validated.coordinates.latitude
        event.longitude = validated.coordinates.longitude
        event.visibility = validated.visibility
        event.date = validated.date.value
        event.end_date = validated.end_date.value
        event.price_amount = validated.price.amount
        event.price_currency = validated.price.currency
        event.password = password
        uow.commit()

        log.info("event edited", event_id=event_id, user_id=user_id)
        return event.create_detached_copy()


@returns_result
def kick_user(uow: AbstractUnitOfWork, organizer_id: int, event_id: int, user_id: int) -> None:
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_organizer(event, organizer_id)
        require_participant(event, user_id)
        if organizer_id == user_id:
            raise fail(ErrorKind.CANT_KICK_YOURSELF)

        event.remove_participant(user_id)
        uow.commit()
        log.info("user kicked from event", event_id=event_id, user_id=user_id, organizer_id=organizer_id)


def get_categories(catalogue: CategoryCatalogue | None = None) -> dict[str, list[str]]:
    return (catalogue or default_catalogue()).as_dict()
