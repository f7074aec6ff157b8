"""ABOUTME: Lookup and authorization checks shared by the event, role and poll services
ABOUTME: Each check raises PlanItException so the surrounding unit of work rolls back"""

from planit.domain.errors import ErrorKind
from planit.domain.events import Event
from planit.domain.users import User

from .exceptions import fail
from .unit_of_work import AbstractUnitOfWork


def get_event_or_fail(uow: AbstractUnitOfWork, event_id: int) -> Event:
    event = uow.events.get(event_id)
    if event is None:
        raise fail(ErrorKind.EVENT_NOT_FOUND)
    return event


def get_user_or_fail(uow: AbstractUnitOfWork, user_id: int) -> User:
    user = uow.users.get(user_id)
    if user is None:
        raise fail(ErrorKind.USER_NOT_FOUND)
    return user


def require_not_ended(event: Event) -> None:
    if event.has_ended():
        raise fail(ErrorKind.EVENT_HAS_ENDED)


def require_participant(event: Event, user_id: int) -> None:
    if not event.is_participant(user_id):
        raise fail(ErrorKind.USER_NOT_IN_EVENT)


def require_organizer(event: Event, user_id: int) -> None:
    if not event.is_organizer(user_id):
        raise fail(ErrorKind.USER_IS_NOT_ORGANIZER)


def can_view_event(event: Event, user_id: int | None) -> bool:
    """Public events are visible to everyone, private ones only to their participants."""
    if not event.is_private:
        return True
    return user_id is not None and event.is_participant(user_id)
