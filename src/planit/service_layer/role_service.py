"""ABOUTME: Role service layer: organizers hand out and take back roles within an event
ABOUTME: A member holds exactly one role: Organizer, Participant or a task name chosen by an organizer"""

from dataclasses import dataclass

import structlog

from planit.domain.errors import ErrorKind
from planit.domain.events import Event, EventParticipant
from planit.domain.result import Err
from planit.domain.value_objects import EventRole, Name

from .exceptions import fail, returns_result
from .permissions import get_event_or_fail, get_user_or_fail, require_not_ended, require_organizer, require_participant
from .unit_of_work import AbstractUnitOfWork

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UserRole:
    user_id: int
    event_id: int
    role: str


def _load_target(uow: AbstractUnitOfWork, organizer_id: int, user_id: int, event_id: int) -> tuple[Event, EventParticipant]:
    get_user_or_fail(uow, user_id)
    event = get_event_or_fail(uow, event_id)
    require_not_ended(event)
    require_participant(event, user_id)
    require_organizer(event, organizer_id)
    return event, event.get_participant(user_id)  # type: ignore[return-value]


def _is_last_organizer(event: Event, participant: EventParticipant) -> bool:
    return participant.is_organizer and event.organizer_ids() == [participant.user_id]


@returns_result
def assign_role(
    uow: AbstractUnitOfWork, organizer_id: int, user_id: int, event_id: int, role_name: str | None
) -> UserRole:
    """
    Give a member of an event a role, replacing the one they hold.

    Args:
        uow: Unit of Work for database operations
        organizer_id: ID of the organizer handing out the role
        user_id: ID of the member receiving it
        event_id: ID of the event
        role_name: "Organizer", "Participant" or the name of a task

    Returns:
        Ok with the member's new role, or Err with USER_NOT_FOUND, EVENT_NOT_FOUND,
        EVENT_HAS_ENDED, USER_NOT_IN_EVENT, USER_IS_NOT_ORGANIZER,
        FAILED_TO_ASSIGN_ROLE or ONLY_ORGANIZER
    """
    with uow:
        event, participant = _load_target(uow, organizer_id, user_id, event_id)
        if isinstance(Name.create(role_name, "role"), Err):
            raise fail(ErrorKind.FAILED_TO_ASSIGN_ROLE)
        assert role_name is not None
        if role_name != EventRole.ORGANIZER and _is_last_organizer(event, participant):
            raise fail(ErrorKind.ONLY_ORGANIZER)

        participant.role = role_name
        uow.commit()
        log.info("role assigned", event_id=event_id, user_id=user_id, role=role_name, organizer_id=organizer_id)
        return UserRole(user_id=user_id, event_id=event_id, role=role_name)


@returns_result
def remove_role(uow: AbstractUnitOfWork, organizer_id: int, user_id: int, event_id: int) -> UserRole:
    """Take a member's role away, leaving them a plain Participant."""
    with uow:
        event, participant = _load_target(uow, organizer_id, user_id, event_id)
        if participant.role == EventRole.PARTICIPANT:
            raise fail(ErrorKind.ROLE_NOT_FOUND)
        if _is_last_organizer(event, participant):
            raise fail(ErrorKind.ONLY_ORGANIZER)

        previous = participant.role
        participant.role = EventRole.PARTICIPANT
        uow.commit()
        log.info("role removed", event_id=event_id, user_id=user_id, role=previous, organizer_id=organizer_id)
        return UserRole(user_id=user_id, event_id=event_id, role=EventRole.PARTICIPANT)


@returns_result
def get_user_role(uow: AbstractUnitOfWork, user_id: int, event_id: int) -> UserRole:
    with uow:
        event = get_event_or_fail(uow, event_id)
        participant = event.get_participant(user_id)
        if participant is None:
            raise fail(ErrorKind.USER_NOT_IN_EVENT)
        return UserRole(user_id=user_id, event_id=event_id, role=participant.role)
