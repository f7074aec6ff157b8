"""ABOUTME: Poll service layer: organizers open polls in their events and members vote on them
ABOUTME: A poll stays open for its duration in hours and takes exactly one vote per member"""

from dataclasses import dataclass

import structlog

from planit.domain.events import Event
from planit.domain.errors import ErrorKind
from planit.domain.polls import Poll, PollOption
from planit.domain.validators import PollInput, validate_poll_input

from .exceptions import fail, returns_result, unwrap_or_raise
from .permissions import get_event_or_fail, require_not_ended, require_organizer, require_participant
from .unit_of_work import AbstractUnitOfWork

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PollCreated:
    id: int
    title: str


@dataclass(frozen=True)
class OptionResult:
    id: int
    text: str
    votes: int


@dataclass(frozen=True)
class PollResults:
    id: int
    event_id: int
    title: str
    duration_hours: int
    ends_at: str
    has_ended: bool
    options: list[OptionResult]

    @classmethod
    def from_poll(cls, poll: Poll) -> "PollResults":
        counts = poll.vote_counts()
        return cls(
            id=poll.id,  # type: ignore[arg-type]
            event_id=poll.event_id,
            title=poll.title,
            duration_hours=poll.duration_hours,
            ends_at=poll.ends_at.isoformat(),
            has_ended=poll.has_ended(),
            options=[
                OptionResult(id=option.id, text=option.text, votes=counts.get(option.id, 0))  # type: ignore[arg-type]
                for option in poll.options
            ],
        )


def _get_poll_in_event(uow: AbstractUnitOfWork, event: Event, poll_id: int) -> Poll:
    poll = uow.polls.get(poll_id)
    if poll is None or poll.event_id != event.id:
        raise fail(ErrorKind.POLL_NOT_FOUND)
    return poll


@returns_result
def create_poll(uow: AbstractUnitOfWork, organizer_id: int, event_id: int, poll_input: PollInput) -> PollCreated:
    """
    Open a poll in an event.

    Args:
        uow: Unit of Work for database operations
        organizer_id: ID of the organizer opening the poll
        event_id: ID of the event
        poll_input: Title, between two and five options, and the duration in hours

    Returns:
        Ok with the new poll's id and title, or Err with the combined validation
        error, EVENT_NOT_FOUND, EVENT_HAS_ENDED or USER_IS_NOT_ORGANIZER
    """
    validated = unwrap_or_raise(validate_poll_input(poll_input))

    with uow:
        event = get_event_or_fail(uow, event_id)
        require_not_ended(event)
        require_organizer(event, organizer_id)

        poll = Poll(
            event_id=event_id,
            title=validated.title,
            duration_hours=validated.duration.hours,
            options=[PollOption(text=option.value) for option in validated.options],
        )
        uow.polls.add(poll)
        uow.commit()

        log.info("poll created", poll_id=poll.id, event_id=event_id, organizer_id=organizer_id)
        return PollCreated(id=poll.id, title=poll.title)  # type: ignore[arg-type]


@returns_result
def get_poll(uow: AbstractUnitOfWork, user_id: int, event_id: int, poll_id: int) -> PollResults:
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_participant(event, user_id)
        return PollResults.from_poll(_get_poll_in_event(uow, event, poll_id))


@returns_result
def get_polls(uow: AbstractUnitOfWork, user_id: int, event_id: int) -> list[PollResults]:
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_participant(event, user_id)
        return [PollResults.from_poll(poll) for poll in uow.polls.get_polls_for_event(event_id)]


@returns_result
def vote_poll(uow: AbstractUnitOfWork, user_id: int, event_id: int, poll_id: int, option_id: int) -> PollResults:
    """
    Cast a member's single vote on a poll.

    Returns:
        Ok with the updated poll results, or Err with EVENT_NOT_FOUND, EVENT_HAS_ENDED,
        USER_NOT_IN_EVENT, POLL_NOT_FOUND, POLL_HAS_ENDED, OPTION_NOT_FOUND or
        USER_ALREADY_VOTED, checked in that order
    """
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_not_ended(event)
        require_participant(event, user_id)
        poll = _get_poll_in_event(uow, event, poll_id)
        if poll.has_ended():
            raise fail(ErrorKind.POLL_HAS_ENDED)
        if poll.get_option(option_id) is None:
            raise fail(ErrorKind.OPTION_NOT_FOUND)
        if poll.has_voted(user_id):
            raise fail(ErrorKind.USER_ALREADY_VOTED)

        poll.vote(user_id, option_id)
        uow.commit()
        log.info("vote cast", poll_id=poll_id, event_id=event_id, user_id=user_id)
        return PollResults.from_poll(poll)


@returns_result
def delete_poll(uow: AbstractUnitOfWork, organizer_id: int, event_id: int, poll_id: int) -> None:
    with uow:
        event = get_event_or_fail(uow, event_id)
        require_organizer(event, organizer_id)
        poll = _get_poll_in_event(uow, event, poll_id)
        uow.polls.delete(poll)
        uow.commit()
        log.info("poll deleted", poll_id=poll_id, event_id=event_id, organizer_id=organizer_id)
