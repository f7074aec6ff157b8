"""ABOUTME: Unit tests for poll service operations
ABOUTME: Tests opening polls, reading results, voting rules and deleting polls with fake repositories"""

from datetime import UTC, datetime, timedelta

import pytest

from planit.domain.errors import ErrorKind
from planit.domain.result import Err, Ok
from planit.domain.validators import PollInput
from planit.service_layer import event_service, poll_service
from tests.fakes import FakeUnitOfWork
from tests.helpers import add_user, event_input, timestamp

ALICE, BOB, CAROL = 1, 2, 3


@pytest.fixture
def uow():
    uow = FakeUnitOfWork()
    for username in ("alice", "bobby", "carol"):
        add_user(uow, username)
    return uow


@pytest.fixture
def event_id(uow, catalogue):
    created = event_service.create_event(uow, ALICE, event_input(), catalogue).unwrap()
    event_service.join_event(uow, BOB, created.id, "").unwrap()
    return created.id


def poll_input(**overrides) -> PollInput:
    fields = {"title": "Where do we eat?", "options": ["Pizza", "Sushi", "Tacos"], "duration": 24}
    fields.update(overrides)
    return PollInput(**fields)


@pytest.fixture
def poll(uow, event_id):
    created = poll_service.create_poll(uow, ALICE, event_id, poll_input()).unwrap()
    return uow.polls.get(created.id)


def error_kind(result):
    assert isinstance(result, Err), result
    return result.error.kind


class TestCreatePoll:
    def test_create(self, uow, event_id):
        result = poll_service.create_poll(uow, ALICE, event_id, poll_input())

        assert result == Ok(poll_service.PollCreated(id=1, title="Where do we eat?"))
        poll = uow.polls.get(1)
        assert [option.text for option in poll.options] == ["Pizza", "Sushi", "Tacos"]
        assert poll.event_id == event_id
        assert poll.duration_hours == 24
        assert uow.committed

    def test_duration_as_text(self, uow, event_id):
        created = poll_service.create_poll(uow, ALICE, event_id, poll_input(duration="3")).unwrap()
        assert uow.polls.get(created.id).duration_hours == 3

    def test_validation_errors_combined(self, uow, event_id):
        result = poll_service.create_poll(uow, ALICE, event_id, poll_input(title=" ", options=["Only"], duration=0))

        assert error_kind(result) == ErrorKind.INVALID_INPUT
        assert "Title is blank" in result.error.message
        assert "Invalid number of options" in result.error.message
        assert "Invalid duration" in result.error.message
        assert uow.polls.all() == []

    @pytest.mark.parametrize("options", [["a"], ["a", "b", "c", "d", "e", "f"]])
    def test_option_count(self, uow, event_id, options):
        result = poll_service.create_poll(uow, ALICE, event_id, poll_input(options=options))
        assert error_kind(result) == ErrorKind.INVALID_NUMBER_OF_OPTIONS

    def test_participants_cannot_create(self, uow, event_id):
        assert error_kind(poll_service.create_poll(uow, BOB, event_id, poll_input())) == ErrorKind.USER_IS_NOT_ORGANIZER

    def test_missing_event(self, uow):
        assert error_kind(poll_service.create_poll(uow, ALICE, 50, poll_input())) == ErrorKind.EVENT_NOT_FOUND

    def test_ended_event(self, uow, event_id):
        uow.events.get(event_id).end_date = timestamp(days=-1)
        assert error_kind(poll_service.create_poll(uow, ALICE, event_id, poll_input())) == ErrorKind.EVENT_HAS_ENDED


class TestGetPolls:
    def test_get_poll_results(self, uow, event_id, poll):
        results = poll_service.get_poll(uow, BOB, event_id, poll.id).unwrap()

        assert results.title == "Where do we eat?"
        assert [(option.text, option.votes) for option in results.options] == [
            ("Pizza", 0),
            ("Sushi", 0),
            ("Tacos", 0),
        ]
        assert not results.has_ended
        assert results.ends_at == poll.ends_at.isoformat()

    def test_list_polls(self, uow, event_id, poll):
        poll_service.create_poll(uow, ALICE, event_id, poll_input(title="When?", options=["Friday", "Saturday"]))

        polls = poll_service.get_polls(uow, ALICE, event_id).unwrap()

        assert [p.title for p in polls] == ["Where do we eat?", "When?"]

    def test_members_only(self, uow, event_id, poll):
        assert error_kind(poll_service.get_poll(uow, CAROL, event_id, poll.id)) == ErrorKind.USER_NOT_IN_EVENT
        assert error_kind(poll_service.get_polls(uow, CAROL, event_id)) == ErrorKind.USER_NOT_IN_EVENT

    def test_poll_from_another_event(self, uow, catalogue, event_id, poll):
        other = event_service.create_event(uow, ALICE, event_input(), catalogue).unwrap()

        result = poll_service.get_poll(uow, ALICE, other.id, poll.id)

        assert error_kind(result) == ErrorKind.POLL_NOT_FOUND
        assert result.error.status == 404


class TestVotePoll:
    def test_vote(self, uow, event_id, poll):
        sushi = poll.options[1].id

        results = poll_service.vote_poll(uow, BOB, event_id, poll.id, sushi).unwrap()

        assert [option.votes for option in results.options] == [0, 1, 0]
        assert poll.has_voted(BOB)

    def test_vote_once(self, uow, event_id, poll):
        poll_service.vote_poll(uow, BOB, event_id, poll.id, poll.options[0].id).unwrap()

        result = poll_service.vote_poll(uow, BOB, event_id, poll.id, poll.options[1].id)

        assert error_kind(result) == ErrorKind.USER_ALREADY_VOTED
        assert result.error.message == "You have already voted"
        assert poll.vote_counts()[poll.options[1].id] == 0

    def test_unknown_option(self, uow, event_id, poll):
        assert error_kind(poll_service.vote_poll(uow, BOB, event_id, poll.id, 999)) == ErrorKind.OPTION_NOT_FOUND

    def test_poll_has_ended(self, uow, event_id, poll):
        poll.created_at = datetime.now(UTC) - timedelta(hours=25)

        result = poll_service.vote_poll(uow, BOB, event_id, poll.id, poll.options[0].id)

        assert error_kind(result) == ErrorKind.POLL_HAS_ENDED

    def test_outsiders_cannot_vote(self, uow, event_id, poll):
        result = poll_service.vote_poll(uow, CAROL, event_id, poll.id, poll.options[0].id)
        assert error_kind(result) == ErrorKind.USER_NOT_IN_EVENT

    def test_check_order(self, uow, event_id, poll):
        """Test that the poll is looked up before the option and the vote are checked."""
        poll.vote(BOB, poll.options[0].id)

        assert error_kind(poll_service.vote_poll(uow, BOB, event_id, 77, 999)) == ErrorKind.POLL_NOT_FOUND
        assert error_kind(poll_service.vote_poll(uow, BOB, event_id, poll.id, 999)) == ErrorKind.OPTION_NOT_FOUND

    def test_event_has_ended(self, uow, event_id, poll):
        uow.events.get(event_id).end_date = timestamp(days=-1)

        result = poll_service.vote_poll(uow, BOB, event_id, poll.id, poll.options[0].id)

        assert error_kind(result) == ErrorKind.EVENT_HAS_ENDED


class TestDeletePoll:
    def test_delete(self, uow, event_id, poll):
        assert poll_service.delete_poll(uow, ALICE, event_id, poll.id) == Ok(None)
        assert uow.polls.get(poll.id) is None

    def test_participants_cannot_delete(self, uow, event_id, poll):
        result = poll_service.delete_poll(uow, BOB, event_id, poll.id)

        assert error_kind(result) == ErrorKind.USER_IS_NOT_ORGANIZER
        assert uow.polls.get(poll.id) is not None

    def test_missing_poll(self, uow, event_id):
        assert error_kind(poll_service.delete_poll(uow, ALICE, event_id, 5)) == ErrorKind.POLL_NOT_FOUND
