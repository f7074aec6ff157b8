"""ABOUTME: Unit tests for user service operations
ABOUTME: Tests registration, login, profile edits, a user's events and feedback with fake repositories"""

import pytest

from planit.domain.errors import ErrorKind
from planit.domain.result import Err, Ok
from planit.domain.users import User
from planit.domain.validators import UserEditInput, UserLoginInput, UserRegisterInput
from planit.service_layer import event_service, user_service
from planit.service_layer.security import verify_password
from tests.fakes import FakeUnitOfWork
from tests.helpers import add_user, event_input, timestamp


def register_input(**overrides) -> UserRegisterInput:
    fields = {"username": "alice", "name": "Alice", "email": "alice@example.com", "password": "Secr3t!"}
    fields.update(overrides)
    return UserRegisterInput(**fields)


class TestRegisterUser:
    def test_register(self):
        uow = FakeUnitOfWork()

        result = user_service.register_user(uow, register_input())

        assert isinstance(result, Ok)
        user = result.value
        assert user.id == 1
        assert user.username == "alice"
        assert user.password_hash != "Secr3t!"
        assert verify_password("Secr3t!", uow.users.get(1).password_hash)
        assert uow.committed

    def test_validation_collects_every_problem(self):
        uow = FakeUnitOfWork()

        result = user_service.register_user(
            uow, register_input(username="al", email="alice@example.org", password="abc")
        )

        assert isinstance(result, Err)
        assert result.error.kind == ErrorKind.INVALID_INPUT
        assert "Invalid username length" in result.error.message
        assert "Invalid email format" in result.error.message
        assert "Password must contain at least one number" in result.error.message
        assert list(uow.users.all()) == []

    def test_existing_email(self):
        uow = FakeUnitOfWork()
        add_user(uow, "alice")

        result = user_service.register_user(uow, register_input(username="alice2", email="ALICE@example.com"))

        assert result.error.kind == ErrorKind.EXISTING_EMAIL
        assert result.error.message == "Email is already being used."

    def test_existing_username(self):
        uow = FakeUnitOfWork()
        add_user(uow, "alice")

        result = user_service.register_user(uow, register_input(email="other@example.com"))

        assert result.error.kind == ErrorKind.EXISTING_USERNAME

    def test_email_checked_before_username(self):
        uow = FakeUnitOfWork()
        add_user(uow, "alice")

        assert user_service.register_user(uow, register_input()).error.kind == ErrorKind.EXISTING_EMAIL


class TestAuthenticateUser:
    @pytest.fixture
    def uow(self):
        uow = FakeUnitOfWork()
        add_user(uow, "alice", password="Secr3t!")
        return uow

    @pytest.mark.parametrize("identifier", ["alice", "alice@example.com"])
    def test_login_with_username_or_email(self, uow, identifier):
        result = user_service.authenticate_user(uow, UserLoginInput(identifier, "Secr3t!"))

        assert isinstance(result, Ok)
        assert result.value.username == "alice"

    def test_wrong_password(self, uow):
        result = user_service.authenticate_user(uow, UserLoginInput("alice", "Wr0ng!"))
        assert result.error.kind == ErrorKind.INCORRECT_PASSWORD

    def test_unknown_user(self, uow):
        result = user_service.authenticate_user(uow, UserLoginInput("nobody", "Secr3t!"))

        assert result.error.kind == ErrorKind.INCORRECT_LOGIN
        assert result.error.message == "Email or username not found."

    def test_inactive_user(self, uow):
        uow.users.get(1).is_active = False

        result = user_service.authenticate_user(uow, UserLoginInput("alice", "Secr3t!"))

        assert result.error.kind == ErrorKind.INCORRECT_LOGIN

    def test_blank_password(self, uow):
        result = user_service.authenticate_user(uow, UserLoginInput("alice", ""))

        assert result.error.kind == ErrorKind.VALUE_IS_BLANK
        assert result.error.message == "Password is blank"

    def test_weak_passwords_still_checked_against_hash(self):
        """Test that login does not apply the registration strength rules."""
        uow = FakeUnitOfWork()
        add_user(uow, "legacy", password="abc")

        assert isinstance(user_service.authenticate_user(uow, UserLoginInput("legacy", "abc")), Ok)


class TestGetUser:
    def test_get_user(self):
        uow = FakeUnitOfWork()
        alice = add_user(uow, "alice")

        user = user_service.get_user(uow, alice.id).unwrap()

        assert user == alice
        assert user is not alice

    def test_missing_user(self):
        result = user_service.get_user(FakeUnitOfWork(), 3)

        assert result.error.kind == ErrorKind.USER_NOT_FOUND
        assert result.error.status == 404


class TestEditUser:
    def test_edit_profile(self, catalogue):
        uow = FakeUnitOfWork()
        alice = add_user(uow, "alice")

        edit_input = UserEditInput(name="Alice B", description="Likes football", interests=["music", "Technology"])

        result = user_service.edit_user(uow, alice.id, edit_input, catalogue)

        assert isinstance(result, Ok)
        assert alice.name == "Alice B"
        assert alice.description == "Likes football"
        assert alice.interests == ["Music", "Technology"]

    def test_duplicate_interests(self, catalogue):
        uow = FakeUnitOfWork()
        alice = add_user(uow, "alice")

        result = user_service.edit_user(uow, alice.id, UserEditInput(name="Alice", interests=["Music", "music"]), catalogue)

        assert result.error.kind == ErrorKind.INTERESTS_ARE_DUPLICATED
        assert alice.interests == []

    def test_unknown_interest(self, catalogue):
        uow = FakeUnitOfWork()
        alice = add_user(uow, "alice")

        result = user_service.edit_user(uow, alice.id, UserEditInput(name="Alice", interests=["Knitting"]), catalogue)

        assert result.error.kind == ErrorKind.INVALID_VALUE

    def test_missing_user(self, catalogue):
        result = user_service.edit_user(FakeUnitOfWork(), 8, UserEditInput(name="Ghost"), catalogue)
        assert result.error.kind == ErrorKind.USER_NOT_FOUND


class TestGetUserEvents:
    def test_events_sorted_by_date(self, catalogue):
        uow = FakeUnitOfWork()
        alice = add_user(uow, "alice")
        bob = add_user(uow, "bobby")
        later = event_service.create_event(
            uow, alice.id, event_input(date=timestamp(days=9), end_date=None), catalogue
        ).unwrap()
        sooner = event_service.create_event(
            uow, bob.id, event_input(date=timestamp(days=2), end_date=None), catalogue
        ).unwrap()
        event_service.create_event(uow, bob.id, event_input(), catalogue).unwrap()
        event_service.join_event(uow, alice.id, sooner.id, "").unwrap()

        events = user_service.get_user_events(uow, alice.id).unwrap()

        assert [event.id for event in events] == [sooner.id, later.id]

    def test_missing_user(self):
        assert user_service.get_user_events(FakeUnitOfWork(), 4).error.kind == ErrorKind.USER_NOT_FOUND


class TestFeedback:
    def test_send_feedback(self):
        uow = FakeUnitOfWork()

        feedback = user_service.send_feedback(uow, 1, "  Great app!  ").unwrap()

        assert feedback.text == "Great app!"
        assert feedback.user_id == 1
        assert uow.committed

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_feedback(self, text):
        result = user_service.send_feedback(FakeUnitOfWork(), 1, text)

        assert result.error.kind == ErrorKind.VALUE_IS_BLANK
        assert result.error.message == "Feedback is blank"

    def test_feedback_must_be_text(self):
        result = user_service.send_feedback(FakeUnitOfWork(), 1, 42)

        assert result.error.kind == ErrorKind.INVALID_VALUE
        assert result.error.message == "Invalid feedback"

    def test_latest_first(self):
        uow = FakeUnitOfWork()
        for text in ("first", "second", "third"):
            user_service.send_feedback(uow, None, text)

        feedback = user_service.get_feedback(uow, limit=2).unwrap()

        assert [item.text for item in feedback] == ["third", "second"]


def test_about():
    about = user_service.about()

    assert about.name == "PlanIt"
    assert about.version == "0.0.1"
    assert about.contributors


def test_users_get_a_detached_copy():
    uow = FakeUnitOfWork()
    user_service.register_user(uow, register_input()).unwrap().name = "Mallory"

    stored: User = uow.users.get(1)
    assert stored.name == "Alice"
