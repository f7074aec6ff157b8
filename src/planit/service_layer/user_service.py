"""ABOUTME: User service layer: registration, login, profiles, feedback and the about page
ABOUTME: Passwords are hashed with werkzeug before they reach storage"""

from dataclasses import dataclass

import structlog

from planit.config import APP_VERSION, APPLICATION_NAME, CONTRIBUTORS
from planit.domain.categories import CategoryCatalogue, default_catalogue
from planit.domain.errors import ErrorKind
from planit.domain.events import Event
from planit.domain.users import Feedback, User
from planit.domain.validators import (
    UserEditInput,
    UserLoginInput,
    UserRegisterInput,
    validate_user_edit_input,
    validate_user_login_input,
    validate_user_register_input,
)

from .exceptions import fail, returns_result, unwrap_or_raise
from .permissions import get_user_or_fail
from .security import hash_password, verify_password
from .unit_of_work import AbstractUnitOfWork

log = structlog.get_logger(__name__)

FEEDBACK_PAGE_SIZE = 50


@dataclass(frozen=True)
class About:
    name: str
    version: str
    contributors: tuple[str, ...]


@returns_result
def register_user(uow: AbstractUnitOfWork, register_input: UserRegisterInput) -> User:
    """
    Register a new user.

    Args:
        uow: Unit of Work for database operations
        register_input: Username, name, email and password as typed by the user

    Returns:
        Ok with the created User, or Err with the combined validation error,
        EXISTING_EMAIL or EXISTING_USERNAME
    """
    validated = unwrap_or_raise(validate_user_register_input(register_input))

    with uow:
        if uow.users.get_by_email(validated.email.value) is not None:
            raise fail(ErrorKind.EXISTING_EMAIL)
        if uow.users.get_by_username(validated.username.value) is not None:
            raise fail(ErrorKind.EXISTING_USERNAME)

        user = User(
            username=validated.username.value,
            name=validated.name.value,
            email=validated.email.value,
            password_hash=hash_password(validated.password.value),
        )
        uow.users.add(user)
        uow.commit()

        log.info("user registered", user_id=user.id, username=user.username)
        return user.create_detached_copy()


@returns_result
def authenticate_user(uow: AbstractUnitOfWork, login_input: UserLoginInput) -> User:
    """Check login credentials, accepting either the email address or the username."""
    validated = unwrap_or_raise(validate_user_login_input(login_input))
    identifier = validated.email_or_username

    with uow:
        if identifier.is_email:
            user = uow.users.get_by_email(identifier.value.value)
        else:
            user = uow.users.get_by_username(identifier.value.value)
        if user is None or not user.is_active:
            raise fail(ErrorKind.INCORRECT_LOGIN)
        if not verify_password(validated.password, user.password_hash):
            log.info("failed login", user_id=user.id)
            raise fail(ErrorKind.INCORRECT_PASSWORD)
        return user.create_detached_copy()


@returns_result
def get_user(uow: AbstractUnitOfWork, user_id: int) -> User:
    with uow:
        return get_user_or_fail(uow, user_id).create_detached_copy()


@returns_result
def edit_user(
    uow: AbstractUnitOfWork,
    user_id: int,
    edit_input: UserEditInput,
    catalogue: CategoryCatalogue | None = None,
) -> User:
    """Update a user's name, description and interests. Interests must be distinct configured categories."""
    validated = unwrap_or_raise(validate_user_edit_input(edit_input, catalogue or default_catalogue()))

    with uow:
        user = get_user_or_fail(uow, user_id)
        user.update_profile(
            name=validated.name.value,
            description=validated.description,
            interests=[interest.name for interest in validated.interests],
        )
        uow.commit()
        log.info("user profile edited", user_id=user_id)
        return user.create_detached_copy()


@returns_result
def get_user_events(uow: AbstractUnitOfWork, user_id: int) -> list[Event]:
    with uow:
        get_user_or_fail(uow, user_id)
        return [event.create_detached_copy() for event in uow.events.get_events_for_user(user_id)]


@returns_result
def send_feedback(uow: AbstractUnitOfWork, user_id: int | None, text: str | None) -> Feedback:
    if text is not None and not isinstance(text, str):
        raise fail(ErrorKind.INVALID_VALUE, "feedback")
    if text is None or not text.strip():
        raise fail(ErrorKind.VALUE_IS_BLANK, "feedback")

    with uow:
        feedback = Feedback(text=text.strip(), user_id=user_id)
        uow.feedback.add(feedback)
        uow.commit()
        log.info("feedback received", feedback_id=feedback.id, user_id=user_id)
        return feedback.create_detached_copy()


@returns_result
def get_feedback(uow: AbstractUnitOfWork, limit: int = FEEDBACK_PAGE_SIZE) -> list[Feedback]:
    with uow:
        return [feedback.create_detached_copy() for feedback in uow.feedback.latest(limit)]


def about() -> About:
    return About(name=APPLICATION_NAME, version=APP_VERSION, contributors=CONTRIBUTORS)
