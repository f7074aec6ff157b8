"""ABOUTME: Security utilities for password hashing and checking
ABOUTME: Wraps werkzeug's password hashing so user and event passwords are never stored in clear"""

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Hash a password using werkzeug's secure method."""
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    return check_password_hash(password_hash, password)


def event_password_matches(given: str | None, stored: str) -> bool:
    """Compare an event join password with the stored one.

    Event passwords are shared secrets handed out by organizers, stored as a werkzeug
    hash when set. An empty stored password only matches an empty answer.
    """
    if given is not None and not isinstance(given, str):
        return False
    given = given or ""
    if not stored:
        return given == ""
    return check_password_hash(stored, given)
