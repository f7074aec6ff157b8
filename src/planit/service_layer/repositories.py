"""ABOUTME: Abstract repository interfaces for domain objects
ABOUTME: Defines repository contracts to abstract database operations from business logic"""

from __future__ import annotations

import abc
from collections.abc import Iterable
from typing import Any

from planit.domain.events import Event
from planit.domain.polls import Poll
from planit.domain.users import Feedback, User


class AbstractRepository(abc.ABC):
    """Base repository interface providing common operations."""

    @abc.abstractmethod
    def add(self, item: Any) -> None:
        """Add an item to the repository."""
        raise NotImplementedError

    @abc.abstractmethod
    def get(self, item_id: int) -> Any | None:
        """Get an item by its ID."""
        raise NotImplementedError

    @abc.abstractmethod
    def all(self) -> Iterable[Any]:
        """List all items in the repository."""
        raise NotImplementedError


class UserRepository(AbstractRepository):
    """Repository interface for User domain objects."""

    @abc.abstractmethod
    def get_by_email(self, email: str) -> User | None:
        raise NotImplementedError

    @abc.abstractmethod
    def get_by_username(self, username: str) -> User | None:
        raise NotImplementedError

    @abc.abstractmethod
    def get_many(self, user_ids: Iterable[int]) -> list[User]:
        """Get the users with the given IDs; unknown IDs are skipped."""
        raise NotImplementedError


class EventRepository(AbstractRepository):
    """Repository interface for Event domain objects."""

    @abc.abstractmethod
    def get_by_code(self, code: str) -> Event | None:
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, event: Event) -> None:
        """Delete an event together with its memberships."""
        raise NotImplementedError

    @abc.abstractmethod
    def list_page(self, limit: int, offset: int) -> list[Event]:
        """List events, newest first."""
        raise NotImplementedError

    @abc.abstractmethod
    def search_by_category(self, category: str, limit: int, offset: int) -> list[Event]:
        raise NotImplementedError

    @abc.abstractmethod
    def search_by_text(self, text: str, limit: int, offset: int) -> list[Event]:
        """Case-insensitive partial match on title or description."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_events_for_user(self, user_id: int) -> list[Event]:
        """Get all events the user is a participant of."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_events_with_coordinates(self) -> list[Event]:
        """Get all events that have coordinates other than the (0, 0) default."""
        raise NotImplementedError


class PollRepository(AbstractRepository):
    """Repository interface for Poll domain objects."""

    @abc.abstractmethod
    def get_polls_for_event(self, event_id: int) -> list[Poll]:
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, poll: Poll) -> None:
        """Delete a poll together with its options and votes."""
        raise NotImplementedError


class FeedbackRepository(AbstractRepository):
    """Repository interface for Feedback domain objects."""

    @abc.abstractmethod
    def latest(self, limit: int) -> list[Feedback]:
        raise NotImplementedError
