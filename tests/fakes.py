"""ABOUTME: Fake repository implementations for testing
ABOUTME: In-memory repositories that implement the same interfaces as real ones, handing out integer ids"""

import itertools
from collections.abc import Iterable
from typing import Any

from planit.domain.events import Event
from planit.domain.polls import Poll
from planit.domain.users import Feedback, User
from planit.service_layer.repositories import (
    AbstractRepository,
    EventRepository,
    FeedbackRepository,
    PollRepository,
    UserRepository,
)
from planit.service_layer.unit_of_work import AbstractUnitOfWork


class FakeRepository(AbstractRepository):
    """Base fake repository with in-memory storage."""

    def __init__(self, items: list[Any] | None = None):
        self._items = list(items) if items else []
        self._ids = itertools.count(1)

    def add(self, item: Any) -> None:
        """Add an item to the repository, assigning it the next id like the database would."""
        if item.id is None:
            item.id = next(self._ids)
        self._items.append(item)

    def get(self, item_id: int) -> Any | None:
        """Get an item by its ID."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def all(self) -> Iterable[Any]:
        """Get all items in the repository."""
        return list(self._items)

    def _remove(self, item: Any) -> None:
        self._items = [existing for existing in self._items if existing is not item]


def _page(items: list[Any], limit: int, offset: int) -> list[Any]:
    return items[offset : offset + limit]


class FakeUserRepository(FakeRepository, UserRepository):
    """Fake implementation of UserRepository."""

    def get_by_email(self, email: str) -> User | None:
        for user in self._items:
            if user.email.lower() == email.lower():
                return user
        return None

    def get_by_username(self, username: str) -> User | None:
        for user in self._items:
            if user.username == username:
                return user
        return None

    def get_many(self, user_ids: Iterable[int]) -> list[User]:
        wanted = set(user_ids)
        return [user for user in self._items if user.id in wanted]


class FakeEventRepository(FakeRepository, EventRepository):
    """Fake implementation of EventRepository."""

    def add(self, item: Event) -> None:
        super().add(item)
        for participant in item.participants:
            participant.event_id = item.id

    def get_by_code(self, code: str) -> Event | None:
        for event in self._items:
            if event.code == code:
                return event
        return None

    def delete(self, event: Event) -> None:
        self._remove(event)

    def _newest_first(self) -> list[Event]:
        return sorted(self._items, key=lambda event: event.id, reverse=True)

    def list_page(self, limit: int, offset: int) -> list[Event]:
        return _page(self._newest_first(), limit, offset)

    def search_by_category(self, category: str, limit: int, offset: int) -> list[Event]:
        matches = [event for event in self._newest_first() if event.category.lower() == category.lower()]
        return _page(matches, limit, offset)

    def search_by_text(self, text: str, limit: int, offset: int) -> list[Event]:
        text = text.lower()
        matches = [
            event
            for event in self._newest_first()
            if text in event.title.lower() or text in event.description.lower()
        ]
        return _page(matches, limit, offset)

    def get_events_for_user(self, user_id: int) -> list[Event]:
        return sorted((event for event in self._items if event.is_participant(user_id)), key=lambda e: e.date)

    def get_events_with_coordinates(self) -> list[Event]:
        return [event for event in self._items if event.latitude != 0.0 or event.longitude != 0.0]


class FakePollRepository(FakeRepository, PollRepository):
    """Fake implementation of PollRepository."""

    def __init__(self, items: list[Any] | None = None):
        super().__init__(items)
        self._option_ids = itertools.count(1)

    def add(self, item: Poll) -> None:
        super().add(item)
        for option in item.options:
            if option.id is None:
                option.id = next(self._option_ids)
            option.poll_id = item.id

    def get_polls_for_event(self, event_id: int) -> list[Poll]:
        return [poll for poll in self._items if poll.event_id == event_id]

    def delete(self, poll: Poll) -> None:
        self._remove(poll)


class FakeFeedbackRepository(FakeRepository, FeedbackRepository):
    """Fake implementation of FeedbackRepository."""

    def latest(self, limit: int) -> list[Feedback]:
        return sorted(self._items, key=lambda feedback: feedback.id, reverse=True)[:limit]


class FakeUnitOfWork(AbstractUnitOfWork):
    """Fake Unit of Work implementation for testing."""

    def __init__(self) -> None:
        self.users = self.fake_users = FakeUserRepository()
        self.events = self.fake_events = FakeEventRepository()
        self.polls = self.fake_polls = FakePollRepository()
        self.feedback = self.fake_feedback = FakeFeedbackRepository()
        self.committed = False

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args) -> None:
        pass

    def commit(self) -> None:
        """Mark as committed."""
        self.committed = True

    def rollback(self) -> None:
        self.committed = False
