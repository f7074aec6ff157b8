"""ABOUTME: SQLAlchemy implementations of repository interfaces
ABOUTME: Provides concrete database operations using SQLAlchemy sessions"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from planit.adapters import orm
from planit.domain.events import Event
from planit.domain.polls import Poll
from planit.domain.users import Feedback, User
from planit.service_layer.repositories import (
    EventRepository,
    FeedbackRepository,
    PollRepository,
    UserRepository,
)


class SqlAlchemyRepository:
    """Base SQLAlchemy repository with common functionality."""

    def __init__(self, session: Session) -> None:
        self.session = session


class SqlAlchemyUserRepository(SqlAlchemyRepository, UserRepository):
    """SQLAlchemy implementation of UserRepository."""

    def add(self, item: User) -> None:
        self.session.add(item)

    def get(self, item_id: int) -> User | None:
        return self.session.query(User).filter_by(id=item_id).first()

    def all(self) -> Iterable[User]:
        return self.session.query(User).order_by(orm.users.c.id).all()

    def get_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(func.lower(orm.users.c.email) == email.lower()).first()

    def get_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter_by(username=username).first()

    def get_many(self, user_ids: Iterable[int]) -> list[User]:
        user_ids = list(user_ids)
        if not user_ids:
            return []
        return self.session.query(User).filter(orm.users.c.id.in_(user_ids)).all()


class SqlAlchemyEventRepository(SqlAlchemyRepository, EventRepository):
    """SQLAlchemy implementation of EventRepository."""

    def add(self, item: Event) -> None:
        self.session.add(item)
        # callers need the generated id straight away
        self.session.flush()

    def get(self, item_id: int) -> Event | None:
        return self.session.query(Event).filter_by(id=item_id).first()

    def all(self) -> Iterable[Event]:
        return self.session.query(Event).order_by(orm.events.c.id).all()

    def get_by_code(self, code: str) -> Event | None:
        return self.session.query(Event).filter_by(code=code).first()

    def delete(self, event: Event) -> None:
        self.session.delete(event)

    def list_page(self, limit: int, offset: int) -> list[Event]:
        return self.session.query(Event).order_by(orm.events.c.id.desc()).limit(limit).offset(offset).all()

    def search_by_category(self, category: str, limit: int, offset: int) -> list[Event]:
        return (
            self.session.query(Event)
            .filter(func.lower(orm.events.c.category) == category.lower())
            .order_by(orm.events.c.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    def search_by_text(self, text: str, limit: int, offset: int) -> list[Event]:
        pattern = f"%{text.lower()}%"
        return (
            self.session.query(Event)
            .filter(
                or_(
                    func.lower(orm.events.c.title).like(pattern),
                    func.lower(orm.events.c.description).like(pattern),
                )
            )
            .order_by(orm.events.c.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    def get_events_for_user(self, user_id: int) -> list[Event]:
        return (
            self.session.query(Event)
            .join(orm.event_participants, orm.event_participants.c.event_id == orm.events.c.id)
            .filter(orm.event_participants.c.user_id == user_id)
            .order_by(orm.events.c.date)
            .all()
        )

    def get_events_with_coordinates(self) -> list[Event]:
        return (
            self.session.query(Event)
            .filter(or_(orm.events.c.latitude != 0.0, orm.events.c.longitude != 0.0))
            .all()
        )


class SqlAlchemyPollRepository(SqlAlchemyRepository, PollRepository):
    """SQLAlchemy implementation of PollRepository."""

    def add(self, item: Poll) -> None:
        self.session.add(item)
        self.session.flush()

    def get(self, item_id: int) -> Poll | None:
        return self.session.query(Poll).filter_by(id=item_id).first()

    def all(self) -> Iterable[Poll]:
        return self.session.query(Poll).order_by(orm.polls.c.id).all()

    def get_polls_for_event(self, event_id: int) -> list[Poll]:
        return self.session.query(Poll).filter_by(event_id=event_id).order_by(orm.polls.c.id).all()

    def delete(self, poll: Poll) -> None:
        self.session.delete(poll)


class SqlAlchemyFeedbackRepository(SqlAlchemyRepository, FeedbackRepository):
    """SQLAlchemy implementation of FeedbackRepository."""

    def add(self, item: Feedback) -> None:
        self.session.add(item)

    def get(self, item_id: int) -> Feedback | None:
        return self.session.query(Feedback).filter_by(id=item_id).first()

    def all(self) -> Iterable[Feedback]:
        return self.session.query(Feedback).order_by(orm.feedback.c.id).all()

    def latest(self, limit: int) -> list[Feedback]:
        return self.session.query(Feedback).order_by(orm.feedback.c.id.desc()).limit(limit).all()
