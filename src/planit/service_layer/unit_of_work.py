"""ABOUTME: One transaction per service call, with the user, event, poll and feedback repositories bound to it
ABOUTME: Leaving the with block commits, unless an exception (including a rule violation) is on its way out"""

from __future__ import annotations

import abc
from types import TracebackType

from sqlalchemy.orm import Session, sessionmaker

from planit.adapters.database import create_session_factory
from planit.adapters.sql_repository import (
    SqlAlchemyEventRepository,
    SqlAlchemyFeedbackRepository,
    SqlAlchemyPollRepository,
    SqlAlchemyUserRepository,
)
from planit.service_layer.repositories import (
    EventRepository,
    FeedbackRepository,
    PollRepository,
    UserRepository,
)


class AbstractUnitOfWork(abc.ABC):
    """What the services see: four repositories plus commit and rollback."""

    users: UserRepository
    events: EventRepository
    polls: PollRepository
    feedback: FeedbackRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()

    @abc.abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


_default_session_factory: sessionmaker | None = None


def default_session_factory() -> sessionmaker:
    global _default_session_factory
    if _default_session_factory is None:
        _default_session_factory = create_session_factory()
    return _default_session_factory


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """Opens a fresh session for every `with` block and closes it on the way out."""

    def __init__(self, session_factory: sessionmaker | None = None) -> None:
        self.session_factory = session_factory or default_session_factory()
        self._session: Session | None = None

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = self.session_factory()
        assert isinstance(self._session, Session)
        return self._session

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self.users = SqlAlchemyUserRepository(self.session)
        self.events = SqlAlchemyEventRepository(self.session)
        self.polls = SqlAlchemyPollRepository(self.session)
        self.feedback = SqlAlchemyFeedbackRepository(self.session)

        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            self.session.close()
            self._session = None

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
