"""ABOUTME: Database connection setup and imperative mapping for PlanIt
ABOUTME: Engine and session factory setup, table creation, and the mapping of users, events and polls"""

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import clear_mappers as sqla_clear_mappers
from sqlalchemy.orm import relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from planit.adapters import orm
from planit.config import bool_environ_get, get_db_uri
from planit.domain import events, polls, users


class DatabaseError(Exception):
    """The database layer could not be set up."""


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str = "", echo: bool = False) -> Engine:
    database_url = database_url or get_db_uri()
    echo = bool_environ_get("DB_ECHO") or echo
    extra_args: dict[str, Any] = {}
    if database_url.startswith("postgresql://"):
        extra_args = {
            "pool_pre_ping": True,
            "pool_recycle": 3600,
            "pool_size": 10,
            "max_overflow": 20,
        }
    elif database_url == "sqlite:///:memory:":
        # one shared connection, otherwise every checkout sees a fresh empty database
        extra_args = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    engine = create_engine(database_url, echo=echo, **extra_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(database_url: str = "", echo: bool = False) -> sessionmaker:
    """Sessions keep their attributes after commit, so services can hand objects back."""
    engine = create_db_engine(database_url, echo)
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_tables(session_factory: sessionmaker) -> None:
    orm.metadata.create_all(session_factory.kw["bind"])


def drop_tables(session_factory: sessionmaker) -> None:
    orm.metadata.drop_all(session_factory.kw["bind"])


_mappers_started = False


def start_mappers() -> None:
    """Map the PlanIt domain classes onto the tables in `orm`. Calling it again is a no-op.

    Participants, poll options and votes load eagerly with their parent, and go with it on delete.
    """
    global _mappers_started

    if _mappers_started:
        return

    try:
        orm.mapper_registry.map_imperatively(users.User, orm.users)
        orm.mapper_registry.map_imperatively(users.Feedback, orm.feedback)

        orm.mapper_registry.map_imperatively(events.EventParticipant, orm.event_participants)
        orm.mapper_registry.map_imperatively(
            events.Event,
            orm.events,
            properties={
                "participants": relationship(
                    events.EventParticipant,
                    cascade="all, delete-orphan",
                    passive_deletes=True,
                    lazy="selectin",
                    order_by=orm.event_participants.c.joined_at,
                ),
            },
        )

        orm.mapper_registry.map_imperatively(polls.PollOption, orm.poll_options)
        orm.mapper_registry.map_imperatively(polls.PollVote, orm.poll_votes)
        orm.mapper_registry.map_imperatively(
            polls.Poll,
            orm.polls,
            properties={
                "options": relationship(
                    polls.PollOption,
                    cascade="all, delete-orphan",
                    passive_deletes=True,
                    lazy="selectin",
                    order_by=orm.poll_options.c.id,
                ),
                "votes": relationship(
                    polls.PollVote,
                    cascade="all, delete-orphan",
                    passive_deletes=True,
                    lazy="selectin",
                ),
            },
        )

        _mappers_started = True

    except Exception as e:  # pragma: no cover
        raise DatabaseError(f"Failed to start mappers: {e}") from e


def clear_mappers() -> None:
    sqla_clear_mappers()

    global _mappers_started
    _mappers_started = False
