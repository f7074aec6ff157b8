"""ABOUTME: Wires the ORM mapping and a unit of work together for the entrypoints
ABOUTME: Both the Flask request helpers and the CLI get their unit of work from here"""

from sqlalchemy.orm import sessionmaker

from planit.adapters import database
from planit.config import get_db_uri
from planit.service_layer.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork


def bootstrap(
    start_orm: bool = True,
    uow: AbstractUnitOfWork | None = None,
    session_factory: sessionmaker | None = None,
) -> AbstractUnitOfWork:
    """Return a ready unit of work. Tests pass a fake `uow` and skip the mapping."""
    if start_orm:
        database.start_mappers()
    if uow is not None:
        return uow
    return SqlAlchemyUnitOfWork(session_factory or database.create_session_factory(get_db_uri()))
