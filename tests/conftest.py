"""ABOUTME: Pytest configuration and fixtures for PlanIt tests
ABOUTME: Provides environment, SQLite database, category and Flask app fixtures for unit, integration, and e2e tests"""

import os

import pytest
from click.testing import CliRunner

from planit.adapters import database
from planit.domain.categories import CategoryCatalogue
from planit.entrypoints.flask_app import create_app


@pytest.fixture(autouse=True)
def set_test_env():
    """Automatically set test environment for all tests."""
    original_env = os.environ.get("FLASK_ENV")
    os.environ["FLASK_ENV"] = "testing"
    yield
    if original_env is not None:
        os.environ["FLASK_ENV"] = original_env
    else:
        os.environ.pop("FLASK_ENV", None)


@pytest.fixture
def clear_env_vars():
    """Fixture to temporarily remove environment variables for testing."""
    original_vars = {}

    def _clear_env_vars(*args):
        for key in args:
            original_vars[key] = os.environ.get(key)
            os.environ.pop(key, None)

    yield _clear_env_vars

    # Restore original environment variables
    for key, value in original_vars.items():
        if value is not None:
            os.environ[key] = value


@pytest.fixture
def temp_env_vars():
    """Fixture to temporarily set environment variables for testing."""
    original_vars = {}

    def _set_env_vars(**kwargs):
        for key, value in kwargs.items():
            original_vars[key] = os.environ.get(key)
            os.environ[key] = value

    yield _set_env_vars

    # Restore original environment variables
    for key, value in original_vars.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


@pytest.fixture
def catalogue():
    """A small category configuration, independent of the bundled file."""
    return CategoryCatalogue({
        "Simple Meeting": [],
        "Sports and Fitness": ["Football", "Running", "Yoga"],
        "Technology": ["Hackathon", "Meetup"],
        "Music": ["Concert", "Festival"],
    })


@pytest.fixture
def sqlite_session_factory():
    session_factory = database.create_session_factory("sqlite:///:memory:")
    database.start_mappers()
    database.create_tables(session_factory)

    yield session_factory

    database.clear_mappers()
    database.drop_tables(session_factory)
    session_factory.kw["bind"].dispose()


@pytest.fixture
def sqlite_session(sqlite_session_factory):
    session = sqlite_session_factory()
    yield session
    session.close()


@pytest.fixture
def cli_with_session_factory(sqlite_session_factory):
    """Fixture that provides a Click runner with test session factory in context."""

    def _invoke_cli_with_context(cli_command, args, **kwargs):
        runner = CliRunner()
        ctx_obj = {"session_factory": sqlite_session_factory}
        return runner.invoke(cli_command, args, obj=ctx_obj, **kwargs)

    return _invoke_cli_with_context


@pytest.fixture
def app():
    """Create test Flask application backed by in-memory SQLite."""
    app = create_app("testing")
    yield app
    database.clear_mappers()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
