import pytest
from flask import Flask
from flask.testing import FlaskClient

from tests.e2e.helpers import PASSWORD, api, event_payload, register


@pytest.fixture
def login_as(app: Flask):
    """Register a user and return a test client holding their logged in session."""

    def _login_as(username: str) -> FlaskClient:
        client = app.test_client()
        assert register(client, username).status_code == 201
        response = client.post(api("/login"), json={"emailOrUsername": username, "password": PASSWORD})
        assert response.status_code == 200, response.get_json()
        client.user_id = response.get_json()["user"]["id"]  # type: ignore[attr-defined]
        return client

    return _login_as


@pytest.fixture
def organizer(login_as) -> FlaskClient:
    return login_as("alice")


@pytest.fixture
def member(login_as) -> FlaskClient:
    return login_as("bobby")


@pytest.fixture
def event_id(organizer: FlaskClient) -> int:
    """A public event organized by alice."""
    response = organizer.post(api("/event"), json=event_payload())
    assert response.status_code == 201, response.get_json()
    return response.get_json()["id"]
