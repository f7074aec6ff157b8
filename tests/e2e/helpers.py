from flask.testing import FlaskClient

from planit.entrypoints.flask_app import API_PREFIX
from tests.helpers import timestamp

PASSWORD = "Secr3t!"  # pragma: allowlist secret


def api(path: str) -> str:
    return f"{API_PREFIX}{path}"


def register(client: FlaskClient, username: str, password: str = PASSWORD):
    return client.post(
        api("/register"),
        json={"username": username, "name": username.title(), "email": f"{username}@example.com", "password": password},
    )


def event_payload(**overrides) -> dict:
    """A valid body for POST /event, using the bundled categories."""
    payload = {
        "title": "Five-a-side",
        "category": "Sports and Fitness",
        "subcategory": "Football",
        "date": timestamp(days=7),
        "endDate": timestamp(days=7, hours=2),
        "price": "5 EUR",
        "description": "Friendly match, all levels welcome",
        "visibility": "Public",
    }
    payload.update(overrides)
    return payload
