"""ABOUTME: Login, server side session and security header extensions for the PlanIt app
ABOUTME: Sets up Flask-Login session auth, Flask-Session storage and Talisman security headers"""

from flask import Flask, jsonify
from flask.typing import ResponseReturnValue
from flask_login import LoginManager
from flask_session import Session
from flask_talisman import Talisman

from planit.domain.users import User
from planit.entrypoints.responses import get_uow

login_manager = LoginManager()
session_store = Session()
talisman = Talisman()


def init_extensions(app: Flask) -> None:
    """Bind the module level extension objects to `app`."""
    login_manager.init_app(app)

    session_store.init_app(app)

    # Initialize Flask-Talisman for security headers; nothing here is rendered in a browser
    talisman.init_app(
        app,
        force_https=app.config.get("FORCE_HTTPS", False),
        strict_transport_security=True,
        content_security_policy={"default-src": "'none'"},
    )


@login_manager.unauthorized_handler
def unauthorized() -> ResponseReturnValue:
    return jsonify({"error": "Authentication required"}), 401


@login_manager.user_loader
def load_user(user_id: str) -> User | None:
    """Turn the id Flask-Login kept in the session back into an active user, or None."""
    try:
        user_pk = int(user_id)
    except (ValueError, TypeError):
        return None

    uow = get_uow()
    with uow:
        db_user = uow.users.get(user_pk)
        if db_user is None or not db_user.is_active:
            return None
        return db_user.create_detached_copy()
