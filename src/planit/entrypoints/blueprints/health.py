"""ABOUTME: Health check endpoint for monitoring service status
ABOUTME: Reports database reachability and the running version as JSON"""

from flask import Blueprint, current_app, jsonify
from flask.typing import ResponseReturnValue
from sqlalchemy.exc import SQLAlchemyError

from planit.config import APP_VERSION
from planit.entrypoints.responses import get_uow

health_bp = Blueprint("health", __name__)


def check_database() -> tuple[bool, int | str]:
    """
    Check database connectivity and return user count.

    Returns:
        Tuple of (success: bool, user_count: int | "UNKNOWN")
    """
    try:
        uow = get_uow()
        with uow:
            user_count = len(list(uow.users.all()))
        return True, user_count
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check could not reach the database: {e}")
        return False, "UNKNOWN"


@health_bp.route("/health")
def health_check() -> ResponseReturnValue:
    """
    Health check endpoint returning JSON with system status.

    HTTP status 200 if the database answers, 500 otherwise.
    """
    db_ok, user_count = check_database()
    response_data = {
        "database_ok": db_ok,
        "user_count": user_count,
        "version": APP_VERSION,
    }
    return jsonify(response_data), 200 if db_ok else 500
