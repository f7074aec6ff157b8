"""ABOUTME: Flask application factory with configuration, blueprints, and error handling
ABOUTME: Creates the PlanIt JSON API with its database session factory and category catalogue"""

from flask import Flask, jsonify
from flask.typing import ResponseReturnValue
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

import planit.logging
from planit import config
from planit.adapters import database
from planit.domain.categories import load_category_catalogue
from planit.entrypoints.extensions import init_extensions
from planit.entrypoints.responses import CATALOGUE_KEY, SESSION_FACTORY_KEY

API_PREFIX = "/api-planit"


def create_app(config_name: str = "") -> Flask:
    """
    Flask application factory.

    Args:
        config_name: Configuration name (development, testing, production)

    Returns:
        Configured Flask application instance
    """
    planit.logging.logging_setup(config.get_log_level())

    app = Flask(__name__)

    # Load configuration
    flask_config = config.get_config(config_name)
    app.config.from_object(flask_config)

    # Trust 1 layer of proxy (the reverse proxy in front of the app)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore[method-assign]

    database.start_mappers()
    session_factory = database.create_session_factory(app.config["SQLALCHEMY_DATABASE_URI"])
    app.extensions[SESSION_FACTORY_KEY] = session_factory
    if app.config.get("TESTING"):
        database.create_tables(session_factory)

    # Categories are read once and shared read-only by every request
    app.extensions[CATALOGUE_KEY] = load_category_catalogue(app.config["CATEGORIES_PATH"])

    init_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)

    app.logger.info("PlanIt application startup")

    return app


def register_blueprints(app: Flask) -> None:
    """Register application blueprints."""
    from .blueprints.events import events_bp
    from .blueprints.health import health_bp
    from .blueprints.polls import polls_bp
    from .blueprints.users import users_bp

    app.register_blueprint(users_bp, url_prefix=API_PREFIX)
    app.register_blueprint(events_bp, url_prefix=API_PREFIX)
    app.register_blueprint(polls_bp, url_prefix=API_PREFIX)
    app.register_blueprint(health_bp)


def register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers."""

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException) -> ResponseReturnValue:
        return jsonify({"error": error.description}), error.code or 500

    @app.errorhandler(IntegrityError)
    def integrity_error(error: IntegrityError) -> ResponseReturnValue:
        # two requests raced past the same uniqueness check
        app.logger.warning(f"Integrity error: {error.orig}")
        return jsonify({"error": "Request conflicts with existing data"}), 400

    @app.errorhandler(Exception)
    def internal_error(error: Exception) -> ResponseReturnValue:
        app.logger.exception(f"Server Error: {error}")
        return jsonify({"error": "Internal server error"}), 500
