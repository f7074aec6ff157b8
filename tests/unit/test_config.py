"""ABOUTME: Unit tests for PlanIt configuration module
ABOUTME: Tests environment variable loading and configuration class behavior"""

import logging
from pathlib import Path
from typing import ClassVar

import pytest

from planit.config import (
    SQLITE_DB_URI,
    FlaskProductionConfig,
    FlaskTestSQLiteConfig,
    InvalidConfig,
    PostgresCfg,
    get_categories_path,
    get_config,
    get_db_uri,
    get_log_level,
    to_bool,
)


class TestToBool:
    test_values: ClassVar = [
        ("true", True),
        ("True", True),
        ("1", True),
        ("0", False),
        ("yes", True),
        ("no", False),
        ("on", True),
        ("OFF", False),
        ("", False),
        (None, False),
        ("  true  ", True),  # Test whitespace handling
    ]

    @pytest.mark.parametrize("bool_str,expected", test_values)
    def test_to_bool(self, bool_str: str, expected: bool) -> None:
        assert to_bool(bool_str) == expected

    def test_to_bool_rejects_other_values(self):
        """Test that an unknown value names the setting it came from."""
        with pytest.raises(ValueError, match="DEBUG=maybe"):
            to_bool("maybe", context_str="DEBUG=")


class TestDatabaseUri:
    def test_db_uri_override(self, temp_env_vars):
        """Test that DB_URI wins over the individual postgres settings."""
        temp_env_vars(DB_URI="sqlite:///planit.db")
        assert get_db_uri() == "sqlite:///planit.db"

    def test_postgres_cfg_from_env(self, temp_env_vars, clear_env_vars):
        """Test that the postgres settings come from the environment."""
        clear_env_vars("DB_URI", "DB_PORT")
        temp_env_vars(DB_HOST="db", DB_USER="alice", DB_PASSWORD="secret", DB_NAME="events")  # pragma: allowlist secret

        cfg = PostgresCfg.from_env()

        assert cfg.port == 5432
        assert cfg.to_url() == "postgresql://alice:secret@db:5432/events"  # pragma: allowlist secret


class TestLogLevel:
    def test_default_log_level(self, clear_env_vars):
        clear_env_vars("LOG_LEVEL")
        assert get_log_level() == logging.INFO

    def test_named_log_level(self, temp_env_vars):
        temp_env_vars(LOG_LEVEL="debug")
        assert get_log_level() == logging.DEBUG

    def test_unknown_log_level(self, temp_env_vars):
        temp_env_vars(LOG_LEVEL="LOUD")
        with pytest.raises(InvalidConfig, match="LOUD"):
            get_log_level()


class TestCategoriesPath:
    def test_bundled_categories_by_default(self, clear_env_vars):
        clear_env_vars("CATEGORIES_PATH")
        path = get_categories_path()
        assert path.name == "categories.json"
        assert path.exists()

    def test_categories_path_override(self, temp_env_vars):
        temp_env_vars(CATEGORIES_PATH="/etc/planit/categories.json")
        assert get_categories_path() == Path("/etc/planit/categories.json")


class TestFlaskConfigs:
    def test_testing_config_uses_sqlite(self):
        """Test that the testing config never touches postgres or redis."""
        config = get_config("testing")

        assert isinstance(config, FlaskTestSQLiteConfig)
        assert config.SQLALCHEMY_DATABASE_URI == SQLITE_DB_URI
        assert config.SESSION_TYPE == "cachelib"
        assert config.TESTING is True

    def test_production_config_with_secret_key(self, temp_env_vars):
        """Test that ProductionConfig works with proper SECRET_KEY."""
        temp_env_vars(SECRET_KEY="production-secret-key")

        config = FlaskProductionConfig()

        assert config.SECRET_KEY == "production-secret-key"
        assert config.FLASK_ENV == "production"

    def test_production_config_without_secret_key(self, clear_env_vars):
        """Test that ProductionConfig raises error without proper SECRET_KEY."""
        clear_env_vars("SECRET_KEY")
        with pytest.raises(InvalidConfig, match="SECRET_KEY must be set in production"):
            FlaskProductionConfig()
