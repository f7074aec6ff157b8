"""ABOUTME: Settings for PlanIt, read from the environment (and a .env file when present)
ABOUTME: Database and session store locations, logging switches, the category file and the Flask config classes"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from cachelib.file import FileSystemCache
from dotenv import load_dotenv
from redis import Redis

load_dotenv()

APPLICATION_NAME = "PlanIt"
APP_VERSION = "0.0.1"
CONTRIBUTORS = ("PlanIt team",)

DEFAULT_SECRET_KEY = "planit-dev-only-secret"  # noqa: S105
SQLITE_DB_URI = "sqlite:///:memory:"
BUNDLED_CATEGORIES = Path(__file__).parent / "data" / "categories.json"

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0", ""})


class InvalidConfig(Exception):
    """A setting is missing or has a value PlanIt cannot use"""


def _local_port(host: str, docker_port: int, local_port: int) -> int:
    # services on this machine are expected on shifted ports, containers on the standard ones
    return local_port if host == "localhost" else docker_port


@dataclass(slots=True, kw_only=True)
class PostgresCfg:
    user: str
    password: str
    host: str
    port: int
    db_name: str

    def to_url(self) -> str:
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.db_name}"

    @classmethod
    def from_env(cls, default_db_name: str = "planit", user: str = "planit") -> "PostgresCfg":
        host = os.environ.get("DB_HOST", "localhost")
        return cls(
            user=os.environ.get("DB_USER", user),
            password=os.environ.get("DB_PASSWORD", "planit"),
            host=host,
            port=int(os.environ.get("DB_PORT", _local_port(host, 5432, 54321))),
            db_name=os.environ.get("DB_NAME", default_db_name),
        )


@dataclass(slots=True, kw_only=True)
class RedisCfg:
    host: str
    port: int
    db: str = ""

    def to_url(self) -> str:
        base = f"redis://{self.host}:{self.port}"
        return f"{base}/{self.db}" if self.db else base

    @classmethod
    def from_env(cls) -> "RedisCfg":
        host = os.environ.get("REDIS_HOST", "localhost")
        return cls(
            host=host,
            port=int(os.environ.get("REDIS_PORT", _local_port(host, 6379, 63791))),
            db=os.environ.get("REDIS_DB", ""),
        )


def get_db_uri() -> str:
    """DB_URI wins; otherwise the URL is assembled from the DB_* settings."""
    return os.environ.get("DB_URI") or PostgresCfg.from_env().to_url()


def to_bool(value: str | None, context_str: str = "") -> bool:
    """
    Read an on/off setting. Case and surrounding whitespace are ignored, and a missing
    value counts as off. Anything that is not true/false, yes/no, on/off or 1/0 raises
    ValueError, naming the setting through `context_str`.
    """
    word = (value or "").strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Cannot convert '{context_str}{word}' to boolean, use true/false, yes/no, on/off or 1/0")


def bool_environ_get(key: str, default: str = "") -> bool:
    return to_bool(os.environ.get(key, default), context_str=f"{key}=")


def _flask_env() -> str:
    return os.environ.get("FLASK_ENV", "development").strip().lower()


def is_development() -> bool:
    return _flask_env() == "development"


def should_log_sql() -> bool:
    return bool_environ_get("LOG_SQL")


def get_log_level() -> int:
    name = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    raise InvalidConfig(f"Unknown LOG_LEVEL '{name}'")


def get_categories_path() -> Path:
    override = os.environ.get("CATEGORIES_PATH")
    return Path(override) if override else BUNDLED_CATEGORIES


class FlaskBaseConfig:
    """Settings shared by every environment. Values are read when the object is built."""

    TESTING = False
    JSON_SORT_KEYS = False

    def __init__(self) -> None:
        self.SQLALCHEMY_DATABASE_URI = get_db_uri()
        self.SECRET_KEY: str = os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY)
        self.FLASK_ENV: str = _flask_env()
        self.DEBUG: bool = bool_environ_get("DEBUG")
        self.FORCE_HTTPS: bool = bool_environ_get("FORCE_HTTPS")
        self.CATEGORIES_PATH: Path = get_categories_path()
        self.APPLICATION_ROOT = os.environ.get("APPLICATION_ROOT", "/")


class FlaskConfig(FlaskBaseConfig):
    """Development settings: sessions live in redis."""

    def __init__(self) -> None:
        super().__init__()
        self.SESSION_TYPE = "redis"
        self.SESSION_REDIS = Redis.from_url(RedisCfg.from_env().to_url())


class FlaskTestSQLiteConfig(FlaskBaseConfig):
    """In-memory SQLite and file based sessions, so tests need neither postgres nor redis."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.SQLALCHEMY_DATABASE_URI = SQLITE_DB_URI
        self.SECRET_KEY = "planit-test-secret"  # noqa: S105
        self.FLASK_ENV = "testing"

        session_dir = Path(tempfile.gettempdir()) / "planit_flask_session"
        session_dir.mkdir(exist_ok=True)
        self.SESSION_TYPE = "cachelib"
        self.SESSION_CACHELIB = FileSystemCache(str(session_dir))


class FlaskProductionConfig(FlaskConfig):
    def __init__(self) -> None:
        super().__init__()
        self.FLASK_ENV = "production"
        if self.SECRET_KEY == DEFAULT_SECRET_KEY:
            raise InvalidConfig("SECRET_KEY must be set in production")


CONFIG_CLASSES: dict[str, type[FlaskBaseConfig]] = {
    "development": FlaskConfig,
    "testing": FlaskTestSQLiteConfig,
    "production": FlaskProductionConfig,
}


def get_config(config_name: str = "") -> FlaskBaseConfig:
    """Build the config for `config_name`, or for FLASK_ENV. Unknown names get the development config."""
    env = config_name.strip().lower() or _flask_env()
    return CONFIG_CLASSES.get(env, FlaskConfig)()
