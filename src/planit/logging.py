"""ABOUTME: structlog wired into the standard library logging tree
ABOUTME: Human readable console output in development, one JSON object per line everywhere else"""

import logging.config

import structlog

from planit import config

timestamper = structlog.processors.TimeStamper(fmt="iso")
pre_chain = [
    # Add the log level and a timestamp to the event_dict if the log entry is not from structlog.
    structlog.stdlib.add_log_level,
    timestamper,
]


def _handler_name() -> str:
    return "dev_console" if config.is_development() else "default"


def _dict_config() -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": structlog.dev.ConsoleRenderer(colors=False),
                "foreign_pre_chain": pre_chain,
            },
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": structlog.processors.JSONRenderer(),
                "foreign_pre_chain": pre_chain,
            },
        },
        "handlers": {
            "default": {
                "level": "INFO",
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
            "dev_console": {
                "level": "DEBUG",
                "class": "logging.StreamHandler",
                "formatter": "console",
            },
        },
        "loggers": {
            "": {
                "handlers": [_handler_name()],
                "level": "INFO",
                "propagate": True,
            },
        },
    }


def logging_setup(log_level: int = logging.INFO) -> None:
    """Configure stdlib logging and structlog. Safe to call more than once."""
    logging.config.dictConfig(_dict_config())
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.getHandlerByName(_handler_name())
    assert handler is not None
    handler.setLevel(log_level)
    logging.getLogger().setLevel(log_level)

    if config.should_log_sql():
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
