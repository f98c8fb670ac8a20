"""
Structured logging configuration using structlog.

JSON lines outside development, colored console output while developing.
Session context (data mode, user) is carried in contextvars so that every
event logged while serving a session or polling its backend says which
dataset it came from.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from src.config.settings import Settings, get_settings

# Keys whose values never reach the log output
REDACTED_KEYS = frozenset({"password", "token", "authorization", "api_key"})


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp every event with app name, version and environment."""
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.environment
    return event_dict


def redact_credentials(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask login credentials and tokens passed as event keys."""
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def bind_session_context(mode: str, user: str | None = None) -> None:
    """
    Attach the active data mode and user to subsequent events.

    The binding lives in the current context only: an API request, the
    snapshot poller task or a CLI run.
    """
    structlog.contextvars.bind_contextvars(data_mode=mode, user=user)


def clear_session_context() -> None:
    structlog.contextvars.unbind_contextvars("data_mode", "user")


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib loggers it writes through."""
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        redact_credentials,
    ]

    if settings.environment == "development":
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    for name, level in settings.log_levels.items():
        logging.getLogger(name).setLevel(level.upper())


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
