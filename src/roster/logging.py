"""
Structured logging for the Roster API.

Development runs render colored console lines; everything else emits one JSON
object per event. Every event carries the current request id and, when the
caller sent a valid token, the account id.
"""

import base64
import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

SERVICE_NAME = "roster-api"


def add_request_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor stamping the request and account ids onto each event."""
    request_id = request_id_ctx.get()
    if request_id:
        event_dict.setdefault("request_id", request_id)

    user_id = user_id_ctx.get()
    if user_id:
        event_dict.setdefault("user_id", user_id)

    return event_dict


def add_service_name(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _resolve_level(debug: bool, log_level: str | None) -> int:
    if not log_level:
        return logging.DEBUG if debug else logging.INFO
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        debug: Console rendering when True, JSON otherwise
        log_level: Explicit level name; defaults to DEBUG in debug mode, INFO otherwise
    """
    logging.basicConfig(
        level=_resolve_level(debug, log_level),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            [structlog.processors.CallsiteParameter.FUNC_NAME]
        ),
        add_request_context,
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(add_service_name)
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger for a module; pass ``__name__``."""
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Generate a compact request ID from a microsecond timestamp plus randomness.

    Format: 14-character urlsafe base64 string without padding.
    """
    timestamp_us = int(time.time() * 1_000_000)
    random_bytes = secrets.token_bytes(2)

    combined_bytes = timestamp_us.to_bytes(8, byteorder="big") + random_bytes
    return base64.urlsafe_b64encode(combined_bytes).decode("ascii").rstrip("=")


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> None:
    """Set request context variables.

    Args:
        request_id: Request ID to set (generates one if None)
        user_id: Account ID to set
    """
    if request_id is None:
        request_id = generate_request_id()

    request_id_ctx.set(request_id)
    if user_id is not None:
        user_id_ctx.set(user_id)


def clear_request_context() -> None:
    """Clear request context variables."""
    request_id_ctx.set(None)
    user_id_ctx.set(None)


def get_request_id() -> str | None:
    """Get the current request ID."""
    return request_id_ctx.get()


def get_user_id() -> str | None:
    """Get the current account ID."""
    return user_id_ctx.get()
