"""Structured logging for the API (structlog over the stdlib root logger).

Every line carries the app name and environment. Request and identity
context come from contextvars bound by the logging middleware and the auth
dependencies. Credential-bearing fields are masked before rendering.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

REDACTED = "***"
SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "password",
        "password_hash",
        "refresh_token",
        "token",
        "jwt_secret_key",
    }
)

# Chatty libraries that would otherwise log every query or connection
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio", "httpx", "httpcore")


def redact_credentials(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask values of credential-bearing keys."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def add_service_fields(app_name: str, env: str) -> structlog.typing.Processor:
    """Processor stamping every event with the app name and environment."""

    def processor(
        logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("app", app_name)
        event_dict.setdefault("env", env)
        return event_dict

    return processor


def setup_logging(
    debug: bool = False, *, app_name: str = "ems-api", env: str = "development"
) -> None:
    """Configure structlog and the stdlib root logger.

    Debug mode renders colored console lines; otherwise one JSON object
    per line for log shipping.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_fields(app_name, env),
        redact_credentials,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the correlation id to every log line of the current request."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_user_context(
    user_id: UUID | str,
    workspace_id: UUID | str | None,
    email: str | None = None,
) -> None:
    """Attach the caller's identity once their token has been verified.

    The email is bound only when `log_user_emails` is enabled.
    """
    from src.ems.core.config import get_settings

    bind_contextvars(user_id=str(user_id))
    if workspace_id is not None:
        bind_contextvars(workspace_id=str(workspace_id))
    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
