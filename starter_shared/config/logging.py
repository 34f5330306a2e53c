"""
Structured logging for the CRUD starter.

Loggers accept keyword arguments next to the message:

    logger.info("User created", user_id=str(user.id), email=mask_email(user.email))

The keywords travel on the record as ``extra_data``. Production renders one
JSON object per line, development a colored single line. Both include the
request correlation ID (see starter_shared.infrastructure.correlation) when
one is set.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from starter_shared.config.settings import settings

NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
}


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields shared by both formatters; empty ones are left out."""
    fields: dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    request_id = getattr(record, "request_id", None)
    if request_id and request_id != "-":
        fields["request_id"] = request_id
    extra_data = getattr(record, "extra_data", None)
    if extra_data:
        fields["data"] = extra_data
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {"timestamp": datetime.now(timezone.utc).isoformat(), **_record_fields(record)}
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if settings.debug:
            payload["source"] = f"{record.filename}:{record.lineno} in {record.funcName}"
        return json.dumps(payload, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable, colored formatter for development."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        fields = _record_fields(record)
        color = self.COLORS.get(record.levelname, self.RESET)

        parts = [f"{color}[{datetime.now():%H:%M:%S}] {record.levelname:8}{self.RESET}"]
        if "request_id" in fields:
            parts.append(f"{self.DIM}[{fields['request_id'][:8]}]{self.RESET}")
        parts.append(f"{record.name}: {fields['message']}")
        line = " ".join(parts)

        if "data" in fields:
            line += " (" + " | ".join(f"{k}={v}" for k, v in fields["data"].items()) + ")"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """
    Logger whose level methods take arbitrary keyword data.

    Keywords that logging.Logger does not know (everything except exc_info,
    extra, stack_info and stacklevel) end up in ``record.extra_data``.
    """

    def _log(
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: dict | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **data: Any,
    ) -> None:
        extra = dict(extra or {})
        extra["extra_data"] = data or None
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


logging.setLoggerClass(StructuredLogger)


def setup_logging(level: int | None = None, json_output: bool | None = None) -> None:
    """
    Install the root handler. Call once at startup.

    Args:
        level: Root level, DEBUG in debug mode and INFO otherwise by default.
        json_output: JSON lines instead of colored text, default in production.
    """
    # Import here to avoid circular imports
    from starter_shared.infrastructure.correlation import CorrelationIdFilter

    if level is None:
        level = logging.DEBUG if settings.debug else logging.INFO
    if json_output is None:
        json_output = settings.environment == "production"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(StructuredFormatter() if json_output else DevelopmentFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a logger instance with the given name.

    Usage:
        from starter_shared.config.logging import get_logger
        logger = get_logger(__name__)

        logger.info("User created", user_id=user.id, email=mask_email(user.email))
        logger.error("Failed to delete user", user_id=user_id, exc_info=True)
    """
    return logging.getLogger(name)  # type: ignore


def mask_email(email: str | None) -> str:
    """Mask an email for logs: "user@example.com" becomes "us***@example.com"."""
    if not email:
        return "<no-email>"
    local, at, domain = email.partition("@")
    if not at or not local:
        return "***@invalid"
    return f"{local[:2]}***@{domain}"


rest_api_logger = get_logger("starter_api")
cli_logger = get_logger("starter_api.cli")
