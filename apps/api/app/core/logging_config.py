"""Structured JSON logging configuration."""

import contextvars
import logging
import uuid

from pythonjsonlogger.json import JsonFormatter

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")
request_path_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_path", default="")

# Chatty driver loggers that drown out request logs at DEBUG
_QUIET_LOGGERS = ("pymongo", "motor")


class RequestContextFilter(logging.Filter):
    """Inject request_id and path into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")  # type: ignore[attr-defined]
        record.path = request_path_var.get("")  # type: ignore[attr-defined]
        return True


def setup_logging(*, debug: bool = False) -> None:
    """Configure root logger with JSON formatter and request context filter."""
    handler = logging.StreamHandler()
    formatter = JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s %(path)s",
        rename_fields={"asctime": "timestamp", "levelname": "level"},
    )
    handler.setFormatter(formatter)
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def generate_request_id() -> str:
    """Generate a new request ID."""
    return uuid.uuid4().hex[:16]
