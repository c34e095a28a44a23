"""JSON logging tagged with the skill request being served.

Every record carries the request id, caller, request type and intent of the
envelope in flight, so a single dispatch can be followed across handler,
storage and HTTP logs.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping, Optional

from pythonjsonlogger import jsonlogger

from principles_skill.core.config import settings

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from principles_skill.core.models import RequestEnvelope

REQUEST_FIELDS = ("request_id", "user_id", "request_type", "intent")
UNBOUND = "-"

_request_context: ContextVar[Mapping[str, str]] = ContextVar(
    "skill_request_context", default=MappingProxyType({})
)

LOG_LEVEL = getattr(logging, settings.PRINCIPLES_LOG_LEVEL.upper(), logging.INFO)
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _resolve_logs_dir() -> Optional[Path]:
    """Return the configured logs directory, else ``DATA_DIR/logs``.

    ``None`` means the directory cannot be created and only stdout is used.
    """
    logs_dir = settings.PRINCIPLES_LOG_DIR or Path(settings.DATA_DIR) / "logs"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return logs_dir


LOGS_DIR = _resolve_logs_dir()
LOG_FILE_PATH = LOGS_DIR / "principles_skill.log" if LOGS_DIR is not None else None


def get_log_context() -> Mapping[str, str]:
    """Return the request fields bound for the current task."""
    return _request_context.get()


@contextmanager
def log_context(**fields: Optional[str]) -> Iterator[None]:
    """Bind request fields for records emitted inside the block.

    Nested blocks extend the outer binding; empty values leave it unchanged.
    """
    unknown = set(fields) - set(REQUEST_FIELDS)
    if unknown:
        raise TypeError(f"unknown log context fields: {sorted(unknown)}")
    merged = dict(_request_context.get())
    merged.update({name: value for name, value in fields.items() if value})
    token = _request_context.set(MappingProxyType(merged))
    try:
        yield
    finally:
        _request_context.reset(token)


def request_log_context(envelope: "RequestEnvelope"):
    """Bind the identifying fields of ``envelope`` for the duration of a dispatch."""
    return log_context(
        request_id=envelope.request_id,
        user_id=envelope.user_id,
        request_type=envelope.request_type,
        intent=envelope.intent_name,
    )


class RequestContextFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Copy the bound request fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        bound = _request_context.get()
        for name in REQUEST_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, bound.get(name, UNBOUND))
        return True


def build_formatter() -> jsonlogger.JsonFormatter:
    fields = ["%(asctime)s", "%(levelname)s", "%(name)s", "%(message)s"]
    fields.extend(f"%({name})s" for name in REQUEST_FIELDS)
    return jsonlogger.JsonFormatter(
        " ".join(fields),
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        static_fields={"schema_version": settings.PRINCIPLES_LOG_SCHEMA_VERSION},
        datefmt="%Y-%m-%d %H:%M:%S",
        json_ensure_ascii=False,
    )


def _ensure_handlers(logger: logging.Logger) -> None:
    if logger.handlers:
        return

    formatter = build_formatter()
    context_filter = RequestContextFilter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if LOG_FILE_PATH is not None:
        handlers.append(
            RotatingFileHandler(
                LOG_FILE_PATH,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.addFilter(context_filter)
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger that writes request-tagged JSON."""
    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)
    _ensure_handlers(logger)
    return logger


__all__ = [
    "LOG_FILE_PATH",
    "REQUEST_FIELDS",
    "RequestContextFilter",
    "build_formatter",
    "get_log_context",
    "get_logger",
    "log_context",
    "request_log_context",
]
