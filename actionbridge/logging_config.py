"""Logging for actionbridge.

Every module logs through ``get_logger``. When ``log_handler`` is enabled the
``actionbridge`` package logger gets a JSON handler whose records group the
action event fields under a single ``event`` object. Action inputs and
results are never logged.
"""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from pythonjsonlogger import jsonlogger

from .config import Settings, get_settings

PACKAGE_LOGGER = "actionbridge"
HANDLER_NAME = "actionbridge.json"

# Extra fields attached by log_invocation, nested under "event"
EVENT_FIELDS = ("action", "arity", "duration_ms", "return_type")

_configured = False


class ActionEventFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with action events folded into one object.

    A success record renders as::

        {"message": "Action invocation succeeded", "logger": "...",
         "time": "...", "level": "INFO",
         "event": {"name": "action_success", "action": "getWeather",
                   "arity": "unary", "duration_ms": 3, "return_type": "dict"}}
    """

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["logger"] = log_record.pop("name", record.name)
        log_record["time"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record["level"] = record.levelname

        event = getattr(record, "event", None)
        if event is not None:
            fields = {k: log_record.pop(k) for k in EVENT_FIELDS if k in log_record}
            log_record["event"] = {"name": event, **fields}


def configure_logging(settings: Optional[Settings] = None) -> Optional[logging.Handler]:
    """(Re)attach the JSON handler to the package logger.

    Any handler installed by an earlier call is removed first, so this can be
    called again after settings change.

    Args:
        settings: Optional settings override

    Returns:
        The installed handler, or None when ``log_handler`` is off
    """
    settings = settings or get_settings()
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            package_logger.removeHandler(handler)

    if not settings.log_handler:
        return None

    handler = logging.StreamHandler(sys.stderr if settings.log_to_stderr else sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(ActionEventFormatter("%(message)s %(name)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.log_level.upper())
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger, configuring the package logger on first use."""
    global _configured
    if not _configured:
        _configured = True
        configure_logging()
    return logging.getLogger(name)


@contextmanager
def log_invocation(
    logger: logging.Logger,
    action_name: str,
    **context: Any,
) -> Iterator[Dict[str, Any]]:
    """Log the start and successful end of one handler invocation.

    Yields a dict the caller can fill with extra fields for the success
    record. If the body raises, nothing further is logged and the exception
    propagates.
    """
    logger.info(
        "Action invocation started",
        extra={"event": "action_start", "action": action_name, **context},
    )
    started = time.perf_counter()
    outcome: Dict[str, Any] = {}

    yield outcome

    logger.info(
        "Action invocation succeeded",
        extra={
            "event": "action_success",
            "action": action_name,
            "duration_ms": int((time.perf_counter() - started) * 1000),
            **context,
            **outcome,
        },
    )
