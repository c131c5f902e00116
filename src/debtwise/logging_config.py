"""Structured logging for the debt calculators and planned-payment sync."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from .config import BaseConfig

ROOT_LOGGER_NAME = "debtwise"

# Keys grouped under "debt" in JSON output; anything else lands in "extra".
DEBT_CONTEXT_FIELDS = (
    "debt_id",
    "debt_name",
    "frequency",
    "as_of",
    "balance",
    "payment",
    "months_remaining",
    "planned_payment_id",
)

_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def debt_log_context(debt: Any, **fields: Any) -> dict[str, Any]:
    """Build the ``extra=`` mapping identifying *debt* in a log record."""

    context: dict[str, Any] = {
        "debt_id": getattr(debt, "id", None),
        "debt_name": getattr(debt, "name", None),
    }
    frequency = getattr(debt, "payment_frequency", None)
    if frequency is not None:
        context["frequency"] = getattr(frequency, "value", frequency)
    context.update(fields)
    return context


def _json_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, float):
        return round(value, 2)
    return value


class JSONFormatter(logging.Formatter):
    """One JSON object per record with debt context lifted into its own key."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        debt = {
            key: _json_value(record.__dict__[key])
            for key in DEBT_CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        }
        if debt:
            payload["debt"] = debt

        extra = {
            key: _json_value(value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and key not in DEBT_CONTEXT_FIELDS
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(payload, default=str)


class DebtContextFormatter(logging.Formatter):
    """Console formatter appending ``[debt=<id>]`` when a record carries one."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        debt_id = getattr(record, "debt_id", None)
        return f"{line} [debt={debt_id}]" if debt_id is not None else line


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and rotating JSON file handlers to the ``debtwise`` logger.

    The host application calls this once; library code only uses
    :func:`get_logger`. Calling it again replaces the previous handlers.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG if config.DEV_MODE else logging.INFO)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO if config.DEV_MODE else logging.WARNING)
    console.setFormatter(
        DebtContextFormatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", "%H:%M:%S")
    )
    logger.addHandler(console)

    log_file = Path(config.DATA_DIR) / "logs" / config.LOG_FILENAME
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG if config.DEV_MODE else logging.INFO)
    file_handler.setFormatter(JSONFormatter())
    logger.addHandler(file_handler)

    logger.info("Logging initialized", extra={"log_file": str(log_file)})
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``debtwise`` namespace."""

    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
