"""Logging setup for the payment instruction service."""

import json
import logging
import sys
from typing import Any

from app.utils.config import settings
from app.utils.time import utcnow


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def configure_logging(level: str | None = None, format_type: str | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Falls back to ``settings.log_level`` / ``settings.log_format`` when the
    arguments are omitted. Safe to call more than once; previous handlers
    are replaced.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    if (format_type or settings.log_format) == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("app").setLevel(log_level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
