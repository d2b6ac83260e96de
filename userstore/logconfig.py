"""Root logging setup, driven by ``Settings.log_level`` and ``Settings.log_json``."""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict

from .config import Settings

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with ``extra=`` fields as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)
        return json.dumps(payload, default=str)


def configure_logging(settings: Settings) -> None:
    level = settings.log_level.upper()
    formatter: Dict[str, Any] = (
        {"()": JsonFormatter}
        if settings.log_json
        else {"format": CONSOLE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"}
    )

    # module loggers exist before this runs, so they must stay enabled
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": formatter},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                }
            },
            "root": {"handlers": ["default"], "level": level},
        }
    )
