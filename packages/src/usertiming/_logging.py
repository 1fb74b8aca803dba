"""JSON-lines log formatter and logging configuration.

:class:`JsonFormatter` writes one JSON object per record.  Records
logged with an ``entry`` extra holding a
:class:`~usertiming._entry.PerformanceMeasure` carry its wire
projection under ``"entry"``, so resolved measurements can be shipped
to a log aggregator without a separate transport::

    {"timestamp": "...", "level": "DEBUG", "logger": "usertiming._resolver",
     "message": "Resolved measure 'load': ...", "service": "usertiming",
     "entry": {"name": "load", "entryType": "measure", ...}}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Any

from usertiming._entry import PerformanceMeasure
from usertiming._settings import LoggingSettings

_MEGABYTE = 1024 * 1024

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects (NDJSON).

    Fields: ``timestamp`` (UTC, ISO 8601), ``level``, ``logger``,
    ``message``, ``service``; plus ``entry`` for measurement records
    and ``exception`` when a traceback is attached.

    Args:
        service: Name included in every log line.
    """

    def __init__(self, *, service: str = "usertiming") -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self._service,
        }

        entry = getattr(record, "entry", None)
        if isinstance(entry, PerformanceMeasure):
            payload["entry"] = entry.to_dict()

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(
    settings: LoggingSettings,
    *,
    service: str = "usertiming",
) -> None:
    """Install handlers on the root logger according to *settings*.

    Existing root handlers are removed first.  A stderr handler is
    always installed; a :class:`RotatingFileHandler` is added when
    ``settings.file`` is set.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if settings.format == "json":
        formatter: logging.Formatter = JsonFormatter(service=service)
    else:
        formatter = logging.Formatter(_TEXT_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.file is not None:
        handlers.append(
            RotatingFileHandler(
                settings.file,
                maxBytes=settings.max_file_size_mb * _MEGABYTE,
                backupCount=settings.backup_count,
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(settings.level)
