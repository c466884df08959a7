# avvikelser/core/logging_config.py
"""
Loggning för exportkontrollen och semesteravdraget.

Produktion: JSON-rader till roterande filer (app.log och error.log) och
varningar till stdout. Utveckling: färgad konsol.

Kärnan loggar vilken avvikelse, anställd eller ledighetsansökan en rad gäller
via ``extra=`` (deviation_id, employee_id, leave_request_id). Vilken exportbatch
raden hör till sätts med LogContext runt en hel validering.
"""

import json
import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Final


#: Record-attribut som sätts med ``extra=`` av kärnan och skrivs ut när de finns.
RECORD_FIELDS: Final[tuple[str, ...]] = ("employee_id", "deviation_id", "leave_request_id")

#: Record-attribut som bär fälten från LogContext.
CONTEXT_ATTR: Final[str] = "log_context"

APP_LOG_NAME: Final[str] = "app.log"
ERROR_LOG_NAME: Final[str] = "error.log"
APP_LOG_MAX_BYTES: Final[int] = 10_000_000
APP_LOG_BACKUPS: Final[int] = 5
ERROR_LOG_MAX_BYTES: Final[int] = 10_000_000
ERROR_LOG_BACKUPS: Final[int] = 10

_log_context: ContextVar[dict] = ContextVar("avvikelser_log_context", default={})
_base_factory = None


def is_production() -> bool:
    return os.getenv("PRODUCTION", "false").lower() == "true"


def default_log_dir() -> Path:
    return Path(os.getenv("LOG_DIR", "logs"))


def record_fields(record: logging.LogRecord) -> dict:
    """Kontext- och extra-fält på en record, kontexten först."""
    fields = dict(getattr(record, CONTEXT_ATTR, None) or {})
    for name in RECORD_FIELDS:
        if hasattr(record, name):
            fields[name] = getattr(record, name)
    return fields


class JSONFormatter(logging.Formatter):
    """En JSON-rad per logghändelse, för loggaggregering."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        log_data.update(record_fields(record))

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """
    Färgad konsol för utveckling. Kontextfälten skrivs sist på raden,
    till exempel ``[export_batch=2025-07 deviation_id=12]``.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Kopia så att andra handlers ser nivån utan färgkoder
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
            )
        line = super().format(record)
        fields = record_fields(record)
        if fields:
            line += " [" + " ".join(f"{k}={v}" for k, v in fields.items()) + "]"
        return line


def _rotating_json_handler(path: Path, level: int, max_bytes: int, backups: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_bytes,
        backupCount=backups,
        encoding='utf-8',
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(production: bool | None = None, log_dir: Path | None = None) -> None:
    """
    Konfigurerar rotloggern för en process som använder kärnan
    (exportjobb, API-worker).

    Args:
        production: JSON till filer om True, färgad konsol om False.
            None läser miljövariabeln PRODUCTION.
        log_dir: Katalog för app.log och error.log i produktion.
            None läser LOG_DIR (default "logs").
    """
    if production is None:
        production = is_production()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if production else logging.DEBUG)
    root_logger.handlers.clear()

    if production:
        log_dir = Path(log_dir) if log_dir is not None else default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        root_logger.addHandler(
            _rotating_json_handler(log_dir / APP_LOG_NAME, logging.INFO, APP_LOG_MAX_BYTES, APP_LOG_BACKUPS)
        )
        root_logger.addHandler(
            _rotating_json_handler(log_dir / ERROR_LOG_NAME, logging.ERROR, ERROR_LOG_MAX_BYTES, ERROR_LOG_BACKUPS)
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(console_handler)
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(ColoredFormatter(
            fmt='%(levelname)-8s %(asctime)s [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging configured (production=%s)",
        production,
        extra={"extra_fields": {"log_dir": str(log_dir) if log_dir else None, "production": production}},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(name)


def _context_record_factory(*args, **kwargs) -> logging.LogRecord:
    record = _base_factory(*args, **kwargs)
    context = _log_context.get()
    if context:
        setattr(record, CONTEXT_ATTR, dict(context))
    return record


def _install_record_factory() -> None:
    global _base_factory
    if _base_factory is None:
        _base_factory = logging.getLogRecordFactory()
        logging.setLogRecordFactory(_context_record_factory)


class LogContext:
    """
    Lägger till fält på alla loggrader inom blocket.

    Fälten hålls i en ContextVar, så samtidiga valideringar i olika trådar
    eller tasks får var sin kontext. Nästlade block ärver och kan skriva över
    yttre fält.

    Usage:
        with LogContext(export_batch="2025-07"):
            result = validate(deviations, employees, time_codes)
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self._token = None

    def __enter__(self):
        _install_record_factory()
        self._token = _log_context.set({**_log_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)
