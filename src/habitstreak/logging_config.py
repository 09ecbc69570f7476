"""Logging setup for the app and the CLI.

Three handlers hang off the ``habitstreak`` logger: a console stream, a
rotating JSON file under ``<DATA_DIR>/logs`` and an in-memory session buffer
written out when the process exits. Store code logs with
``extra={"event": ...}``; the JSON output lifts that event name to the top
level so log files can be filtered by it.
"""

from __future__ import annotations

import atexit
import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import BaseConfig

ROOT_LOGGER_NAME = "habitstreak"

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


class _SessionLog:
    """Lines logged during this process, written to one file at exit."""

    def __init__(self) -> None:
        self.started = datetime.now()
        self.lines: list[str] = []
        self.path: Optional[Path] = None
        self._registered = False

    def attach(self, logs_dir: Path) -> None:
        self.path = logs_dir / self.started.strftime("session_%Y%m%d_%H%M%S.log")
        if not self._registered:
            atexit.register(self.flush)
            self._registered = True

    def flush(self) -> None:  # pragma: no cover - runs at interpreter exit
        if not self.lines or self.path is None:
            return
        header = [
            "# HabitStreak session log",
            f"# Started: {self.started.isoformat()}",
            f"# Entries: {len(self.lines)}",
            "",
        ]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("\n".join(header + self.lines) + "\n", encoding="utf-8")
        except OSError as exc:
            sys.stderr.write(f"Failed to flush session log: {exc}\n")


_session = _SessionLog()


class SessionBufferHandler(logging.Handler):
    """Collects formatted records into the process-wide session log."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            _session.lines.append(self.format(record))
        except Exception:  # pragma: no cover
            self.handleError(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the ``event`` extra promoted."""

    # Attributes every LogRecord has; anything else came in through ``extra``
    _RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
        "message",
        "asctime",
    }

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
            "message": record.getMessage(),
        }

        extra = {k: v for k, v in vars(record).items() if k not in self._RECORD_ATTRS}
        event = extra.pop("event", None)
        if event is not None:
            entry["event"] = event
        if extra:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


def _console_formatter(dev_mode: bool) -> logging.Formatter:
    if dev_mode:
        return logging.Formatter(
            "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
            datefmt="%H:%M:%S",
        )
    return logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(config: BaseConfig, *, console_level: Optional[int] = None) -> logging.Logger:
    """Attach console, JSON file and session handlers to the app logger.

    Safe to call more than once; earlier handlers are closed and replaced.

    Args:
        config: Provides DATA_DIR, DEV_MODE and LOG_FILENAME
        console_level: Override for the console threshold (INFO in dev mode,
            WARNING otherwise)

    Returns:
        The ``habitstreak`` logger
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(logging.INFO)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console_formatter = _console_formatter(config.DEV_MODE)

    console = logging.StreamHandler()
    if console_level is None:
        console_level = logging.INFO if config.DEV_MODE else logging.WARNING
    console.setLevel(console_level)
    console.setFormatter(console_formatter)

    log_file = logs_dir / config.LOG_FILENAME
    json_file = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
    )
    json_file.setLevel(logging.INFO)
    json_file.setFormatter(JSONFormatter())

    session = SessionBufferHandler(level=logging.DEBUG)
    session.setFormatter(console_formatter)

    for handler in (console, json_file, session):
        app_logger.addHandler(handler)
    _session.attach(logs_dir)

    app_logger.info(
        "Logging initialized",
        extra={"event": "logging_ready", "dev_mode": config.DEV_MODE, "log_file": str(log_file)},
    )
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Return ``name`` as a child of the app logger (``__name__`` is fine)."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def session_log_path() -> Path | None:
    """Where the session buffer will be written at exit, once logging is set up."""
    return _session.path
