"""Structured logging utilities for the Okta group member export tool.

All loggers live under the ``groupexport`` namespace. Console output goes to
stderr so it never mixes with the checklist on stdout, and a log file (when
configured) always receives JSON lines.
"""

import json
import logging
import os
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "groupexport"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Extra fields copied from log records into structured output, with the
# short labels DetailedFormatter uses for them.
CONTEXT_FIELDS: dict[str, str] = {
    "operation": "op",
    "group_id": "group",
    "api_endpoint": "endpoint",
    "status_code": "status",
    "page": "page",
    "row_count": "rows",
    "file_path": "file",
    "duration": "duration",
}

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
COLOR_RESET = "\033[0m"


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)
    }


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name on a TTY."""

    def __init__(self, *args: Any, disable_colors: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.disable_colors = disable_colors

    def _use_colors(self) -> bool:
        return not self.disable_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self._use_colors():
            return super().format(record)

        # Color a copy; other handlers share this record.
        colored = logging.makeLogRecord(record.__dict__)
        color = LEVEL_COLORS.get(record.levelname, "")
        colored.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(colored)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Render the record and its context fields as one JSON object."""
        entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(_record_context(record))
        return json.dumps(entry, default=str)


class DetailedFormatter(logging.Formatter):
    """Text formatter that appends context fields as ``[key=value, ...]``."""

    def format(self, record: logging.LogRecord) -> str:
        base_msg = super().format(record)
        context = _record_context(record)
        if not context:
            return base_msg

        parts = []
        for name, value in context.items():
            if name == "duration":
                value = f"{value:.3f}s"
            parts.append(f"{CONTEXT_FIELDS[name]}={value}")
        return f"{base_msg} [{', '.join(parts)}]"


def _console_formatter(
    log_format: str, structured: bool, disable_colors: bool
) -> logging.Formatter:
    if structured or log_format == "json":
        return StructuredFormatter()
    if log_format == "detailed":
        return DetailedFormatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT)
    return ColoredFormatter(
        fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT, disable_colors=disable_colors
    )


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    structured: bool = False,
    log_format: str = "console",
    disable_colors: bool = False,
) -> logging.Logger:
    """Configure the ``groupexport`` logger.

    Args:
        level: Log level name; unknown names fall back to WARNING
        log_file: Optional path that receives JSON lines
        structured: Force JSON output on the console
        log_format: Console format (console, json, detailed)
        disable_colors: Never color the level name

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.WARNING)
    if not isinstance(log_level, int):
        log_level = logging.WARNING
    logger.setLevel(log_level)

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_console_formatter(log_format, structured, disable_colors))
    handlers.append(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(log_level)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``groupexport`` namespace.

    Args:
        name: Logger name (typically __name__)
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() == "true"


def configure_from_env() -> logging.Logger:
    """Configure logging from environment variables.

    Environment variables:
        GROUPEXPORT_LOG_LEVEL: Log level (default: WARNING)
        GROUPEXPORT_LOG_FILE: Log file path (optional)
        GROUPEXPORT_LOG_STRUCTURED: Use structured logging (default: false)
        GROUPEXPORT_LOG_FORMAT: Log format (console, json, detailed) (default: console)
        GROUPEXPORT_LOG_DISABLE_COLORS: Disable colored output (default: false)
    """
    return setup_logging(
        level=os.getenv("GROUPEXPORT_LOG_LEVEL", "WARNING"),
        log_file=os.getenv("GROUPEXPORT_LOG_FILE") or None,
        structured=_env_flag("GROUPEXPORT_LOG_STRUCTURED"),
        log_format=os.getenv("GROUPEXPORT_LOG_FORMAT", "console"),
        disable_colors=_env_flag("GROUPEXPORT_LOG_DISABLE_COLORS"),
    )


def init_default_logging() -> None:
    """Configure from the environment unless handlers are already installed."""
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_from_env()


init_default_logging()
