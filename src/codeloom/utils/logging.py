"""Standardized logging for Codeloom.

The library only creates loggers under the "codeloom" namespace; handlers
are installed by applications (the CLI calls configure_from_cli). Output
goes to stderr by default because stdout carries generated text.

Three output modes:
- Human mode: [LEVEL] message (colored if TTY)
- Verbose mode: [LEVEL][HH:MM:SS] message
- CI/JSON mode: {"level":"...","ts":"...","msg":"..."}
"""

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

from rich.style import Style


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    VERBOSE = "verbose"
    JSON = "json"


LEVEL_STYLES = {
    logging.DEBUG: Style(color="bright_black"),
    logging.INFO: Style(color="green"),
    logging.WARNING: Style(color="yellow"),
    logging.ERROR: Style(color="red"),
    logging.CRITICAL: Style(color="red", bold=True),
}


def _is_tty(stream: TextIO | None = None) -> bool:
    """Check if the stream is a TTY (supports colors)."""
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class HumanFormatter(logging.Formatter):
    """Formatter for human-readable output.

    Format: [LEVEL] message, with the level tag colored on a TTY.
    """

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize human formatter.

        Args:
            use_colors: Whether to color the level tag
        """
        super().__init__()
        self.use_colors = use_colors

    def level_tag(self, record: logging.LogRecord) -> str:
        """Return the [LEVEL] tag, colored when enabled."""
        tag = f"[{record.levelname}]"
        if not self.use_colors:
            return tag
        return LEVEL_STYLES.get(record.levelno, Style.null()).render(tag)

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        return f"{self.level_tag(record)} {record.getMessage()}"


class VerboseFormatter(HumanFormatter):
    """Formatter for verbose output with timestamps.

    Format: [LEVEL][HH:MM:SS] message
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with timestamp."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"{self.level_tag(record)}[{timestamp}] {record.getMessage()}"


class JSONFormatter(logging.Formatter):
    """Formatter for JSON lines output (machine-readable).

    Format: {"level":"INFO","ts":"2026-01-31T19:45:23+00:00","msg":"..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "msg": record.getMessage(),
        }

        if hasattr(record, "extra_data"):
            log_entry.update(record.extra_data)

        return json.dumps(log_entry)


class CodeloomLogger(logging.Logger):
    """Logger with structured logging support."""

    def structured(self, level: int, msg: str, **kwargs: Any) -> None:
        """Log `msg` with keyword data attached.

        The keyword data becomes extra fields of the JSON line in CI mode and
        is not shown by the human formatters.
        """
        if not self.isEnabledFor(level):
            return
        self.log(level, msg, extra={"extra_data": kwargs} if kwargs else None)


logging.setLoggerClass(CodeloomLogger)


def get_logger(name: str = "codeloom") -> CodeloomLogger:
    """Return a logger under the codeloom namespace with structured() support."""
    return logging.getLogger(name)  # type: ignore


def _make_formatter(mode: LogMode, use_colors: bool) -> logging.Formatter:
    """Return the formatter for an output mode."""
    if mode is LogMode.JSON:
        return JSONFormatter()
    formatter_class = VerboseFormatter if mode is LogMode.VERBOSE else HumanFormatter
    return formatter_class(use_colors=use_colors)


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Install a single handler on the "codeloom" logger.

    Calling this again replaces the previous handler. Records do not
    propagate to the root logger once a handler is installed.

    Args:
        mode: Output mode (human, verbose, json)
        level: Minimum log level
        stream: Output stream (default: stderr)
    """
    target = stream or sys.stderr
    handler = logging.StreamHandler(target)
    handler.setFormatter(_make_formatter(mode, _is_tty(target)))

    root = logging.getLogger("codeloom")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> None:
    """Configure logging from the global CLI flags.

    --ci selects JSON lines and wins over --verbose for the format;
    --quiet wins over --verbose for the level.

    Args:
        verbose: Timestamps and debug messages
        quiet: Warnings and errors only
        ci: JSON output for CI/CD
    """
    mode = LogMode.JSON if ci else LogMode.VERBOSE if verbose else LogMode.HUMAN
    level = logging.WARNING if quiet else logging.DEBUG if verbose else logging.INFO
    setup_logging(mode=mode, level=level)
