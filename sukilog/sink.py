"""
Structured JSON Sink
====================

Bounded Context: Record Emission

This module provides the backend that encodes composed records as JSON
lines and writes them out.

Design:
- JSON output (compatible with log aggregators)
- Thread-safe (uses standard logging handlers and their locks)
- Fixed encoding: lowercase level, "message" and "timestamp" keys,
  ISO 8601 timestamps, caller of the facade reported as "caller"
- PANIC raises PanicError, FATAL flushes and exits the process

Architecture:
- Wraps a private logging.Logger (not registered globally)
- Record fields travel on the LogRecord as ``extra``
- JSONFormatter renders the final line

Example:
    >>> sink = build_sink(LogLevel.INFO, output=sys.stdout)
    >>> sink.write(LogLevel.INFO, "started", [("app_name", "orders")])

Output:
    {"level": "info", "timestamp": "2025-10-24T15:30:45.123+00:00",
     "caller": "main.py:12", "message": "started", "app_name": "orders"}
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, IO, Iterable, Optional, Tuple, Union

from .errors import PanicError, SinkBuildError
from .levels import LogLevel
from .schemas.common import json_default

Output = Union[None, str, Path, IO[str]]

# Backend levels; PANIC sits between ERROR and CRITICAL
STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.PANIC: logging.ERROR + 5,
    LogLevel.FATAL: logging.CRITICAL,
}

FATAL_EXIT_CODE = 1


class StructuredSink:
    """
    Leveled structured-record sink.

    Attributes:
        level: Minimum level written
        caller_skip: Extra frames between the sink and the reported caller
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging handlers.
    """

    def __init__(
        self,
        level: LogLevel,
        handler: logging.Handler,
        caller_skip: int = 0,
        owns_handler: bool = False
    ):
        """
        Initialize sink around a configured handler.

        Args:
            level: Minimum level written
            handler: Destination handler; its formatter is replaced
            caller_skip: Frames above write() to skip when reporting caller
            owns_handler: Close the handler (and its file) on close()
        """
        self.level = level
        self.caller_skip = caller_skip
        self._owns_handler = owns_handler

        handler.setFormatter(JSONFormatter())
        self.logger = logging.Logger("sukilog.sink", STDLIB_LEVELS[level])
        self.logger.propagate = False
        self.logger.addHandler(handler)

    def enabled(self, level: LogLevel) -> bool:
        """True if records at level are written."""
        return level >= self.level

    def write(
        self,
        level: LogLevel,
        message: str,
        fields: Iterable[Tuple[str, Any]]
    ) -> None:
        """
        Emit one record.

        Args:
            level: Record severity
            message: Human-readable message
            fields: Ordered (key, value) pairs written after the message

        Raises:
            PanicError: After emission at PANIC level
            SystemExit: After emission at FATAL level
        """
        if self.enabled(level):
            self.logger.log(
                STDLIB_LEVELS[level],
                message,
                extra={'suki_level': level, 'suki_fields': list(fields)},
                stack_info=level >= LogLevel.ERROR,
                stacklevel=2 + self.caller_skip,
            )

        if level == LogLevel.PANIC:
            raise PanicError(message)
        if level == LogLevel.FATAL:
            self.sync()
            sys.exit(FATAL_EXIT_CODE)

    def sync(self) -> None:
        """Flush buffered output."""
        for handler in self.logger.handlers:
            handler.flush()

    def close(self) -> None:
        """Flush and detach the handler; close it if the sink opened it."""
        for handler in list(self.logger.handlers):
            handler.flush()
            self.logger.removeHandler(handler)
            if self._owns_handler:
                handler.close()

        # Keeps logging's last-resort stderr handler out of a closed sink
        self.logger.addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """
    Formatter that renders a sink record as one JSON line.

    Key order: level, timestamp, caller, message, the record fields,
    then stacktrace for ERROR and above.
    """

    def format(self, record: logging.LogRecord) -> str:
        level = getattr(record, 'suki_level', None)
        entry = {
            'level': level.label if level is not None else record.levelname.lower(),
            'timestamp': self.formatTime(record),
            'caller': f"{record.filename}:{record.lineno}",
            'message': record.getMessage(),
        }

        for key, value in getattr(record, 'suki_fields', ()):
            entry[key] = value

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        if record.stack_info:
            entry['stacktrace'] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=_encode_default)

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        """ISO 8601 with millisecond precision and local UTC offset."""
        created = datetime.fromtimestamp(record.created).astimezone()
        return created.isoformat(timespec='milliseconds')


def _encode_default(obj: Any) -> Any:
    # Field values are arbitrary; never fail the write over one
    try:
        return json_default(obj)
    except TypeError:
        return str(obj)


def _build_handler(output: Output) -> Tuple[logging.Handler, bool]:
    if output is None or output == "stderr":
        return logging.StreamHandler(sys.stderr), False
    if output == "stdout":
        return logging.StreamHandler(sys.stdout), False
    if isinstance(output, (str, Path)):
        try:
            return logging.FileHandler(output, encoding="utf-8"), True
        except OSError as e:
            raise SinkBuildError(f"Cannot open log output {output}: {e}") from e
    if not callable(getattr(output, 'write', None)):
        raise SinkBuildError(
            f"Log output must be a path or a writable stream, got {type(output).__name__}"
        )
    return logging.StreamHandler(output), False


def build_sink(
    level: Union[LogLevel, int, str],
    output: Output = None,
    caller_skip: int = 0
) -> StructuredSink:
    """
    Build a sink with the fixed encoding conventions.

    Args:
        level: Minimum level (LogLevel, number or name)
        output: None/"stderr", "stdout", a file path, or a writable stream
        caller_skip: Frames between write() and the frame to report

    Returns:
        Configured StructuredSink

    Raises:
        SinkBuildError: If the level is invalid or the output cannot be used

    Example:
        >>> sink = build_sink("debug", output="/var/log/orders.jsonl")
    """
    try:
        min_level = LogLevel.parse(level)
    except ValueError as e:
        raise SinkBuildError(str(e)) from e

    handler, owns_handler = _build_handler(output)
    return StructuredSink(
        level=min_level,
        handler=handler,
        caller_skip=caller_skip,
        owns_handler=owns_handler,
    )
