"""
Log Levels and Record Taxonomy
==============================

Bounded Context: Record Classification

This module defines the enumerations stamped on every record.

Design:
- LogLevel keeps the backend-native numbering (-1..5, 3 unused)
- AlertLevel is orthogonal to severity; it drives alert routing downstream
- LogType tags which facade method produced the record

Example Log Query (CloudWatch Insights):
    fields @timestamp, message, data.tracing.trace_id
    | filter log_type = "handler.http" and alert = 1
"""

from enum import Enum, IntEnum
from typing import Union


class LogLevel(IntEnum):
    """
    Ordered record severity.

    The numbering matches the backend's native levels, so the gap at 3
    must stay.
    """

    DEBUG = -1
    INFO = 0
    WARN = 1
    ERROR = 2
    PANIC = 4
    FATAL = 5

    @property
    def label(self) -> str:
        """Lowercase name written to the ``level`` key."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: Union["LogLevel", int, str]) -> "LogLevel":
        """
        Coerce a level name, number or member to a LogLevel.

        Args:
            value: e.g. ``LogLevel.INFO``, ``0``, ``"info"``, ``"WARNING"``

        Returns:
            Matching LogLevel

        Raises:
            ValueError: If value names no level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid log level: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Invalid log level: {value!r}") from None
        if isinstance(value, str):
            name = value.strip().upper()
            name = _LEVEL_ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"Invalid log level: {value!r}") from None
        raise ValueError(f"Invalid log level: {value!r}")


_LEVEL_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}


class AlertLevel(IntEnum):
    """Alert routing flag carried on every record as a plain integer."""

    NONE = 0
    ALERT = 1


class LogType(str, Enum):
    """
    Value of the ``log_type`` field.

    Categories:
    - application: leveled calls (info, error, ...)
    - handler.*: transaction records from request handlers
    - event: business events
    """

    APPLICATION = "application"
    HTTP = "handler.http"
    KAFKA = "handler.kafka"
    EVENT = "event"
