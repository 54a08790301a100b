"""
Common Schema Types
==================

Bounded Context: Shared Payload Structures

Types and helpers shared by the HTTP, Kafka and event payloads.

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Totality: builders always return a value, never raise on data
- Serialization: to_dict() for JSON export, from_dict() to read back

Types:
- ErrorInfo: error name plus stack trace text
"""

from dataclasses import dataclass, asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ErrorInfo:
    """
    Error attached to a transaction outcome.

    Attributes:
        name: Error name or message
        stack_trace: Stack trace text

    Example:
        >>> ErrorInfo(name="timeout", stack_trace="...").to_dict()
        {'name': 'timeout', 'stack_trace': '...'}
    """
    name: str = ""
    stack_trace: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Serialize to JSON-compatible dict."""
        return {
            'name': self.name,
            'stack_trace': self.stack_trace,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, str]]) -> 'ErrorInfo':
        """Deserialize from dict. Missing keys default to empty."""
        if not data:
            return cls()
        return cls(
            name=str(data.get('name', '')),
            stack_trace=str(data.get('stack_trace', '')),
        )


def with_error(name: str, *stacktrace: str) -> ErrorInfo:
    """
    Build an ErrorInfo.

    With one extra argument it is the stack trace. With two or more the
    second one is used and the first is dropped. With none the stack
    trace is empty.
    """
    trace = ""

    if len(stacktrace) == 1:
        trace = stacktrace[0]
    elif len(stacktrace) > 1:
        trace = stacktrace[1]

    return ErrorInfo(name=name, stack_trace=trace)


def first_error(errors) -> ErrorInfo:
    """First ErrorInfo of a variadic tuple, or an empty one."""
    if len(errors) > 0:
        return errors[0]
    return ErrorInfo()


def string_map(value: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Copy of a header-like map, ``{}`` for None."""
    if value is None:
        return {}
    return dict(value)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """ISO 8601 text for a datetime, None passes through."""
    if value is None:
        return None
    return value.isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse ISO 8601 text written by format_timestamp().

    Raises:
        ValueError: If timestamp format invalid
    """
    if value is None or value == "":
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid ISO timestamp: {value}") from e


def json_default(obj: Any) -> Any:
    """
    ``default=`` hook for json.dumps.

    Handles payload objects (to_dict), dataclasses, enums and datetimes.

    Raises:
        TypeError: For anything else
    """
    if hasattr(obj, 'to_dict') and callable(obj.to_dict):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
