"""
Field Primitives
================

Bounded Context: Call-Site Context

Small immutable values callers pass as variadic context to the logger
facade. Each carries a ``kind`` tag so the composer can dispatch on it.

Types:
- LogField: one named value merged into the application payload
- LogOption: overrides the record's alert level
- TraceInfo: trace correlation triple

Example:
    >>> logger.info(
    ...     "order created",
    ...     with_tracing("trace-1", "span-1"),
    ...     any_field("order_id", 42),
    ...     with_option(LogOption(alert=AlertLevel.ALERT)),
    ... )
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from .levels import AlertLevel


class ContextKind(str, Enum):
    """Tag identifying a context item."""
    TRACE = "trace"
    OPTION = "option"
    FIELD = "field"


class ContextItem:
    """Base for values the composer recognizes in variadic args."""
    kind: ClassVar[ContextKind]


@dataclass(frozen=True)
class LogField(ContextItem):
    """
    A single named value.

    Attributes:
        key: Field name (not validated; empty and duplicate keys allowed)
        value: Any value. Exceptions are rendered as their message.
    """
    kind: ClassVar[ContextKind] = ContextKind.FIELD

    key: str
    value: Any


@dataclass(frozen=True)
class LogOption(ContextItem):
    """Per-call options. Only the alert level for now."""
    kind: ClassVar[ContextKind] = ContextKind.OPTION

    alert: AlertLevel = AlertLevel.NONE


@dataclass(frozen=True)
class TraceInfo(ContextItem):
    """
    Trace correlation for one logical request.

    Attributes:
        trace_id: Distributed trace identifier
        span_id: Span identifier within the trace
        request_id: Optional request identifier (default: "")
    """
    kind: ClassVar[ContextKind] = ContextKind.TRACE

    trace_id: str
    span_id: str
    request_id: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Serialize to JSON-compatible dict."""
        return {
            'trace_id': self.trace_id,
            'span_id': self.span_id,
            'request_id': self.request_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> 'TraceInfo':
        """Deserialize from dict.

        Raises:
            ValueError: If trace_id or span_id is missing
        """
        try:
            return cls(
                trace_id=str(data['trace_id']),
                span_id=str(data['span_id']),
                request_id=str(data.get('request_id', '')),
            )
        except KeyError as e:
            raise ValueError(f"Missing required TraceInfo field: {e}")


def any_field(key: str, value: Any) -> LogField:
    """Wrap any value under a key."""
    return LogField(key=key, value=value)


def error_field(err: Optional[BaseException]) -> LogField:
    """
    Field keyed ``"error"`` holding the exception message.

    The exception object itself is never stored, so the backend never
    has to serialize it.
    """
    if err is not None:
        return any_field("error", str(err))
    return any_field("error", "")


def with_tracing(trace_id: str, span_id: str, *request_id: str) -> TraceInfo:
    """
    Build a TraceInfo. Only the first extra argument is used as the
    request id; the rest are ignored.
    """
    req_id = ""
    if len(request_id) > 0:
        req_id = request_id[0]

    return TraceInfo(trace_id=trace_id, span_id=span_id, request_id=req_id)


def with_option(opts: LogOption) -> LogOption:
    return opts
