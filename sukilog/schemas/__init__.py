"""
sukilog Schemas
===============

Bounded Context: Domain Payloads

Immutable, typed payloads for transaction and event records, and the
``with_*`` builders that normalize raw handler inputs into them.

Design:
- Frozen dataclasses (immutability)
- Builders are total: missing maps become {}, missing errors become
  an empty ErrorInfo, unserializable event data becomes ""
- to_dict() for JSON serialization, from_dict() for reading back

Public API
----------
Common Types:
    ErrorInfo, with_error

HTTP Types:
    HTTPRequestInfo, HTTPResponseInfo
    with_http_request, with_http_response

Kafka Types:
    KafkaMessage, KafkaResult
    with_kafka_message, with_kafka_result

Event Types:
    EventAction, EventResult, EventLog, with_event

Example:
    >>> from sukilog.schemas import with_http_request, with_http_response, with_error
    >>> req = with_http_request("POST", "/orders", "10.0.0.1", None, None, None, "{}")
    >>> resp = with_http_response(500, 12.5, "", with_error("db down", "trace..."))
"""

from .common import ErrorInfo, with_error
from .http import (
    HTTPRequestInfo,
    HTTPResponseInfo,
    with_http_request,
    with_http_response,
)
from .kafka import (
    KafkaMessage,
    KafkaResult,
    with_kafka_message,
    with_kafka_result,
)
from .event import (
    EventAction,
    EventResult,
    EventLog,
    serialize_event_data,
    with_event,
)

__all__ = [
    # Common types
    'ErrorInfo',
    'with_error',
    # HTTP types
    'HTTPRequestInfo',
    'HTTPResponseInfo',
    'with_http_request',
    'with_http_response',
    # Kafka types
    'KafkaMessage',
    'KafkaResult',
    'with_kafka_message',
    'with_kafka_result',
    # Event types
    'EventAction',
    'EventResult',
    'EventLog',
    'serialize_event_data',
    'with_event',
]
