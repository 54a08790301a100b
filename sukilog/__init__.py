"""
sukilog: Structured Logging Facade
==================================

Bounded Context: Observability

This package renders application logs, HTTP and Kafka transactions and
business events into one record shape for log aggregators.

Architecture:
- fields: call-site context (fields, options, tracing)
- schemas: HTTP, Kafka and event payloads
- composer: merges variadic context into the nested ``data`` payload
- sink: JSON encoding and emission over the logging module
- logger: SukiLogger facade and the process-wide default L()

Record shape:
    {
        "level": "info",
        "timestamp": "2025-10-24T15:30:45.123+00:00",
        "caller": "handlers/orders.py:57",
        "message": "order created",
        "app_name": "orders",
        "version": "2.3.1",
        "log_type": "application",
        "alert": 0,
        "data": {
            "tracing": {"trace_id": "4bf9...", "span_id": "00f0..."},
            "orders": {"order_id": 42}
        }
    }

Public API
----------
Facade:
    SukiLogger, L, default_logger

Configuration:
    Config, new_production_config

Levels:
    LogLevel, AlertLevel, LogType

Context:
    LogField, LogOption, TraceInfo
    any_field, error_field, with_tracing, with_option

Payloads:
    ErrorInfo, with_error
    HTTPRequestInfo, HTTPResponseInfo, with_http_request, with_http_response
    KafkaMessage, KafkaResult, with_kafka_message, with_kafka_result
    EventAction, EventResult, EventLog, with_event

Errors:
    SukiLogError, SinkBuildError, PanicError

Example:
    >>> from sukilog import L, Config, LogLevel, any_field, with_tracing
    >>> L().configure(Config(log_level=LogLevel.INFO, app_name="orders"))
    >>> L().info("order created", with_tracing("4bf9", "00f0"), any_field("order_id", 42))
"""

import logging

# Version
__version__ = "1.0.0"

# Levels
from .levels import LogLevel, AlertLevel, LogType

# Context
from .fields import (
    LogField,
    LogOption,
    TraceInfo,
    any_field,
    error_field,
    with_tracing,
    with_option,
)

# Payloads
from .schemas import (
    ErrorInfo,
    with_error,
    HTTPRequestInfo,
    HTTPResponseInfo,
    with_http_request,
    with_http_response,
    KafkaMessage,
    KafkaResult,
    with_kafka_message,
    with_kafka_result,
    EventAction,
    EventResult,
    EventLog,
    with_event,
)

# Configuration
from .config import Config, new_production_config

# Errors
from .errors import SukiLogError, SinkBuildError, PanicError

# Facade
from .logger import SukiLogger, L, default_logger

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    '__version__',
    # Levels
    'LogLevel',
    'AlertLevel',
    'LogType',
    # Context
    'LogField',
    'LogOption',
    'TraceInfo',
    'any_field',
    'error_field',
    'with_tracing',
    'with_option',
    # Payloads
    'ErrorInfo',
    'with_error',
    'HTTPRequestInfo',
    'HTTPResponseInfo',
    'with_http_request',
    'with_http_response',
    'KafkaMessage',
    'KafkaResult',
    'with_kafka_message',
    'with_kafka_result',
    'EventAction',
    'EventResult',
    'EventLog',
    'with_event',
    # Configuration
    'Config',
    'new_production_config',
    # Errors
    'SukiLogError',
    'SinkBuildError',
    'PanicError',
    # Facade
    'SukiLogger',
    'L',
    'default_logger',
]
