"""
SukiLogger Facade
=================

Bounded Context: Logging API

The logger applications hold. Each method is a one-shot emission: the
composer builds the record, the sink writes it.

Methods:
- debug/info/warn/error/panic/fatal: application records at that level
- request_http/request_kafka/event: transaction records, always INFO
- configure: rebuild the sink from a Config

Process-wide default:
    L() returns a shared instance, built on first use with level FATAL
    so an unconfigured process stays nearly silent. Configure it once at
    startup, before threads start logging:

    >>> from sukilog import L, Config
    >>> L().configure(Config(app_name="orders", version="2.3.1"))
    >>> L().info("order created", any_field("order_id", 42))

Thread Safety:
    Emission is safe from any thread (the sink's handlers lock). First
    access to L() is guarded by a lock. configure() is not synchronized
    with in-flight emissions.
"""

import threading
from dataclasses import replace
from typing import Any, Optional

from .composer import (
    Record,
    compose_application,
    compose_event,
    compose_http,
    compose_kafka,
)
from .config import Config, new_production_config
from .levels import LogLevel
from .schemas import (
    EventLog,
    HTTPRequestInfo,
    HTTPResponseInfo,
    KafkaMessage,
    KafkaResult,
)
from .sink import Output, StructuredSink, build_sink

# Frames between StructuredSink.write and the caller: _emit and the public method
CALLER_SKIP = 2


class SukiLogger:
    """
    Structured logger facade.

    Attributes:
        config: Active configuration (app identity, limits)

    Example:
        >>> logger = SukiLogger(Config(app_name="orders", log_level=LogLevel.DEBUG))
        >>> logger.debug("cache miss", any_field("key", "order:1"))
        >>> logger.request_http("handled", request, response,
        ...                     with_tracing(trace_id, span_id))
    """

    def __init__(self, config: Optional[Config] = None, output: Output = None):
        """
        Initialize logger.

        Args:
            config: Logger configuration (default: new_production_config())
            output: Sink destination (default: stderr)

        Raises:
            SinkBuildError: If the sink cannot be built
        """
        self.config = config if config is not None else new_production_config()
        self._sink: StructuredSink = build_sink(
            self.config.log_level, output=output, caller_skip=CALLER_SKIP
        )

    @property
    def sink(self) -> StructuredSink:
        return self._sink

    def configure(self, config: Config, output: Output = None) -> None:
        """
        Replace the sink and configuration.

        The new sink is built first; if that fails the logger keeps its
        current state. The previous sink is flushed and closed.

        Args:
            config: New configuration
            output: Sink destination (default: stderr)

        Raises:
            SinkBuildError: If the sink cannot be built
        """
        sink = build_sink(config.log_level, output=output, caller_skip=CALLER_SKIP)

        previous = self._sink
        self._sink = sink
        self.config = config
        previous.close()

    def enabled(self, level: LogLevel) -> bool:
        return self._sink.enabled(level)

    def _emit(self, level: LogLevel, message: str, record: Record) -> None:
        self._sink.write(level, message, record.fields(self.config))

    def debug(self, message: str, *args: Any) -> None:
        self._emit(LogLevel.DEBUG, message, compose_application(self.config, args))

    def info(self, message: str, *args: Any) -> None:
        self._emit(LogLevel.INFO, message, compose_application(self.config, args))

    def warn(self, message: str, *args: Any) -> None:
        self._emit(LogLevel.WARN, message, compose_application(self.config, args))

    warning = warn

    def error(self, message: str, *args: Any) -> None:
        self._emit(LogLevel.ERROR, message, compose_application(self.config, args))

    def panic(self, message: str, *args: Any) -> None:
        """
        Log at PANIC level, then raise.

        Raises:
            PanicError: Always, even when PANIC is below the minimum level
        """
        self._emit(LogLevel.PANIC, message, compose_application(self.config, args))

    def fatal(self, message: str, *args: Any) -> None:
        """
        Log at FATAL level, flush, then exit the process with status 1.

        Raises:
            SystemExit: Always
        """
        self._emit(LogLevel.FATAL, message, compose_application(self.config, args))

    def request_http(
        self,
        message: str,
        request: HTTPRequestInfo,
        response: HTTPResponseInfo,
        *args: Any
    ) -> None:
        """
        Log an HTTP transaction at INFO.

        Request and response bodies over ``config.max_body_size`` bytes
        are replaced with "body is too large". Only tracing and options
        are read from args.
        """
        self._emit(LogLevel.INFO, message, compose_http(self.config, request, response, args))

    def request_kafka(
        self,
        message: str,
        kafka_message: KafkaMessage,
        kafka_result: KafkaResult,
        *args: Any
    ) -> None:
        """Log a broker transaction at INFO."""
        self._emit(LogLevel.INFO, message, compose_kafka(kafka_message, kafka_result, args))

    def event(self, message: str, event: EventLog, *args: Any) -> None:
        """Log a business event at INFO."""
        self._emit(LogLevel.INFO, message, compose_event(event, args))

    def sync(self) -> None:
        self._sink.sync()

    def close(self) -> None:
        self._sink.close()


_default_logger: Optional[SukiLogger] = None
_default_lock = threading.Lock()


def L() -> SukiLogger:
    """
    Process-wide default logger.

    Built once, on first access, with production defaults at level FATAL.
    """
    global _default_logger

    if _default_logger is None:
        with _default_lock:
            if _default_logger is None:
                config = replace(new_production_config(), log_level=LogLevel.FATAL)
                _default_logger = SukiLogger(config)
    return _default_logger


default_logger = L
