"""
Record Composer
===============

Bounded Context: Record Assembly

Turns the variadic context of one facade call into a Record: the
``log_type`` tag, the alert level and the nested ``data`` payload.

Classification (call-site order):
- TraceInfo → data["tracing"] = {trace_id, span_id}; request_id is dropped
- LogOption → alert level, last one wins
- LogField  → application payload, later duplicate keys overwrite
- anything else → ignored

Transaction records (HTTP, Kafka, event) honor only trace and option
items; fields are an application-record concept.

Example:
    >>> record = compose_application(config, [
    ...     with_tracing("t-1", "s-1", "r-1"),
    ...     any_field("order_id", 42),
    ... ])
    >>> record.data
    {'tracing': {'trace_id': 't-1', 'span_id': 's-1'},
     'application': {'order_id': 42}}
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Tuple

from .config import Config
from .fields import ContextItem, ContextKind, LogField, TraceInfo
from .levels import AlertLevel, LogType
from .schemas import (
    EventLog,
    HTTPRequestInfo,
    HTTPResponseInfo,
    KafkaMessage,
    KafkaResult,
)

BODY_TOO_LARGE = "body is too large"


@dataclass(frozen=True)
class Record:
    """
    Composed record, ready for the sink.

    Attributes:
        log_type: Which facade method produced the record
        alert: Alert level written as an integer
        data: Nested call-specific payload (always present, may be empty)
    """
    log_type: LogType
    alert: AlertLevel = AlertLevel.NONE
    data: Dict[str, Any] = field(default_factory=dict)

    def fields(self, config: Config) -> List[Tuple[str, Any]]:
        """Ordered top-level fields: app_name, version, log_type, alert, data."""
        return [
            ("app_name", config.app_name),
            ("version", config.version),
            ("log_type", self.log_type.value),
            ("alert", int(self.alert)),
            ("data", self.data),
        ]


def compose_tracing(trace: TraceInfo) -> Dict[str, str]:
    """Tracing payload. Only trace and span ids are propagated."""
    return {
        'trace_id': trace.trace_id,
        'span_id': trace.span_id,
    }


def field_value(log_field: LogField) -> Any:
    """Field value as written; exceptions become their message."""
    if isinstance(log_field.value, BaseException):
        return str(log_field.value)
    return log_field.value


def _scan(args: Iterable[Any], collect_fields: bool) -> Tuple[AlertLevel, Dict[str, Any], Dict[str, Any]]:
    alert = AlertLevel.NONE
    data: Dict[str, Any] = {}
    app_data: Dict[str, Any] = {}

    for arg in args:
        if not isinstance(arg, ContextItem):
            continue
        if arg.kind is ContextKind.TRACE:
            data["tracing"] = compose_tracing(arg)
        elif arg.kind is ContextKind.OPTION:
            alert = arg.alert
        elif arg.kind is ContextKind.FIELD and collect_fields:
            app_data[arg.key] = field_value(arg)

    return alert, data, app_data


def compose_application(config: Config, args: Iterable[Any]) -> Record:
    """
    Compose a leveled application record.

    Fields are nested under ``config.payload_key`` and only when at
    least one was supplied.
    """
    alert, data, app_data = _scan(args, collect_fields=True)

    if len(app_data) > 0:
        data[config.payload_key] = app_data

    return Record(log_type=LogType.APPLICATION, alert=alert, data=data)


def compose_transaction(log_type: LogType, payload: Dict[str, Any], args: Iterable[Any]) -> Record:
    """
    Compose a transaction record from a fixed payload plus trace and
    option items from args.
    """
    alert, data, _ = _scan(args, collect_fields=False)
    data.update(payload)
    return Record(log_type=log_type, alert=alert, data=data)


def truncate_body(body: str, max_body_size: int) -> str:
    """
    Replace a body longer than max_body_size bytes (UTF-8) with the
    ``"body is too large"`` marker. A limit of 0 or less disables it.
    """
    if max_body_size > 0 and len(body.encode("utf-8")) > max_body_size:
        return BODY_TOO_LARGE
    return body


def compose_http(
    config: Config,
    request: HTTPRequestInfo,
    response: HTTPResponseInfo,
    args: Iterable[Any],
) -> Record:
    """HTTP transaction record; bodies are bounded by config.max_body_size."""
    if config.max_body_size > 0:
        request = replace(request, body=truncate_body(request.body, config.max_body_size))
        response = replace(response, body=truncate_body(response.body, config.max_body_size))

    return compose_transaction(
        LogType.HTTP,
        {
            "http_request": request.to_dict(),
            "http_response": response.to_dict(),
        },
        args,
    )


def compose_kafka(message: KafkaMessage, result: KafkaResult, args: Iterable[Any]) -> Record:
    return compose_transaction(
        LogType.KAFKA,
        {
            "kafka_message": message.to_dict(),
            "kafka_result": result.to_dict(),
        },
        args,
    )


def compose_event(event: EventLog, args: Iterable[Any]) -> Record:
    return compose_transaction(LogType.EVENT, {"event": event.to_dict()}, args)
