"""
Tests for the HTTP, Kafka and event payload builders.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from sukilog import (
    ErrorInfo,
    EventAction,
    EventResult,
    HTTPRequestInfo,
    HTTPResponseInfo,
    KafkaMessage,
    KafkaResult,
    with_error,
    with_event,
    with_http_request,
    with_http_response,
    with_kafka_message,
    with_kafka_result,
)


def test_with_error_stack_trace_indexing():
    """One extra arg is the trace; with two or more the second wins."""
    assert with_error("x") == ErrorInfo(name="x", stack_trace="")
    assert with_error("x", "a").stack_trace == "a"
    assert with_error("x", "a", "b").stack_trace == "b"
    assert with_error("x", "a", "b", "c").stack_trace == "b"


def test_http_request_none_maps_become_empty():
    req = with_http_request("GET", "/orders", "10.0.0.1", None, None, None, "")
    assert req.headers == {}
    assert req.params == {}
    assert req.query == {}

    data = req.to_dict()
    assert data["headers"] == {} and data["params"] == {} and data["query"] == {}


def test_http_request_keeps_given_maps():
    headers = {"Content-Type": "application/json"}
    req = with_http_request("POST", "/orders/{id}", "10.0.0.1",
                            headers, {"id": "7"}, {"dry_run": "1"}, "{}")
    assert req.to_dict() == {
        "method": "POST",
        "path": "/orders/{id}",
        "remote_ip": "10.0.0.1",
        "headers": {"Content-Type": "application/json"},
        "params": {"id": "7"},
        "query": {"dry_run": "1"},
        "body": "{}",
    }
    assert HTTPRequestInfo.from_dict(req.to_dict()) == req


def test_http_response_error_defaults():
    resp = with_http_response(200, 1.5, "ok")
    assert resp.error == ErrorInfo()
    assert not resp.failed
    assert resp.to_dict()["error"] == {"name": "", "stack_trace": ""}

    failed = with_http_response(500, 3.0, "", with_error("db down", "trace"), with_error("ignored"))
    assert failed.error == ErrorInfo(name="db down", stack_trace="trace")
    assert failed.failed
    assert HTTPResponseInfo.from_dict(failed.to_dict()) == failed


def test_http_response_from_dict_rejects_missing_status():
    with pytest.raises(ValueError):
        HTTPResponseInfo.from_dict({"duration": 1.0})


def test_kafka_message_none_headers_become_empty():
    ts = datetime(2025, 10, 24, 15, 30, 45, tzinfo=timezone.utc)
    msg = with_kafka_message("orders", 2, 42, None, "order-1", '{"id":1}', ts)
    assert msg.headers == {}

    data = msg.to_dict()
    assert data["timestamp"] == "2025-10-24T15:30:45+00:00"
    assert data["partition"] == 2
    assert data["offset"] == 42
    assert KafkaMessage.from_dict(data) == msg


def test_kafka_message_without_timestamp():
    msg = with_kafka_message("orders", 0, 0, {"h": "v"}, "", "", None)
    assert msg.to_dict()["timestamp"] is None
    assert msg.headers == {"h": "v"}


def test_kafka_result_error_defaults():
    assert with_kafka_result(2.5) == KafkaResult(duration=2.5, error=ErrorInfo())
    result = with_kafka_result(2.5, with_error("poison message"))
    assert result.to_dict() == {
        "duration": 2.5,
        "error": {"name": "poison message", "stack_trace": ""},
    }


def test_with_event_serializes_data():
    event = with_event("order", EventAction.CREATE, EventResult.SUCCESS, {"a": 1}, "ref-1")
    assert event.data == '{"a":1}'
    assert event.to_dict() == {
        "entity": "order",
        "action": "create",
        "result": "success",
        "reference_id": "ref-1",
        "data": '{"a":1}',
    }


def test_with_event_sorts_keys():
    event = with_event("order", EventAction.UPDATE, EventResult.SUCCESS,
                       {"b": 2, "a": {"d": 4, "c": 3}}, "ref-1")
    assert event.data == '{"a":{"c":3,"d":4},"b":2}'


def test_with_event_string_data_verbatim():
    event = with_event("order", EventAction.DELETE, EventResult.COMPENSATE,
                       "already-a-string", "ref-1")
    assert event.data == "already-a-string"

    quoted = with_event("order", EventAction.DELETE, EventResult.SUCCESS, '{"a":1}', "ref-1")
    assert quoted.data == '{"a":1}'


def test_with_event_none_data():
    assert with_event("order", EventAction.CREATE, EventResult.SUCCESS, None, "r").data == ""


def test_with_event_dataclass_data():
    @dataclass
    class Order:
        id: int
        placed_at: datetime

    order = Order(id=7, placed_at=datetime(2025, 1, 2, 3, 4, 5))
    event = with_event("order", EventAction.CREATE, EventResult.SUCCESS, order, "7")
    assert event.data == '{"id":7,"placed_at":"2025-01-02T03:04:05"}'


def test_with_event_unserializable_data_is_empty():
    """Serialization failures never raise."""
    circular = {}
    circular["self"] = circular

    assert with_event("order", EventAction.CREATE, EventResult.SUCCESS, object(), "r").data == ""
    assert with_event("order", EventAction.CREATE, EventResult.SUCCESS, circular, "r").data == ""


def test_with_event_accepts_plain_strings():
    event = with_event("order", "create", "archived", 1, "r")
    assert event.action is EventAction.CREATE
    assert event.result == "archived"
    assert event.data == "1"
    assert event.to_dict()["result"] == "archived"


def test_with_event_failing_to_dict_is_empty():
    """Any exception from a caller's to_dict() is swallowed."""
    class Broken:
        def to_dict(self):
            raise RuntimeError("boom")

    event = with_event("order", EventAction.CREATE, EventResult.SUCCESS, Broken(), "r")
    assert event.data == ""

    nested = with_event("order", EventAction.CREATE, EventResult.SUCCESS, {"item": Broken()}, "r")
    assert nested.data == ""


def test_with_event_non_finite_floats_are_empty():
    """NaN and infinities have no JSON form."""
    for value in (float("nan"), float("inf"), float("-inf")):
        event = with_event("order", EventAction.UPDATE, EventResult.SUCCESS, {"a": value}, "r")
        assert event.data == ""
