"""
Tests for the SukiLogger facade and the process-wide default logger.
"""

import io
import threading
import time

import pytest

import sukilog.logger as logger_module
from sukilog import (
    AlertLevel,
    Config,
    EventAction,
    EventResult,
    L,
    LogLevel,
    LogOption,
    PanicError,
    SinkBuildError,
    SukiLogger,
    any_field,
    default_logger,
    error_field,
    with_error,
    with_event,
    with_http_request,
    with_http_response,
    with_kafka_message,
    with_kafka_result,
    with_option,
    with_tracing,
)


def test_info_record_shape(make_logger, records):
    logger = make_logger()

    logger.info("order created", with_tracing("t-1", "s-1", "r-1"), any_field("order_id", 42))

    [record] = records()
    assert record["level"] == "info"
    assert record["message"] == "order created"
    assert record["app_name"] == "orders"
    assert record["version"] == "2.3.1"
    assert record["log_type"] == "application"
    assert record["alert"] == 0
    assert record["data"] == {
        "tracing": {"trace_id": "t-1", "span_id": "s-1"},
        "orders": {"order_id": 42},
    }


def test_data_present_when_empty(make_logger, records):
    make_logger().info("bare")
    [record] = records()
    assert record["data"] == {}


def test_caller_is_facade_caller(make_logger, records):
    logger = make_logger()
    logger.info("where")
    logger.warning("alias")

    for record in records():
        assert record["caller"].startswith("test_logger.py:")


def test_leveled_methods(make_logger, records):
    logger = make_logger()

    logger.debug("d")
    logger.info("i")
    logger.warn("w")
    logger.warning("w2")
    logger.error("e", error_field(ValueError("bad input")))

    got = records()
    assert [r["level"] for r in got] == ["debug", "info", "warn", "warn", "error"]
    assert got[-1]["data"] == {"orders": {"error": "bad input"}}
    assert "stacktrace" in got[-1]


def test_minimum_level_filters(make_logger, records):
    logger = make_logger(log_level=LogLevel.WARN)

    logger.debug("d")
    logger.info("i")
    logger.warn("w")

    assert [r["message"] for r in records()] == ["w"]
    assert not logger.enabled(LogLevel.INFO)


def test_alert_option(make_logger, records):
    logger = make_logger()

    logger.error("paging", with_option(LogOption(alert=AlertLevel.ALERT)))
    logger.error("last wins",
                 LogOption(alert=AlertLevel.ALERT),
                 LogOption(alert=AlertLevel.NONE))

    paging, last_wins = records()
    assert paging["alert"] == 1
    assert last_wins["alert"] == 0


def test_empty_app_name_uses_payload_key(make_logger, records):
    make_logger(app_name="").info("m", any_field("k", "v"))
    [record] = records()
    assert record["app_name"] == ""
    assert record["data"] == {"payload": {"k": "v"}}


def test_panic_logs_then_raises(make_logger, records):
    logger = make_logger()

    with pytest.raises(PanicError):
        logger.panic("invariant broken", any_field("order_id", 1))

    [record] = records()
    assert record["level"] == "panic"
    assert record["data"] == {"orders": {"order_id": 1}}


def test_fatal_logs_then_exits(make_logger, records):
    logger = make_logger()

    with pytest.raises(SystemExit) as exc_info:
        logger.fatal("cannot continue")

    assert exc_info.value.code == 1
    assert records()[0]["level"] == "fatal"


def test_request_http(make_logger, records):
    logger = make_logger(max_body_size=8)
    request = with_http_request("POST", "/orders", "10.0.0.1",
                                {"Content-Type": "application/json"}, None, None,
                                '{"sku": "A-1"}')
    response = with_http_response(500, 12.5, "error", with_error("db down", "trace"))

    logger.request_http("handled", request, response,
                        with_tracing("t", "s", "r"),
                        LogOption(alert=AlertLevel.ALERT),
                        any_field("ignored", True))

    [record] = records()
    assert record["level"] == "info"
    assert record["log_type"] == "handler.http"
    assert record["alert"] == 1
    assert set(record["data"]) == {"tracing", "http_request", "http_response"}
    assert record["data"]["tracing"] == {"trace_id": "t", "span_id": "s"}
    assert record["data"]["http_request"]["body"] == "body is too large"
    assert record["data"]["http_request"]["params"] == {}
    assert record["data"]["http_response"]["body"] == "error"
    assert record["data"]["http_response"]["error"] == {"name": "db down", "stack_trace": "trace"}


def test_request_kafka(make_logger, records):
    logger = make_logger()
    message = with_kafka_message("orders", 3, 17, None, "order-1", "{}", None)

    logger.request_kafka("consumed", message, with_kafka_result(0.8))

    [record] = records()
    assert record["level"] == "info"
    assert record["log_type"] == "handler.kafka"
    assert record["alert"] == 0
    assert record["data"]["kafka_message"]["topic"] == "orders"
    assert record["data"]["kafka_message"]["headers"] == {}
    assert record["data"]["kafka_result"] == {
        "duration": 0.8,
        "error": {"name": "", "stack_trace": ""},
    }


def test_event(make_logger, records):
    logger = make_logger()
    event = with_event("order", EventAction.CREATE, EventResult.SUCCESS, {"a": 1}, "ref-1")

    logger.event("order created", event, with_tracing("t", "s"))

    [record] = records()
    assert record["level"] == "info"
    assert record["log_type"] == "event"
    assert record["data"]["event"] == {
        "entity": "order",
        "action": "create",
        "result": "success",
        "reference_id": "ref-1",
        "data": '{"a":1}',
    }


def test_transaction_records_follow_info_threshold(make_logger, records):
    logger = make_logger(log_level=LogLevel.ERROR)
    event = with_event("order", EventAction.DELETE, EventResult.SUCCESS, None, "r")

    logger.event("dropped", event)

    assert records() == []


def test_configure_swaps_config_and_output(make_logger, records):
    logger = make_logger()
    new_output = io.StringIO()

    logger.configure(Config(app_name="billing", version="9.9.9", log_level=LogLevel.INFO),
                     output=new_output)
    logger.debug("dropped")
    logger.info("routed")

    assert records() == []
    line = new_output.getvalue().splitlines()
    assert len(line) == 1
    assert '"app_name": "billing"' in line[0]
    assert logger.config.app_name == "billing"


def test_configure_failure_keeps_state(make_logger, records):
    logger = make_logger()
    config = logger.config
    sink = logger.sink

    with pytest.raises(SinkBuildError):
        logger.configure(Config(app_name="billing"), output=object())

    assert logger.config is config
    assert logger.sink is sink
    logger.info("still here")
    assert records()[0]["app_name"] == "orders"


def test_configure_closes_previous_file(tmp_path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    logger = SukiLogger(Config(), output=str(first))
    logger.info("one")
    previous = logger.sink

    logger.configure(Config(), output=str(second))
    logger.info("two")
    logger.close()

    assert "one" in first.read_text(encoding="utf-8")
    assert "two" in second.read_text(encoding="utf-8")
    assert all(h.__class__.__name__ == "NullHandler" for h in previous.logger.handlers)


def test_default_logger_is_quiet(reset_default_logger, capsys):
    logger = L()

    assert logger is L()
    assert default_logger() is logger
    assert logger.config.log_level is LogLevel.FATAL
    assert logger.config.app_name == "application"

    logger.info("hidden")
    logger.error("hidden too")

    assert capsys.readouterr().err == ""


def test_default_logger_built_once_under_concurrency(reset_default_logger, monkeypatch):
    built = []
    real_build_sink = logger_module.build_sink

    def counting_build_sink(*args, **kwargs):
        built.append(1)
        time.sleep(0.05)
        return real_build_sink(*args, **kwargs)

    monkeypatch.setattr(logger_module, "build_sink", counting_build_sink)

    barrier = threading.Barrier(8)
    results = []

    def first_access():
        barrier.wait()
        results.append(L())

    threads = [threading.Thread(target=first_access) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(result is results[0] for result in results)
    assert len(built) == 1


def test_default_logger_can_be_configured(reset_default_logger):
    output = io.StringIO()

    L().configure(Config(app_name="orders"), output=output)
    L().info("visible")

    assert '"message": "visible"' in output.getvalue()
