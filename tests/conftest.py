"""
Shared fixtures: an in-memory log output and loggers writing to it.
"""

import io
import json

import pytest

import sukilog.logger as logger_module
from sukilog import Config, LogLevel, SukiLogger


def read_records(output):
    """Parse every JSON line written to output."""
    return [json.loads(line) for line in output.getvalue().splitlines() if line.strip()]


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def records(output):
    return lambda: read_records(output)


@pytest.fixture
def make_logger(output):
    """Factory for loggers writing to ``output``; keyword args override Config."""
    def factory(**overrides):
        values = {
            "log_level": LogLevel.DEBUG,
            "app_name": "orders",
            "version": "2.3.1",
        }
        values.update(overrides)
        return SukiLogger(Config(**values), output=output)
    return factory


@pytest.fixture
def reset_default_logger(monkeypatch):
    """Start the test without a process-wide default logger."""
    monkeypatch.setattr(logger_module, "_default_logger", None)
