from __future__ import annotations

import pytest
from loguru import logger

from pylox import Interpreter
from pylox.logging_utils import configure_logging, resolve_log_level


@pytest.fixture
def captured_logs():
    configure_logging("DEBUG")
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(sink_id)
    logger.disable("pylox")


def test_resolve_log_level_prefers_argument(monkeypatch):
    monkeypatch.setenv("PYLOX_LOG_LEVEL", "debug")
    assert resolve_log_level("info") == "INFO"
    assert resolve_log_level() == "DEBUG"
    monkeypatch.delenv("PYLOX_LOG_LEVEL")
    assert resolve_log_level() == "WARNING"


def test_runtime_error_is_logged(captured_logs):
    Interpreter().run("print nil + 1;")
    assert any(
        m.startswith("INFO runtime error at line 1: Operands must be two numbers or two strings.")
        for m in captured_logs
    )


def test_pipeline_stages_are_logged(captured_logs):
    Interpreter().run("{ var a = 1; print a; }")
    joined = "".join(captured_logs)
    assert "scanned" in joined
    assert "parsed 1 statements" in joined
    assert "resolved 1 local references" in joined


def test_resolution_summary_is_logged_once(captured_logs):
    Interpreter().run("fun f(a) { { var b = a; { print b; } } } class C { m() { return this; } }")
    summaries = [m for m in captured_logs if "local references" in m]
    assert len(summaries) == 1
    assert summaries[0].startswith("DEBUG resolved ")
