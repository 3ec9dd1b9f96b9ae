"""Tests for logging helpers."""

from unittest.mock import MagicMock

import pytest
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer

from movie_api import logger as logger_module


def test_select_renderer_uses_console_in_debug() -> None:
    assert isinstance(logger_module._select_renderer(True), ConsoleRenderer)


def test_select_renderer_uses_json_in_production() -> None:
    assert isinstance(logger_module._select_renderer(False), JSONRenderer)


@pytest.mark.asyncio
async def test_async_log_timing_records_duration() -> None:
    log = MagicMock()

    async with logger_module.async_log_timing("create_tables", logger=log, table="movies") as ctx:
        ctx["rows"] = 3

    assert ctx["duration_ms"] >= 0
    log.info.assert_called_once()
    args, kwargs = log.info.call_args
    assert args == ("create_tables completed",)
    assert kwargs["table"] == "movies"
    assert kwargs["rows"] == 3


@pytest.mark.asyncio
async def test_async_log_timing_logs_on_error() -> None:
    log = MagicMock()

    with pytest.raises(RuntimeError):
        async with logger_module.async_log_timing("seed", logger=log, level="warning"):
            raise RuntimeError("boom")

    log.warning.assert_called_once()


def test_log_exception_includes_error_details() -> None:
    log = MagicMock()
    exc = ValueError("bad value")

    logger_module.log_exception(log, exc, "Failed to create movie", title="Dune")

    args, kwargs = log.error.call_args
    assert args == ("Failed to create movie",)
    assert kwargs["error"] == "bad value"
    assert kwargs["error_type"] == "ValueError"
    assert kwargs["exc_info"] is exc
    assert kwargs["title"] == "Dune"


def test_log_exception_without_traceback() -> None:
    log = MagicMock()

    logger_module.log_exception(log, KeyError("x"), "Lookup failed", level="warning", include_traceback=False)

    _, kwargs = log.warning.call_args
    assert "exc_info" not in kwargs
