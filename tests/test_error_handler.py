# SPDX-License-Identifier: MIT
"""Tests for :mod:`slugmint.utils.error_handler`."""

import logfire

from slugmint.errors import NoBalance
from slugmint.events import EventLog, Withdrawal, dispatch
from slugmint.utils import ErrorHandler, LoggingErrorHandler


def test_logging_error_handler_reports_exception(monkeypatch) -> None:
    calls: list[tuple[str, dict]] = []
    monkeypatch.setattr(
        logfire, "error", lambda template, **attrs: calls.append((template, attrs))
    )
    LoggingErrorHandler().handle("withdraw failed", NoBalance("No balance for x"))
    LoggingErrorHandler().handle("plain")
    assert calls[0][1]["error_type"] == "NoBalance"
    assert calls[0][1]["context"] == "withdraw failed"
    assert calls[1] == ("{context}", {"context": "plain"})


class _Recorder(ErrorHandler):
    def __init__(self) -> None:
        self.calls: list[tuple[str, Exception | None]] = []

    def handle(self, message: str, exc: Exception | None = None) -> None:
        self.calls.append((message, exc))


def test_dispatch_reports_sink_failure_and_continues() -> None:
    def _broken(_event) -> None:
        raise RuntimeError("sink offline")

    recorder = _Recorder()
    log = EventLog()
    event = Withdrawal(address="alice", amount=5)
    dispatch([_broken, log], event, recorder)
    assert log.events == [event]
    ((message, exc),) = recorder.calls
    assert message == "Event sink failed for withdrawal event"
    assert isinstance(exc, RuntimeError)
