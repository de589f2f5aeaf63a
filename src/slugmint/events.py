# SPDX-License-Identifier: MIT
"""Events emitted after committed registry and ledger transactions."""

from __future__ import annotations

from threading import Lock
from typing import Iterable, Literal, Protocol, Union

from pydantic import Field

from .models import StrictModel
from .utils.error_handler import ErrorHandler, LoggingErrorHandler


class RegistrationEvent(StrictModel):
    """Emitted once per successful registration."""

    kind: Literal["registered"] = "registered"
    caller: str
    destination: str
    slug: str
    sequence_number: int = Field(..., ge=1)
    is_custom: bool
    referrer: str | None = None


class DestinationUpdated(StrictModel):
    """Emitted when an owner replaces a destination."""

    kind: Literal["destination_updated"] = "destination_updated"
    caller: str
    sequence_number: int = Field(..., ge=1)
    slug: str
    previous: str
    destination: str


class Withdrawal(StrictModel):
    """Emitted when an address withdraws its balance."""

    kind: Literal["withdrawal"] = "withdrawal"
    address: str
    amount: int = Field(..., gt=0)


Event = Union[RegistrationEvent, DestinationUpdated, Withdrawal]


class EventSink(Protocol):
    """Callable receiving committed events."""

    def __call__(self, event: Event) -> None: ...


def dispatch(
    sinks: Iterable[EventSink],
    event: Event,
    handler: ErrorHandler | None = None,
) -> None:
    """Deliver ``event`` to every sink.

    Events describe state that has already committed, so a failing sink is
    reported through ``handler`` and the remaining sinks still run.
    """
    for sink in sinks:
        try:
            sink(event)
        except Exception as exc:
            (handler or LoggingErrorHandler()).handle(
                f"Event sink failed for {event.kind} event", exc
            )


class EventLog:
    """Thread-safe in-memory event recorder usable as an :class:`EventSink`."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: list[Event] = []

    def __call__(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[Event]:
        """Return a copy of the recorded events."""
        with self._lock:
            return list(self._events)

    def of_kind(self, kind: str) -> list[Event]:
        """Return recorded events whose ``kind`` matches."""
        return [event for event in self.events if event.kind == kind]

    def clear(self) -> None:
        """Drop all recorded events."""
        with self._lock:
            self._events.clear()


__all__ = [
    "Event",
    "EventLog",
    "dispatch",
    "EventSink",
    "RegistrationEvent",
    "DestinationUpdated",
    "Withdrawal",
]
