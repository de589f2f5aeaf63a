# SPDX-License-Identifier: MIT
"""Wiring of store, ledger and registry from validated settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import logfire

from slugmint.events import EventLog
from slugmint.io_utils.store import JsonFileStore, MemoryStore, StateStore
from slugmint.ledger import FeeLedger
from slugmint.registry import Registry

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from .settings import Settings


class RuntimeEnv:
    """Explicitly constructed container for one registry and its ledger.

    Independent instances never share state; each owns its store.
    """

    def __init__(self, settings: "Settings", store: StateStore | None = None) -> None:
        self.settings = settings
        if store is None:
            store = (
                JsonFileStore(settings.state_file)
                if settings.state_file
                else MemoryStore()
            )
        self.store = store
        self.events = EventLog()
        self.ledger = FeeLedger(
            store,
            protocol_owner=settings.protocol_owner,
            referrer_fee_bips=settings.referrer_fee_bips,
            sinks=[self.events],
        )
        self.registry = Registry(
            store,
            self.ledger,
            registration_fee=settings.registration_fee,
            sinks=[self.events],
        )
        logfire.debug(
            "RuntimeEnv created",
            store=type(store).__name__,
            protocol_owner=settings.protocol_owner,
        )


__all__ = ["RuntimeEnv"]
