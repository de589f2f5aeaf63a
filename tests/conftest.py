# SPDX-License-Identifier: MIT
"""Test configuration for slugmint.

Keeps Logfire local and provides fresh, independent registries per test.
"""

from __future__ import annotations

import logfire
import pytest

from slugmint.events import EventLog
from slugmint.io_utils.store import MemoryStore
from slugmint.ledger import FeeLedger
from slugmint.registry import Registry

FEE = 1_000
BIPS = 3_000
PROTOCOL = "protocol"


@pytest.fixture(autouse=True, scope="session")
def _local_logfire():
    """Configure Logfire without console output or network export."""

    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def events() -> EventLog:
    return EventLog()


@pytest.fixture()
def ledger(store: MemoryStore, events: EventLog) -> FeeLedger:
    return FeeLedger(
        store, protocol_owner=PROTOCOL, referrer_fee_bips=BIPS, sinks=[events]
    )


@pytest.fixture()
def registry(store: MemoryStore, ledger: FeeLedger, events: EventLog) -> Registry:
    return Registry(store, ledger, registration_fee=FEE, sinks=[events])
