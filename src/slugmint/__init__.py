# SPDX-License-Identifier: MIT
"""Short slug registry with a referrer fee ledger."""

from .errors import SlugmintError
from .events import EventLog, RegistrationEvent
from .io_utils.store import JsonFileStore, MemoryStore, StateStore
from .ledger import FeeLedger
from .models import IdentifierRecord, Registration
from .registry import Registry

__all__ = [
    "EventLog",
    "FeeLedger",
    "IdentifierRecord",
    "JsonFileStore",
    "MemoryStore",
    "Registration",
    "RegistrationEvent",
    "Registry",
    "SlugmintError",
    "StateStore",
]
