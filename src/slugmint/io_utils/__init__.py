# SPDX-License-Identifier: MIT
"""Persistence helpers and state stores."""

from .persistence import atomic_write, read_lines
from .store import TABLES, JsonFileStore, MemoryStore, StateStore

__all__ = [
    "TABLES",
    "JsonFileStore",
    "MemoryStore",
    "StateStore",
    "atomic_write",
    "read_lines",
]
