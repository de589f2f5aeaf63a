# SPDX-License-Identifier: MIT
"""Key-value state stores with serialised, all-or-nothing transactions.

A store holds a fixed set of named tables. Each component reads and writes
only its own tables; the shared :meth:`StateStore.transaction` boundary is
what makes a registration, its fee credit and its ownership assignment
commit together or not at all.

Readers see committed state only. Values written to a store must be
immutable (ints, strings, tuples, frozen models) so that a shallow copy of
the tables is enough to isolate a transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from threading import RLock, get_ident
from typing import Any, Callable, Iterator

import logfire
from pydantic_core import from_json, to_json

from slugmint.models import IdentifierRecord

from .persistence import atomic_write, read_lines

TABLES: tuple[str, ...] = (
    "slugs",
    "sequences",
    "destinations",
    "counters",
    "owners",
    "balances",
    "ledger_totals",
)


class StateStore(ABC):
    """Interface for the persistence collaborator."""

    @abstractmethod
    def get(self, table: str, key: Any, default: Any = None) -> Any:
        """Return the value stored under ``key`` in ``table``."""

    @abstractmethod
    def put(self, table: str, key: Any, value: Any) -> None:
        """Store ``value`` under ``key`` in ``table``."""

    @abstractmethod
    def delete(self, table: str, key: Any) -> None:
        """Remove ``key`` from ``table`` if present."""

    @abstractmethod
    def items(self, table: str) -> list[tuple[Any, Any]]:
        """Return a snapshot of all rows in ``table``."""

    @abstractmethod
    def transaction(self) -> Any:
        """Return a context manager serialising one logical transaction."""


class MemoryStore(StateStore):
    """In-process store with copy-on-write transactions.

    Readers never take the lock and only see committed tables. A
    transaction works on a private copy of the tables, visible to the thread
    that opened it, and the outermost level publishes that copy with a
    single reference swap once :meth:`_commit` succeeds. Nested levels
    snapshot the working copy on entry and restore it if their body raises.
    A failed outermost transaction discards the copy.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._depth = 0
        self._dirty = False
        self._writer: int | None = None
        self._working: dict[str, dict[Any, Any]] | None = None
        self._tables: dict[str, dict[Any, Any]] = {name: {} for name in TABLES}

    def _view(self) -> dict[str, dict[Any, Any]]:
        working = self._working
        if working is not None and self._writer == get_ident():
            return working
        return self._tables

    def _table(self, table: str) -> dict[Any, Any]:
        try:
            return self._view()[table]
        except KeyError:
            raise KeyError(f"Unknown table {table!r}") from None

    def get(self, table: str, key: Any, default: Any = None) -> Any:
        return self._table(table).get(key, default)

    def put(self, table: str, key: Any, value: Any) -> None:
        with self.transaction():
            self._table(table)[key] = value
            self._dirty = True

    def delete(self, table: str, key: Any) -> None:
        with self.transaction():
            self._table(table).pop(key, None)
            self._dirty = True

    def items(self, table: str) -> list[tuple[Any, Any]]:
        return list(self._table(table).items())

    @staticmethod
    def _copy(tables: dict[str, dict[Any, Any]]) -> dict[str, dict[Any, Any]]:
        return {name: dict(rows) for name, rows in tables.items()}

    def _commit(self, tables: dict[str, dict[Any, Any]]) -> None:
        """Hook invoked with the new tables before they are published."""

    @contextmanager
    def transaction(self) -> Iterator["MemoryStore"]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._working = self._copy(self._tables)
                self._writer = get_ident()
                self._dirty = False
                snapshot = None
                was_dirty = False
            else:
                snapshot = self._copy(self._working)
                was_dirty = self._dirty
            self._depth += 1
            try:
                yield self
                if outermost and self._dirty:
                    self._commit(self._working)
                    self._tables = self._working
            except BaseException:
                if snapshot is not None:
                    self._working = snapshot
                    self._dirty = was_dirty
                logfire.debug("Store transaction rolled back", depth=self._depth)
                raise
            finally:
                self._depth -= 1
                if outermost:
                    self._working = None
                    self._writer = None
                    self._dirty = False


def _decode_record(value: Any) -> IdentifierRecord:
    return IdentifierRecord.model_validate(value)


def _decode_tuple(value: Any) -> tuple[Any, ...]:
    return tuple(value)


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "slugs": _decode_record,
    "destinations": _decode_tuple,
}


class JsonFileStore(MemoryStore):
    """Memory store mirrored to a JSON lines snapshot file.

    The file is rewritten atomically before a transaction is published. A
    failed write discards the transaction, so readers never see state that
    is missing from disk.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        with logfire.span("store.load", attributes={"path": str(self.path)}):
            count = 0
            for line in read_lines(self.path):
                if not line.strip():
                    continue
                row = from_json(line)
                table = row["table"]
                decode = _DECODERS.get(table)
                value = decode(row["value"]) if decode else row["value"]
                self._table(table)[row["key"]] = value
                count += 1
            logfire.debug("Loaded store snapshot", path=str(self.path), rows=count)

    def _lines(self, tables: dict[str, dict[Any, Any]]) -> Iterator[str]:
        for table in TABLES:
            for key, value in tables[table].items():
                yield to_json({"table": table, "key": key, "value": value}).decode(
                    "utf-8"
                )

    def _commit(self, tables: dict[str, dict[Any, Any]]) -> None:
        atomic_write(self.path, self._lines(tables))


__all__ = ["TABLES", "StateStore", "MemoryStore", "JsonFileStore"]
