# SPDX-License-Identifier: MIT
"""Tests for the state stores."""

import threading
from pathlib import Path

import pytest

from slugmint.io_utils.store import JsonFileStore, MemoryStore
from slugmint.ledger import FeeLedger
from slugmint.registry import Registry

FEE = 1_000
PROTOCOL = "protocol"


def test_transaction_rolls_back_on_error() -> None:
    store = MemoryStore()
    store.put("balances", "a", 1)
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.put("balances", "a", 2)
            store.put("balances", "b", 3)
            raise RuntimeError("boom")
    assert store.get("balances", "a") == 1
    assert store.get("balances", "b") is None


def test_nested_transaction_rolls_back_only_inner_changes() -> None:
    store = MemoryStore()
    with store.transaction():
        store.put("balances", "outer", 1)
        with pytest.raises(ValueError):
            with store.transaction():
                store.put("balances", "inner", 2)
                raise ValueError("inner")
    assert store.get("balances", "outer") == 1
    assert store.get("balances", "inner") is None


def test_unknown_table() -> None:
    with pytest.raises(KeyError):
        MemoryStore().get("nope", "key")


def _wire(store) -> tuple[Registry, FeeLedger]:
    ledger = FeeLedger(store, protocol_owner=PROTOCOL, referrer_fee_bips=3_000)
    return Registry(store, ledger, registration_fee=FEE), ledger


def test_json_store_survives_reload(tmp_path: Path) -> None:
    path = tmp_path / "state.jsonl"
    registry, _ = _wire(JsonFileStore(path))
    first = registry.register("alice", "https://example.com")
    custom = registry.register(
        "bob", "https://docs.example.com", slug="docs", referrer="carol", payment=FEE
    )
    registry.edit_destination("alice", first.sequence_number, "https://example.org")

    reloaded, ledger = _wire(JsonFileStore(path))
    assert reloaded.total_registered == 2
    assert reloaded.lookup_by_slug(first.slug) == (1, "https://example.org")
    assert reloaded.lookup_by_slug("docs") == (2, "https://docs.example.com")
    assert reloaded.record_of(custom.sequence_number).is_custom is True
    assert reloaded.owner_of(2) == "bob"
    assert reloaded.slugs_for_destination("https://example.org") == (first.slug,)
    assert ledger.balance_of("carol") == 300
    assert ledger.audit().collected == FEE

    third = reloaded.register("dave", "https://third.example.com")
    assert third.sequence_number == 3


def test_json_store_skips_write_for_failed_transaction(tmp_path: Path) -> None:
    path = tmp_path / "state.jsonl"
    store = JsonFileStore(path)
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.put("balances", "a", 1)
            raise RuntimeError("boom")
    assert not path.exists()


def test_json_store_skips_write_for_read_only_transaction(tmp_path: Path) -> None:
    path = tmp_path / "state.jsonl"
    store = JsonFileStore(path)
    with store.transaction():
        store.get("balances", "a")
    assert not path.exists()


def test_open_transaction_is_invisible_to_other_threads() -> None:
    store = MemoryStore()
    store.put("balances", "a", 1)
    seen: list[object] = []
    with store.transaction():
        store.put("balances", "a", 2)
        store.put("balances", "b", 3)
        assert store.get("balances", "a") == 2
        reader = threading.Thread(
            target=lambda: seen.extend(
                [store.get("balances", "a"), store.get("balances", "b")]
            )
        )
        reader.start()
        reader.join(timeout=5)
    assert seen == [1, None]
    assert store.get("balances", "b") == 3


def test_failed_snapshot_write_keeps_previous_state(
    tmp_path: Path, monkeypatch
) -> None:
    path = tmp_path / "state.jsonl"
    store = JsonFileStore(path)
    store.put("balances", "a", 1)

    def _fail(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("slugmint.io_utils.store.atomic_write", _fail)
    with pytest.raises(OSError):
        store.put("balances", "a", 2)
    assert store.get("balances", "a") == 1
