# SPDX-License-Identifier: MIT
"""Ownership collaborator resolving who controls a sequence number."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .io_utils.store import StateStore


class OwnershipResolver(ABC):
    """Interface for the identity collaborator.

    The registry only reads ownership to authorise edits and assigns the
    initial owner when a registration commits. Transfers happen elsewhere.
    """

    @abstractmethod
    def owner_of(self, sequence_number: int) -> str | None:
        """Return the current owner of ``sequence_number`` or ``None``."""

    @abstractmethod
    def assign(self, sequence_number: int, owner: str) -> None:
        """Record ``owner`` as the controller of ``sequence_number``."""


class StoreOwnership(OwnershipResolver):
    """Ownership kept in the ``owners`` table of a :class:`StateStore`.

    Sharing the registry's store means the initial assignment commits or
    rolls back together with the registration.
    """

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def owner_of(self, sequence_number: int) -> str | None:
        return self._store.get("owners", sequence_number)

    def assign(self, sequence_number: int, owner: str) -> None:
        self._store.put("owners", sequence_number, owner)


__all__ = ["OwnershipResolver", "StoreOwnership"]
