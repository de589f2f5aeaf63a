# SPDX-License-Identifier: MIT
"""Slug registry binding slugs, destinations, owners and sequence numbers.

The registry owns four store tables:

``slugs``
    slug → :class:`IdentifierRecord`
``sequences``
    sequence number → slug
``destinations``
    destination → tuple of slugs currently pointing at it
``counters``
    ``"sequence"`` → last sequence number issued

Every mutation runs inside a single store transaction, so a failure leaves
no counter increment, index write, balance credit or ownership assignment
behind. Events are emitted only after the transaction commits.
"""

from __future__ import annotations

import logfire

from .core.generator import generate
from .core.prober import next_available
from .errors import (
    EmptyDestination,
    EmptySlug,
    InvalidReferrer,
    NotFound,
    NotOwner,
    SlugTaken,
)
from .events import (
    DestinationUpdated,
    Event,
    EventSink,
    RegistrationEvent,
    dispatch,
)
from .identity import OwnershipResolver, StoreOwnership
from .io_utils.store import StateStore
from .ledger import FeeLedger
from .metadata import DefaultMetadataRenderer, MetadataRenderer, SlugMetadata
from .models import IdentifierRecord, Registration

_COUNTER_KEY = "sequence"


class Registry:
    """Register slugs and resolve them to destinations."""

    def __init__(
        self,
        store: StateStore,
        ledger: FeeLedger,
        registration_fee: int,
        ownership: OwnershipResolver | None = None,
        renderer: MetadataRenderer | None = None,
        sinks: list[EventSink] | None = None,
    ) -> None:
        if registration_fee < 0:
            raise ValueError("registration_fee must be non-negative")
        self._store = store
        self._ledger = ledger
        self.registration_fee = registration_fee
        self.ownership = ownership or StoreOwnership(store)
        self.renderer = renderer or DefaultMetadataRenderer()
        self._sinks: list[EventSink] = list(sinks or [])

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def total_registered(self) -> int:
        """Return the last sequence number issued."""
        return self._store.get("counters", _COUNTER_KEY, 0)

    def exists(self, slug: str) -> bool:
        """Return ``True`` when ``slug`` is registered."""
        return self._store.get("slugs", slug) is not None

    def cost_of(self, length: int) -> int:
        """Return the fee for a custom slug of ``length`` characters.

        The length is accepted for interface stability but does not affect
        the price.
        """
        return self.registration_fee

    def lookup_by_slug(self, slug: str) -> tuple[int, str]:
        """Return ``(sequence_number, destination)`` for ``slug``.

        Raises:
            EmptySlug: If ``slug`` is empty.
            NotFound: If ``slug`` is not registered.
        """
        if not slug:
            raise EmptySlug("Slug must be non-empty")
        record = self._store.get("slugs", slug)
        if record is None:
            raise NotFound(f"Unknown slug {slug!r}")
        return record.sequence_number, record.destination

    def record_of(self, sequence_number: int) -> IdentifierRecord:
        """Return the record registered under ``sequence_number``.

        Raises:
            NotFound: If no registration has that number.
        """
        slug = self._store.get("sequences", sequence_number)
        if slug is None:
            raise NotFound(f"Unknown sequence number {sequence_number}")
        return self._store.get("slugs", slug)

    def owner_of(self, sequence_number: int) -> str:
        """Return the current owner of ``sequence_number``."""
        self.record_of(sequence_number)
        owner = self.ownership.owner_of(sequence_number)
        if owner is None:
            raise NotFound(f"No owner for sequence number {sequence_number}")
        return owner

    def slugs_for_destination(self, destination: str) -> tuple[str, ...]:
        """Return the slugs currently pointing at ``destination``."""
        return self._store.get("destinations", destination, ())

    def metadata(self, sequence_number: int) -> SlugMetadata:
        """Return the rendered metadata document for ``sequence_number``."""
        record = self.record_of(sequence_number)
        return self.renderer.render(record.slug, record.is_custom, len(record.slug))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def register(
        self,
        caller: str,
        destination: str,
        slug: str = "",
        referrer: str | None = None,
        payment: int = 0,
    ) -> Registration:
        """Register ``destination`` and return the committed registration.

        Without ``slug`` a free slug is generated from the current counter
        and any payment is refunded in full. With ``slug`` the registration
        fee is settled through the ledger before the record is committed.

        Args:
            caller: Authenticated principal becoming the owner.
            destination: Non-empty destination string.
            slug: Optional caller-chosen slug.
            referrer: Optional address credited a share of the fee.
            payment: Amount offered for a custom slug.

        Raises:
            EmptyDestination: If ``destination`` is empty.
            InvalidReferrer: If ``referrer`` is the caller.
            SlugTaken: If ``slug`` is already registered.
            InsufficientPayment: If ``payment`` does not cover the fee.
        """
        if payment < 0:
            raise ValueError("payment must be non-negative")
        if not destination:
            raise EmptyDestination("Destination must be non-empty")
        if referrer and referrer == caller:
            raise InvalidReferrer("Caller cannot refer itself")
        with logfire.span(
            "registry.register",
            attributes={"caller": caller, "custom": bool(slug)},
        ):
            with self._store.transaction():
                is_custom = bool(slug)
                if is_custom:
                    if self.exists(slug):
                        raise SlugTaken(slug)
                    refund = self._ledger.settle(
                        payment, self.cost_of(len(slug)), referrer
                    )
                else:
                    seed = self.total_registered
                    slug = next_available(generate(seed), self.exists)
                    refund = payment
                record = self._commit(caller, destination, slug, is_custom)
            logfire.info(
                "Slug registered",
                slug=record.slug,
                sequence_number=record.sequence_number,
                custom=is_custom,
            )
        self._emit(
            RegistrationEvent(
                caller=caller,
                destination=destination,
                slug=record.slug,
                sequence_number=record.sequence_number,
                is_custom=is_custom,
                referrer=referrer,
            )
        )
        return Registration(
            slug=record.slug,
            sequence_number=record.sequence_number,
            is_custom=is_custom,
            refund=refund,
        )

    def _commit(
        self, caller: str, destination: str, slug: str, is_custom: bool
    ) -> IdentifierRecord:
        sequence_number = self.total_registered + 1
        record = IdentifierRecord(
            sequence_number=sequence_number,
            slug=slug,
            destination=destination,
            is_custom=is_custom,
        )
        self._store.put("counters", _COUNTER_KEY, sequence_number)
        self._store.put("slugs", slug, record)
        self._store.put("sequences", sequence_number, slug)
        self._index_destination(destination, slug)
        self.ownership.assign(sequence_number, caller)
        return record

    def edit_destination(
        self, caller: str, sequence_number: int, destination: str
    ) -> IdentifierRecord:
        """Point ``sequence_number`` at a new ``destination``.

        Raises:
            NotFound: If ``sequence_number`` is unknown.
            NotOwner: If ``caller`` does not own it.
            EmptyDestination: If ``destination`` is empty.
        """
        with logfire.span(
            "registry.edit_destination",
            attributes={"caller": caller, "sequence_number": sequence_number},
        ):
            with self._store.transaction():
                current = self.record_of(sequence_number)
                if self.ownership.owner_of(sequence_number) != caller:
                    raise NotOwner(f"{caller} does not own #{sequence_number}")
                if not destination:
                    raise EmptyDestination("Destination must be non-empty")
                updated = current.model_copy(update={"destination": destination})
                self._store.put("slugs", current.slug, updated)
                self._unindex_destination(current.destination, current.slug)
                self._index_destination(destination, current.slug)
            logfire.info(
                "Destination updated",
                slug=current.slug,
                sequence_number=sequence_number,
            )
        self._emit(
            DestinationUpdated(
                caller=caller,
                sequence_number=sequence_number,
                slug=current.slug,
                previous=current.destination,
                destination=destination,
            )
        )
        return updated

    def subscribe(self, sink: EventSink) -> None:
        """Register an additional event sink."""
        self._sinks.append(sink)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _index_destination(self, destination: str, slug: str) -> None:
        slugs = self.slugs_for_destination(destination)
        self._store.put("destinations", destination, slugs + (slug,))

    def _unindex_destination(self, destination: str, slug: str) -> None:
        remaining = tuple(
            s for s in self.slugs_for_destination(destination) if s != slug
        )
        if remaining:
            self._store.put("destinations", destination, remaining)
        else:
            self._store.delete("destinations", destination)

    def _emit(self, event: Event) -> None:
        dispatch(self._sinks, event)


__all__ = ["Registry"]
