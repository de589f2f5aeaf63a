# SPDX-License-Identifier: MIT
"""Exception types raised by the registry, ledger and codec.

Every error is a local validation failure. Callers receive it synchronously
and the transaction that raised it leaves no state behind.
"""

from __future__ import annotations


class SlugmintError(Exception):
    """Base class for all slugmint failures."""


class EmptyDestination(SlugmintError):
    """A destination string was empty."""


class SlugTaken(SlugmintError):
    """The requested slug is already registered."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Slug already registered: {slug!r}")
        self.slug = slug


class InvalidReferrer(SlugmintError):
    """The referrer is the caller itself."""


class InsufficientPayment(SlugmintError):
    """The payment does not cover the registration cost."""

    def __init__(self, payment: int, cost: int) -> None:
        super().__init__(f"Payment {payment} is below cost {cost}")
        self.payment = payment
        self.cost = cost


class NotOwner(SlugmintError):
    """The caller does not control the identifier."""


class EmptySlug(SlugmintError):
    """A slug lookup was attempted with an empty string."""


class NotFound(SlugmintError):
    """No record exists for the requested slug or sequence number."""


class NoBalance(SlugmintError):
    """The address has nothing to withdraw."""


class InvalidSymbol(SlugmintError):
    """A character or rank is outside the slug alphabet."""


class SlugSpaceExhausted(SlugmintError):
    """Probing wrapped around without finding a free slug."""


class LedgerImbalance(SlugmintError):
    """Balances and payouts no longer add up to the fees collected."""


__all__ = [
    "SlugmintError",
    "EmptyDestination",
    "SlugTaken",
    "InvalidReferrer",
    "InsufficientPayment",
    "NotOwner",
    "EmptySlug",
    "NotFound",
    "NoBalance",
    "InvalidSymbol",
    "SlugSpaceExhausted",
    "LedgerImbalance",
]
