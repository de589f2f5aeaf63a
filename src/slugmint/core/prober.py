# SPDX-License-Identifier: MIT
"""Find the next unused slug by counting upward in alphabet order."""

from __future__ import annotations

from typing import Callable

import logfire

from slugmint.constants import ALPHABET
from slugmint.errors import SlugSpaceExhausted

from .codec import rank_of

_FIRST = ALPHABET[0]
_LAST = ALPHABET[-1]


def increment(slug: str) -> str:
    """Return the successor of ``slug`` treated as a base-58 counter.

    The rightmost symbol is least significant. A symbol at the end of the
    alphabet resets to the first symbol and carries left. When every
    symbol carries the result wraps to the all-first-symbol slug.
    """
    symbols = list(slug)
    for position in range(len(symbols) - 1, -1, -1):
        rank = rank_of(symbols[position])
        if symbols[position] != _LAST:
            symbols[position] = ALPHABET[rank + 1]
            return "".join(symbols)
        symbols[position] = _FIRST
    return _FIRST * len(slug)


def next_available(candidate: str, exists: Callable[[str], bool]) -> str:
    """Return the first slug at or after ``candidate`` for which ``exists`` is false.

    Args:
        candidate: Starting slug.
        exists: Predicate reporting whether a slug is already taken.

    Raises:
        SlugSpaceExhausted: If probing returns to ``candidate``.
    """
    current = candidate
    probes = 0
    while exists(current):
        current = increment(current)
        probes += 1
        if current == candidate:
            logfire.error("Slug space exhausted", start=candidate, probes=probes)
            raise SlugSpaceExhausted(f"No free slug after {probes} probes")
    if probes:
        logfire.debug(
            "Resolved slug collision", start=candidate, slug=current, probes=probes
        )
    return current


__all__ = ["increment", "next_available"]
