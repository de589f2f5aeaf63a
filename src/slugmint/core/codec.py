# SPDX-License-Identifier: MIT
"""Conversions between integers and strings over the slug alphabet.

:func:`encode` is the lossy, shift-based encoding used for generated slugs:
each step emits ``value % 58`` and then drops six bits rather than dividing
by 58. The output is unique per input but not uniformly distributed.

:func:`to_ordinal` and :func:`from_ordinal` are the exact fixed-width
base-58 view of a slug in alphabet order, the order the collision prober
counts in.
"""

from __future__ import annotations

from slugmint.constants import ALPHABET, BASE, SHIFT_BITS, SLUG_LENGTH
from slugmint.errors import InvalidSymbol

_RANKS: dict[str, int] = {symbol: rank for rank, symbol in enumerate(ALPHABET)}


def symbol_at(index: int) -> str:
    """Return the alphabet symbol with rank ``index``.

    Raises:
        InvalidSymbol: If ``index`` is outside ``[0, 58)``.
    """
    if not 0 <= index < BASE:
        raise InvalidSymbol(f"Rank {index} outside alphabet range [0, {BASE})")
    return ALPHABET[index]


def rank_of(symbol: str) -> int:
    """Return the rank of ``symbol`` within the alphabet.

    Raises:
        InvalidSymbol: If ``symbol`` is not a member of the alphabet.
    """
    try:
        return _RANKS[symbol]
    except KeyError:
        raise InvalidSymbol(f"Symbol {symbol!r} is not in the alphabet") from None


def encode(value: int, width: int = SLUG_LENGTH) -> str:
    """Return a ``width`` character string derived from ``value``.

    Args:
        value: Non-negative integer to encode.
        width: Number of symbols to emit.

    Returns:
        String whose first character comes from the lowest digit.
    """
    if value < 0:
        raise ValueError("value must be non-negative")
    symbols: list[str] = []
    for _ in range(width):
        symbols.append(ALPHABET[value % BASE])
        value >>= SHIFT_BITS
    return "".join(symbols)


def is_slug(text: str, width: int = SLUG_LENGTH) -> bool:
    """Return ``True`` when ``text`` has ``width`` symbols, all in the alphabet."""
    return len(text) == width and all(ch in _RANKS for ch in text)


def to_ordinal(slug: str) -> int:
    """Return the base-58 value of ``slug``, most significant symbol first."""
    value = 0
    for symbol in slug:
        value = value * BASE + rank_of(symbol)
    return value


def from_ordinal(value: int, width: int = SLUG_LENGTH) -> str:
    """Return the ``width`` symbol slug whose base-58 value is ``value``.

    Values beyond ``58 ** width`` wrap modulo the slug space.
    """
    value %= BASE**width
    symbols = [ALPHABET[0]] * width
    for position in range(width - 1, -1, -1):
        value, digit = divmod(value, BASE)
        symbols[position] = ALPHABET[digit]
    return "".join(symbols)


__all__ = [
    "symbol_at",
    "rank_of",
    "encode",
    "is_slug",
    "to_ordinal",
    "from_ordinal",
]
