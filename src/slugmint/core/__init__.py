# SPDX-License-Identifier: MIT
"""Slug codec, generator and collision prober."""

from .codec import encode, from_ordinal, is_slug, rank_of, symbol_at, to_ordinal
from .generator import generate
from .prober import increment, next_available

__all__ = [
    "encode",
    "from_ordinal",
    "generate",
    "increment",
    "is_slug",
    "next_available",
    "rank_of",
    "symbol_at",
    "to_ordinal",
]
