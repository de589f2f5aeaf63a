# SPDX-License-Identifier: MIT
"""Deterministic slug candidates derived from the registration counter."""

from __future__ import annotations

import hashlib

from slugmint.constants import SLUG_LENGTH

from .codec import encode


def seed_digest(seed: int) -> int:
    """Return SHA-256 of ``seed`` (32-byte big-endian) as an integer."""
    if seed < 0:
        raise ValueError("seed must be non-negative")
    digest = hashlib.sha256(seed.to_bytes(32, "big")).digest()
    return int.from_bytes(digest, "big")


def generate(seed: int, width: int = SLUG_LENGTH) -> str:
    """Return the candidate slug for ``seed``.

    The same seed always yields the same slug; consecutive seeds are
    decorrelated by the hash.
    """
    return encode(seed_digest(seed), width)


__all__ = ["generate", "seed_digest"]
