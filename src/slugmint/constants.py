# SPDX-License-Identifier: MIT
"""Project-wide constants.

Keep this file minimal and free of side effects.
"""

from __future__ import annotations

from typing import Final

# Base58 symbol set: digits and letters without 0, O, I and l.
ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
BASE: Final[int] = len(ALPHABET)

SLUG_LENGTH: Final[int] = 8
# Bits consumed per emitted symbol by ``codec.encode``.
SHIFT_BITS: Final[int] = 6

BIPS_DENOMINATOR: Final[int] = 10_000

DEFAULT_REGISTRATION_FEE: Final[int] = 10_000_000_000_000_000
DEFAULT_REFERRER_FEE_BIPS: Final[int] = 3_000
DEFAULT_PROTOCOL_OWNER: Final[str] = "protocol"

__all__ = [
    "ALPHABET",
    "BASE",
    "SLUG_LENGTH",
    "SHIFT_BITS",
    "BIPS_DENOMINATOR",
    "DEFAULT_REGISTRATION_FEE",
    "DEFAULT_REFERRER_FEE_BIPS",
    "DEFAULT_PROTOCOL_OWNER",
]
