# SPDX-License-Identifier: MIT
"""Tests for :mod:`slugmint.core.generator`."""

import hashlib

import pytest

from slugmint.core.codec import encode, is_slug
from slugmint.core.generator import generate, seed_digest

# SHA-256 of 32 zero bytes.
SEED_ZERO_DIGEST = "66687aadf862bd776c8fc18b8e9f8e20089714856ee233b3902a591d0d5f2925"


def test_seed_zero_digest_is_pinned() -> None:
    assert seed_digest(0) == int(SEED_ZERO_DIGEST, 16)


def test_generate_zero_is_pinned() -> None:
    assert generate(0) == "tDwrkbxH"
    assert generate(0) == generate(0)
    assert is_slug(generate(0))


def test_generate_one_is_pinned() -> None:
    assert generate(1) == "Ykf6j8ZE"


def test_generate_hashes_big_endian_seed() -> None:
    digest = hashlib.sha256((12345).to_bytes(32, "big")).digest()
    assert generate(12345) == encode(int.from_bytes(digest, "big"), 8)


def test_sequential_seeds_give_distinct_slugs() -> None:
    slugs = {generate(seed) for seed in range(200)}
    assert len(slugs) == 200


def test_generate_rejects_negative_seed() -> None:
    with pytest.raises(ValueError):
        generate(-1)
