# SPDX-License-Identifier: MIT
"""Tests for :mod:`slugmint.core.prober`."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from slugmint.core.codec import from_ordinal, to_ordinal
from slugmint.core.generator import generate
from slugmint.core.prober import increment, next_available
from slugmint.errors import InvalidSymbol, SlugSpaceExhausted

SPACE = 58**8


@pytest.mark.parametrize(
    ("slug", "expected"),
    [
        ("11111111", "11111112"),
        ("1111111z", "11111121"),
        ("1zzzzzzz", "21111111"),
        ("abcdefgz", "abcdefh1"),
        ("zzzzzzzz", "11111111"),
    ],
)
def test_increment_carries_right_to_left(slug: str, expected: str) -> None:
    assert increment(slug) == expected


@given(st.integers(min_value=0, max_value=SPACE - 1))
def test_increment_adds_one_modulo_space(value: int) -> None:
    assert to_ordinal(increment(from_ordinal(value))) == (value + 1) % SPACE


def test_increment_rejects_foreign_symbols() -> None:
    with pytest.raises(InvalidSymbol):
        increment("1111111O")


def test_next_available_returns_free_candidate() -> None:
    assert next_available("abcdefgh", lambda _slug: False) == "abcdefgh"


def test_next_available_skips_taken_slugs() -> None:
    taken = {"1111111z", "11111121"}
    assert next_available("1111111z", taken.__contains__) == "11111122"


def test_next_available_after_generated_collision() -> None:
    taken = {generate(0)}
    assert next_available(generate(0), taken.__contains__) == "tDwrkbxJ"


def test_next_available_skips_consecutive_generated_collisions() -> None:
    taken = {"tDwrkbxH", "tDwrkbxJ"}
    assert next_available("tDwrkbxH", taken.__contains__) == "tDwrkbxK"


def test_next_available_wraps_past_maximum() -> None:
    taken = {"zzzzzzzz"}
    assert next_available("zzzzzzzz", taken.__contains__) == "11111111"


def test_next_available_detects_exhausted_space() -> None:
    with pytest.raises(SlugSpaceExhausted):
        next_available("1", lambda _slug: True)
