"""Tests for utils: chunking and string splitting."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from notionblocks.utils import chunk, chunk_blocks, split_string


class TestChunk:
    def test_empty(self):
        assert chunk([], 3) == []

    def test_exact_multiple(self):
        assert chunk([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

    def test_remainder_last(self):
        assert chunk([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunk([1], 0)

    def test_chunk_blocks_default_size(self):
        blocks = [{"type": "paragraph", "n": i} for i in range(201)]
        batches = chunk_blocks(blocks)
        assert [len(b) for b in batches] == [100, 100, 1]
        assert batches[2][0]["n"] == 200


class TestSplitString:
    def test_short(self):
        assert split_string("abc", 5) == ["abc"]

    def test_empty(self):
        assert split_string("", 5) == []

    def test_hard_cut(self):
        assert split_string("a" * 1951) == ["a" * 1950, "a"]

    def test_prefers_last_newline(self):
        assert split_string("ab\ncd\nefgh", 7) == ["ab\ncd\n", "efgh"]

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            split_string("abc", 0)

    def test_multibyte_characters(self):
        assert split_string("é" * 5, 2) == ["éé", "éé", "é"]


@given(
    items=st.lists(st.integers(), max_size=300),
    size=st.integers(min_value=1, max_value=120),
)
def test_chunk_preserves_order_and_bounds(items, size):
    groups = chunk(items, size)
    assert [x for g in groups for x in g] == items
    assert all(1 <= len(g) <= size for g in groups)
    assert all(len(g) == size for g in groups[:-1])


@given(
    text=st.text(alphabet=st.sampled_from("ab\n é"), max_size=400),
    limit=st.integers(min_value=1, max_value=50),
)
def test_split_string_roundtrip(text, limit):
    pieces = split_string(text, limit)
    assert "".join(pieces) == text
    assert all(0 < len(p) <= limit for p in pieces)
