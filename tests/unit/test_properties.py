"""Property-based tests for notionblocks using Hypothesis.

These tests verify invariants of the full conversion pipeline.  They
complement the example-based unit tests by exercising the converter with a
wide range of randomly generated documents.
"""

from __future__ import annotations

import json

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from notionblocks.config import NotionBlocksConfig
from notionblocks.converter.md_to_notion import MarkdownToNotionConverter

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

_word_st = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=12)

_line_st = st.one_of(
    _word_st,
    _word_st.map(lambda w: f"# {w}"),
    _word_st.map(lambda w: f"#### {w}"),
    _word_st.map(lambda w: f"**{w}** and *{w}*"),
    _word_st.map(lambda w: f"> {w}"),
    _word_st.map(lambda w: f"> [!TIP] {w}"),
    _word_st.map(lambda w: f"![{w}](https://example.com/{w}.png)"),
    _word_st.map(lambda w: f"![{w}](https://example.com/{w}.webp)"),
    _word_st.map(lambda w: f"text \\![{w}]({w}.jpg) more"),
    _word_st.map(lambda w: f"```py\n{w}\n```"),
    _word_st.map(lambda w: f"| {w} | b |\n|---|---|\n| 1 | 2 |"),
    _word_st.map(lambda w: f"- {w}"),
    st.just("---"),
)

_document_st = st.lists(_line_st, max_size=40).map("\n\n".join)


def _segments(block):
    payload = block[block["type"]]
    yield from payload.get("rich_text", [])
    yield from payload.get("caption", [])
    for row in payload.get("children", []) if block["type"] == "table" else []:
        for cell in row["table_row"]["cells"]:
            yield from cell


def _converter(**kwargs):
    return MarkdownToNotionConverter(NotionBlocksConfig(**kwargs))


# ---------------------------------------------------------------------------
# Pipeline invariants
# ---------------------------------------------------------------------------

@settings(max_examples=60, suppress_health_check=[HealthCheck.too_slow])
@given(markdown=_document_st, batch_size=st.integers(min_value=1, max_value=100))
def test_batches_bounded_and_ordered(markdown, batch_size):
    result = _converter(batch_size=batch_size).convert(markdown)
    assert all(1 <= len(batch) <= batch_size for batch in result.batches)
    assert [block for batch in result.batches for block in batch] == result.blocks


@settings(max_examples=60, suppress_health_check=[HealthCheck.too_slow])
@given(markdown=_document_st)
def test_every_block_well_formed(markdown):
    result = _converter().convert(markdown)
    for block in result.blocks:
        assert block["object"] == "block"
        assert block["type"] in block
        rich_text = block[block["type"]].get("rich_text", [])
        assert len(rich_text) <= 100
        assert all(len(seg["text"]["content"]) <= 1950 for seg in _segments(block))
    json.dumps(result.batches)


@given(urls=st.lists(_word_st.map(lambda w: f"https://example.com/{w}.jpg"), min_size=1, max_size=8))
def test_image_only_paragraph_becomes_images(urls):
    markdown = " ".join(f"![x]({url})" for url in urls)
    result = _converter().convert(markdown)
    assert [b["type"] for b in result.blocks] == ["image"] * len(urls)
    assert [b["image"]["external"]["url"] for b in result.blocks] == urls


@given(length=st.integers(min_value=1, max_value=6000))
def test_code_content_survives_splitting(length):
    content = "x" * length
    result = _converter().convert(f"```\n{content}\n```")
    segments = result.blocks[0]["code"]["rich_text"]
    assert "".join(seg["text"]["content"] for seg in segments) == content
    assert [len(seg["text"]["content"]) for seg in segments[:-1]] == [1950] * (len(segments) - 1)


@settings(max_examples=25)
@given(count=st.integers(min_value=0, max_value=330))
def test_block_count_batches(count):
    markdown = "\n\n".join(f"p{i}" for i in range(count))
    result = _converter().convert(markdown)
    assert len(result.blocks) == count
    assert len(result.batches) == -(-count // 100)


@given(markdown=_document_st)
def test_conversion_is_deterministic(markdown):
    converter = _converter()
    assert converter.convert(markdown).batches == converter.convert(markdown).batches
