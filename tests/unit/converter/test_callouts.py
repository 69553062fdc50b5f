"""Tests for converter/callouts.py: callout detection and conversion."""

from __future__ import annotations

import copy

import pytest

from notionblocks.converter.ast_normalizer import ASTNormalizer
from notionblocks.converter.callouts import (
    CalloutHeader,
    build_callout,
    callout_color,
    is_callout,
    leading_emoji,
    parse_callout,
    real_node,
)


def _quote(markdown: str) -> dict:
    tokens = ASTNormalizer().parse(markdown)
    assert tokens[0]["type"] == "block_quote"
    return tokens[0]


def _quote_of(*children):
    return {"type": "block_quote", "children": [{"type": "paragraph", "children": list(children)}]}


class TestParseCallout:
    def test_type_emoji_and_text(self):
        assert parse_callout("[!TIP] 🔥 Remember this") == CalloutHeader("TIP", "🔥", "Remember this")

    def test_type_only(self):
        assert parse_callout("[!WARNING] Careful") == CalloutHeader("WARNING", "", "Careful")

    def test_marker_only(self):
        assert parse_callout("[!NOTE]") == CalloutHeader("NOTE", "", "")

    def test_leading_whitespace_trimmed(self):
        assert parse_callout("   [!danger] ⚠️ Hot") == CalloutHeader("danger", "⚠️", "Hot")

    def test_no_marker_defaults_to_note(self):
        assert parse_callout("  plain text ") == CalloutHeader("NOTE", "", "plain text")

    def test_marker_not_at_start(self):
        assert parse_callout("see [!TIP] here").kind == "NOTE"

    def test_zwj_emoji_sequence(self):
        header = parse_callout("[!NOTE] 👩‍💻 Dev")
        assert header.emoji == "👩‍💻"
        assert header.text == "Dev"

    def test_word_after_marker_is_not_emoji(self):
        assert parse_callout("[!TIP] Hello") == CalloutHeader("TIP", "", "Hello")

    def test_tag_sequence_flag_kept_whole(self):
        flag = "\U0001F3F4\U000E0067\U000E0062\U000E0073\U000E0063\U000E0074\U000E007F"
        assert parse_callout(f"[!TIP] {flag} Hi") == CalloutHeader("TIP", flag, "Hi")

    @pytest.mark.parametrize("icon", [
        "\U0001F44D\U0001F3FD",
        "#\uFE0F\u20E3",
        "\U0001F1F3\U0001F1F1",
        "\u2764\uFE0F",
    ])
    def test_multi_code_point_emoji(self, icon):
        assert parse_callout(f"[!NOTE] {icon} text") == CalloutHeader("NOTE", icon, "text")


class TestLeadingEmoji:
    def test_requires_space_before_emoji(self):
        assert leading_emoji("\U0001F525 x") == ""
        assert leading_emoji(" \U0001F525 x") == "\U0001F525"

    def test_emoji_must_come_first(self):
        assert leading_emoji(" hi \U0001F525") == ""

    def test_blank(self):
        assert leading_emoji("   ") == ""
        assert leading_emoji("") == ""


class TestCalloutColor:
    @pytest.mark.parametrize("kind, color", [
        ("CAUTION", "yellow_background"),
        ("DANGER", "red_background"),
        ("IMPORTANT", "purple_background"),
        ("INFO", "blue_background"),
        ("NOTE", "blue_background"),
        ("SUCCESS", "green_background"),
        ("TIP", "green_background"),
        ("WARNING", "orange_background"),
        ("tip", "green_background"),
        ("CUSTOM", "gray_background"),
    ])
    def test_color_table(self, kind, color):
        assert callout_color(kind) == color


class TestIsCallout:
    @pytest.mark.parametrize("marker", [
        "[!NOTE]", "[!TIP]", "[!SUCCESS]", "[!IMPORTANT]",
        "[!WARNING]", "[!DANGER]", "[!CAUTION]", "[!note]",
    ])
    def test_markers(self, marker):
        assert is_callout(_quote(f"> {marker} text"))

    def test_marker_anywhere_in_first_text(self):
        assert is_callout(_quote_of({"type": "text", "raw": "see [!tip] here"}))

    def test_unknown_marker(self):
        assert not is_callout(_quote("> [!INFO] text"))

    def test_plain_quote(self):
        assert not is_callout(_quote("> just a quote"))

    def test_first_child_not_string(self):
        quote = _quote_of({"type": "strong", "children": [{"type": "text", "raw": "[!TIP]"}]})
        assert not is_callout(quote)

    def test_empty_quote(self):
        assert not is_callout({"type": "block_quote"})
        assert real_node({"type": "block_quote"}) is None


class TestBuildCallout:
    def test_tip_with_emoji(self):
        block = build_callout(_quote("> [!TIP] 🔥 Remember this"))
        assert block["object"] == "block"
        assert block["type"] == "callout"
        callout = block["callout"]
        assert callout["color"] == "green_background"
        assert callout["icon"] == {"type": "emoji", "emoji": "🔥"}
        assert [seg["text"]["content"] for seg in callout["rich_text"]] == ["Remember this"]

    def test_flag_icon_leaves_no_tag_characters_in_text(self):
        flag = "\U0001F3F4\U000E0067\U000E0062\U000E0073\U000E0063\U000E0074\U000E007F"
        block = build_callout(_quote(f"> [!TIP] {flag} Hi"))
        assert block["callout"]["icon"] == {"type": "emoji", "emoji": flag}
        assert [seg["text"]["content"] for seg in block["callout"]["rich_text"]] == ["Hi"]

    def test_without_emoji_icon_is_none(self):
        block = build_callout(_quote("> [!WARNING] Careful"))
        assert block["callout"]["icon"] is None
        assert block["callout"]["color"] == "orange_background"

    def test_marker_line_only_drops_leading_break(self):
        block = build_callout(_quote("> [!NOTE]\n> Body text"))
        contents = [seg["text"]["content"] for seg in block["callout"]["rich_text"]]
        assert contents == ["Body text"]
        assert block["callout"]["color"] == "blue_background"

    def test_formatting_after_marker_kept(self):
        block = build_callout(_quote("> [!IMPORTANT] Read **this**"))
        rich_text = block["callout"]["rich_text"]
        assert rich_text[0]["text"]["content"] == "Read "
        assert rich_text[1]["text"]["content"] == "this"
        assert rich_text[1]["annotations"]["bold"] is True

    def test_source_tree_not_modified(self):
        quote = _quote("> [!TIP] 🔥 Remember this")
        snapshot = copy.deepcopy(quote)
        build_callout(quote)
        assert quote == snapshot

    def test_same_tree_converts_twice_identically(self):
        quote = _quote("> [!DANGER] Hot")
        assert build_callout(quote) == build_callout(quote)
