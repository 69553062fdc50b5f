"""Tests for converter/ast_normalizer.py."""

from __future__ import annotations

from notionblocks.converter.ast_normalizer import ASTNormalizer


def _parse(markdown):
    return ASTNormalizer().parse(markdown)


class TestNormalizer:
    def test_empty_document(self):
        assert _parse("") == []

    def test_blank_lines_dropped(self):
        tokens = _parse("a\n\n\n\nb")
        assert [t["type"] for t in tokens] == ["paragraph", "paragraph"]

    def test_heading_level(self):
        heading = _parse("## Title")[0]
        assert heading["type"] == "heading"
        assert heading["attrs"]["level"] == 2

    def test_fenced_code(self):
        code = _parse("```py\nprint(1)\n```")[0]
        assert code["type"] == "fenced_code"
        assert code["raw"] == "print(1)\n"
        assert code["attrs"]["info"] == "py"

    def test_fenced_code_without_info(self):
        code = _parse("```\nx\n```")[0]
        assert code["type"] == "fenced_code"
        assert "attrs" not in code

    def test_indented_code(self):
        code = _parse("    indented\n")[0]
        assert code["type"] == "indented_code"

    def test_callout_marker_is_one_text_token(self):
        quote = _parse("> [!TIP] 🔥 Remember this")[0]
        paragraph = quote["children"][0]
        assert paragraph["children"][0] == {"type": "text", "raw": "[!TIP] 🔥 Remember this"}

    def test_escaped_bang_before_link(self):
        children = _parse("see \\![a](u)")[0]["children"]
        assert children[0] == {"type": "text", "raw": "see !"}
        assert children[1]["type"] == "link"

    def test_table_sections(self):
        table = _parse("| a | b |\n|---|---|\n| 1 | 2 |")[0]
        assert table["type"] == "table"
        assert [s["type"] for s in table["children"]] == ["table_head", "table_body"]

    def test_ragged_table_rows_keep_their_cells(self):
        table = _parse("| a | b |\n|---|---|\n| 1 |\n| 1 | 2 | 3 |")[0]
        assert table["type"] == "table"
        body = table["children"][1]
        assert [len(row["children"]) for row in body["children"]] == [1, 3]

    def test_thematic_break_and_list_kept(self):
        tokens = _parse("---\n\n- item")
        assert [t["type"] for t in tokens] == ["thematic_break", "list"]
