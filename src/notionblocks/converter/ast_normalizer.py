"""Parse Markdown and normalize to canonical AST tokens.

This module wraps mistune v3's AST renderer and normalises the raw token
stream into a well-defined set of canonical types used by the rest of the
converter pipeline.

Canonical block tokens:
    heading, paragraph, block_quote, list, list_item, task_list_item,
    fenced_code, indented_code, table, thematic_break, html_block

Canonical inline tokens:
    text, strong, emphasis, codespan, strikethrough, link, image,
    softbreak, linebreak, html_inline

Adjacent ``text`` tokens are coalesced.  Mistune emits a separate token
whenever an inline rule starts and then fails (``[!TIP]`` comes out as
``[`` and ``!TIP]``), and callout detection needs the whole literal.
"""

from __future__ import annotations

import mistune

from notionblocks.converter.table_plugin import ragged_table

# ---------------------------------------------------------------------------
# Mistune-to-canonical type mapping
# ---------------------------------------------------------------------------

_BLOCK_TYPE_MAP: dict[str, str] = {
    "heading": "heading",
    "paragraph": "paragraph",
    "block_quote": "block_quote",
    "list": "list",
    "list_item": "list_item",
    "task_list_item": "task_list_item",
    "block_code": "block_code",
    "table": "table",
    "thematic_break": "thematic_break",
    "block_html": "html_block",
    # Tight list items wrap their inline content in block_text
    "block_text": "paragraph",
}

_INLINE_TYPE_MAP: dict[str, str] = {
    "text": "text",
    "strong": "strong",
    "emphasis": "emphasis",
    "codespan": "codespan",
    "strikethrough": "strikethrough",
    "link": "link",
    "image": "image",
    "softbreak": "softbreak",
    "linebreak": "linebreak",
    "inline_html": "html_inline",
}

_TABLE_PART_TYPES: frozenset[str] = frozenset({
    "table_head",
    "table_body",
    "table_row",
    "table_cell",
})

# Types that should be silently skipped during normalization
_SKIP_TYPES: frozenset[str] = frozenset({
    "blank_line",
})


class ASTNormalizer:
    """Parse Markdown and normalize to canonical AST tokens."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(
            renderer="ast",
            plugins=[
                "strikethrough",
                "url",
                ragged_table,
            ],
        )

    def parse(self, markdown: str) -> list[dict]:
        """Parse markdown and return the normalized top-level token list."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return []
        return self._normalize_tokens(raw_tokens)

    def _normalize_tokens(self, tokens: list[dict]) -> list[dict]:
        """Normalize a token list and coalesce adjacent text tokens."""
        result: list[dict] = []
        for token in tokens:
            normalized = self._normalize_token(token)
            if normalized is None:
                continue
            if (
                normalized["type"] == "text"
                and result
                and result[-1]["type"] == "text"
            ):
                result[-1] = {
                    "type": "text",
                    "raw": result[-1].get("raw", "") + normalized.get("raw", ""),
                }
                continue
            result.append(normalized)
        return result

    def _normalize_token(self, token: dict) -> dict | None:
        """Normalize a single token, returning None if it should be skipped."""
        raw_type = token.get("type", "")

        if raw_type in _SKIP_TYPES:
            return None

        if raw_type in _BLOCK_TYPE_MAP:
            return self._normalize_block(token, _BLOCK_TYPE_MAP[raw_type])

        if raw_type in _INLINE_TYPE_MAP:
            return self._normalize_inline(token, _INLINE_TYPE_MAP[raw_type])

        if raw_type in _TABLE_PART_TYPES:
            return self._normalize_container(token, raw_type)

        # "raw" type used inside codespan children, block_code etc.
        if raw_type == "raw":
            return {"type": "text", "raw": token.get("raw", "")}

        # Unknown token: skip silently
        return None

    def _normalize_block(self, token: dict, canonical_type: str) -> dict:
        """Normalize a block-level token."""
        if canonical_type == "block_code":
            return self._normalize_code(token)

        if canonical_type == "html_block":
            return {"type": canonical_type, "raw": token.get("raw", "")}

        if canonical_type == "thematic_break":
            return {"type": canonical_type}

        return self._normalize_container(token, canonical_type)

    def _normalize_code(self, token: dict) -> dict:
        """Split ``block_code`` into fenced and indented variants.

        The raw code keeps mistune's trailing newline; the code converter
        owns the decision to trim it.
        """
        fenced = token.get("style") == "fenced"
        result: dict = {
            "type": "fenced_code" if fenced else "indented_code",
            "raw": token.get("raw", ""),
        }
        info = (token.get("attrs") or {}).get("info")
        if fenced and info:
            result["attrs"] = {"info": info}
        return result

    def _normalize_inline(self, token: dict, canonical_type: str) -> dict:
        """Normalize an inline-level token."""
        # Leaf tokens that only carry a literal
        if canonical_type in ("text", "codespan", "html_inline"):
            return {"type": canonical_type, "raw": token.get("raw", "")}

        if canonical_type in ("softbreak", "linebreak"):
            return {"type": canonical_type}

        # link / image keep url + title; the rest only carry children
        return self._normalize_container(token, canonical_type)

    def _normalize_container(self, token: dict, canonical_type: str) -> dict:
        """Copy attrs and recursively normalize children."""
        result: dict = {"type": canonical_type}

        attrs = token.get("attrs")
        if attrs:
            result["attrs"] = dict(attrs)

        children = token.get("children")
        if children:
            result["children"] = self._normalize_tokens(children)

        return result
