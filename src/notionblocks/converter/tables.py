"""Table conversion: Markdown table AST to Notion table block.

Builds a Notion ``table`` block from the normalized table AST token
produced by the table rule in :mod:`notionblocks.converter.table_plugin`.

The table AST structure (after normalization) looks like::

    {
        "type": "table",
        "children": [
            {
                "type": "table_head",
                "children": [
                    {"type": "table_cell", "attrs": {"align": null, "head": true},
                     "children": [inline tokens...]},
                    ...
                ]
            },
            {
                "type": "table_body",
                "children": [
                    {
                        "type": "table_row",
                        "children": [
                            {"type": "table_cell", "attrs": {"align": null, "head": false},
                             "children": [inline tokens...]},
                            ...
                        ]
                    },
                    ...
                ]
            }
        ]
    }

``table_head`` and ``table_body`` are the table's *sections*.  The head
section holds its cells directly; it is treated as a single row.

The resulting Notion block::

    {
        "object": "block",
        "type": "table",
        "table": {
            "table_width": <widest row>,
            "has_column_header": <more than one section>,
            "has_row_header": false,
            "children": [
                {"type": "table_row", "table_row": {"cells": [[<segments>], ...]}},
                ...
            ]
        }
    }

Rows shorter than ``table_width`` are left as they are.
"""

from __future__ import annotations

from typing import Any

from notionblocks.config import NotionBlocksConfig
from notionblocks.converter.rich_text import build_rich_text, split_rich_text

_SECTION_TYPES = frozenset({"table_head", "table_body"})


def build_table(
    token: dict[str, Any],
    config: NotionBlocksConfig,
) -> list[dict[str, Any]]:
    """Build a Notion table block from a table AST token.

    Parameters
    ----------
    token:
        Normalized table AST token with ``type="table"``.
    config:
        Conversion configuration (text limit per cell segment).

    Returns
    -------
    list[dict]
        A one-element list holding the table block.  The renderer flattens
        it into the surrounding block sequence.
    """
    sections = [
        child for child in token.get("children", [])
        if child.get("type") in _SECTION_TYPES
    ]

    notion_rows: list[dict[str, Any]] = []
    table_width = 0

    for section in sections:
        for row in _section_rows(section):
            cells = _build_row_cells(row.get("children", []), config)
            table_width = max(table_width, len(cells))
            notion_rows.append({
                "type": "table_row",
                "table_row": {"cells": cells},
            })

    # Smallest table Notion accepts
    if not notion_rows:
        table_width = 1
        notion_rows.append({
            "type": "table_row",
            "table_row": {"cells": [[]]},
        })

    return [{
        "object": "block",
        "type": "table",
        "table": {
            "table_width": table_width,
            "has_column_header": len(sections) > 1,
            "has_row_header": False,
            "children": notion_rows,
        },
    }]


def _section_rows(section: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the rows of a section; a section of bare cells is one row."""
    children = section.get("children", [])
    if any(child.get("type") == "table_cell" for child in children):
        return [section]
    return [child for child in children if child.get("type") == "table_row"]


def _build_row_cells(
    cells: list[dict[str, Any]],
    config: NotionBlocksConfig,
) -> list[list[dict[str, Any]]]:
    """Build a list of cell rich_text arrays from table_cell tokens."""
    result: list[list[dict[str, Any]]] = []
    for cell in cells:
        if cell.get("type") != "table_cell":
            continue
        rich_text = build_rich_text(cell.get("children", []))
        if _is_blank(rich_text):
            result.append([])
            continue
        result.append(split_rich_text(rich_text, config.text_content_limit))
    return result


def _is_blank(rich_text: list[dict[str, Any]]) -> bool:
    if not rich_text:
        return True
    return len(rich_text) == 1 and not rich_text[0]["text"]["content"].strip()
