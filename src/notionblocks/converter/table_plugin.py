"""Mistune block rules for GFM tables with ragged body rows.

mistune's stock ``table`` plugin turns the whole table back into a
paragraph as soon as one body row has a different cell count from the
header.  These rules accept such rows and keep exactly the cells each row
has, so the table converter can size the table by its widest row.

The emitted tokens have the same shape as the stock plugin's::

    {"type": "table", "children": [
        {"type": "table_head", "children": [<table_cell>, ...]},
        {"type": "table_body", "children": [
            {"type": "table_row", "children": [<table_cell>, ...]},
        ]},
    ]}

Each ``table_cell`` keeps its source in ``text``; mistune parses it into
inline children when it renders the AST.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from mistune.block_parser import BlockParser
    from mistune.core import BlockState
    from mistune.markdown import Markdown

# Rows wrapped in pipes: ``| a | b |``
PIPE_TABLE_PATTERN = r"^ {0,3}\|[^\n]*\|[ \t]*(?:\n|$)"
# Rows without outer pipes: ``a | b``
BARE_TABLE_PATTERN = r"^ {0,3}\S[^\n]*\|[^\n]*(?:\n|$)"

_LINE_RE = re.compile(r"[^\n]*(?:\n|$)")
_DELIMITER_RE = re.compile(r"^(:?)-+(:?)$")

RowStripper = Callable[[str], Optional[str]]


def ragged_table(md: "Markdown") -> None:
    """Register the table rules on *md*'s block parser.

    Use it in place of mistune's ``"table"`` plugin::

        mistune.create_markdown(renderer="ast", plugins=[ragged_table])
    """
    md.block.register("table", PIPE_TABLE_PATTERN, parse_pipe_table, before="paragraph")
    md.block.register("nptable", BARE_TABLE_PATTERN, parse_bare_table, before="paragraph")


def parse_pipe_table(block: "BlockParser", m: re.Match[str], state: "BlockState") -> int | None:
    return _parse_table(m, state, _strip_pipe_row)


def parse_bare_table(block: "BlockParser", m: re.Match[str], state: "BlockState") -> int | None:
    return _parse_table(m, state, _strip_bare_row)


def _parse_table(m: re.Match[str], state: "BlockState", strip_row: RowStripper) -> int | None:
    """Append a table token and return the position after it.

    Returns ``None`` when the header and delimiter rows do not form a
    table; mistune then treats the header line as paragraph text.
    """
    header = strip_row(m.group(0))
    if header is None:
        return None

    pos = m.end()
    delimiter_line = _line_at(state.src, pos)
    delimiter = strip_row(delimiter_line)
    if delimiter is None:
        return None

    header_cells = split_cells(header)
    aligns = parse_aligns(split_cells(delimiter))
    if aligns is None or len(aligns) != len(header_cells):
        return None
    pos += len(delimiter_line)

    rows: list[dict[str, Any]] = []
    while pos < state.cursor_max:
        line = _line_at(state.src, pos)
        text = strip_row(line)
        if text is None:
            break
        rows.append({
            "type": "table_row",
            "children": _cell_tokens(split_cells(text), aligns, head=False),
        })
        pos += len(line)

    state.append_token({
        "type": "table",
        "children": [
            {"type": "table_head", "children": _cell_tokens(header_cells, aligns, head=True)},
            {"type": "table_body", "children": rows},
        ],
    })
    return pos


def split_cells(row: str) -> list[str]:
    """Split a row on unescaped pipes and trim each cell.

    >>> split_cells(" a | b ")
    ['a', 'b']
    """
    cells: list[str] = []
    start = 0
    for pos, char in enumerate(row):
        if char == "|" and not _is_escaped(row, pos):
            cells.append(row[start:pos].strip())
            start = pos + 1
    cells.append(row[start:].strip())
    return cells


def parse_aligns(cells: list[str]) -> list[str | None] | None:
    """Read the column alignments from delimiter cells.

    Returns ``None`` if any cell is not a run of dashes with optional
    colons on either side.
    """
    aligns: list[str | None] = []
    for cell in cells:
        match = _DELIMITER_RE.match(cell)
        if match is None:
            return None
        left, right = match.groups()
        if left and right:
            aligns.append("center")
        elif left:
            aligns.append("left")
        elif right:
            aligns.append("right")
        else:
            aligns.append(None)
    return aligns


def _cell_tokens(
    cells: list[str],
    aligns: list[str | None],
    head: bool,
) -> list[dict[str, Any]]:
    # Cells past the delimiter row's columns have no alignment
    return [
        {
            "type": "table_cell",
            "text": text,
            "attrs": {"align": aligns[i] if i < len(aligns) else None, "head": head},
        }
        for i, text in enumerate(cells)
    ]


def _strip_pipe_row(line: str) -> str | None:
    text = line.rstrip("\n").strip(" \t")
    if len(text) < 2 or not text.startswith("|") or not text.endswith("|"):
        return None
    return text[1:-1]


def _strip_bare_row(line: str) -> str | None:
    text = line.rstrip("\n").strip(" \t")
    if "|" not in text:
        return None
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not _is_escaped(text, len(text) - 1):
        text = text[:-1]
    return text


def _line_at(src: str, pos: int) -> str:
    match = _LINE_RE.match(src, pos)
    return match.group(0) if match else ""


def _is_escaped(text: str, pos: int) -> bool:
    backslashes = 0
    pos -= 1
    while pos >= 0 and text[pos] == "\\":
        backslashes += 1
        pos -= 1
    return backslashes % 2 == 1
