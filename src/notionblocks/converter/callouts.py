"""Callout detection and conversion.

A block quote becomes a Notion ``callout`` when the first line of its
content carries a GitHub-style alert marker::

    > [!TIP] 🔥 Remember this
    > and this.

The marker names the callout kind (which picks the background colour) and
may be followed by a single emoji used as the callout icon.  Parsing is a
pure transform: the quote's tokens are copied, never edited in place.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import emoji

from notionblocks.converter.rich_text import build_rich_text

CALLOUT_MARKERS: tuple[str, ...] = (
    "[!note]",
    "[!tip]",
    "[!success]",
    "[!important]",
    "[!warning]",
    "[!danger]",
    "[!caution]",
)
"""Lower-cased markers that turn a block quote into a callout."""

_BACKGROUND_COLORS: dict[str, str] = {
    "CAUTION": "yellow_background",
    "DANGER": "red_background",
    "IMPORTANT": "purple_background",
    "INFO": "blue_background",
    "NOTE": "blue_background",
    "SUCCESS": "green_background",
    "TIP": "green_background",
    "WARNING": "orange_background",
}

_DEFAULT_COLOR = "gray_background"

_STRING_TOKEN_TYPES = frozenset({"text", "codespan", "html_inline"})

_MARKER_RE = re.compile(r"^\[!(\w+)\]")


@dataclass(frozen=True)
class CalloutHeader:
    """The parsed first line of a callout."""

    kind: str = "NOTE"
    emoji: str = ""
    text: str = ""


def real_node(quote: dict[str, Any]) -> dict[str, Any] | None:
    """Return the quote's first child, which holds its actual content."""
    children = quote.get("children", [])
    return children[0] if children else None


def _first_string_child(node: dict[str, Any] | None) -> dict[str, Any] | None:
    if not node:
        return None
    children = node.get("children", [])
    if not children or children[0].get("type") not in _STRING_TOKEN_TYPES:
        return None
    return children[0]


def is_callout(quote: dict[str, Any]) -> bool:
    """Return True if the quote's leading text contains a callout marker."""
    first = _first_string_child(real_node(quote))
    if first is None:
        return False
    literal = first.get("raw", "").lower()
    return any(marker in literal for marker in CALLOUT_MARKERS)


def parse_callout(text: str) -> CalloutHeader:
    """Split ``[!TYPE] EMOJI rest`` into its parts.

    The match is anchored at the start of *text* after leading whitespace.
    Whitespace between the marker and the remaining text is dropped; the
    remaining text keeps its trailing whitespace so it still joins the next
    inline token.  Without a match the kind defaults to ``NOTE``, the emoji
    to ``""`` and the text is returned trimmed.

    >>> parse_callout("[!TIP] 🔥 Remember this")
    CalloutHeader(kind='TIP', emoji='🔥', text='Remember this')
    """
    stripped = text.lstrip()
    match = _MARKER_RE.match(stripped)
    if match is None:
        return CalloutHeader(text=text.strip())
    rest = stripped[match.end():]
    icon = leading_emoji(rest)
    if icon:
        rest = rest.lstrip()[len(icon):]
    return CalloutHeader(kind=match.group(1), emoji=icon, text=rest.lstrip())


def leading_emoji(text: str) -> str:
    """Return the emoji that starts *text* after at least one space, or ``""``.

    Multi-code-point emoji (ZWJ sequences, skin tones, keycaps and
    tag-sequence flags) are returned whole.
    """
    body = text.lstrip()
    if not body or body == text:
        return ""
    found = emoji.emoji_list(body)
    if found and found[0]["match_start"] == 0:
        return found[0]["emoji"]
    return ""


def callout_color(kind: str) -> str:
    """Map a callout kind to a Notion background colour."""
    return _BACKGROUND_COLORS.get(kind.upper(), _DEFAULT_COLOR)


def build_callout(quote: dict[str, Any]) -> dict:
    """Build a Notion ``callout`` block from a block quote token."""
    node = real_node(quote)
    children = list(node.get("children", [])) if node else []
    header = CalloutHeader()

    first = _first_string_child(node)
    if first is not None:
        header = parse_callout(first.get("raw", ""))
        if header.text.strip():
            children[0] = {**first, "raw": header.text}
        else:
            children.pop(0)

    rich_text = build_rich_text(children)
    if rich_text and rich_text[0]["text"]["content"] == "\n":
        rich_text.pop(0)

    return {
        "object": "block",
        "type": "callout",
        "callout": {
            "rich_text": rich_text,
            "icon": {"type": "emoji", "emoji": header.emoji} if header.emoji else None,
            "color": callout_color(header.kind),
        },
    }
