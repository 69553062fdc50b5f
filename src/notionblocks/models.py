"""Public data models for notionblocks.

This module contains the enums, result types and warning types referenced
by the public API surface.  All types are plain dataclasses with no
behaviour beyond what is needed for structural equality and a couple of
read-only accessors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ImageType(str, Enum):
    """Classification of an image ``src`` for the Notion ``image`` block."""

    EXTERNAL = "external"
    """An absolute ``http(s)`` URL with a supported file extension."""

    FILE = "file"
    """Anything that is not an absolute URL: relative paths, bare
    filenames, ``data:`` URIs and unparseable strings."""

    INVALID = "invalid"
    """An absolute URL whose extension Notion cannot display."""


class NodeType(str, Enum):
    """Block-level AST token types that have a block converter."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCK_QUOTE = "block_quote"
    FENCED_CODE = "fenced_code"
    TABLE = "table"


# ---------------------------------------------------------------------------
# Image-like links
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImageLikeLink:
    """A ``link`` token that is semantically an image.

    The parser produces a link rather than an image when the leading ``!``
    was escaped (``\\![alt](url)``); the ``!`` then survives as the tail of
    the preceding text token.

    Attributes
    ----------
    link:
        The wrapped ``link`` AST token.
    alt_text:
        Concatenated text children of the link, trimmed.
    """

    link: dict[str, Any]
    alt_text: str = ""

    @property
    def url(self) -> str:
        return self.link.get("attrs", {}).get("url", "")

    @property
    def title(self) -> str | None:
        """The alt text if non-empty, else the link's own title, else ``None``."""
        return self.alt_text or self.link.get("attrs", {}).get("title") or None


# ---------------------------------------------------------------------------
# Conversion warnings
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"INVALID_IMAGE"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Conversion result
# ---------------------------------------------------------------------------

@dataclass
class ConversionResult:
    """Output of a full Markdown-to-Notion conversion.

    Attributes
    ----------
    blocks:
        Flat, ordered list of Notion block dicts.
    batches:
        The same blocks chunked into lists of at most ``batch_size`` items,
        ready to be sent one batch per ``append_block_children`` request.
        Empty when *blocks* is empty.
    warnings:
        Non-fatal issues (skipped nodes, invalid images).
    """

    blocks: list[dict] = field(default_factory=list)
    batches: list[list[dict]] = field(default_factory=list)
    warnings: list[ConversionWarning] = field(default_factory=list)
