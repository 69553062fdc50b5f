"""notionblocks — Convert Markdown into Notion API block payloads.

Public re-exports
-----------------

* **Entry points:** :func:`to_json_string`, :func:`to_array`, :func:`convert`
* **Converter:** :class:`MarkdownToNotionConverter`
* **Configuration:** :class:`NotionBlocksConfig`
* **Errors:** Every :class:`NotionBlocksError` subclass and :class:`ErrorCode`
* **Models:** Result dataclasses and enums

Usage::

    from notionblocks import to_array

    for batch in to_array("# Hello\\n\\n> [!TIP] 🔥 Remember this"):
        notion.blocks.children.append(page_id, children=batch)
"""

from __future__ import annotations

# ── Entry points ────────────────────────────────────────────────────────
from notionblocks.api import convert, to_array, to_json_string

# ── Configuration ───────────────────────────────────────────────────────
from notionblocks.config import NotionBlocksConfig

# ── Converter ───────────────────────────────────────────────────────────
from notionblocks.converter.md_to_notion import MarkdownToNotionConverter

# ── Errors ──────────────────────────────────────────────────────────────
from notionblocks.errors import (
    ErrorCode,
    NotionBlocksConversionError,
    NotionBlocksEncodingError,
    NotionBlocksError,
)

# ── Images ──────────────────────────────────────────────────────────────
from notionblocks.image import SUPPORTED_EXTENSIONS, classify_image, is_valid_image

# ── Models ──────────────────────────────────────────────────────────────
from notionblocks.models import (
    ConversionResult,
    ConversionWarning,
    ImageLikeLink,
    ImageType,
    NodeType,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Entry points
    "to_json_string",
    "to_array",
    "convert",
    "MarkdownToNotionConverter",
    # Configuration
    "NotionBlocksConfig",
    # Errors
    "NotionBlocksError",
    "ErrorCode",
    "NotionBlocksConversionError",
    "NotionBlocksEncodingError",
    # Images
    "SUPPORTED_EXTENSIONS",
    "classify_image",
    "is_valid_image",
    # Models
    "ConversionResult",
    "ConversionWarning",
    "ImageLikeLink",
    "ImageType",
    "NodeType",
]
