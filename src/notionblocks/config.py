"""Configuration for notionblocks.

:class:`NotionBlocksConfig` is a dataclass that captures every tuneable knob
of the converter.  The defaults reproduce Notion's request limits, so most
callers never need to construct one explicitly.

Module-level constants:

* :data:`NOTION_MAX_RICH_TEXT_ITEMS` — hard API limit on segments per array.
* :data:`NOTION_MAX_TEXT_LENGTH` — hard API limit on characters per segment.
* :data:`NOTION_MAX_BLOCKS_PER_REQUEST` — hard API limit on appended blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from notionblocks.image.detect import SUPPORTED_EXTENSIONS

# ---------------------------------------------------------------------------
# Notion request limits
# ---------------------------------------------------------------------------

NOTION_MAX_RICH_TEXT_ITEMS = 100
NOTION_MAX_TEXT_LENGTH = 2000
NOTION_MAX_BLOCKS_PER_REQUEST = 100


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class NotionBlocksConfig:
    """Complete configuration for a conversion.

    Parameters
    ----------
    rich_text_limit:
        Maximum number of segments in one ``rich_text`` array.  Blocks
        exceeding it are split into consecutive blocks of the same type.
    text_content_limit:
        Maximum characters per segment.  Kept below Notion's 2 000 so that
        escaping on the wire never pushes a segment over the limit.
    batch_size:
        Maximum number of blocks per output batch.
    heading_overflow:
        How to handle Markdown headings of level 4 and above (Notion only
        supports H1–H3).

        * ``"downgrade"`` — clamp to ``heading_3``.
        * ``"paragraph"`` — render as a bold paragraph.
    image_extensions:
        File extensions accepted for external image URLs.
    ensure_ascii:
        Escape non-ASCII characters in the JSON string output.
    metrics:
        Optional :class:`~notionblocks.observability.MetricsHook`.
    debug_dump_ast:
        Write the normalised Mistune AST to *stderr* on each conversion.
    debug_dump_payload:
        Write the Notion block payload to *stderr* on each conversion.
    """

    # ── Limits ──────────────────────────────────────────────────────────
    rich_text_limit: int = NOTION_MAX_RICH_TEXT_ITEMS

    text_content_limit: int = 1950

    batch_size: int = NOTION_MAX_BLOCKS_PER_REQUEST

    # ── Headings ────────────────────────────────────────────────────────
    heading_overflow: Literal["downgrade", "paragraph"] = "downgrade"

    # ── Images ──────────────────────────────────────────────────────────
    image_extensions: list[str] = field(
        default_factory=lambda: list(SUPPORTED_EXTENSIONS),
    )

    # ── Output ──────────────────────────────────────────────────────────
    ensure_ascii: bool = True

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 1 <= self.rich_text_limit <= NOTION_MAX_RICH_TEXT_ITEMS:
            raise ValueError(
                f"rich_text_limit must be between 1 and {NOTION_MAX_RICH_TEXT_ITEMS}, "
                f"got {self.rich_text_limit}"
            )
        if not 1 <= self.text_content_limit <= NOTION_MAX_TEXT_LENGTH:
            raise ValueError(
                f"text_content_limit must be between 1 and {NOTION_MAX_TEXT_LENGTH}, "
                f"got {self.text_content_limit}"
            )
        if not 1 <= self.batch_size <= NOTION_MAX_BLOCKS_PER_REQUEST:
            raise ValueError(
                f"batch_size must be between 1 and {NOTION_MAX_BLOCKS_PER_REQUEST}, "
                f"got {self.batch_size}"
            )
        if self.heading_overflow not in ("downgrade", "paragraph"):
            raise ValueError(
                f"heading_overflow must be 'downgrade' or 'paragraph', "
                f"got {self.heading_overflow!r}"
            )
        self.image_extensions = [ext.lower().lstrip(".") for ext in self.image_extensions]
