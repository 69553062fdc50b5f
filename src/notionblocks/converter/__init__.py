"""Markdown → Notion conversion pipeline.

Public API:

- :class:`MarkdownToNotionConverter` — Markdown → batched Notion blocks.
- :class:`ASTNormalizer` — parse and normalize Markdown to canonical AST.
- :func:`converter_for` — look up the block converter for a token type.
- :func:`build_image` — convert an image token or image-like link.
- :func:`build_rich_text` — convert inline AST tokens to rich_text arrays.
- :func:`split_rich_text` — split oversized rich_text segments.
"""

from notionblocks.converter.ast_normalizer import ASTNormalizer
from notionblocks.converter.block_builder import build_image, converter_for
from notionblocks.converter.md_to_notion import MarkdownToNotionConverter
from notionblocks.converter.rich_text import build_rich_text, split_rich_text

__all__ = [
    "ASTNormalizer",
    "MarkdownToNotionConverter",
    "build_image",
    "build_rich_text",
    "converter_for",
    "split_rich_text",
]
