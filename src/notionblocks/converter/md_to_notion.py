"""Full Markdown-to-Notion conversion pipeline.

:class:`MarkdownToNotionConverter` orchestrates the pipeline:

1. **Parse** -- Mistune parses raw Markdown into an AST.
2. **Normalize** -- :class:`ASTNormalizer` maps token types to canonical names.
3. **Render** -- every top-level token is converted in document order:

   a. images found anywhere inside the token are emitted first, each as its
      own block;
   b. the token's converter (see :func:`converter_for`) builds its block(s),
      unless the token is a paragraph holding nothing but images;
   c. oversized segments are split and ``rich_text`` arrays longer than the
      limit are spread over consecutive blocks of the same type.

4. **Batch** -- the flat block list is chunked into request-sized batches.

The result is a :class:`ConversionResult` containing the blocks, the
batches and any non-fatal warnings.
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any

from notionblocks.config import NotionBlocksConfig
from notionblocks.converter.ast_normalizer import ASTNormalizer
from notionblocks.converter.block_builder import ConverterOutput, build_image, converter_for
from notionblocks.converter.rich_text import chunk_rich_text, split_rich_text
from notionblocks.errors import NotionBlocksConversionError
from notionblocks.image.detect import classify_image
from notionblocks.image.extract import contains_only_images, extract_images
from notionblocks.models import ConversionResult, ConversionWarning, ImageLikeLink, ImageType
from notionblocks.observability import NoopMetricsHook, get_logger
from notionblocks.utils.chunk import chunk_blocks

log = get_logger("notionblocks.converter")


class MarkdownToNotionConverter:
    """Convert Markdown text to Notion API block payloads.

    Parameters
    ----------
    config:
        Conversion configuration controlling the Notion limits, heading
        overflow, accepted image extensions, metrics and debug output.

    Examples
    --------
    >>> from notionblocks.config import NotionBlocksConfig
    >>> converter = MarkdownToNotionConverter(NotionBlocksConfig())
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> len(result.blocks)
    2
    >>> result.blocks[0]["type"]
    'heading_1'
    """

    def __init__(self, config: NotionBlocksConfig | None = None) -> None:
        self._config = config or NotionBlocksConfig()
        self._normalizer = ASTNormalizer()
        self._metrics = self._config.metrics or NoopMetricsHook()

    def convert(self, markdown: str) -> ConversionResult:
        """Full pipeline: parse -> normalize -> render -> batch.

        Parameters
        ----------
        markdown:
            Raw Markdown text to convert.

        Returns
        -------
        ConversionResult
            Contains ``blocks`` (flat list of Notion block dicts),
            ``batches`` (the same blocks in groups of at most
            ``batch_size``) and ``warnings``.
        """
        t0 = time.monotonic()
        log.debug(
            "Conversion started",
            extra={"extra_fields": {"op": "convert", "chars": len(markdown)}},
        )
        tokens = self._normalizer.parse(markdown)

        if self._config.debug_dump_ast:
            print(
                "[notionblocks] Normalized AST:",
                json.dumps(tokens, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        warnings: list[ConversionWarning] = []
        blocks: list[dict[str, Any]] = []
        for token in tokens:
            blocks.extend(self._render_token(token, warnings))

        batches = chunk_blocks(blocks, self._config.batch_size)

        if self._config.debug_dump_payload:
            print(
                "[notionblocks] Notion blocks payload:",
                json.dumps(batches, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        elapsed_ms = (time.monotonic() - t0) * 1000
        self._record(blocks, batches, warnings, elapsed_ms)

        return ConversionResult(blocks=blocks, batches=batches, warnings=warnings)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_token(
        self,
        token: dict[str, Any],
        warnings: list[ConversionWarning],
    ) -> list[dict[str, Any]]:
        """Render one top-level token: hoisted images, then its own block(s)."""
        rendered: list[dict[str, Any]] = []

        for image in extract_images(token):
            block = build_image(image, self._config)
            self._warn_if_invalid(image, warnings)
            rendered.extend(self._apply_rich_text_limits(block))

        token_type = token.get("type", "")
        converter = converter_for(token_type)
        if converter is None:
            warnings.append(ConversionWarning(
                code="UNSUPPORTED_NODE",
                message=f"Token type '{token_type}' has no Notion block and was skipped.",
                context={"node_type": token_type},
            ))
            log.debug(
                "Node skipped",
                extra={"extra_fields": {"op": "convert", "node_type": token_type}},
            )
            return rendered

        # Already represented by the hoisted image blocks
        if token_type == "paragraph" and contains_only_images(token):
            return rendered

        try:
            output = converter(token, self._config)
        except (KeyError, TypeError, AttributeError, IndexError) as exc:
            raise NotionBlocksConversionError(
                message=f"Failed to convert '{token_type}' token: {exc}",
                context={"node_type": token_type},
                cause=exc,
            ) from exc

        for block in _flatten(output):
            rendered.extend(self._apply_rich_text_limits(block))
        return rendered

    def _apply_rich_text_limits(self, block: dict[str, Any]) -> list[dict[str, Any]]:
        """Enforce the per-segment and per-array limits on a block's rich_text.

        A block whose ``rich_text`` is longer than ``rich_text_limit`` is
        emitted as consecutive copies of itself, each holding the next slice
        of segments.  Blocks without a ``rich_text`` payload pass through.
        """
        block_type = block.get("type", "")
        payload = block.get(block_type)
        if not isinstance(payload, dict) or "rich_text" not in payload:
            return [block]

        rich_text = split_rich_text(payload["rich_text"], self._config.text_content_limit)
        if len(rich_text) <= self._config.rich_text_limit:
            return [{**block, block_type: {**payload, "rich_text": rich_text}}]

        return [
            {**block, block_type: {**payload, "rich_text": group}}
            for group in chunk_rich_text(rich_text, self._config.rich_text_limit)
        ]

    def _warn_if_invalid(self, image: Any, warnings: list[ConversionWarning]) -> None:
        url = image.url if isinstance(image, ImageLikeLink) else image.get("attrs", {}).get("url", "")
        if classify_image(url, self._config.image_extensions) is ImageType.INVALID:
            warnings.append(ConversionWarning(
                code="INVALID_IMAGE",
                message=f"Image '{url}' has an unsupported extension; rendered as text.",
                context={"src": url},
            ))

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def _record(
        self,
        blocks: list[dict[str, Any]],
        batches: list[list[dict[str, Any]]],
        warnings: list[ConversionWarning],
        elapsed_ms: float,
    ) -> None:
        self._metrics.increment("notionblocks.blocks_created_total", len(blocks))
        self._metrics.increment("notionblocks.batches_total", len(batches))
        for warning in warnings:
            self._metrics.increment(
                "notionblocks.conversion_warnings_total",
                tags={"code": warning.code},
            )
        self._metrics.timing("notionblocks.conversion_duration_ms", elapsed_ms)

        log.debug(
            "Conversion complete",
            extra={
                "extra_fields": {
                    "op": "convert",
                    "blocks": len(blocks),
                    "batches": len(batches),
                    "warnings": len(warnings),
                    "duration_ms": round(elapsed_ms, 3),
                }
            },
        )


def _flatten(output: ConverterOutput) -> list[dict[str, Any]]:
    """Flatten a converter's output one level into a list of blocks."""
    if output is None:
        return []
    if isinstance(output, list):
        return output
    return [output]
