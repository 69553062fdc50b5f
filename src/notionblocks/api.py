"""Top-level entry points.

Usage::

    from notionblocks import to_array, to_json_string

    payload = to_json_string("# Hello\\n\\nWorld")
    batches = to_array("# Hello\\n\\nWorld")
    for batch in batches:
        notion.blocks.children.append(page_id, children=batch)

Both entry points return a list of *batches*, each a list of at most 100
block dicts, or an empty list when the Markdown yields no blocks.  Source
text that is not valid UTF-8 never raises: undecodable bytes and lone
surrogates are dropped before parsing.
"""

from __future__ import annotations

import json
from typing import Any, Union

from notionblocks.config import NotionBlocksConfig
from notionblocks.converter.md_to_notion import MarkdownToNotionConverter
from notionblocks.errors import NotionBlocksEncodingError
from notionblocks.models import ConversionResult
from notionblocks.observability import get_logger

log = get_logger("notionblocks.api")

MarkdownSource = Union[str, bytes]


def convert(
    markdown: MarkdownSource,
    config: NotionBlocksConfig | None = None,
) -> ConversionResult:
    """Convert Markdown into Notion blocks, batches and warnings."""
    return MarkdownToNotionConverter(config).convert(_sanitize(markdown))


def to_json_string(
    markdown: MarkdownSource,
    config: NotionBlocksConfig | None = None,
) -> str:
    """Convert Markdown into a JSON array of block batches.

    Parameters
    ----------
    markdown:
        Markdown source, as text or UTF-8 bytes.
    config:
        Optional conversion configuration.

    Returns
    -------
    str
        ``"[]"`` when there are no blocks, otherwise a JSON array of arrays
        of block objects.  Non-ASCII characters are escaped unless
        ``config.ensure_ascii`` is false.
    """
    config = config or NotionBlocksConfig()
    result = convert(markdown, config)
    return json.dumps(result.batches, ensure_ascii=config.ensure_ascii, default=str)


def to_array(
    markdown: MarkdownSource,
    config: NotionBlocksConfig | None = None,
) -> list[list[dict[str, Any]]] | dict[str, str]:
    """Convert Markdown into block batches as plain Python values.

    The batches are produced by decoding :func:`to_json_string`, so the
    result only holds JSON types.  If decoding fails an error record
    ``{"error": <message>}`` is returned instead of raising.
    """
    payload = to_json_string(markdown, config)
    try:
        return _decode(payload)
    except NotionBlocksEncodingError as exc:
        log.warning(
            "Payload decode failed",
            extra={"extra_fields": {"op": "to_array", **exc.context}},
        )
        return {"error": exc.message}


def _decode(payload: str) -> list[list[dict[str, Any]]]:
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise NotionBlocksEncodingError(
            message=exc.msg,
            context={"position": exc.pos},
            cause=exc,
        ) from exc


def _sanitize(markdown: MarkdownSource) -> str:
    """Return *markdown* as a ``str`` holding only encodable characters."""
    if isinstance(markdown, bytes):
        return markdown.decode("utf-8", "ignore")
    # Lone surrogates (e.g. from a lossy decode upstream) cannot be encoded
    return markdown.encode("utf-8", "ignore").decode("utf-8")
