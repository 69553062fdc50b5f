"""Build Notion rich_text arrays from normalized inline AST tokens.

Every segment produced here has the same shape::

    {
        "type": "text",
        "text": {"content": "hello", "link": None},
        "annotations": {"bold": False, "italic": False, "strikethrough": False,
                        "underline": False, "code": False, "color": "default"}
    }

A link sets ``text.link`` to ``{"url": "https://..."}``.  Code blocks drop
the ``annotations`` key entirely (see the code converter).

Inline images produce no segment: the renderer emits every image as its own
block ahead of the containing block.
"""

from __future__ import annotations

from typing import Any

from notionblocks.utils.chunk import chunk
from notionblocks.utils.text_split import split_string

# ---------------------------------------------------------------------------
# Annotation defaults
# ---------------------------------------------------------------------------

def default_annotations() -> dict:
    """Return a fresh default Notion annotations dict."""
    return {
        "bold": False,
        "italic": False,
        "strikethrough": False,
        "underline": False,
        "code": False,
        "color": "default",
    }


def merge_annotations(base: dict, **overrides: bool) -> dict:
    """Merge annotation overrides into a copy of *base*."""
    merged = dict(base)
    for key, value in overrides.items():
        if key in merged:
            # OR-merge: nested emphasis never switches a flag back off
            merged[key] = merged[key] or value
    return merged


_WRAPPER_ANNOTATIONS: dict[str, str] = {
    "strong": "bold",
    "emphasis": "italic",
    "strikethrough": "strikethrough",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_rich_text(
    children: list[dict],
    *,
    annotations: dict | None = None,
    link: str | None = None,
) -> list[dict]:
    """Convert inline AST tokens to a Notion rich_text array.

    Handles: text, strong, emphasis, strikethrough, codespan, link,
    softbreak, linebreak and html_inline.  Images are skipped.  Any other
    token that has children is recursed into with the inherited formatting.

    Parameters
    ----------
    children:
        List of normalized inline AST tokens.
    annotations:
        Inherited annotations from a parent inline node (e.g. bold from
        a ``strong`` wrapper).  Defaults to all-false.
    link:
        Inherited link URL from a parent ``link`` node.

    Returns
    -------
    list[dict]
        A list of Notion rich_text segment dicts.
    """
    if annotations is None:
        annotations = default_annotations()

    segments: list[dict] = []

    for token in children:
        token_type = token.get("type", "")

        if token_type in ("text", "html_inline"):
            raw = token.get("raw", "")
            if raw:
                segments.append(make_text_segment(raw, annotations, link))

        elif token_type in _WRAPPER_ANNOTATIONS:
            child_annots = merge_annotations(
                annotations, **{_WRAPPER_ANNOTATIONS[token_type]: True},
            )
            segments.extend(build_rich_text(
                token.get("children", []), annotations=child_annots, link=link,
            ))

        elif token_type == "codespan":
            child_annots = merge_annotations(annotations, code=True)
            segments.append(make_text_segment(token.get("raw", ""), child_annots, link))

        elif token_type == "link":
            link_url = token.get("attrs", {}).get("url", "")
            segments.extend(build_rich_text(
                token.get("children", []), annotations=annotations, link=link_url or link,
            ))

        elif token_type in ("softbreak", "linebreak"):
            segments.append(make_text_segment("\n", annotations, link))

        elif token_type == "image":
            continue

        elif "children" in token:
            segments.extend(build_rich_text(
                token["children"], annotations=annotations, link=link,
            ))

    return segments


def node_rich_text(node: dict[str, Any] | None) -> list[dict]:
    """Build the rich_text array for a block node from its inline children."""
    if not node:
        return []
    return build_rich_text(node.get("children", []))


def split_rich_text(segments: list[dict], limit: int = 1950) -> list[dict]:
    """Split any segment whose content is longer than *limit* characters.

    Each piece keeps the original segment's annotations and link, and the
    pieces' contents concatenate back to the original content.

    Parameters
    ----------
    segments:
        List of Notion rich_text segment dicts.
    limit:
        Maximum character count per segment content.

    Returns
    -------
    list[dict]
        A new list where every segment's content is at most *limit* chars.
    """
    output: list[dict] = []

    for segment in segments:
        content = segment.get("text", {}).get("content", "")

        if len(content) <= limit:
            output.append(segment)
            continue

        for piece in split_string(content, limit):
            output.append(_clone_text_segment(segment, piece))

    return output


def chunk_rich_text(segments: list[dict], size: int = 100) -> list[list[dict]]:
    """Group segments into consecutive arrays of at most *size* segments."""
    return chunk(segments, size)


def extract_text(segments: list[dict]) -> str:
    """Concatenate the plain content of rich_text segments."""
    return "".join(seg.get("text", {}).get("content", "") for seg in segments)


# ---------------------------------------------------------------------------
# Segment construction
# ---------------------------------------------------------------------------

def make_text_segment(
    content: str,
    annotations: dict | None = None,
    link: str | None = None,
) -> dict:
    """Create a single Notion rich_text text segment."""
    return {
        "type": "text",
        "text": {
            "content": content,
            "link": {"url": link} if link else None,
        },
        "annotations": dict(annotations) if annotations is not None else default_annotations(),
    }


def _clone_text_segment(segment: dict, new_content: str) -> dict:
    """Clone a text segment with new content, preserving annotations and link."""
    text = dict(segment.get("text", {}))
    text["content"] = new_content
    new_seg: dict = {**segment, "text": text}
    if "annotations" in segment:
        new_seg["annotations"] = dict(segment["annotations"])
    return new_seg
