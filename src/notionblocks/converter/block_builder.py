"""Convert normalized AST tokens to Notion block dicts.

One converter per supported top-level token type:

- heading -> heading_1/2/3 (level 4+ per ``heading_overflow``)
- paragraph -> paragraph (no block when it has no text)
- block_quote -> quote, or callout when it carries a ``[!TYPE]`` marker
- fenced_code -> code with a Notion language identifier
- table -> delegate to tables.py

Images are not dispatched through the table below: the renderer pulls
them out of every node and converts them with :func:`build_image`.

Each converter is a pure function ``(token, config) -> block(s)``.  A
converter may return ``None`` (no block), a single block dict, or a list of
blocks that the renderer flattens.
"""

from __future__ import annotations

import re
from collections.abc import Callable as _Callable
from typing import Any, Union

from notionblocks.config import NotionBlocksConfig
from notionblocks.converter.callouts import build_callout, is_callout, real_node
from notionblocks.converter.rich_text import (
    default_annotations,
    make_text_segment,
    merge_annotations,
    node_rich_text,
    split_rich_text,
)
from notionblocks.converter.tables import build_table
from notionblocks.image.detect import classify_image
from notionblocks.image.extract import Image
from notionblocks.models import ImageLikeLink, ImageType, NodeType

Block = dict[str, Any]
ConverterOutput = Union[Block, list[Block], None]

# ---------------------------------------------------------------------------
# Notion code language mapping
# ---------------------------------------------------------------------------

# Notion API accepts a specific set of language identifiers.  Several
# Markdown info strings map to the same identifier.
_NOTION_LANGUAGES: frozenset[str] = frozenset({
    "abap", "arduino", "bash", "basic", "c", "clojure", "coffeescript",
    "c++", "c#", "css", "dart", "diff", "docker", "elixir", "elm",
    "erlang", "flow", "fortran", "f#", "gherkin", "glsl", "go", "graphql",
    "groovy", "haskell", "html", "java", "javascript", "json", "julia",
    "kotlin", "latex", "less", "lisp", "livescript", "lua", "makefile",
    "markdown", "markup", "matlab", "mermaid", "nix", "objective-c",
    "ocaml", "pascal", "perl", "php", "plain text", "powershell",
    "prolog", "protobuf", "python", "r", "reason", "ruby", "rust",
    "sass", "scala", "scheme", "scss", "sql", "swift",
    "typescript", "vb.net", "verilog", "vhdl", "visual basic",
    "webassembly", "xml", "yaml",
})

_LANGUAGE_ALIASES: dict[str, str] = {
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "coffee": "coffeescript",
    "cpp": "c++",
    "csharp": "c#",
    "cs": "c#",
    "fsharp": "f#",
    "golang": "go",
    "js": "javascript",
    "jsx": "javascript",
    "md": "markdown",
    "objc": "objective-c",
    "plaintext": "plain text",
    "text": "plain text",
    "txt": "plain text",
    "ps1": "powershell",
    "py": "python",
    "rb": "ruby",
    "rs": "rust",
    "ts": "typescript",
    "tsx": "typescript",
    "vbnet": "vb.net",
    "vb": "visual basic",
    "wasm": "webassembly",
    "yml": "yaml",
    "dockerfile": "docker",
    "make": "makefile",
    "tex": "latex",
    "kt": "kotlin",
    "hs": "haskell",
}

_DEFAULT_LANGUAGE = "plain text"


def normalize_language(info: str | None) -> str:
    """Map a code fence info string to a Notion-accepted language name.

    Only the first word of *info* is considered.  Unknown languages fall
    back to ``"plain text"``.

    >>> normalize_language("py")
    'python'
    >>> normalize_language("python3 title=demo.py")
    'python'
    >>> normalize_language("brainfuck")
    'plain text'
    """
    if not info or not info.strip():
        return _DEFAULT_LANGUAGE
    lang = info.strip().lower().split()[0]
    # Strip trailing digits on the second try (e.g. "python3" -> "python")
    for candidate in (lang, re.sub(r"\d+$", "", lang)):
        if candidate in _LANGUAGE_ALIASES:
            return _LANGUAGE_ALIASES[candidate]
        if candidate in _NOTION_LANGUAGES:
            return candidate
    return _DEFAULT_LANGUAGE


# ---------------------------------------------------------------------------
# Block converters
# ---------------------------------------------------------------------------

def build_heading(token: dict, config: NotionBlocksConfig) -> Block:
    """Build a Notion heading block."""
    level = token.get("attrs", {}).get("level", 1)
    rich_text = node_rich_text(token)

    if level > 3 and config.heading_overflow == "paragraph":
        bold = [
            {**seg, "annotations": merge_annotations(
                seg.get("annotations", default_annotations()), bold=True,
            )}
            for seg in rich_text
        ]
        return {
            "object": "block",
            "type": "paragraph",
            "paragraph": {"rich_text": bold, "color": "default"},
        }

    # Notion only supports up to heading_3
    heading_type = f"heading_{min(max(level, 1), 3)}"
    return {
        "object": "block",
        "type": heading_type,
        heading_type: {
            "rich_text": rich_text,
            "color": "default",
            "is_toggleable": False,
        },
    }


def build_paragraph(token: dict, config: NotionBlocksConfig) -> Block | None:
    """Build a Notion paragraph block, or ``None`` if it holds no text."""
    rich_text = node_rich_text(token)
    if not rich_text:
        return None
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {
            "rich_text": rich_text,
            "color": "default",
        },
    }


def build_block_quote(token: dict, config: NotionBlocksConfig) -> Block:
    """Build a Notion quote block, or a callout for ``> [!TYPE]`` quotes.

    Only the quote's first child contributes text.
    """
    if is_callout(token):
        return build_callout(token)
    return {
        "object": "block",
        "type": "quote",
        "quote": {
            "rich_text": node_rich_text(real_node(token)),
            "color": "default",
        },
    }


def build_code(token: dict, config: NotionBlocksConfig) -> Block:
    """Build a Notion code block.

    The parser keeps the newline that closes the last code line; exactly
    one trailing newline is trimmed.  Code segments carry no annotations.
    """
    content = token.get("raw", "")
    if content.endswith("\n"):
        content = content[:-1]

    rich_text: list[dict] = []
    if content:
        segment = make_text_segment(content)
        del segment["annotations"]
        rich_text.append(segment)

    return {
        "object": "block",
        "type": "code",
        "code": {
            "caption": [],
            "rich_text": rich_text,
            "language": normalize_language(token.get("attrs", {}).get("info")),
        },
    }


def build_image(image: Image, config: NotionBlocksConfig) -> Block:
    """Build a Notion image block from an image token or image-like link.

    External URLs with an unsupported extension degrade to an italic gray
    paragraph reading ``[Invalid image: <url>]``.

    Parameters
    ----------
    image:
        A native ``image`` AST token or an :class:`ImageLikeLink`.
    config:
        Conversion configuration (accepted image extensions, text limit).

    Returns
    -------
    dict
        A Notion ``image`` block, or the fallback ``paragraph`` block.
    """
    if isinstance(image, ImageLikeLink):
        url, title = image.url, image.title
    else:
        attrs = image.get("attrs", {})
        url, title = attrs.get("url", ""), attrs.get("title") or None

    image_type = classify_image(url, config.image_extensions)

    if image_type is ImageType.INVALID:
        annotations = {**default_annotations(), "italic": True, "color": "gray"}
        return {
            "object": "block",
            "type": "paragraph",
            "paragraph": {
                "rich_text": [make_text_segment(f"[Invalid image: {url}]", annotations)],
            },
        }

    caption = [make_text_segment(title)] if title else []
    return {
        "object": "block",
        "type": "image",
        "image": {
            "type": image_type.value,
            image_type.value: {"url": url},
            "caption": split_rich_text(caption, config.text_content_limit),
        },
    }


# ---------------------------------------------------------------------------
# Converter dispatch table
# ---------------------------------------------------------------------------

Converter = _Callable[[dict, NotionBlocksConfig], ConverterOutput]

_CONVERTERS: dict[NodeType, Converter] = {
    NodeType.HEADING: build_heading,
    NodeType.PARAGRAPH: build_paragraph,
    NodeType.BLOCK_QUOTE: build_block_quote,
    NodeType.FENCED_CODE: build_code,
    NodeType.TABLE: build_table,
}


def converter_for(token_type: str) -> Converter | None:
    """Return the converter for *token_type*, or ``None`` if unsupported."""
    try:
        return _CONVERTERS[NodeType(token_type)]
    except ValueError:
        return None
