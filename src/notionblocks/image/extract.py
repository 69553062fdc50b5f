"""Locate images inside normalised AST subtrees.

Notion images are blocks, never inline content, so the renderer pulls every
image out of a top-level node and emits it ahead of that node's own block.

Two token shapes count as images:

* a native ``image`` token, and
* a ``link`` token whose immediately preceding sibling is a ``text`` token
  ending in ``!``.  This is what the parser produces for ``\\![alt](url)``,
  where the escaped bang keeps the link from being read as an image.

Sibling lookups work on the parent's child list and an index, so tokens do
not need parent pointers.
"""

from __future__ import annotations

import re
from typing import Any, Union

from notionblocks.models import ImageLikeLink

Image = Union[dict[str, Any], ImageLikeLink]

_TRAILING_BANG_RE = re.compile(r"!\s*$")


def is_image_link(siblings: list[dict[str, Any]], index: int) -> bool:
    """Return True if ``siblings[index]`` is a link disguised as an image."""
    if index <= 0 or siblings[index].get("type") != "link":
        return False
    previous = siblings[index - 1]
    if previous.get("type") != "text":
        return False
    return previous.get("raw", "").endswith("!")


def link_alt_text(link: dict[str, Any]) -> str:
    """Concatenate the link's direct ``text`` children and trim the result."""
    return "".join(
        child.get("raw", "")
        for child in link.get("children", [])
        if child.get("type") == "text"
    ).strip()


def extract_images(node: dict[str, Any]) -> list[Image]:
    """Collect all images in the subtree rooted at *node*, in document order.

    The walk is depth-first pre-order.  Native images are returned as their
    AST token; image-like links are wrapped in :class:`ImageLikeLink`.
    """
    images: list[Image] = []
    if node.get("type") == "image":
        images.append(node)
    _collect_images(node.get("children", []), images)
    return images


def _collect_images(children: list[dict[str, Any]], images: list[Image]) -> None:
    for index, child in enumerate(children):
        if child.get("type") == "image":
            images.append(child)
        elif is_image_link(children, index):
            images.append(ImageLikeLink(child, link_alt_text(child)))
        _collect_images(child.get("children", []), images)


def contains_only_images(node: dict[str, Any]) -> bool:
    """Return True if *node* holds at least one image and no other text.

    Whitespace and the ``!`` left in front of image-like links are ignored,
    so ``![a](u1) ![b](u2)`` and ``\\![a](u1)`` both qualify.
    """
    children = node.get("children", [])
    if not children:
        return False

    has_images = False
    text_content: list[str] = []

    for index, child in enumerate(children):
        child_type = child.get("type")
        if child_type == "image" or is_image_link(children, index):
            has_images = True
        elif child_type == "text":
            text_content.append(_TRAILING_BANG_RE.sub("", child.get("raw", "")))
        else:
            text_content.append(plain_text(child))

    return has_images and "".join(text_content).strip() == ""


def plain_text(node: dict[str, Any]) -> str:
    """Recursively concatenate the literal text of *node* and its children."""
    parts = [node.get("raw", "")]
    parts.extend(plain_text(child) for child in node.get("children", []))
    return "".join(parts)
