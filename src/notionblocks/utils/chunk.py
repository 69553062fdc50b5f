"""Partition sequences to fit Notion's per-request and per-array limits.

Two limits share the same shape:

* ``append_block_children`` accepts at most 100 blocks per request, and
* a block's ``rich_text`` array accepts at most 100 segments.

:func:`chunk` splits any list into consecutive, order-preserving groups;
:func:`chunk_blocks` is the batching entry point used by the renderer.
"""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")


def chunk(items: list[T], size: int) -> list[list[T]]:
    """Split *items* into consecutive groups of at most *size* elements.

    An empty input returns an empty list (not ``[[]]``).  Only the last
    group may be shorter than *size*.

    Raises
    ------
    ValueError
        If *size* is less than 1.

    Examples
    --------
    >>> chunk([1, 2, 3, 4, 5], 2)
    [[1, 2], [3, 4], [5]]
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    return [items[i : i + size] for i in range(0, len(items), size)]


def chunk_blocks(
    blocks: list[dict[str, Any]],
    size: int = 100,
) -> list[list[dict[str, Any]]]:
    """Batch Notion block dicts into groups of at most *size*.

    No block is ever split across batches and global order is preserved, so
    sending the batches one after another appends the blocks in document
    order.

    >>> len(chunk_blocks([{"type": "paragraph"}] * 250))
    3
    """
    return chunk(blocks, size)
