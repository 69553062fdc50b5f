"""Split long strings for Notion's rich-text content limit.

Notion rejects a ``rich_text[].text.content`` longer than 2 000 characters;
the converter works with a slightly lower ceiling (1 950 by default).

Python ``str`` indexing is code-point based, so slicing never bisects a
multi-byte character.  When a window contains a newline the split happens
just after the last one, which keeps code lines intact; otherwise the text
is cut hard at the limit.
"""

from __future__ import annotations


def split_string(text: str, limit: int = 1950) -> list[str]:
    """Split *text* into chunks of at most *limit* characters.

    Parameters
    ----------
    text:
        The input string to partition.
    limit:
        Maximum number of characters per chunk.

    Returns
    -------
    list[str]
        Non-empty chunks whose concatenation equals *text*.  An empty
        *text* gives an empty list.

    Raises
    ------
    ValueError
        If *limit* is less than 1.

    Examples
    --------
    >>> split_string("hello world", 5)
    ['hello', ' worl', 'd']

    >>> split_string("ab\\ncdef", 4)
    ['ab\\n', 'cdef']

    >>> split_string("", 100)
    []
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    chunks: list[str] = []
    start = 0
    while len(text) - start > limit:
        end = start + limit
        newline = text.rfind("\n", start, end)
        if newline != -1:
            end = newline + 1
        chunks.append(text[start:end])
        start = end
    if start < len(text):
        chunks.append(text[start:])
    return chunks
