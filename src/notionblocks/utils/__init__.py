from .chunk import chunk, chunk_blocks
from .text_split import split_string

__all__ = [
    "chunk",
    "chunk_blocks",
    "split_string",
]
