"""Image classification and extraction.

Exports
-------
classify_image
    Classify an image ``src`` as external, file, or invalid.
is_valid_image
    Shortcut for ``classify_image(url) is not ImageType.INVALID``.
extract_images
    Collect native images and image-like links from an AST subtree.
contains_only_images
    Detect paragraphs that hold nothing but images.
"""

from .detect import SUPPORTED_EXTENSIONS, classify_image, is_external_url, is_valid_image
from .extract import contains_only_images, extract_images, is_image_link, plain_text

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "classify_image",
    "contains_only_images",
    "extract_images",
    "is_external_url",
    "is_image_link",
    "is_valid_image",
    "plain_text",
]
