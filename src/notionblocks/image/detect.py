"""Image source classification.

Classifies a raw image ``src`` string (from ``![alt](src)``) into one of the
:class:`ImageType` variants so the image converter knows which block to
emit.

Only absolute ``http(s)`` URLs with a host count as *external*.  Everything
else (relative paths, bare filenames, ``data:`` URIs, ``http://`` with no
host, other schemes, unparseable strings) is a *file* reference and is never
rejected.  External URLs must end in an extension Notion can display.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlparse

from notionblocks.models import ImageType

SUPPORTED_EXTENSIONS: tuple[str, ...] = (
    "bmp",
    "gif",
    "heic",
    "jpeg",
    "jpg",
    "png",
    "svg",
    "tif",
    "tiff",
)
"""Image file extensions Notion renders for external URLs."""

_EXTERNAL_SCHEMES = frozenset({"http", "https"})

_WHITESPACE_RE = re.compile(r"\s")


def is_external_url(url: str) -> bool:
    """Return True if *url* is an absolute ``http(s)`` URL with a host."""
    if not url or _WHITESPACE_RE.search(url):
        return False
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        # e.g. an unbalanced IPv6 bracket in the netloc
        return False
    return parsed.scheme.lower() in _EXTERNAL_SCHEMES and bool(hostname)


def url_extension(url: str) -> str:
    """Return the lower-cased extension of the URL's path component.

    Query string and fragment are ignored.  Returns ``""`` when the last
    path segment has no dot.
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return ""
    basename = path.rsplit("/", 1)[-1]
    _, dot, extension = basename.rpartition(".")
    return extension.lower() if dot else ""


def classify_image(
    url: str,
    extensions: Iterable[str] = SUPPORTED_EXTENSIONS,
) -> ImageType:
    """Classify an image URL as external, file, or invalid.

    Parameters
    ----------
    url:
        The raw source string from an image token.
    extensions:
        Accepted extensions for external URLs (lower-case, no dot).

    Returns
    -------
    ImageType
        The classification of the source.
    """
    if not is_external_url(url):
        return ImageType.FILE
    if url_extension(url) in frozenset(extensions):
        return ImageType.EXTERNAL
    return ImageType.INVALID


def is_valid_image(url: str, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> bool:
    """Return True unless *url* is an external URL with an unsupported extension."""
    return classify_image(url, extensions) is not ImageType.INVALID
