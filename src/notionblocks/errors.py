"""Error hierarchy for notionblocks.

Every public error class inherits from :class:`NotionBlocksError`.  Each
carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict, and an
optional ``cause`` (chained exception).

Most conversion problems are *not* errors: unsupported node types are
skipped and invalid image URLs degrade to a descriptive paragraph.  These
classes cover the few places where conversion genuinely cannot continue.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    CONVERSION_ERROR = "CONVERSION_ERROR"
    ENCODING_ERROR = "ENCODING_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionBlocksError(Exception):
    """Base exception for all notionblocks errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Conversion errors
# ---------------------------------------------------------------------------

class NotionBlocksConversionError(NotionBlocksError):
    """A block converter failed on a node it claimed to support.

    Context keys: ``node_type``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONVERSION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NotionBlocksEncodingError(NotionBlocksError):
    """The JSON payload could not be decoded back into Python values.

    Context keys: ``position``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.ENCODING_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
