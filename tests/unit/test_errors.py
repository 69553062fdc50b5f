"""Tests for the error hierarchy."""

from __future__ import annotations

from notionblocks.errors import (
    ErrorCode,
    NotionBlocksConversionError,
    NotionBlocksEncodingError,
    NotionBlocksError,
)


class TestErrors:
    def test_conversion_error(self):
        cause = KeyError("x")
        err = NotionBlocksConversionError("boom", context={"node_type": "table"}, cause=cause)
        assert isinstance(err, NotionBlocksError)
        assert err.code == ErrorCode.CONVERSION_ERROR
        assert err.message == "boom"
        assert str(err) == "boom"
        assert err.context == {"node_type": "table"}
        assert err.__cause__ is cause

    def test_encoding_error_defaults(self):
        err = NotionBlocksEncodingError("bad payload")
        assert err.code == "ENCODING_ERROR"
        assert err.context == {}
        assert err.cause is None

    def test_repr(self):
        err = NotionBlocksEncodingError("bad", context={"position": 3})
        assert repr(err) == (
            "NotionBlocksEncodingError(code=<ErrorCode.ENCODING_ERROR: 'ENCODING_ERROR'>, "
            "message='bad', context={'position': 3})"
        )
