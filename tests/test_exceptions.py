"""Tests for error classification."""

import pytest

from docsupload.exceptions import (
    DocsAPIError,
    DocsAuthenticationError,
    DocsCreationError,
    DocsFileNotFoundError,
    DocsInvalidEntryError,
    DocsInvalidResponseError,
    DocsNetworkError,
    DocsRateLimitError,
    ErrorKind,
    classify_error,
)


class TestClassifyError:
    """Tests for classify_error."""

    @pytest.mark.parametrize(
        "error,kind",
        [
            (DocsInvalidEntryError("bad"), ErrorKind.PERMANENT),
            (DocsFileNotFoundError("/tmp/x"), ErrorKind.PERMANENT),
            (PermissionError("denied"), ErrorKind.PERMANENT),
            (DocsAuthenticationError("expired"), ErrorKind.AUTH_FAILURE),
            (DocsCreationError("taken"), ErrorKind.CREATION_FAILURE),
            (DocsNetworkError("down"), ErrorKind.TRANSIENT),
            (DocsRateLimitError("slow down"), ErrorKind.TRANSIENT),
            (DocsInvalidResponseError("garbage"), ErrorKind.TRANSIENT),
            (DocsAPIError("unknown"), ErrorKind.TRANSIENT),
        ],
    )
    def test_kinds(self, error, kind):
        assert classify_error(error) is kind


def test_file_not_found_message():
    error = DocsFileNotFoundError("/data/missing")

    assert str(error) == "Specified path /data/missing doesn't exist"
    assert error.path == "/data/missing"
