"""Tests for the file format policy."""

import pytest

from docsupload.formats import (
    DOCUMENT,
    OTHER,
    PDF,
    PRESENTATION,
    SPREADSHEET,
    SUPPORTED_FORMATS,
    classify,
    is_supported_format,
    is_within_size_limit,
)
from docsupload.models import LocalFile


def local_file(file_name, size=10):
    name, _, extension = file_name.rpartition(".")
    return LocalFile(path=None, name=name, extension=extension.lower(), size=size)


class TestIsSupportedFormat:
    """Tests for is_supported_format."""

    @pytest.mark.parametrize("extension", SUPPORTED_FORMATS)
    def test_supported(self, extension):
        assert is_supported_format(local_file(f"file.{extension}"))

    @pytest.mark.parametrize("file_name", ["photo.jpg", "archive.zip", "data.tsb"])
    def test_unsupported(self, file_name):
        assert not is_supported_format(local_file(file_name))

    def test_no_extension(self):
        assert not is_supported_format(
            LocalFile(path=None, name="README", extension="", size=1)
        )

    def test_upper_case_extension(self, make_file):
        """Test extensions are compared case-insensitively."""
        assert is_supported_format(make_file("REPORT.DOCX"))


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("a.docx", DOCUMENT),
            ("a.txt", DOCUMENT),
            ("a.xlsx", SPREADSHEET),
            ("a.tab", SPREADSHEET),
            ("a.ppt", PRESENTATION),
            ("a.pdf", PDF),
            ("a.jpg", OTHER),
        ],
    )
    def test_categories(self, file_name, expected):
        assert classify(local_file(file_name)) == expected


class TestIsWithinSizeLimit:
    """Tests for is_within_size_limit."""

    @pytest.mark.parametrize(
        "file_name,limit",
        [
            ("a.doc", 500_000),
            ("a.csv", 1_000_000),
            ("a.pps", 10_000_000),
            ("a.pdf", 10_000_000),
        ],
    )
    def test_boundary(self, file_name, limit):
        """Test the limit itself is accepted and one byte more is not."""
        assert is_within_size_limit(local_file(file_name, size=limit))
        assert not is_within_size_limit(local_file(file_name, size=limit + 1))

    def test_no_limit_for_other_types(self):
        assert is_within_size_limit(local_file("a.jpg", size=10**12))
