"""Tests for utility functions."""

import os

from docsupload.utils import (
    count_files,
    folder_key,
    format_size,
    list_directory,
    split_remote_path,
)


class TestFormatSize:
    """Tests for format_size."""

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(1024 * 1024) == "1.0 MB"

    def test_gigabytes(self):
        assert format_size(1024 * 1024 * 1024) == "1.0 GB"


class TestListDirectory:
    """Tests for list_directory."""

    def test_sorted_files_and_folders(self, tmp_path):
        (tmp_path / "b.txt").write_text("b")
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "zdir").mkdir()
        (tmp_path / "adir").mkdir()

        files, folders = list_directory(tmp_path)

        assert [f.name for f in files] == ["a.txt", "b.txt"]
        assert [f.name for f in folders] == ["adir", "zdir"]

    def test_empty(self, tmp_path):
        assert list_directory(tmp_path) == ([], [])


class TestCountFiles:
    """Tests for count_files."""

    def test_recursive_and_flat(self, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.txt").write_text("b")
        (tmp_path / "sub" / "deeper").mkdir()
        (tmp_path / "sub" / "deeper" / "c.txt").write_text("c")

        assert count_files(tmp_path, recursive=False) == 1
        assert count_files(tmp_path, recursive=True) == 3

    def test_directory_link_counted_once(self, tmp_path):
        """Test a link back to an ancestor does not inflate the count."""
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.txt").write_text("b")
        os.symlink(tmp_path, tmp_path / "sub" / "up")

        assert count_files(tmp_path, recursive=True) == 2


class TestSplitRemotePath:
    """Tests for split_remote_path."""

    def test_simple(self):
        assert split_remote_path("Backup/2024") == ["Backup", "2024"]

    def test_drops_empty_segments(self):
        assert split_remote_path("/Backup//2024/") == ["Backup", "2024"]

    def test_empty(self):
        assert split_remote_path("") == []
        assert split_remote_path(None) == []
        assert split_remote_path("///") == []


class TestFolderKey:
    def test_link_shares_key_with_target(self, tmp_path):
        (tmp_path / "real").mkdir()
        os.symlink(tmp_path / "real", tmp_path / "link")

        assert folder_key(tmp_path / "link") == folder_key(tmp_path / "real")
        assert folder_key(tmp_path) != folder_key(tmp_path / "real")
