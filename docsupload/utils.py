"""Utility functions for docsupload."""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Upload attempts per file (a single attempt when retries are disabled)
DEFAULT_MAX_ATTEMPTS: int = 3

# Retry configuration for idempotent listing requests
DEFAULT_MAX_RETRIES: int = 3
DEFAULT_RETRY_DELAY: float = 1.0  # seconds

# Page size for entry listings
DEFAULT_PAGE_SIZE: int = 100


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


# =============================================================================
# Local tree utilities
# =============================================================================


def list_directory(folder: Path) -> tuple[list[Path], list[Path]]:
    """List the files and sub-directories of a folder, sorted by name.

    Args:
        folder: Directory to list

    Returns:
        Tuple of (files, directories). Unreadable directories yield two
        empty lists.
    """
    files: list[Path] = []
    folders: list[Path] = []
    try:
        for item in sorted(folder.iterdir(), key=lambda p: p.name):
            if item.is_dir():
                folders.append(item)
            elif item.is_file():
                files.append(item)
    except PermissionError as e:
        logger.warning(f"Permission denied: {e}")
    return files, folders


def folder_key(folder: Path) -> tuple[int, int]:
    """Identify a directory by device and inode, following symlinks."""
    st = folder.stat()
    return st.st_dev, st.st_ino


def count_files(
    folder: Path, recursive: bool, visited: Optional[set[tuple[int, int]]] = None
) -> int:
    """Count the files a walk over ``folder`` will visit.

    A directory reached a second time (through a symlink) is not counted
    again.

    Args:
        folder: Directory to count
        recursive: Whether sub-directories are included
        visited: Keys (see ``folder_key``) of directories already counted

    Returns:
        Number of regular files
    """
    if visited is None:
        visited = {folder_key(folder)}
    files, folders = list_directory(folder)
    count = len(files)
    if recursive:
        for subfolder in folders:
            key = folder_key(subfolder)
            if key in visited:
                continue
            visited.add(key)
            count += count_files(subfolder, recursive, visited)
    return count


def split_remote_path(path: Optional[str]) -> list[str]:
    """Split a slash-separated remote path into folder names.

    Empty segments (leading, trailing or doubled slashes) are dropped.

    Examples:
        >>> split_remote_path("/Backup//2024/")
        ['Backup', '2024']
        >>> split_remote_path(None)
        []
    """
    if not path:
        return []
    return [segment for segment in path.split("/") if segment]
