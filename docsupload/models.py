"""Data models for local files and remote document store entries."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

FOLDER_TYPE = "folder"


@dataclass(frozen=True)
class LocalFile:
    """Snapshot of a local file taken while walking the tree."""

    path: Path
    """Absolute path to the file"""

    name: str
    """File name without the extension"""

    extension: str
    """Lower-cased extension without the dot (empty if there is none)"""

    size: int
    """File size in bytes"""

    @classmethod
    def from_path(cls, file_path: Path) -> "LocalFile":
        """Create a LocalFile from a path on disk.

        The name is split at the last dot, so ``report.tar.gz`` becomes
        ``report.tar`` with extension ``gz``. Names starting with a dot and
        containing no other dot have no extension.

        Args:
            file_path: Path to the file

        Returns:
            LocalFile instance
        """
        path = file_path.absolute()
        file_name = path.name
        dot = file_name.rfind(".")
        if dot > 0:
            name, extension = file_name[:dot], file_name[dot + 1 :].lower()
        else:
            name, extension = file_name, ""
        return cls(
            path=path,
            name=name,
            extension=extension,
            size=path.stat().st_size,
        )


@dataclass(frozen=True)
class RemoteFolder:
    """Handle to a folder in the remote namespace.

    The account's top-level namespace has no handle; it is represented by
    ``None`` wherever a ``Optional[RemoteFolder]`` is expected.
    """

    id: str
    title: str
    type: str = FOLDER_TYPE
    parent_id: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER_TYPE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RemoteFolder":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or data.get("name", ""),
            type=data.get("type", FOLDER_TYPE),
            parent_id=_optional_id(data.get("parent_id")),
        )


@dataclass(frozen=True)
class RemoteDocument:
    """A document stored in the remote namespace."""

    id: str
    title: str
    type: str
    parent_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RemoteDocument":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or data.get("name", ""),
            type=data.get("type", ""),
            parent_id=_optional_id(data.get("parent_id")),
        )


@dataclass
class EntriesPage:
    """One page of an entries listing."""

    entries: list[dict[str, Any]]
    current_page: Optional[int] = None
    last_page: Optional[int] = None

    @property
    def has_more(self) -> bool:
        if self.current_page is None or self.last_page is None:
            return False
        return self.current_page < self.last_page

    @classmethod
    def from_api_response(cls, data: Any) -> "EntriesPage":
        """Parse a listing response.

        Accepts either a bare list of entries or an object with a ``data``
        list and ``current_page``/``last_page`` pagination fields.
        """
        if isinstance(data, list):
            return cls(entries=data)
        if not isinstance(data, dict):
            return cls(entries=[])
        return cls(
            entries=list(data.get("data") or []),
            current_page=data.get("current_page"),
            last_page=data.get("last_page"),
        )


class ConflictDecision(Enum):
    """What to do with a local file that collides with a remote document."""

    ADD = "add"
    SKIP = "skip"
    REPLACE = "replace"


class UploadOutcome(Enum):
    """Result of handling one local file."""

    UPLOADED = "uploaded"
    SKIPPED_UNSUPPORTED_FORMAT = "skipped_unsupported_format"
    SKIPPED_OVERSIZE = "skipped_oversize"
    SKIPPED_BY_POLICY = "skipped_by_policy"
    SKIPPED_AFTER_RETRIES_EXHAUSTED = "skipped_after_retries_exhausted"
    SKIPPED_PERMANENT_ERROR = "skipped_permanent_error"

    @property
    def is_error(self) -> bool:
        return self in (
            UploadOutcome.SKIPPED_AFTER_RETRIES_EXHAUSTED,
            UploadOutcome.SKIPPED_PERMANENT_ERROR,
        )


@dataclass
class UploadStats:
    """Tally of outcomes for one upload run."""

    total: int = 0
    processed: int = 0
    outcomes: dict[UploadOutcome, int] = field(default_factory=dict)

    def record(self, outcome: UploadOutcome) -> None:
        self.outcomes[outcome] = self.outcomes.get(outcome, 0) + 1

    def count(self, outcome: UploadOutcome) -> int:
        return self.outcomes.get(outcome, 0)

    @property
    def uploads(self) -> int:
        return self.count(UploadOutcome.UPLOADED)

    @property
    def errors(self) -> int:
        return sum(n for outcome, n in self.outcomes.items() if outcome.is_error)

    @property
    def skips(self) -> int:
        return sum(
            n
            for outcome, n in self.outcomes.items()
            if outcome is not UploadOutcome.UPLOADED and not outcome.is_error
        )


def _optional_id(value: Any) -> Optional[str]:
    # Root entries come back with parent_id 0, "" or null depending on endpoint
    if value in (None, "", 0, "0"):
        return None
    return str(value)
