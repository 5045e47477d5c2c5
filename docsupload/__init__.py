"""docsupload - CLI tool for batch uploading documents preserving folder structure."""

from .api import DocsClient
from .conflicts import ConflictPolicy, ConflictResolver, ConsolePrompt, PresetAnswers
from .exceptions import (
    DocsAPIError,
    DocsAuthenticationError,
    DocsConfigError,
    DocsCreationError,
    DocsFileNotFoundError,
    DocsInvalidEntryError,
    DocsInvalidResponseError,
    DocsNetworkError,
    DocsNotFoundError,
    DocsPermissionError,
    DocsRateLimitError,
    DocsUploadError,
    ErrorKind,
    classify_error,
)
from .models import (
    ConflictDecision,
    LocalFile,
    RemoteDocument,
    RemoteFolder,
    UploadOutcome,
)
from .resolver import FolderResolver
from .retrier import UploadRetrier
from .store import DocsStore, DocumentStore
from .synchronizer import Synchronizer

__version__ = "1.3.1"

__all__ = [
    "DocsClient",
    "DocsStore",
    "DocumentStore",
    "Synchronizer",
    "FolderResolver",
    "ConflictResolver",
    "ConflictPolicy",
    "ConsolePrompt",
    "PresetAnswers",
    "UploadRetrier",
    "ConflictDecision",
    "LocalFile",
    "RemoteDocument",
    "RemoteFolder",
    "UploadOutcome",
    "DocsAPIError",
    "DocsAuthenticationError",
    "DocsConfigError",
    "DocsCreationError",
    "DocsFileNotFoundError",
    "DocsInvalidEntryError",
    "DocsInvalidResponseError",
    "DocsNetworkError",
    "DocsNotFoundError",
    "DocsPermissionError",
    "DocsRateLimitError",
    "DocsUploadError",
    "ErrorKind",
    "classify_error",
]
