"""Exceptions raised by the document store client and the upload engine."""

from enum import Enum


class DocsAPIError(Exception):
    """Base exception for all document store errors."""


class DocsAuthenticationError(DocsAPIError):
    """Raised when login fails or the token is rejected."""


class DocsConfigError(DocsAPIError):
    """Raised when required configuration is missing."""


class DocsNetworkError(DocsAPIError):
    """Raised on connection problems and timeouts."""


class DocsRateLimitError(DocsAPIError):
    """Raised when the service throttles requests."""


class DocsPermissionError(DocsAPIError):
    """Raised when access to a resource is forbidden."""


class DocsNotFoundError(DocsAPIError):
    """Raised when a remote resource does not exist."""


class DocsInvalidResponseError(DocsAPIError):
    """Raised when the service returns something that is not valid JSON."""


class DocsInvalidEntryError(DocsAPIError):
    """Raised when the service permanently rejects an uploaded entry.

    Typical causes are a malformed title or content the service refuses to
    convert. Uploading the same file again will fail the same way.
    """


class DocsCreationError(DocsAPIError):
    """Raised when a remote folder cannot be created."""


class DocsUploadError(DocsAPIError):
    """Raised when an upload fails for a reason not covered above."""


class DocsFileNotFoundError(DocsAPIError):
    """Raised when a local path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Specified path {path} doesn't exist")


class ErrorKind(Enum):
    """How the engine reacts to a failed remote operation."""

    TRANSIENT = "transient"
    PERMANENT = "permanent"
    AUTH_FAILURE = "auth_failure"
    CREATION_FAILURE = "creation_failure"


def classify_error(error: Exception) -> ErrorKind:
    """Map an exception raised by a store call to an ErrorKind.

    Args:
        error: Exception raised by a DocumentStore operation

    Returns:
        The kind of failure. Anything unrecognised is transient.
    """
    # Rejected content and unreadable local files fail the same way every time
    if isinstance(error, (DocsInvalidEntryError, DocsFileNotFoundError, OSError)):
        return ErrorKind.PERMANENT
    if isinstance(error, DocsAuthenticationError):
        return ErrorKind.AUTH_FAILURE
    if isinstance(error, DocsCreationError):
        return ErrorKind.CREATION_FAILURE
    return ErrorKind.TRANSIENT
