"""The document store interface used by the upload engine.

The engine only talks to a ``DocumentStore``. ``DocsStore`` adapts the REST
client to that interface: it converts raw responses into models and makes
sure failures surface as ``DocsAPIError`` subclasses that
``classify_error`` understands.
"""

from pathlib import Path
from typing import Any, Optional, Protocol

from .api import DocsClient
from .entries_manager import RemoteEntriesManager
from .exceptions import (
    DocsAPIError,
    DocsAuthenticationError,
    DocsCreationError,
    DocsUploadError,
)
from .models import RemoteDocument, RemoteFolder


class DocumentStore(Protocol):
    """Operations the upload engine needs from the remote service."""

    def list_folders(self, parent: Optional[RemoteFolder]) -> list[RemoteFolder]:
        ...

    def list_documents(
        self, parent: Optional[RemoteFolder]
    ) -> list[RemoteDocument]:
        ...

    def create_folder(
        self, name: str, parent: Optional[RemoteFolder]
    ) -> RemoteFolder:
        ...

    def upload_file(
        self, path: Path, title: str, parent: Optional[RemoteFolder]
    ) -> RemoteDocument:
        ...

    def delete_document(self, document: RemoteDocument) -> None:
        ...

    def authenticate(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
    ) -> str:
        ...


class DocsStore:
    """DocumentStore backed by the REST API client."""

    def __init__(self, client: DocsClient):
        self._client = client
        self._entries = RemoteEntriesManager(client)

    def list_folders(self, parent: Optional[RemoteFolder]) -> list[RemoteFolder]:
        return self._entries.list_folders(_parent_id(parent))

    def list_documents(
        self, parent: Optional[RemoteFolder]
    ) -> list[RemoteDocument]:
        return self._entries.list_documents(_parent_id(parent))

    def create_folder(
        self, name: str, parent: Optional[RemoteFolder]
    ) -> RemoteFolder:
        """Create a folder at the top level or inside ``parent``.

        Raises:
            DocsCreationError: On any failure, including transport errors
        """
        try:
            result = self._client.create_folder(name, parent_id=_parent_id(parent))
        except DocsCreationError:
            raise
        except DocsAPIError as e:
            raise DocsCreationError(f"Failed to create folder '{name}': {e}") from e
        data = _unwrap(result, "folder")
        if data is None:
            raise DocsCreationError(
                f"Failed to create folder '{name}': response has no folder"
            )
        return RemoteFolder.from_dict(data)

    def upload_file(
        self, path: Path, title: str, parent: Optional[RemoteFolder]
    ) -> RemoteDocument:
        result = self._client.upload_file(path, title, parent_id=_parent_id(parent))
        data = _unwrap(result, "document")
        if data is None:
            raise DocsUploadError(
                f"Upload of '{path.name}' returned no document"
            )
        return RemoteDocument.from_dict(data)

    def delete_document(self, document: RemoteDocument) -> None:
        """Move a document to the trash."""
        self._client.trash_entries([document.id])

    def authenticate(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
    ) -> str:
        """Log in with a token or with username and password.

        A token is checked against the service before it is accepted.

        Returns:
            The access token in use

        Raises:
            DocsAuthenticationError: If the credentials are rejected
        """
        if token:
            self._client.set_token(token)
            user_info = self._client.get_logged_user()
            if not user_info or not user_info.get("user"):
                raise DocsAuthenticationError("Invalid token")
            return token
        if username is None or password is None:
            raise DocsAuthenticationError("Username and password are required")
        return self._client.login(username, password)


def _parent_id(parent: Optional[RemoteFolder]) -> Optional[str]:
    return parent.id if parent is not None else None


def _unwrap(result: Any, key: str) -> Optional[dict[str, Any]]:
    """Return the entity from a response shaped {key: {...}} or {...}."""
    if not isinstance(result, dict):
        return None
    data = result.get(key, result)
    if not isinstance(data, dict) or "id" not in data:
        return None
    return data
