"""Shared fixtures for docsupload tests."""

from pathlib import Path
from typing import Optional

import pytest

from docsupload.exceptions import DocsAPIError, DocsCreationError
from docsupload.formats import classify
from docsupload.models import LocalFile, RemoteDocument, RemoteFolder
from docsupload.output import OutputFormatter


class FakeStore:
    """In-memory DocumentStore that records every call in order."""

    def __init__(self):
        self.folders: dict[str, RemoteFolder] = {}
        self.documents: dict[str, RemoteDocument] = {}
        self.calls: list[tuple] = []
        self.upload_errors: list[Exception] = []
        self.fail_create: set[str] = set()
        self.delete_error: Optional[Exception] = None
        self._next_id = 1

    def _new_id(self) -> str:
        new_id = f"id{self._next_id}"
        self._next_id += 1
        return new_id

    @staticmethod
    def _pid(parent: Optional[RemoteFolder]) -> Optional[str]:
        return parent.id if parent is not None else None

    def add_folder(
        self, title: str, parent: Optional[RemoteFolder] = None
    ) -> RemoteFolder:
        folder = RemoteFolder(id=self._new_id(), title=title, parent_id=self._pid(parent))
        self.folders[folder.id] = folder
        return folder

    def add_document(
        self, title: str, doc_type: str, parent: Optional[RemoteFolder] = None
    ) -> RemoteDocument:
        doc = RemoteDocument(
            id=self._new_id(), title=title, type=doc_type, parent_id=self._pid(parent)
        )
        self.documents[doc.id] = doc
        return doc

    def list_folders(self, parent: Optional[RemoteFolder]) -> list[RemoteFolder]:
        pid = self._pid(parent)
        self.calls.append(("list_folders", pid))
        return [f for f in self.folders.values() if f.parent_id == pid]

    def list_documents(self, parent: Optional[RemoteFolder]) -> list[RemoteDocument]:
        pid = self._pid(parent)
        self.calls.append(("list_documents", pid))
        return [d for d in self.documents.values() if d.parent_id == pid]

    def create_folder(self, name: str, parent: Optional[RemoteFolder]) -> RemoteFolder:
        self.calls.append(("create_folder", name, self._pid(parent)))
        if name in self.fail_create:
            raise DocsCreationError(f"Cannot create '{name}'")
        return self.add_folder(name, parent)

    def upload_file(
        self, path: Path, title: str, parent: Optional[RemoteFolder]
    ) -> RemoteDocument:
        self.calls.append(("upload_file", title, self._pid(parent)))
        if self.upload_errors:
            raise self.upload_errors.pop(0)
        return self.add_document(title, classify(LocalFile.from_path(path)), parent)

    def delete_document(self, document: RemoteDocument) -> None:
        self.calls.append(("delete_document", document.id))
        if self.delete_error is not None:
            raise self.delete_error
        self.documents.pop(document.id, None)

    def authenticate(self, username=None, password=None, token=None) -> str:
        self.calls.append(("authenticate", username, token))
        if token == "bad" or password == "bad":
            raise DocsAPIError("rejected")
        return token or "token-from-login"

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def documents_in(self, parent: Optional[RemoteFolder]) -> list[RemoteDocument]:
        pid = self._pid(parent)
        return [d for d in self.documents.values() if d.parent_id == pid]

    def folder_named(
        self, title: str, parent: Optional[RemoteFolder] = None
    ) -> Optional[RemoteFolder]:
        pid = self._pid(parent)
        for folder in self.folders.values():
            if folder.title == title and folder.parent_id == pid:
                return folder
        return None


@pytest.fixture
def store():
    """Provide an empty in-memory document store."""
    return FakeStore()


@pytest.fixture
def out():
    """Provide a quiet output formatter."""
    return OutputFormatter(json_output=False, quiet=True)


@pytest.fixture
def make_file(tmp_path):
    """Create a file under tmp_path and return its LocalFile snapshot."""

    def _make(relative: str, content: str = "content", size: Optional[int] = None):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if size is not None:
            path.write_bytes(b"x" * size)
        else:
            path.write_text(content)
        return LocalFile.from_path(path)

    return _make
