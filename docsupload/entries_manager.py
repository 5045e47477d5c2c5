"""Paginated listing of remote folders and documents."""

import logging
from typing import Any, Optional

from .api import DocsClient
from .exceptions import DocsAPIError
from .models import FOLDER_TYPE, EntriesPage, RemoteDocument, RemoteFolder
from .utils import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)


class RemoteEntriesManager:
    """Fetches folder contents with automatic pagination.

    Listings are never cached: every call reflects the remote state at the
    time it is made.
    """

    def __init__(self, client: DocsClient, per_page: int = DEFAULT_PAGE_SIZE):
        """Initialize the entries manager.

        Args:
            client: Document store API client
            per_page: Number of entries per page (default: 100)
        """
        self.client = client
        self.per_page = per_page

    def _fetch_all(
        self,
        parent_id: Optional[str],
        entry_type: Optional[str] = None,
        exclude_type: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Fetch every page of a listing.

        API errors are logged and the entries gathered so far are returned.
        """
        all_entries: list[dict[str, Any]] = []
        current_page = 1

        try:
            while True:
                result = self.client.get_entries(
                    parent_id=parent_id,
                    entry_type=entry_type,
                    exclude_type=exclude_type,
                    page=current_page,
                    per_page=self.per_page,
                )
                page = EntriesPage.from_api_response(result)
                all_entries.extend(page.entries)
                if not page.has_more:
                    break
                current_page += 1
        except DocsAPIError as e:
            logger.warning(
                f"API error while listing folder {parent_id or 'root'}, "
                f"returning {len(all_entries)} partial results: {e}"
            )

        return all_entries

    def list_folders(self, parent_id: Optional[str] = None) -> list[RemoteFolder]:
        """List the folders directly inside a folder.

        Args:
            parent_id: Folder ID (None for the top-level namespace)

        Returns:
            Sub-folders of the folder
        """
        entries = self._fetch_all(parent_id, entry_type=FOLDER_TYPE)
        # Some servers ignore the type filter
        return [
            RemoteFolder.from_dict(entry)
            for entry in entries
            if entry.get("type", FOLDER_TYPE) == FOLDER_TYPE
        ]

    def list_documents(self, parent_id: Optional[str] = None) -> list[RemoteDocument]:
        """List the documents directly inside a folder, leaving out folders.

        Args:
            parent_id: Folder ID (None for the top-level namespace)

        Returns:
            Documents in the folder
        """
        entries = self._fetch_all(parent_id, exclude_type=FOLDER_TYPE)
        return [
            RemoteDocument.from_dict(entry)
            for entry in entries
            if entry.get("type") != FOLDER_TYPE
        ]
