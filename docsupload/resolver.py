"""Mapping of slash-separated remote paths onto remote folder handles."""

import logging
from typing import Optional

from .exceptions import DocsAPIError, ErrorKind, classify_error
from .models import RemoteFolder
from .output import OutputFormatter
from .store import DocumentStore
from .utils import split_remote_path

logger = logging.getLogger(__name__)

FOLDER_CREATION_FAILED = (
    " - Skipped: failed to create the folder, files will be uploaded to the "
    "upper-level folder"
)


class FolderResolver:
    """Finds remote folders by name, creating the ones that are missing."""

    def __init__(self, store: DocumentStore, out: Optional[OutputFormatter] = None):
        """Initialize the resolver.

        Args:
            store: Remote document store
            out: Output formatter for user-facing messages
        """
        self.store = store
        self.out = out or OutputFormatter()

    def resolve_folder_path(self, path: Optional[str]) -> Optional[RemoteFolder]:
        """Resolve a remote path like ``Backup/2024`` to a folder handle.

        Each segment is looked up among the sub-folders of the previous one
        and created if it does not exist. If a segment cannot be created the
        rest of the path is abandoned and the deepest folder resolved so far
        is used instead.

        Args:
            path: Slash-separated folder path, or None/empty for the top level

        Returns:
            Handle of the last resolved segment, or None for the top-level
            namespace
        """
        parent: Optional[RemoteFolder] = None
        for segment in split_remote_path(path):
            folder = self.find_or_create(segment, parent)
            if folder is None:
                destination = f"'{parent.title}'" if parent else "the top level"
                self.out.warning(
                    f"Could not resolve remote folder '{path}', "
                    f"uploading to {destination} instead"
                )
                return parent
            parent = folder
        return parent

    def find_or_create(
        self,
        name: str,
        parent: Optional[RemoteFolder],
        siblings: Optional[list[RemoteFolder]] = None,
    ) -> Optional[RemoteFolder]:
        """Return the sub-folder ``name`` of ``parent``, creating it if needed.

        Args:
            name: Folder title
            parent: Parent folder (None for the top level)
            siblings: Sub-folders of ``parent`` if already listed; listed
                fresh from the store otherwise

        Returns:
            The folder handle, or None if it could not be created
        """
        if siblings is None:
            siblings = self.store.list_folders(parent)

        for folder in siblings:
            if folder.title == name and folder.is_folder:
                return folder

        try:
            folder = self.store.create_folder(name, parent)
        except DocsAPIError as e:
            kind = classify_error(e)
            if kind is ErrorKind.AUTH_FAILURE:
                logger.error(f"Not authorized to create folder '{name}': {e}")
            else:
                logger.warning(f"Failed to create folder '{name}': {e}")
            return None

        logger.debug(f"Created folder '{name}' (id={folder.id})")
        return folder
