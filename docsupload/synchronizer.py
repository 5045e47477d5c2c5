"""Recursive upload of a local tree into the remote namespace."""

import logging
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .conflicts import ConflictPolicy, ConflictResolver, DecisionProvider
from .exceptions import DocsFileNotFoundError
from .models import (
    ConflictDecision,
    LocalFile,
    RemoteDocument,
    RemoteFolder,
    UploadOutcome,
    UploadStats,
)
from .output import OutputFormatter
from .resolver import FOLDER_CREATION_FAILED, FolderResolver
from .retrier import UploadRetrier
from .store import DocumentStore
from .utils import DEFAULT_MAX_ATTEMPTS, count_files, folder_key, list_directory

logger = logging.getLogger(__name__)


@dataclass
class _UploadRun:
    """State shared by every folder visited during one upload call."""

    conflicts: ConflictResolver
    retrier: UploadRetrier
    stats: UploadStats
    recursive: bool
    without_folders: bool
    lock_folders: bool
    visited: set[tuple[int, int]] = field(default_factory=set)


class Synchronizer:
    """Walks a local tree and uploads it, depth first."""

    def __init__(
        self,
        store: DocumentStore,
        output: Optional[OutputFormatter] = None,
        provider: Optional[DecisionProvider] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """Initialize the synchronizer.

        Args:
            store: Remote document store
            output: Output formatter for progress and status lines
            provider: Answers duplicate prompts (console prompt by default)
            max_attempts: Upload attempts per file when retries are enabled
        """
        self.store = store
        self.output = output or OutputFormatter()
        self.provider = provider
        self.max_attempts = max_attempts
        self.resolver = FolderResolver(store, self.output)
        self.stats = UploadStats()

    def upload(
        self,
        root_path: Union[str, Path],
        recursive: bool = False,
        remote_root_path: Optional[str] = None,
        without_folders: bool = False,
        add_all: bool = False,
        skip_all: bool = False,
        replace_all: bool = False,
        disable_retries: bool = False,
        lock_folders: bool = False,
    ) -> int:
        """Upload a file or folder.

        Args:
            root_path: Local file or folder
            recursive: Also upload sub-folders
            remote_root_path: Slash-separated remote folder to upload into
                (created if missing); top level when empty
            without_folders: Do not recreate the local folder structure;
                everything goes into the remote root folder
            add_all: Upload duplicates as additional documents
            skip_all: Skip files that already exist remotely
            replace_all: Trash existing documents and upload again
            disable_retries: Make a single attempt per file
            lock_folders: Mark each local folder read-only once visited

        Returns:
            Number of files uploaded

        Raises:
            DocsFileNotFoundError: If ``root_path`` does not exist
        """
        root = Path(root_path)
        if not root.exists():
            raise DocsFileNotFoundError(str(root_path))

        conflicts = ConflictResolver(
            self.store,
            self.output,
            ConflictPolicy(add_all=add_all, skip_all=skip_all, replace_all=replace_all),
            self.provider,
        )
        run = _UploadRun(
            conflicts=conflicts,
            retrier=UploadRetrier(
                self.store,
                self.output,
                max_attempts=1 if disable_retries else self.max_attempts,
            ),
            stats=UploadStats(),
            recursive=recursive,
            without_folders=without_folders,
            lock_folders=lock_folders,
        )
        self.stats = run.stats

        target = self.resolver.resolve_folder_path(remote_root_path)

        if not root.is_dir():
            run.stats.total = 1
            run.stats.processed = 1
            self.output.print("")
            self.output.progress_message(str(root.absolute()))
            outcome = self._upload_file(
                root, target, self.store.list_documents(target), run
            )
            if outcome is UploadOutcome.UPLOADED:
                self.output.print("")
                self.output.success("The file has been uploaded")
                return 1
            return 0

        message = f"Uploading{' recursively' if recursive else ''} the folder {root}"
        if remote_root_path:
            message += f" to {remote_root_path}"
        self.output.print("")
        self.output.info(message)
        self.output.print("")

        run.visited.add(folder_key(root))
        run.stats.total = count_files(root, recursive)
        uploaded = self._upload_folder(root, target, run)

        self.output.print("")
        self.output.success(f"Files uploaded: {uploaded}")
        return uploaded

    def _upload_folder(
        self, folder: Path, target: Optional[RemoteFolder], run: _UploadRun
    ) -> int:
        """Upload the files of ``folder``, then its sub-folders."""
        if run.lock_folders:
            _make_read_only(folder)

        files, subfolders = list_directory(folder)
        remote_docs = self.store.list_documents(target) if files else []

        uploaded = 0
        for file_path in files:
            run.stats.processed += 1
            self.output.progress_message(
                f"[{run.stats.processed}/{run.stats.total}] {file_path.absolute()}"
            )
            outcome = self._upload_file(file_path, target, remote_docs, run)
            if outcome is UploadOutcome.UPLOADED:
                uploaded += 1

        if not run.recursive or not subfolders:
            return uploaded

        remote_folders: list[RemoteFolder] = []
        if not run.without_folders:
            remote_folders = self.store.list_folders(target)

        for subfolder in subfolders:
            key = folder_key(subfolder)
            if key in run.visited:
                logger.warning(
                    f"Skipping {subfolder}: folder already visited in this run"
                )
                continue
            run.visited.add(key)

            subfolder_target = target
            if not run.without_folders:
                remote_folder = self.resolver.find_or_create(
                    subfolder.name, target, remote_folders
                )
                if remote_folder is None:
                    self.output.warning(f"{subfolder.absolute()}")
                    self.output.warning(FOLDER_CREATION_FAILED)
                else:
                    subfolder_target = remote_folder
            uploaded += self._upload_folder(subfolder, subfolder_target, run)

        return uploaded

    def _upload_file(
        self,
        file_path: Path,
        target: Optional[RemoteFolder],
        remote_docs: list[RemoteDocument],
        run: _UploadRun,
    ) -> UploadOutcome:
        """Handle one file and record its outcome."""
        try:
            file = LocalFile.from_path(file_path)
        except OSError as e:
            self.output.warning(f" - Skipped: {e}")
            outcome = UploadOutcome.SKIPPED_PERMANENT_ERROR
        else:
            outcome = self._process(file, target, remote_docs, run)

        run.stats.record(outcome)
        return outcome

    def _process(
        self,
        file: LocalFile,
        target: Optional[RemoteFolder],
        remote_docs: list[RemoteDocument],
        run: _UploadRun,
    ) -> UploadOutcome:
        skipped = run.retrier.check_eligibility(file)
        if skipped is not None:
            return skipped

        decision = run.conflicts.resolve(file, remote_docs)
        if decision is ConflictDecision.SKIP:
            self.output.print(" - Skipped")
            return UploadOutcome.SKIPPED_BY_POLICY

        return run.retrier.attempt_upload(file, target)


def _make_read_only(folder: Path) -> None:
    try:
        mode = folder.stat().st_mode
        folder.chmod(mode & ~(stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH))
    except OSError as e:
        logger.debug(f"Could not mark {folder} read-only: {e}")
