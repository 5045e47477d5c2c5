"""Single-file upload with bounded retries."""

import logging
from typing import Optional

from .exceptions import ErrorKind, classify_error
from .formats import is_supported_format, is_within_size_limit
from .models import LocalFile, RemoteFolder, UploadOutcome
from .output import OutputFormatter
from .store import DocumentStore
from .utils import DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)


class UploadRetrier:
    """Uploads one file, trying again after transient failures."""

    def __init__(
        self,
        store: DocumentStore,
        out: OutputFormatter,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """Initialize the retrier.

        Args:
            store: Remote document store
            out: Output formatter for per-attempt messages
            max_attempts: Upload attempts per file (at least 1)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.out = out
        self.max_attempts = max_attempts

    def check_eligibility(self, file: LocalFile) -> Optional[UploadOutcome]:
        """Check format and size without touching the network.

        Returns:
            The skip outcome if the file cannot be uploaded, else None
        """
        if not is_supported_format(file):
            self.out.print(" - Skipped: the file format is not supported")
            return UploadOutcome.SKIPPED_UNSUPPORTED_FORMAT
        if not is_within_size_limit(file):
            self.out.print(" - Skipped: the file size exceeds the limit")
            return UploadOutcome.SKIPPED_OVERSIZE
        return None

    def attempt_upload(
        self, file: LocalFile, target: Optional[RemoteFolder]
    ) -> UploadOutcome:
        """Upload ``file`` into ``target`` (None for the top level).

        Attempts are made back to back. A rejected entry is never retried;
        errors ``classify_error`` does not recognise count as transient.

        Args:
            file: Local file to upload
            target: Destination folder

        Returns:
            The outcome for this file
        """
        skipped = self.check_eligibility(file)
        if skipped is not None:
            return skipped

        for attempt in range(1, self.max_attempts + 1):
            try:
                document = self.store.upload_file(file.path, file.name, target)
            except Exception as e:
                kind = classify_error(e)
                if kind in (ErrorKind.PERMANENT, ErrorKind.AUTH_FAILURE):
                    self.out.warning(f" - Skipped: {e}")
                    return UploadOutcome.SKIPPED_PERMANENT_ERROR

                self.out.warning(f" - Upload error: {e}")
                logger.debug(
                    f"Attempt {attempt}/{self.max_attempts} for {file.path} "
                    f"failed ({kind.value})"
                )
                if attempt < self.max_attempts:
                    self.out.print(" - Another try...")
                    continue
                self.out.warning(" - Skipped")
                return UploadOutcome.SKIPPED_AFTER_RETRIES_EXHAUSTED

            logger.debug(f"Uploaded {file.path} as '{document.title}' ({document.id})")
            return UploadOutcome.UPLOADED

        # max_attempts >= 1, so the loop always returns
        return UploadOutcome.SKIPPED_AFTER_RETRIES_EXHAUSTED
