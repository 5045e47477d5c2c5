"""API client for the document store."""

from __future__ import annotations

import mimetypes
import random
import time
from pathlib import Path
from typing import Any

import httpx

from .config import config
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
)
from .utils import DEFAULT_MAX_RETRIES, DEFAULT_PAGE_SIZE, DEFAULT_RETRY_DELAY

# Endpoints that work without a bearer token
_PUBLIC_ENDPOINTS = ("/auth/login",)


class DocsClient:
    """Client for the document store REST API."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the API client.

        Args:
            token: Optional access token (uses config if not provided)
            api_url: Optional API URL (uses config if not provided)
            max_retries: Retries for idempotent requests (default: 3)
            retry_delay: Initial delay between retries in seconds (default: 1.0)
            timeout: Request timeout in seconds (default: 60.0)
            transport: Optional httpx transport (used by tests)
        """
        self.token = token or config.token
        self.api_url = (api_url or config.api_url).rstrip("/")
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.Client(
                headers=headers,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def set_token(self, token: str) -> None:
        """Use a new access token for subsequent requests."""
        self.token = token
        if self._client is not None and not self._client.is_closed:
            self._client.headers["Authorization"] = f"Bearer {token}"

    def _should_retry(self, exception: Exception, attempt: int) -> bool:
        """Determine if a request should be retried.

        Args:
            exception: The exception that occurred
            attempt: Current attempt number (0-based)

        Returns:
            True if the request should be retried, False otherwise
        """
        if attempt >= self.max_retries:
            return False
        return isinstance(exception, (DocsNetworkError, DocsRateLimitError))

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Exponential backoff with +/- 25% jitter.

        Args:
            attempt: Current attempt number (0-based)

        Returns:
            Delay in seconds
        """
        base_delay = self.retry_delay * (2**attempt)
        jitter = base_delay * 0.25 * (2 * random.random() - 1)
        return base_delay + jitter

    def _error_for_status(
        self,
        e: httpx.HTTPStatusError,
        status_errors: dict[int, type[DocsAPIError]] | None,
    ) -> DocsAPIError:
        """Translate an HTTP error response into a DocsAPIError.

        Args:
            e: The HTTP error exception
            status_errors: Per-call overrides mapping status codes to
                exception classes

        Returns:
            Exception to raise
        """
        status_code = e.response.status_code
        detail = _extract_error_message(e.response)

        if status_errors and status_code in status_errors:
            message = detail or f"Request rejected with status {status_code}"
            return status_errors[status_code](message)
        if status_code == 401:
            return DocsAuthenticationError("Invalid token or unauthorized access")
        if status_code == 403:
            return DocsPermissionError("Access forbidden - check your permissions")
        if status_code == 404:
            return DocsNotFoundError("Resource not found")
        if status_code == 429:
            return DocsRateLimitError("Rate limit exceeded - please try again later")
        if 500 <= status_code < 600:
            # Server hiccups are network-level failures from our point of view
            message = f"Server error {status_code}"
            return DocsNetworkError(f"{message}: {detail}" if detail else message)

        message = f"API request failed with status {status_code}"
        return DocsAPIError(f"{message}: {detail}" if detail else message)

    def _request(
        self,
        method: str,
        endpoint: str,
        retry: bool = True,
        status_errors: dict[int, type[DocsAPIError]] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Make an API request.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            retry: Whether transient failures are retried with backoff.
                Only idempotent requests should pass True.
            status_errors: Per-call mapping of status codes to exceptions
            **kwargs: Additional arguments passed to httpx

        Returns:
            Response JSON data

        Raises:
            DocsAPIError: If the request fails
        """
        if not self.token and endpoint not in _PUBLIC_ENDPOINTS:
            raise DocsConfigError(
                "Access token not configured. Run 'docsupload init' or set "
                "DOCSUPLOAD_TOKEN."
            )

        url = f"{self.api_url}/{endpoint.lstrip('/')}"
        client = self._get_client()
        attempts = self.max_retries + 1 if retry else 1

        for attempt in range(attempts):
            try:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
                return _parse_json(response)
            except httpx.HTTPStatusError as e:
                error = self._error_for_status(e, status_errors)
                if retry and self._should_retry(error, attempt):
                    retry_after = e.response.headers.get("Retry-After")
                    if retry_after and retry_after.isdigit():
                        delay = float(retry_after)
                    else:
                        delay = self._calculate_retry_delay(attempt)
                    time.sleep(delay)
                    continue
                raise error from e
            except httpx.RequestError as e:
                error = DocsNetworkError(f"Network error: {e}")
                if retry and self._should_retry(error, attempt):
                    time.sleep(self._calculate_retry_delay(attempt))
                    continue
                raise error from e

        raise DocsAPIError("Request failed after all retry attempts")

    # =========================
    # Authentication
    # =========================

    def login(self, username: str, password: str) -> str:
        """Exchange username and password for an access token.

        The token is used for all subsequent requests.

        Args:
            username: Account user name or email
            password: Account password

        Returns:
            The access token

        Raises:
            DocsAuthenticationError: If the credentials are rejected
        """
        result = self._request(
            "POST",
            "/auth/login",
            retry=False,
            status_errors={
                400: DocsAuthenticationError,
                403: DocsAuthenticationError,
                422: DocsAuthenticationError,
            },
            json={"username": username, "password": password},
        )
        token = result.get("access_token") or (result.get("user") or {}).get(
            "access_token"
        )
        if not token:
            raise DocsAuthenticationError("Login response did not contain a token")
        self.set_token(token)
        return token

    def get_logged_user(self) -> Any:
        """Return the account the current token belongs to."""
        return self._request("GET", "/auth/user")

    # =========================
    # Entries
    # =========================

    def get_entries(
        self,
        parent_id: str | None = None,
        entry_type: str | None = None,
        exclude_type: str | None = None,
        page: int | None = None,
        per_page: int = DEFAULT_PAGE_SIZE,
    ) -> Any:
        """List entries directly inside a folder.

        Args:
            parent_id: Folder to list (None for the top-level namespace)
            entry_type: Only return entries of this type (e.g. 'folder')
            exclude_type: Leave out entries of this type
            page: Page number (1-based, default: None for page 1)
            per_page: How many entries to return per page

        Returns:
            Listing response with 'data', 'current_page' and 'last_page' keys
        """
        params: dict[str, Any] = {"perPage": per_page}
        params["parentId"] = parent_id if parent_id is not None else "root"
        if entry_type:
            params["type"] = entry_type
        if exclude_type:
            params["excludeType"] = exclude_type
        if page is not None:
            params["page"] = page
        return self._request("GET", "/entries", params=params)

    def create_folder(self, name: str, parent_id: str | None = None) -> Any:
        """Create a new folder.

        Args:
            name: Name of the new folder
            parent_id: ID of parent folder (None for the top level)

        Returns:
            Response with a 'folder' key

        Raises:
            DocsCreationError: If the name is taken or invalid
        """
        data: dict[str, Any] = {"name": name}
        if parent_id is not None:
            data["parentId"] = parent_id
        return self._request(
            "POST",
            "/folders",
            retry=False,
            status_errors={
                400: DocsCreationError,
                409: DocsCreationError,
                422: DocsCreationError,
            },
            json=data,
        )

    def upload_file(
        self,
        file_path: Path,
        title: str,
        parent_id: str | None = None,
    ) -> Any:
        """Upload a file, letting the service convert it to a document.

        The request is never retried here; callers decide whether a failed
        upload is attempted again.

        Args:
            file_path: Local path to the file
            title: Title of the created document
            parent_id: Folder to upload into (None for the top level)

        Returns:
            Response with a 'document' key

        Raises:
            DocsInvalidEntryError: If the service rejects the content
        """
        if not file_path.exists():
            raise DocsFileNotFoundError(str(file_path))

        mime_type, _ = mimetypes.guess_type(str(file_path))
        data: dict[str, Any] = {"title": title}
        if parent_id is not None:
            data["parentId"] = parent_id

        with open(file_path, "rb") as fh:
            return self._request(
                "POST",
                "/documents",
                retry=False,
                status_errors={
                    400: DocsInvalidEntryError,
                    413: DocsInvalidEntryError,
                    415: DocsInvalidEntryError,
                    422: DocsInvalidEntryError,
                },
                data=data,
                files={
                    "file": (
                        file_path.name,
                        fh,
                        mime_type or "application/octet-stream",
                    )
                },
            )

    def trash_entries(self, entry_ids: list[str]) -> Any:
        """Move entries to the trash.

        Args:
            entry_ids: IDs of the entries to trash

        Returns:
            Response with 'status' key
        """
        return self._request(
            "POST", "/entries/trash", retry=False, json={"entryIds": entry_ids}
        )


def _parse_json(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    content_type = response.headers.get("Content-Type", "")
    if "application/json" not in content_type:
        if "text/html" in content_type:
            # Login pages come back as HTML when the token is not accepted
            raise DocsAuthenticationError(
                "Invalid token - server returned HTML instead of JSON"
            )
        raise DocsInvalidResponseError(f"Unexpected response type: {content_type}")
    try:
        return response.json()
    except ValueError as e:
        raise DocsInvalidResponseError("Invalid JSON response from server") from e


def _extract_error_message(response: httpx.Response) -> str | None:
    try:
        error_data = response.json()
    except ValueError:
        return None
    if isinstance(error_data, dict):
        msg = (
            error_data.get("message")
            or error_data.get("error")
            or error_data.get("detail")
        )
        if msg:
            return str(msg)
    return None
