"""Google Cloud Storage backend using the JSON API over httpx.

Whole objects are sent with a single media upload. Resumable uploads follow
the GCS resumable protocol:

- POST ...?uploadType=resumable opens a session; the session URL is
  returned in the Location header.
- Each chunk is a PUT to the session URL with
  ``Content-Range: bytes first-last/*``. The final chunk carries the total
  size instead of ``*``, which finalizes the object.
- ``Content-Range: bytes */*`` with an empty body queries the session.
  308 means the upload is still open and the Range header reports the
  persisted bytes; 200/201 means the object has been finalized.
"""

import re
import time
from typing import Optional

import httpx

from src.storage import StorageClient, StorageError

# GCS answers incomplete resumable requests with 308 "Resume Incomplete"
RESUME_INCOMPLETE = 308

RANGE_HEADER_RE = re.compile(r"^bytes=0-(\d+)$")


def parse_range_header(value: Optional[str]) -> int:
    """Convert a resumable-session Range header into a byte offset.

    Args:
        value: Header value such as ``bytes=0-1048575``, or None when the
               server has not persisted any bytes yet.

    Returns:
        The number of bytes the server has received.

    Raises:
        StorageError: If the header is present but malformed.
    """
    if not value:
        return 0
    match = RANGE_HEADER_RE.match(value.strip())
    if match is None:
        raise StorageError(f"Unexpected Range header: {value!r}")
    return int(match.group(1)) + 1


def content_range(offset: int, length: int, is_final: bool) -> str:
    """Build the Content-Range header for a chunk starting at offset."""
    total = str(offset + length) if is_final else "*"
    if length == 0:
        return f"bytes */{total}"
    return f"bytes {offset}-{offset + length - 1}/{total}"


class GcsClient(StorageClient):
    """StorageClient for the GCS JSON API."""

    def __init__(
        self,
        endpoint: str = "https://storage.googleapis.com",
        access_token: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the GCS client.

        Args:
            endpoint: Base URL of the storage service.
            access_token: OAuth2 bearer token, if the endpoint requires one.
            http_client: Pre-built httpx client (used by tests).
            timeout: Per-request timeout in seconds, None for no timeout.
        """
        self.endpoint = endpoint.rstrip("/")
        headers = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self.headers = headers
        self.http_client = http_client or httpx.Client(timeout=timeout)

    def _upload_url(self, bucket: str) -> str:
        return f"{self.endpoint}/upload/storage/v1/b/{bucket}/o"

    def upload_object(self, bucket: str, name: str, data: bytes) -> float:
        start = time.perf_counter()
        response = self.http_client.post(
            self._upload_url(bucket),
            params={"uploadType": "media", "name": name},
            headers={**self.headers, "Content-Type": "application/octet-stream"},
            content=data,
        )
        response.raise_for_status()
        return time.perf_counter() - start

    def new_upload_session(self, bucket: str, name: str) -> str:
        response = self.http_client.post(
            self._upload_url(bucket),
            params={"uploadType": "resumable", "name": name},
            headers={
                **self.headers,
                "X-Upload-Content-Type": "application/octet-stream",
            },
        )
        response.raise_for_status()

        session_url = response.headers.get("Location")
        if not session_url:
            raise StorageError("Resumable upload response has no Location header")
        return session_url

    def upload_object_part(
        self,
        session: str,
        offset: int,
        data: bytes,
        is_final: bool,
    ) -> float:
        start = time.perf_counter()
        response = self.http_client.put(
            session,
            headers={
                **self.headers,
                "Content-Range": content_range(offset, len(data), is_final),
            },
            content=data,
        )
        if response.status_code != RESUME_INCOMPLETE:
            response.raise_for_status()
        return time.perf_counter() - start

    def get_resume_offset(self, session: str) -> tuple[int, bool]:
        response = self.http_client.put(
            session,
            headers={**self.headers, "Content-Range": "bytes */*"},
        )
        if response.status_code == RESUME_INCOMPLETE:
            return parse_range_header(response.headers.get("Range")), False

        response.raise_for_status()
        try:
            size = int(response.json()["size"])
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Finalized upload response has no object size: {e}") from e
        return size, True

    def close(self) -> None:
        self.http_client.close()
