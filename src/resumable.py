"""Resumable upload session driver.

Handles one resumable session per sweep size:
- Open the session
- Upload the same buffer as successive chunks, tracking the local offset
- After every chunk, check the server-reported offset and final flag
  against the local state before the next chunk is sent

A mismatch raises ConsistencyError and ends the benchmark. Sessions are
never closed explicitly: uploading the final chunk finalizes the object.
"""

from typing import Any, Optional

from src.models import BenchmarkConfig
from src.storage import StorageClient


class ConsistencyError(Exception):
    """Raised when a session's server state disagrees with the local state."""

    def __init__(self, field: str, got: Any, want: Any):
        if field == "offset":
            message = f"unexpected offset: got {got}, want {want}"
        else:
            message = f"unexpected final chunk flag: got {got}, want {want}"
        super().__init__(message)
        self.field = field
        self.got = got
        self.want = want


def session_object_name(units: int) -> str:
    """Object name for the resumable upload of one sweep size."""
    return f"x-{units}"


class ResumableUpload:
    """Drives a single resumable upload session.

    Tracks the local offset and verifies it against the server after each
    chunk. State only moves forward: opened, then any number of verified
    chunks, then done once the final chunk is verified.
    """

    def __init__(self, client: StorageClient, bucket: str, name: str):
        """Initialize the session driver.

        Args:
            client: Storage backend
            bucket: Destination bucket
            name: Destination object name
        """
        self.client = client
        self.bucket = bucket
        self.name = name
        self.session: Optional[Any] = None
        self.offset = 0
        self.done = False

    def open(self) -> Any:
        """Open the upload session.

        Returns:
            The backend's session handle.
        """
        self.session = self.client.new_upload_session(self.bucket, self.name)
        return self.session

    def upload_chunk(self, data: bytes, is_final: bool) -> float:
        """Upload one chunk at the current offset and verify the result.

        Args:
            data: Chunk contents.
            is_final: Whether this chunk finalizes the object.

        Returns:
            Elapsed seconds reported by the backend for the chunk upload.

        Raises:
            RuntimeError: If the session is not open or already finalized.
            ConsistencyError: If the server disagrees with the local state.
        """
        if self.session is None:
            raise RuntimeError("Upload session not opened")
        if self.done:
            raise RuntimeError("Upload session already finalized")

        duration = self.client.upload_object_part(self.session, self.offset, data, is_final)
        self.offset += len(data)
        self.verify(is_final)
        self.done = is_final
        return duration

    def verify(self, want_final: bool) -> None:
        """Check the server-reported resume state against the local state.

        Raises:
            ConsistencyError: On an offset or final flag mismatch.
        """
        got_offset, got_final = self.client.get_resume_offset(self.session)
        if got_offset != self.offset:
            raise ConsistencyError("offset", got_offset, self.offset)
        if got_final != want_final:
            raise ConsistencyError("final", got_final, want_final)


def run_resumable(
    client: StorageClient,
    config: BenchmarkConfig,
    size: int,
    payload: bytes,
) -> list[float]:
    """Upload `config.runs` chunks of payload through one resumable session.

    Args:
        client: Storage backend
        config: Benchmark configuration
        size: Sweep size the payload was generated for
        payload: Chunk contents, reused for every run

    Returns:
        Per-chunk durations in seconds, in upload order.
    """
    upload = ResumableUpload(
        client,
        config.bucket,
        session_object_name(config.units(size)),
    )
    upload.open()

    durations = []
    for i in range(config.runs):
        durations.append(upload.upload_chunk(payload, is_final=i == config.runs - 1))
    return durations
