"""Storage capability interface used by the benchmark drivers.

A backend exposes four operations: whole-object upload, resumable session
creation, chunk upload into a session, and a query of the session's
server-side resume offset. Upload operations time themselves and return
the elapsed seconds.

Failures reported by the remote service are raised as the underlying
client library's exceptions and are never retried.
"""

from abc import ABC, abstractmethod
from typing import Any


class StorageError(Exception):
    """Raised when a backend answers in a way its protocol does not allow."""

    pass


class StorageClient(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod
    def upload_object(self, bucket: str, name: str, data: bytes) -> float:
        """Upload a whole object and return the elapsed seconds."""
        pass

    @abstractmethod
    def new_upload_session(self, bucket: str, name: str) -> Any:
        """Open a resumable upload session and return its handle."""
        pass

    @abstractmethod
    def upload_object_part(
        self,
        session: Any,
        offset: int,
        data: bytes,
        is_final: bool,
    ) -> float:
        """Upload one chunk starting at offset and return the elapsed seconds."""
        pass

    @abstractmethod
    def get_resume_offset(self, session: Any) -> tuple[int, bool]:
        """Return the server-reported (offset, is_final) of a session."""
        pass

    def close(self) -> None:
        """Release any connections held by the backend."""
        pass

    def __enter__(self) -> "StorageClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
