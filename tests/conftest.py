"""Shared fixtures: an in-memory storage backend that records every call."""

from typing import Callable, Optional

import pytest

from src.models import BenchmarkConfig
from src.storage import StorageClient


class FakeStorage(StorageClient):
    """In-memory StorageClient that simulates resumable sessions.

    Every call is appended to ``calls`` as (operation, args). Failures can be
    injected by call count, and the offset query can be tampered with.
    """

    def __init__(
        self,
        duration: float = 0.5,
        fail_upload_at: Optional[int] = None,
        fail_part_at: Optional[int] = None,
        tamper_offset: Optional[Callable[[int, bool], tuple[int, bool]]] = None,
    ):
        self.duration = duration
        self.fail_upload_at = fail_upload_at
        self.fail_part_at = fail_part_at
        self.tamper_offset = tamper_offset
        self.calls: list[tuple[str, tuple]] = []
        self.objects: dict[tuple[str, str], int] = {}
        self.sessions: dict[str, dict] = {}
        self.closed = False

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)

    def upload_object(self, bucket, name, data):
        self.calls.append(("upload_object", (bucket, name, len(data))))
        if self.fail_upload_at is not None and self.count("upload_object") - 1 == self.fail_upload_at:
            raise IOError("upload failed")
        self.objects[(bucket, name)] = len(data)
        return self.duration

    def new_upload_session(self, bucket, name):
        self.calls.append(("new_upload_session", (bucket, name)))
        handle = f"session-{len(self.sessions)}"
        self.sessions[handle] = {"bucket": bucket, "name": name, "offset": 0, "final": False}
        return handle

    def upload_object_part(self, session, offset, data, is_final):
        self.calls.append(("upload_object_part", (session, offset, len(data), is_final)))
        if self.fail_part_at is not None and self.count("upload_object_part") - 1 == self.fail_part_at:
            raise IOError("chunk upload failed")
        state = self.sessions[session]
        state["offset"] = offset + len(data)
        state["final"] = is_final
        return self.duration

    def get_resume_offset(self, session):
        self.calls.append(("get_resume_offset", (session,)))
        state = self.sessions[session]
        result = (state["offset"], state["final"])
        if self.tamper_offset is not None:
            result = self.tamper_offset(*result)
        return result

    def close(self):
        self.closed = True


@pytest.fixture
def fake_storage():
    """Create a well-behaved in-memory storage backend."""
    return FakeStorage()


@pytest.fixture
def small_config():
    """Create a small sweep: 1, 2 and 4 KiB with 4 runs each."""
    return BenchmarkConfig(bucket="test-bucket", runs=4, min_size=1024, max_size=4096)
