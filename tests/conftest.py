"""Shared test fixtures and configuration."""

from datetime import datetime, timezone

import pytest

from bucketlog.storage import InMemoryObjectStorage


class RecordingStorage(InMemoryObjectStorage):
    """In-memory storage that remembers every key it was asked to fetch."""

    def __init__(self, objects=None):
        super().__init__(objects)
        self.fetched: list[str] = []

    async def get_text(self, key: str) -> str:
        self.fetched.append(key)
        return await super().get_text(key)


@pytest.fixture
def storage():
    """Empty in-memory object store."""
    return RecordingStorage()


@pytest.fixture
def populated_storage():
    """Object store holding a day of `svc` logs, inserted out of chronological order."""
    return RecordingStorage(
        {
            "svc/2024/03/01/logs_10_30.log": "late request\n",
            "svc/2024/03/01/logs_10_15.log": "hello\nworld\n",
            "svc/2024/03/01/logs_00_00.log": "midnight\n",
            "svc/2024/03/01/logs_23_59.log": "last call\n",
            "svc/2024/03/01/logs_10_16.log": "hello again\n",
            "svc/2024/03/01/logs_notes.txt": "not a log object\n",
            "svc/2024/03/02/logs_10_15.log": "next day\n",
            "other/2024/03/01/logs_10_15.log": "other group\n",
        }
    )


@pytest.fixture
def fixed_now():
    """The instant 2024-03-01T10:15:00Z."""
    return datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc)


@pytest.fixture
def make_storage():
    """Factory building a recording in-memory store from a key to content mapping."""
    return RecordingStorage
