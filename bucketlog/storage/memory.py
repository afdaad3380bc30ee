import asyncio

from bucketlog.exceptions import StorageError

from .interface import ObjectStorageInterface


class InMemoryObjectStorage(ObjectStorageInterface):
    """In-memory object store, used for local runs and tests."""

    def __init__(self, objects: dict[str, str] | None = None):
        self._objects: dict[str, str] = dict(objects or {})
        self._content_types: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def ensure_bucket_exists(self) -> bool:
        return True

    async def list_keys(self, prefix: str) -> list[str]:
        async with self._lock:
            return [key for key in self._objects if key.startswith(prefix)]

    async def get_text(self, key: str) -> str:
        async with self._lock:
            try:
                return self._objects[key]
            except KeyError:
                raise StorageError(f"The specified key does not exist: {key}") from None

    async def append_text(self, key: str, data: str, content_type: str = "text/plain") -> None:
        async with self._lock:
            self._objects[key] = self._objects.get(key, "") + data
            self._content_types[key] = content_type

    def content_type(self, key: str) -> str | None:
        return self._content_types.get(key)
