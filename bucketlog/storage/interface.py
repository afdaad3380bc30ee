from abc import ABC, abstractmethod


class ObjectStorageInterface(ABC):
    """Abstract interface for the object store holding log objects."""

    @abstractmethod
    async def ensure_bucket_exists(self) -> bool:
        """Ensure the log bucket exists, create if necessary."""
        pass

    @abstractmethod
    async def list_keys(self, prefix: str) -> list[str]:
        """List every key starting with `prefix`."""
        pass

    @abstractmethod
    async def get_text(self, key: str) -> str:
        """Get the full text content of an object. Raises StorageError when it's missing."""
        pass

    @abstractmethod
    async def append_text(self, key: str, data: str, content_type: str = "text/plain") -> None:
        """Append `data` to an object, creating it if absent."""
        pass
