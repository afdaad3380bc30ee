from .factory import StorageFactory
from .interface import ObjectStorageInterface
from .memory import InMemoryObjectStorage
from .s3 import S3ObjectStorage

__all__ = [
    "ObjectStorageInterface",
    "InMemoryObjectStorage",
    "S3ObjectStorage",
    "StorageFactory",
]
