import boto3
from botocore.client import Config

from .interface import ObjectStorageInterface
from .memory import InMemoryObjectStorage
from .s3 import S3ObjectStorage


class StorageFactory:
    """Factory for creating object storage instances."""

    @staticmethod
    def create_s3_storage(
        bucket_name: str,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        region_name: str = "us-east-1",
    ) -> ObjectStorageInterface:
        """Create S3-compatible object storage instance."""
        session = boto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region_name,
        )
        s3_client = session.client("s3", endpoint_url=endpoint_url, config=Config(signature_version="s3v4"))
        return S3ObjectStorage(s3_client, bucket_name)

    @staticmethod
    def create_storage(backend_type: str, **kwargs) -> ObjectStorageInterface:
        """Create object storage instance based on backend type."""
        if backend_type == "s3":
            return StorageFactory.create_s3_storage(**kwargs)
        elif backend_type == "memory":
            return InMemoryObjectStorage()
        else:
            raise ValueError(f"Unknown backend type: {backend_type}")
