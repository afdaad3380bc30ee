import asyncio
from functools import partial

from botocore.exceptions import BotoCoreError, ClientError

from bucketlog.exceptions import StorageError
from bucketlog.logging import get_logger

from .interface import ObjectStorageInterface


class S3ObjectStorage(ObjectStorageInterface):
    """S3-compatible object storage backed by a boto3 client."""

    def __init__(self, s3_client, bucket_name: str, logger=None):
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.logger = logger or get_logger(__name__)

    async def _run(self, func, /, **kwargs):
        """Run a blocking boto3 call in the default executor."""
        return await asyncio.get_event_loop().run_in_executor(None, partial(func, **kwargs))

    async def ensure_bucket_exists(self) -> bool:
        try:
            await self._run(self.s3_client.head_bucket, Bucket=self.bucket_name)
            self.logger.info("bucket-exists", bucket=self.bucket_name)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] != "404":
                self.logger.error("bucket-check-failed", bucket=self.bucket_name, exception=e)
                return False

        try:
            await self._run(self.s3_client.create_bucket, Bucket=self.bucket_name)
        except ClientError as e:
            self.logger.error("bucket-create-failed", bucket=self.bucket_name, exception=e)
            return False

        self.logger.info("bucket-created", bucket=self.bucket_name)
        return True

    async def list_keys(self, prefix: str) -> list[str]:
        def _list() -> list[str]:
            paginator = self.s3_client.get_paginator("list_objects_v2")
            keys = []
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
            return keys

        try:
            return await asyncio.get_event_loop().run_in_executor(None, _list)
        except (ClientError, BotoCoreError) as e:
            self.logger.error("storage-error", operation="list", prefix=prefix, exception=e)
            raise StorageError(str(e)) from e

    async def _read_text(self, key: str) -> str:
        """Fetch an object and decode it as UTF-8. The body is read in the executor too."""

        def _read() -> bytes:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
            return response["Body"].read()

        data = await asyncio.get_event_loop().run_in_executor(None, _read)
        return data.decode("utf-8")

    async def get_text(self, key: str) -> str:
        try:
            return await self._read_text(key)
        except (ClientError, BotoCoreError, UnicodeDecodeError) as e:
            self.logger.error("storage-error", operation="get", key=key, exception=e)
            raise StorageError(str(e)) from e

    async def append_text(self, key: str, data: str, content_type: str = "text/plain") -> None:
        try:
            # Get existing content first, a missing object starts empty
            existing_content = ""
            try:
                existing_content = await self._read_text(key)
            except ClientError as e:
                if e.response["Error"]["Code"] not in ("NoSuchKey", "404"):
                    raise

            await self._run(
                self.s3_client.put_object,
                Bucket=self.bucket_name,
                Key=key,
                Body=(existing_content + data).encode("utf-8"),
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError, UnicodeDecodeError) as e:
            self.logger.error("storage-error", operation="append", key=key, exception=e)
            raise StorageError(str(e)) from e
