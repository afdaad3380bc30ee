"""Tests for the object storage backends."""

import io
import threading
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from bucketlog.exceptions import StorageError
from bucketlog.storage import InMemoryObjectStorage, S3ObjectStorage, StorageFactory


def client_error(code: str, operation: str, message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def s3_client():
    """Mock boto3 S3 client to avoid AWS calls."""
    return Mock()


@pytest.fixture
def s3_storage(s3_client):
    return S3ObjectStorage(s3_client, "log-bucket")


class TestInMemoryObjectStorage:
    """Test the in-memory backend."""

    @pytest.mark.asyncio
    async def test_append_creates_then_concatenates(self):
        """Test appends build up content in order."""
        storage = InMemoryObjectStorage()
        await storage.append_text("k", "a\n")
        await storage.append_text("k", "b\n")
        assert await storage.get_text("k") == "a\nb\n"

    @pytest.mark.asyncio
    async def test_list_by_prefix(self):
        """Test listing only returns keys under the prefix."""
        storage = InMemoryObjectStorage({"a/1": "", "a/2": "", "b/1": ""})
        assert sorted(await storage.list_keys("a/")) == ["a/1", "a/2"]

    @pytest.mark.asyncio
    async def test_missing_key(self):
        """Test reading an absent key raises StorageError."""
        with pytest.raises(StorageError, match="does not exist"):
            await InMemoryObjectStorage().get_text("missing")


class TestS3ObjectStorageRead:
    """Test listing and reading through boto3."""

    @pytest.mark.asyncio
    async def test_list_keys_follows_pages(self, s3_storage, s3_client):
        """Test every page of list_objects_v2 is consumed."""
        paginator = s3_client.get_paginator.return_value
        paginator.paginate.return_value = [
            {"Contents": [{"Key": "svc/2024/03/01/logs_00_00.log"}, {"Key": "svc/2024/03/01/logs_00_01.log"}]},
            {"Contents": [{"Key": "svc/2024/03/01/logs_00_02.log"}]},
            {},
        ]

        keys = await s3_storage.list_keys("svc/2024/03/01/logs_")

        s3_client.get_paginator.assert_called_once_with("list_objects_v2")
        paginator.paginate.assert_called_once_with(Bucket="log-bucket", Prefix="svc/2024/03/01/logs_")
        assert keys == [
            "svc/2024/03/01/logs_00_00.log",
            "svc/2024/03/01/logs_00_01.log",
            "svc/2024/03/01/logs_00_02.log",
        ]

    @pytest.mark.asyncio
    async def test_list_keys_error(self, s3_storage, s3_client):
        """Test listing failures become StorageError with the boto message."""
        s3_client.get_paginator.return_value.paginate.side_effect = client_error(
            "AccessDenied", "ListObjectsV2", "Access Denied"
        )
        with pytest.raises(StorageError, match="Access Denied"):
            await s3_storage.list_keys("svc/")

    @pytest.mark.asyncio
    async def test_get_text(self, s3_storage, s3_client):
        """Test object bodies are decoded as UTF-8."""
        s3_client.get_object.return_value = {"Body": io.BytesIO("héllo\n".encode())}
        assert await s3_storage.get_text("k") == "héllo\n"
        s3_client.get_object.assert_called_once_with(Bucket="log-bucket", Key="k")

    @pytest.mark.asyncio
    async def test_get_text_missing_key(self, s3_storage, s3_client):
        """Test a missing object is a StorageError, not an empty string."""
        s3_client.get_object.side_effect = client_error("NoSuchKey", "GetObject", "The specified key does not exist.")
        with pytest.raises(StorageError, match="NoSuchKey"):
            await s3_storage.get_text("k")

    @pytest.mark.asyncio
    async def test_get_text_not_utf8(self, s3_storage, s3_client):
        """Test an undecodable object is a StorageError, not a bare UnicodeDecodeError."""
        s3_client.get_object.return_value = {"Body": io.BytesIO(b"\xff\xfe")}
        with pytest.raises(StorageError, match="utf-8"):
            await s3_storage.get_text("k")

    @pytest.mark.asyncio
    async def test_body_read_off_event_loop(self, s3_storage, s3_client):
        """Test the streaming body is read in the executor, not on the loop thread."""
        loop_thread = threading.current_thread()
        read_threads = []
        body = Mock()
        body.read.side_effect = lambda: read_threads.append(threading.current_thread()) or b"line\n"
        s3_client.get_object.return_value = {"Body": body}

        assert await s3_storage.get_text("k") == "line\n"
        assert read_threads and read_threads[0] is not loop_thread

    @pytest.mark.asyncio
    async def test_connection_error(self, s3_storage, s3_client):
        """Test botocore transport errors are wrapped too."""
        s3_client.get_object.side_effect = EndpointConnectionError(endpoint_url="http://localhost:9000")
        with pytest.raises(StorageError, match="localhost:9000"):
            await s3_storage.get_text("k")


class TestS3ObjectStorageAppend:
    """Test read-concatenate-put appends."""

    @pytest.mark.asyncio
    async def test_append_to_existing(self, s3_storage, s3_client):
        """Test new data is written after the existing content."""
        s3_client.get_object.return_value = {"Body": io.BytesIO(b"first\n")}

        await s3_storage.append_text("k", "second\n")

        s3_client.put_object.assert_called_once_with(
            Bucket="log-bucket", Key="k", Body=b"first\nsecond\n", ContentType="text/plain"
        )

    @pytest.mark.asyncio
    async def test_append_creates_missing(self, s3_storage, s3_client):
        """Test a missing object is created with just the new data."""
        s3_client.get_object.side_effect = client_error("NoSuchKey", "GetObject")

        await s3_storage.append_text("k", "first\n")

        s3_client.put_object.assert_called_once_with(
            Bucket="log-bucket", Key="k", Body=b"first\n", ContentType="text/plain"
        )

    @pytest.mark.asyncio
    async def test_append_read_error_does_not_overwrite(self, s3_storage, s3_client):
        """Test any read error other than not-found aborts before writing."""
        s3_client.get_object.side_effect = client_error("AccessDenied", "GetObject", "Access Denied")

        with pytest.raises(StorageError, match="Access Denied"):
            await s3_storage.append_text("k", "first\n")
        s3_client.put_object.assert_not_called()

    @pytest.mark.asyncio
    async def test_append_to_non_utf8_object(self, s3_storage, s3_client):
        """Test an undecodable existing object aborts the append with StorageError."""
        s3_client.get_object.return_value = {"Body": io.BytesIO(b"\xff\xfe")}

        with pytest.raises(StorageError, match="utf-8"):
            await s3_storage.append_text("k", "first\n")
        s3_client.put_object.assert_not_called()

    @pytest.mark.asyncio
    async def test_append_put_error(self, s3_storage, s3_client):
        """Test a failed put surfaces as StorageError."""
        s3_client.get_object.side_effect = client_error("NoSuchKey", "GetObject")
        s3_client.put_object.side_effect = client_error("InternalError", "PutObject", "We encountered an internal error")

        with pytest.raises(StorageError, match="internal error"):
            await s3_storage.append_text("k", "first\n")


class TestS3ObjectStorageBucket:
    """Test the startup bucket probe."""

    @pytest.mark.asyncio
    async def test_existing_bucket(self, s3_storage, s3_client):
        assert await s3_storage.ensure_bucket_exists() is True
        s3_client.create_bucket.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_bucket_is_created(self, s3_storage, s3_client):
        s3_client.head_bucket.side_effect = client_error("404", "HeadBucket")
        assert await s3_storage.ensure_bucket_exists() is True
        s3_client.create_bucket.assert_called_once_with(Bucket="log-bucket")

    @pytest.mark.asyncio
    async def test_forbidden_bucket(self, s3_storage, s3_client):
        s3_client.head_bucket.side_effect = client_error("403", "HeadBucket")
        assert await s3_storage.ensure_bucket_exists() is False
        s3_client.create_bucket.assert_not_called()


class TestStorageFactory:
    """Test backend construction."""

    def test_memory(self):
        assert isinstance(StorageFactory.create_storage("memory"), InMemoryObjectStorage)

    def test_s3(self, mocker):
        """Test the S3 backend is built from a boto3 session."""
        session = mocker.patch("bucketlog.storage.factory.boto3.Session")

        storage = StorageFactory.create_storage(
            "s3", bucket_name="log-bucket", endpoint_url="http://localhost:9000", region_name="eu-west-1"
        )

        assert isinstance(storage, S3ObjectStorage)
        assert storage.bucket_name == "log-bucket"
        assert storage.s3_client is session.return_value.client.return_value
        session.assert_called_once_with(aws_access_key_id=None, aws_secret_access_key=None, region_name="eu-west-1")

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend type"):
            StorageFactory.create_storage("gcs")
