from typing import Literal

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from bucketlog.exceptions import MissingEnvironmentVariablesError
from bucketlog.logging import LogLevel, setup_logging
from bucketlog.storage import ObjectStorageInterface, StorageFactory


class Settings(BaseSettings):
    model_config = {"env_prefix": "BUCKETLOG_"}

    BUCKET_NAME: str
    """Bucket holding the log objects."""

    STORAGE_BACKEND: Literal["s3", "memory"] = "s3"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    AWS_REGION: str = "us-east-1"
    AWS_S3_ENDPOINT_URL: str | None = None
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None

    def __init__(self, **kwargs):
        try:
            super().__init__(**kwargs)
        except ValidationError as e:
            missing_keys = []
            prefix = self.model_config["env_prefix"]
            for error in e.errors():
                if error["type"] == "missing":
                    field_name = error["loc"][0]
                    missing_keys.append(f"{prefix}{field_name}")

            if missing_keys:
                raise MissingEnvironmentVariablesError(missing_keys) from e
            else:
                raise

    def configure_logging(self) -> None:
        """Set up logging at LOG_LEVEL, keeping the AWS SDK loggers at WARNING."""
        setup_logging(
            self.LOG_LEVEL,
            overrides={"boto3": LogLevel.WARNING, "botocore": LogLevel.WARNING, "urllib3": LogLevel.WARNING},
        )

    def create_storage(self) -> ObjectStorageInterface:
        if self.STORAGE_BACKEND == "memory":
            return StorageFactory.create_storage("memory")
        return StorageFactory.create_storage(
            "s3",
            bucket_name=self.BUCKET_NAME,
            endpoint_url=self.AWS_S3_ENDPOINT_URL,
            access_key_id=self.AWS_ACCESS_KEY_ID,
            secret_access_key=self.AWS_SECRET_ACCESS_KEY,
            region_name=self.AWS_REGION,
        )
