class BucketLogError(Exception):
    """Base class for every error raised by bucketlog."""


class ValidationError(BucketLogError):
    """Raised when request input is missing or malformed."""


class StorageError(BucketLogError):
    """Raised when the backing object store fails, including not-found on read."""


class MissingEnvironmentVariablesError(BucketLogError):
    def __init__(self, missing_keys: list[str]):
        self.missing_keys = missing_keys
        super().__init__(f'Missing required environment variables: {", ".join(missing_keys)}')
