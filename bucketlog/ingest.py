from datetime import datetime, timezone

from bucketlog.exceptions import ValidationError
from bucketlog.keys import bucket_key
from bucketlog.logging import get_logger
from bucketlog.storage import ObjectStorageInterface

__all__ = ("ingest_log",)

logger = get_logger(__name__)


async def ingest_log(
    storage: ObjectStorageInterface,
    group: str | None,
    message: str | None,
    now: datetime | None = None,
) -> str:
    """
    Append `message` as one line to the current minute object of `group`.

    Args:
        storage: Object store to write to.
        group: Log group.
        message: Line to append, without the trailing newline.
        now: Instant to bucket under. Defaults to the current UTC time.

    Returns:
        str: Key of the object written to.
    """
    if not isinstance(group, str) or not isinstance(message, str) or not group or not message:
        raise ValidationError("group and message are required")

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    key = bucket_key(group, now)
    await storage.append_text(key, message + "\n", content_type="text/plain")
    logger.debug("log-appended", key=key)
    return key
