"""
AWS Lambda entry points for API Gateway proxy events.

`create_log_handler` and `get_log_handler` are meant to be wired as the handlers of two
functions sharing one bucket. Both build their storage from the environment on first use.
"""

import asyncio
import base64
import binascii
import json
from functools import lru_cache
from typing import Any

from bucketlog.exceptions import StorageError, ValidationError
from bucketlog.ingest import ingest_log
from bucketlog.logging import get_logger
from bucketlog.query import query_logs
from bucketlog.storage import ObjectStorageInterface
from bucketlog._interface.settings import Settings

logger = get_logger(__name__)


def _response(status_code: int, body: Any) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


@lru_cache(maxsize=1)
def _default_storage() -> ObjectStorageInterface:
    settings = Settings()
    settings.configure_logging()
    return settings.create_storage()


def _parse_body(event: dict) -> dict:
    body = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValidationError("request body must be base64-encoded UTF-8") from e
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise ValidationError("request body must be valid JSON") from e
    if not isinstance(payload, dict):
        raise ValidationError("request body must be a JSON object")
    return payload


async def handle_create_log(event: dict, storage: ObjectStorageInterface) -> dict:
    try:
        payload = _parse_body(event)
        key = await ingest_log(storage, payload.get("group"), payload.get("message"))
    except ValidationError as e:
        return _response(400, {"detail": str(e)})
    except StorageError as e:
        logger.error("request-failed", handler="create-log", exception=e)
        return _response(500, {"detail": str(e)})
    return _response(200, {"message": "log created", "key": key})


async def handle_get_log(event: dict, storage: ObjectStorageInterface) -> dict:
    group = (event.get("pathParameters") or {}).get("group")
    params = event.get("queryStringParameters") or {}
    try:
        lines = await query_logs(
            storage,
            group,
            params.get("date"),
            params.get("from"),
            params.get("to"),
            params.get("filters"),
        )
    except ValidationError as e:
        return _response(400, {"detail": str(e)})
    except StorageError as e:
        logger.error("request-failed", handler="get-log", exception=e)
        return _response(500, {"detail": str(e)})
    return _response(200, lines)


def create_log_handler(event: dict, context: Any = None) -> dict:
    return asyncio.run(handle_create_log(event, _default_storage()))


def get_log_handler(event: dict, context: Any = None) -> dict:
    return asyncio.run(handle_get_log(event, _default_storage()))
