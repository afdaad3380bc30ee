from bucketlog.keys import day_prefix, parse_bucket_time
from bucketlog.logging import get_logger
from bucketlog.storage import ObjectStorageInterface
from bucketlog.window import TimeWindow

__all__ = ("select_objects",)

logger = get_logger(__name__)


async def select_objects(storage: ObjectStorageInterface, group: str, window: TimeWindow) -> list[str]:
    """
    List the minute objects of `group` whose bucket falls inside `window`.

    Keys that don't follow the minute-object layout are skipped. The result is sorted
    ascending by key, which is chronological order.
    """
    prefix = day_prefix(group, window.day)
    candidates = await storage.list_keys(prefix)

    selected = []
    for key in candidates:
        bucket_time = parse_bucket_time(key)
        if bucket_time is None:
            continue
        if window.contains(window.at(*bucket_time)):
            selected.append(key)

    selected.sort()
    logger.debug("objects-selected", prefix=prefix, candidates=len(candidates), selected=len(selected))
    return selected
