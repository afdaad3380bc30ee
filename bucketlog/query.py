from bucketlog.selector import select_objects
from bucketlog.storage import ObjectStorageInterface
from bucketlog.streamer import MAX_LINES, check_limit, parse_filters, stream_lines
from bucketlog.window import resolve_window

__all__ = ("query_logs",)


async def query_logs(
    storage: ObjectStorageInterface,
    group: str | None,
    date: str | None,
    start: str | None = None,
    end: str | None = None,
    filters: str | None = None,
    limit: int = MAX_LINES,
) -> list[str]:
    """
    Return the lines of `group` logged on `date` between `start` and `end`, oldest first.

    Args:
        storage: Object store to read from.
        group: Log group.
        date: Day to search, as ``YYYYMMDD``.
        start: Optional ``HHmm`` lower bound (inclusive).
        end: Optional ``HHmm`` upper bound (inclusive).
        filters: Optional comma-separated substrings a line must all contain.
        limit: Maximum number of lines to return.
    """
    window = resolve_window(group, date, start, end)
    check_limit(limit)
    filter_set = parse_filters(filters)

    keys = await select_objects(storage, group, window)
    return await stream_lines(storage, keys, filter_set, limit=limit)
