from collections.abc import Iterable

from bucketlog.exceptions import ValidationError
from bucketlog.logging import get_logger
from bucketlog.storage import ObjectStorageInterface

__all__ = ("MAX_LINES", "FilterSet", "check_limit", "parse_filters", "stream_lines")

MAX_LINES = 1000

logger = get_logger(__name__)


class FilterSet:
    """Conjunction of substring predicates. An empty set matches every line."""

    def __init__(self, substrings: Iterable[str] = ()):
        self.substrings = tuple(s for s in substrings if s)

    def __bool__(self) -> bool:
        return bool(self.substrings)

    def __repr__(self) -> str:
        return f"FilterSet({list(self.substrings)!r})"

    def matches(self, line: str) -> bool:
        return all(substring in line for substring in self.substrings)


def check_limit(limit: int) -> None:
    if limit < 1:
        raise ValidationError(f"limit must be at least 1, got {limit}")


def parse_filters(raw: str | None) -> FilterSet:
    """Build a FilterSet from a comma-separated list of substrings."""
    return FilterSet(raw.split(",") if raw else ())


async def stream_lines(
    storage: ObjectStorageInterface,
    keys: Iterable[str],
    filters: FilterSet | None = None,
    limit: int = MAX_LINES,
) -> list[str]:
    """
    Collect matching lines from `keys`, in order, up to `limit` lines.

    Objects are fetched one at a time; once the buffer is full no further object is
    fetched. A failed fetch raises StorageError and nothing is returned.
    """
    check_limit(limit)

    filters = filters or FilterSet()
    lines: list[str] = []

    for key in keys:
        content = await storage.get_text(key)
        for line in content.split("\n"):
            if line and filters.matches(line):
                lines.append(line)
                if len(lines) >= limit:
                    break

        if len(lines) >= limit:
            logger.info("result-cap-reached", key=key, limit=limit)
            break

    return lines
