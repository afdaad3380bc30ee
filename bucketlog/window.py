import re
from datetime import date, datetime, time, timezone

from pydantic import BaseModel

from bucketlog.exceptions import ValidationError

__all__ = ("TimeWindow", "resolve_window")

_DATE_PATTERN = re.compile(r"^\d{8}$")
_TIME_PATTERN = re.compile(r"^\d{4}$")

_START_OF_DAY = time(0, 0)
_END_OF_DAY = time(23, 59)


class TimeWindow(BaseModel):
    """Closed [start, end] interval at minute granularity, anchored to one UTC date."""

    start: datetime
    end: datetime

    @property
    def day(self) -> date:
        return self.start.date()

    def at(self, hour: int, minute: int) -> datetime:
        """Timestamp on the window's date at the given hour and minute."""
        return self.start.replace(hour=hour, minute=minute)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def _parse_date(value: str) -> date:
    if not _DATE_PATTERN.match(value):
        raise ValidationError(f"invalid date {value!r}, expected YYYYMMDD")
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError as e:
        raise ValidationError(f"invalid date {value!r}, expected YYYYMMDD") from e


def _parse_time(value: str, name: str) -> time:
    if not _TIME_PATTERN.match(value):
        raise ValidationError(f"invalid {name} time {value!r}, expected HHmm")
    try:
        return datetime.strptime(value, "%H%M").time()
    except ValueError as e:
        raise ValidationError(f"invalid {name} time {value!r}, expected HHmm") from e


def resolve_window(group: str | None, day: str | None, start: str | None = None, end: str | None = None) -> TimeWindow:
    """
    Turn raw query input into a validated time window.

    Args:
        group: Log group; only checked for presence.
        day: Calendar date as ``YYYYMMDD``.
        start: Optional ``HHmm`` lower bound, defaults to 00:00.
        end: Optional ``HHmm`` upper bound, defaults to 23:59.

    Raises:
        ValidationError: On missing group/date, unparsable values or an inverted range.
    """
    if not isinstance(group, str) or not isinstance(day, str) or not group or not day:
        raise ValidationError("group and date are required")

    anchor = _parse_date(day)
    start_time = _parse_time(start, "from") if start else _START_OF_DAY
    end_time = _parse_time(end, "to") if end else _END_OF_DAY

    window = TimeWindow(
        start=datetime.combine(anchor, start_time, tzinfo=timezone.utc),
        end=datetime.combine(anchor, end_time, tzinfo=timezone.utc),
    )
    if window.start > window.end:
        raise ValidationError("from time must be before or equal to to time")
    return window
