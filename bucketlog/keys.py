"""
Storage key layout shared by the write and read paths.

Every log object lives at ``{group}/{YYYY}/{MM}/{DD}/logs_{HH}_{mm}.log``.
Zero padded components make lexical key order equal chronological order.
"""

import re
from datetime import date, datetime

__all__ = ("FILE_PREFIX", "FILE_SUFFIX", "bucket_key", "day_prefix", "parse_bucket_time")

FILE_PREFIX = "logs_"
FILE_SUFFIX = ".log"

_DAY_FORMAT = "%Y/%m/%d"
_TIME_FORMAT = "%H_%M"

_BUCKET_PATTERN = re.compile(rf"{re.escape(FILE_PREFIX)}(\d\d)_(\d\d){re.escape(FILE_SUFFIX)}$")


def day_prefix(group: str, day: date) -> str:
    """Key prefix shared by every minute object of `group` on `day`."""
    return f"{group}/{day.strftime(_DAY_FORMAT)}/{FILE_PREFIX}"


def bucket_key(group: str, moment: datetime) -> str:
    """Key of the minute object `moment` falls into."""
    return f"{day_prefix(group, moment.date())}{moment.strftime(_TIME_FORMAT)}{FILE_SUFFIX}"


def parse_bucket_time(key: str) -> tuple[int, int] | None:
    """
    Extract the (hour, minute) a key was bucketed under.

    Returns None for keys that don't follow the layout or carry an impossible time.
    """
    match = _BUCKET_PATTERN.search(key)
    if match is None:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute
