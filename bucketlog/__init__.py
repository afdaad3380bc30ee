"""Append-only, minute-bucketed log store on top of S3-compatible object storage."""

from bucketlog.exceptions import BucketLogError, StorageError, ValidationError
from bucketlog.ingest import ingest_log
from bucketlog.query import query_logs
from bucketlog.selector import select_objects
from bucketlog.streamer import MAX_LINES, FilterSet, parse_filters, stream_lines
from bucketlog.window import TimeWindow, resolve_window

__all__ = (
    "BucketLogError",
    "FilterSet",
    "MAX_LINES",
    "StorageError",
    "TimeWindow",
    "ValidationError",
    "ingest_log",
    "parse_filters",
    "query_logs",
    "resolve_window",
    "select_objects",
    "stream_lines",
)
