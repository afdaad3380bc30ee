from fastapi import APIRouter, Query
from pydantic import BaseModel

from bucketlog.ingest import ingest_log
from bucketlog.query import query_logs
from bucketlog._interface.api.dependencies import StorageDependency

router = APIRouter(prefix="/logs", tags=["logs"])


class LogCreate(BaseModel):
    group: str | None = None
    message: str | None = None


class LogCreateResponse(BaseModel):
    message: str
    key: str


@router.post("", response_model=LogCreateResponse)
async def create_log(log: LogCreate, storage: StorageDependency):
    """Append one line to the current minute object of a group."""
    key = await ingest_log(storage, log.group, log.message)
    return LogCreateResponse(message="log created", key=key)


@router.get("/{group}", response_model=list[str])
async def get_logs(
    group: str,
    storage: StorageDependency,
    date: str | None = Query(None, description="Day to search, as YYYYMMDD"),
    from_: str | None = Query(None, alias="from", description="Start time (inclusive), as HHmm"),
    to: str | None = Query(None, description="End time (inclusive), as HHmm"),
    filters: str | None = Query(None, description="Comma-separated substrings every line must contain"),
):
    """Get the lines of a group for one day, oldest first, at most 1000."""
    return await query_logs(storage, group, date, from_, to, filters)
