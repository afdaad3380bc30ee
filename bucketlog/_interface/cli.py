import asyncio
from typing import Annotated

from cyclopts import App, Parameter, validators

from bucketlog.ingest import ingest_log
from bucketlog.query import query_logs
from bucketlog._interface.settings import Settings

app = App(name="bucketlog", help="Append-only minute-bucketed log store on object storage")


@app.command
def serve(
    *,
    host: Annotated[str, Parameter(name="--host")] = "0.0.0.0",  # noqa: S104
    port: Annotated[int, Parameter(name=("-p", "--port"), validator=validators.Number(gt=1024, lt=65535))] = 8080,
):
    """
    Serve the API

    Args:
        host: Host to serve on
        port: Port to serve on
    """
    import uvicorn

    uvicorn.run("bucketlog._interface.api.main:create_app", host=host, port=port, factory=True)


@app.command
def ingest(
    *,
    group: Annotated[str, Parameter(name=("-g", "--group"))],
    message: Annotated[str, Parameter(name=("-m", "--message"))],
):
    """
    Append one line to a group

    Args:
        group: Log group
        message: Line to append
    """
    settings = Settings()
    settings.configure_logging()

    key = asyncio.run(ingest_log(settings.create_storage(), group, message))
    print(key)


@app.command
def query(
    *,
    group: Annotated[str, Parameter(name=("-g", "--group"))],
    date: Annotated[str, Parameter(name=("-d", "--date"))],
    start: Annotated[str | None, Parameter(name=("-f", "--from"))] = None,
    end: Annotated[str | None, Parameter(name=("-t", "--to"))] = None,
    filters: Annotated[str | None, Parameter(name="--filters")] = None,
):
    """
    Print the lines of a group for one day, oldest first

    Args:
        group: Log group
        date: Day to search, as YYYYMMDD
        start: Start time (inclusive), as HHmm
        end: End time (inclusive), as HHmm
        filters: Comma-separated substrings every line must contain
    """
    settings = Settings()
    settings.configure_logging()

    lines = asyncio.run(query_logs(settings.create_storage(), group, date, start, end, filters))
    for line in lines:
        print(line)


if __name__ == "__main__":
    app()
