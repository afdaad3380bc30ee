"""
Main FastAPI application for the log store
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bucketlog.exceptions import StorageError, ValidationError
from bucketlog.logging import get_logger
from bucketlog.storage import ObjectStorageInterface
from bucketlog._interface.api.routes import logs
from bucketlog._interface.settings import Settings

logger = get_logger(__name__)


def create_app(storage: ObjectStorageInterface | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        storage: Object store to serve. When omitted it's built from the environment at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan context manager"""
        if storage is None:
            settings = Settings()
            settings.configure_logging()
            app.state.storage = settings.create_storage()
            await app.state.storage.ensure_bucket_exists()
        yield

    app = FastAPI(title="bucketlog API", version="1.0.0", lifespan=lifespan)
    if storage is not None:
        app.state.storage = storage

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": "invalid request body"})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("request-failed", path=request.url.path, exception=exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    app.include_router(logs.router)

    @app.get("/")
    async def root():
        return {"message": "bucketlog API is running"}

    return app
