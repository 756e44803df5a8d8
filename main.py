import os
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import entries
from core.config import Settings, get_settings
from core.exceptions import StorageException, TimelineException, ValidationException
from core.logging import get_logger, setup_logging
from middleware.correlation import CorrelationIDMiddleware
from middleware.security import SecurityHeadersMiddleware
from services.storage.local_storage import LocalImageStorage
from services.timeline_store import TimelineStore
from utils.filesystem import ensure_dir

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create the upload directories before serving"""
    settings: Settings = app.state.settings

    setup_logging(settings)

    ensure_dir(settings.images_dir)
    ensure_dir(settings.timeline_path.parent)
    logger.info(
        f"Serving {settings.server_root}; images in {settings.images_dir}, "
        f"timeline at {settings.timeline_path}"
    )

    yield

    logger.info("Shutting down")


async def timeline_exception_handler(request: Request, exc: TimelineException):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message} {exc.details}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


async def storage_exception_handler(request: Request, exc: StorageException):
    logger.error(f"{exc.message}: {exc.details}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_dict()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed form input (e.g. text sent in a file slot) counts as missing
    return await timeline_exception_handler(request, ValidationException())


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)
    return await http_exception_handler(request, exc)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.timeline_store = TimelineStore(settings.timeline_path)
    app.state.image_storage = LocalImageStorage(settings.images_dir)

    app.add_exception_handler(TimelineException, timeline_exception_handler)
    app.add_exception_handler(StorageException, storage_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    # Middleware is applied in reverse: correlation ID wraps everything
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(entries.router, prefix="/api", tags=["entries"])

    def page(name: str) -> FileResponse:
        path = settings.server_root / name
        if not path.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return FileResponse(path, media_type="text/html")

    @app.get("/", include_in_schema=False)
    async def viewer():
        return page("index.html")

    @app.get("/admin", include_in_schema=False)
    async def admin():
        return page("admin.html")

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint for load balancers and monitoring.

        Validates that the image directory and the timeline directory
        exist and are writable.

        Returns:
        - 200 OK if healthy
        - 503 Service Unavailable if unhealthy
        """
        checks: dict[str, Any] = {
            "api": True,
            "images_dir": os.access(settings.images_dir, os.W_OK),
            "timeline_dir": os.access(settings.timeline_path.parent, os.W_OK),
        }

        if all(checks.values()):
            return {"status": "healthy", "checks": checks}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "checks": checks},
        )

    # Publishes assets/imgs and assets/json at the paths entries refer to
    app.mount(
        "/assets",
        StaticFiles(directory=settings.assets_root, check_dir=False),
        name="assets",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
