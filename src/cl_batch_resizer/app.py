"""FastAPI application factory and uvicorn entry point."""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from .common.file_storage_impl import LocalFileStorage
from .common.image_storage import ImageStorage
from .common.schemas import ErrorResponse
from .config import Settings, get_settings
from .logging_config import configure_logging
from .plugins.batch_resize.routes import create_router


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed form input with the same envelope as other request errors."""
    fields = sorted(
        {".".join(str(part) for part in error["loc"] if part != "body") for error in exc.errors()}
    )
    message = f"Invalid request field: {', '.join(fields)}" if any(fields) else "Invalid request"
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=400, content=ErrorResponse(message=message).model_dump())


def create_app(
    settings: Settings | None = None,
    storage: ImageStorage | None = None,
) -> FastAPI:
    """Build the service.

    Example:
        app = create_app(Settings(storage_dir="/srv/resizer"))

    Args:
        settings: Defaults to ``get_settings()`` (environment / .env)
        storage: Defaults to ``LocalFileStorage`` under ``settings.storage_dir``

    Returns:
        FastAPI app with ``POST /resize``, ``GET /health`` and ``/uploads`` static files
    """
    settings = settings or get_settings()
    storage = storage or LocalFileStorage(settings.storage_dir)

    # Static serving needs the directory at mount time
    storage.create_directories()

    app = FastAPI(title="cl_batch_resizer", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(create_router(storage, settings))

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    _ = health

    app.mount("/uploads", StaticFiles(directory=storage.public_dir), name="uploads")

    logger.info(f"Serving resized images from {storage.public_dir}")
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
