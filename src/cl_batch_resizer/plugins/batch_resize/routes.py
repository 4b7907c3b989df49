"""Batch resize route factory."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.datastructures import FormData

from ...common.errors import (
    BatchResizeError,
    EmptyResultError,
    InvalidDimensionsError,
    ItemProcessingError,
    NoItemsError,
    StorageError,
)
from ...common.image_storage import ImageStorage
from ...common.schemas import (
    BatchResizeResponse,
    ErrorResponse,
    FailedImageInfo,
    ResizedImageInfo,
    UploadItem,
)
from ...config import Settings
from ...utils.form_values import coerce_int
from .task import BatchResizer


def _status_code(exc: BatchResizeError) -> int:
    if isinstance(exc, (InvalidDimensionsError, NoItemsError)):
        return 400
    if isinstance(exc, (ItemProcessingError, EmptyResultError)):
        return 422
    return 500


def error_response(exc: BatchResizeError) -> JSONResponse:
    return JSONResponse(
        status_code=_status_code(exc),
        content=ErrorResponse(message=exc.message).model_dump(),
    )


def _dimension(form: FormData, field: str, default: int) -> int:
    """Absent field: default. Present but blank or non-numeric: 0 (rejected later)."""
    if field not in form:
        return default
    value = form.get(field)
    return coerce_int(value if isinstance(value, str) else "", default)


async def _read_uploads(files: list[UploadFile]) -> list[UploadItem]:
    items: list[UploadItem] = []
    for file in files:
        try:
            data = await file.read()
        finally:
            await file.close()
        items.append(UploadItem.from_upload(file.filename or "", data))
    return items


def create_router(storage: ImageStorage, settings: Settings) -> APIRouter:
    """Create router with injected dependencies.

    Args:
        storage: ImageStorage implementation for originals and resized output
        settings: Service settings (defaults, limits, encoder quality)

    Returns:
        Configured APIRouter with the batch resize endpoint
    """
    router = APIRouter()

    @router.post(
        "/resize",
        response_model=BatchResizeResponse,
        responses={
            400: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def resize_images(
        request: Request,
        images: Annotated[
            list[UploadFile] | None, File(description="Images to resize (jpg, jpeg, png, gif)")
        ] = None,
        bracket_images: Annotated[
            list[UploadFile] | None, File(alias="images[]", description="Same as 'images'")
        ] = None,
        width: Annotated[str | None, Form(description="Target width in pixels")] = None,
        height: Annotated[str | None, Form(description="Target height in pixels")] = None,
        fail_fast: Annotated[
            bool, Form(description="Abort the batch on the first broken image")
        ] = True,
    ) -> JSONResponse:
        """Resize a batch of uploaded images to exactly ``width`` x ``height``.

        Unsupported files are skipped. Returns the stored path of every
        resized image, or a single error message.
        """
        files = (images or []) + (bracket_images or [])
        logger.debug(f"Resize request: files={len(files)} width={width!r} height={height!r}")

        # FastAPI reports an empty form value as None; presence is read from the form itself
        form = await request.form()
        target_width = _dimension(form, "width", settings.default_width)
        target_height = _dimension(form, "height", settings.default_height)

        resizer = BatchResizer(
            jpeg_quality=settings.jpeg_quality,
            max_dimension=settings.max_dimension,
            fail_fast=fail_fast,
        )

        try:
            items = await _read_uploads(files)
            request = resizer.validate_request(target_width, target_height, items)

            storage.create_directories()
            if settings.keep_originals:
                for item in request.items:
                    _ = await storage.save_original(item.original_name, item.data)

            result = await run_in_threadpool(resizer.process_batch, request)

            results: list[ResizedImageInfo] = []
            for outcome in result.outcomes:
                saved = await storage.save_resized(outcome)
                results.append(
                    ResizedImageInfo(
                        original_name=outcome.original_name,
                        resized_name=outcome.resized_name,
                        path=saved.relative_path,
                    )
                )
        except StorageError as exc:
            logger.error(f"Storage failure: {exc.message}")
            return error_response(exc)
        except BatchResizeError as exc:
            logger.warning(f"Resize request rejected: {exc.message}")
            return error_response(exc)

        response = BatchResizeResponse(
            results=results,
            failures=[
                FailedImageInfo(original_name=failure.original_name, message=failure.message)
                for failure in result.failures
            ]
            or None,
        )
        return JSONResponse(content=response.model_dump(by_alias=True, exclude_none=True))

    # Mark function as used (accessed via FastAPI decorator)
    _ = resize_images

    return router
