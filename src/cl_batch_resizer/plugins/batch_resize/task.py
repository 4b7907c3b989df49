"""Batch resize task implementation."""

from collections.abc import Sequence

from loguru import logger

from ...common.errors import (
    EmptyResultError,
    InvalidDimensionsError,
    ItemProcessingError,
    NoItemsError,
)
from ...common.schemas import BatchResult, ItemFailure, ResizeOutcome, ResizeRequest, UploadItem
from .algo.image_resize import DEFAULT_JPEG_QUALITY, resize_one

DEFAULT_MAX_DIMENSION = 10000


class BatchResizer:
    """Resizes every supported item of a request to one target size.

    Stateless between calls: each ``process_batch`` builds a fresh result.

    By default the batch is fail-fast: the first item that cannot be decoded
    or encoded aborts the whole batch. With ``fail_fast=False`` such items are
    recorded in ``BatchResult.failures`` and the remaining items still run.
    """

    def __init__(
        self,
        *,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
        max_dimension: int = DEFAULT_MAX_DIMENSION,
        fail_fast: bool = True,
    ):
        self.jpeg_quality: int = jpeg_quality
        self.max_dimension: int = max_dimension
        self.fail_fast: bool = fail_fast

    def validate_request(
        self,
        width: int,
        height: int,
        items: Sequence[UploadItem],
    ) -> ResizeRequest:
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(width, height)
        if width > self.max_dimension or height > self.max_dimension:
            raise InvalidDimensionsError(
                width,
                height,
                f"Width and height must not exceed {self.max_dimension} pixels",
            )
        if not items:
            raise NoItemsError()

        return ResizeRequest(target_width=width, target_height=height, items=tuple(items))

    def resize_one(self, item: UploadItem, width: int, height: int) -> ResizeOutcome | None:
        return resize_one(item, width, height, jpeg_quality=self.jpeg_quality)

    def process_batch(self, request: ResizeRequest) -> BatchResult:
        request = self.validate_request(
            request.target_width,
            request.target_height,
            request.items,
        )

        outcomes: list[ResizeOutcome] = []
        failures: list[ItemFailure] = []
        skipped: list[str] = []
        total_items = len(request.items)

        for item in request.items:
            try:
                outcome = self.resize_one(item, request.target_width, request.target_height)
            except ItemProcessingError as exc:
                if self.fail_fast:
                    logger.error(f"Aborting batch on {item.original_name}: {exc.message}")
                    raise
                failures.append(
                    ItemFailure(
                        original_name=item.original_name,
                        kind=type(exc).__name__,
                        message=exc.message,
                    )
                )
            else:
                if outcome is None:
                    skipped.append(item.original_name)
                else:
                    outcomes.append(outcome)

        if not outcomes:
            logger.warning(f"No image of {total_items} could be resized")
            raise EmptyResultError()

        logger.info(
            f"Resized {len(outcomes)}/{total_items} images to "
            + f"{request.target_width}x{request.target_height}"
        )
        return BatchResult(outcomes=outcomes, failures=failures, skipped=skipped)
