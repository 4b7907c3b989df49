"""cl_batch_resizer - Batch image resize service."""

from .common.errors import (
    BatchResizeError,
    DecodeError,
    EmptyResultError,
    EncodeError,
    InvalidDimensionsError,
    NoItemsError,
    StorageError,
)
from .common.file_storage_impl import LocalFileStorage
from .common.image_storage import ImageStorage
from .common.schemas import BatchResult, ResizeOutcome, ResizeRequest, UploadItem
from .plugins.batch_resize import BatchResizer, create_router
from .utils.image_formats import ImageFormat, classify_format

__version__ = "0.1.0"

__all__ = [
    "BatchResizeError",
    "BatchResizer",
    "BatchResult",
    "DecodeError",
    "EmptyResultError",
    "EncodeError",
    "ImageFormat",
    "ImageStorage",
    "InvalidDimensionsError",
    "LocalFileStorage",
    "NoItemsError",
    "ResizeOutcome",
    "ResizeRequest",
    "StorageError",
    "UploadItem",
    "__version__",
    "classify_format",
    "create_router",
]
