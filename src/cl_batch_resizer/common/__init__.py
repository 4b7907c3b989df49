"""Common module - protocols, schemas, errors and storage."""

from .errors import BatchResizeError, StorageError
from .file_storage_impl import LocalFileStorage
from .image_storage import ImageStorage
from .schemas import BatchResult, ResizeOutcome, ResizeRequest, UploadItem

__all__ = [
    "BatchResizeError",
    "BatchResult",
    "ImageStorage",
    "LocalFileStorage",
    "ResizeOutcome",
    "ResizeRequest",
    "StorageError",
    "UploadItem",
]
