"""Error hierarchy for the batch resize pipeline.

Every error carries a short, user-facing ``message``; low-level causes are
chained with ``raise ... from``.
"""

from __future__ import annotations


class BatchResizeError(Exception):
    """Base class for all batch resize errors."""

    default_message: str = "Image processing failed"

    def __init__(self, message: str | None = None):
        self.message: str = message or self.default_message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------


class InvalidDimensionsError(BatchResizeError):
    default_message = "Invalid width or height"

    def __init__(self, width: int, height: int, message: str | None = None):
        self.width: int = width
        self.height: int = height
        super().__init__(message)


class NoItemsError(BatchResizeError):
    default_message = "No images received"


# ---------------------------------------------------------------------------
# Item errors
# ---------------------------------------------------------------------------


class ItemProcessingError(BatchResizeError):
    """Failure bound to one uploaded image."""

    def __init__(self, original_name: str, message: str | None = None):
        self.original_name: str = original_name
        super().__init__(message)


class DecodeError(ItemProcessingError):
    default_message = "Failed to decode image"

    def __init__(self, original_name: str, message: str | None = None):
        super().__init__(original_name, message or f"Failed to decode image '{original_name}'")


class EncodeError(ItemProcessingError):
    default_message = "Failed to encode image"

    def __init__(self, original_name: str, message: str | None = None):
        super().__init__(original_name, message or f"Failed to encode image '{original_name}'")


class EmptyResultError(BatchResizeError):
    default_message = "Image processing failed"


# ---------------------------------------------------------------------------
# Storage errors
# ---------------------------------------------------------------------------


class StorageError(BatchResizeError):
    """Base class for storage-related errors."""

    default_message = "Failed to store image"


class StorageDirectoryCreationError(StorageError):
    def __init__(self, directory: str):
        self.directory: str = directory
        super().__init__(f"Failed to create storage directory '{directory}'")
