"""
ImageStorage Protocol - interface for persisting uploaded and resized images.

Design goals:
- Hide internal folder structure
- Return paths that static file serving can expose unchanged
- Keep storage as the single authority over paths
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .schemas import ResizeOutcome, SavedImageFile


@runtime_checkable
class ImageStorage(Protocol):
    """
    Protocol for flat-file image storage.

    Implementations own:
    - storage root
    - directory layout
    - provisioning of upload directories

    Callers interact ONLY via filenames and the relative paths returned.
    """

    @property
    def public_dir(self) -> Path:
        """Directory to mount for static serving (``uploads``)."""
        ...

    def create_directories(self) -> None:
        """
        Ensure the upload and resized directories exist.

        Raises:
            StorageDirectoryCreationError: If a directory cannot be created.
        """
        ...

    async def save_original(self, original_name: str, data: bytes) -> SavedImageFile:
        """Persist an uploaded original under ``uploads/``."""
        ...

    async def save_resized(self, outcome: ResizeOutcome) -> SavedImageFile:
        """Persist a resized image under ``uploads/resized/``."""
        ...

    def resolve_path(self, relative_path: str) -> Path:
        """
        Resolve a storage-relative path to an absolute filesystem path.

        Raises:
            StorageError: If the path escapes the storage root.
        """
        ...
