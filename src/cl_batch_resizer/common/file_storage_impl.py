from __future__ import annotations

import hashlib
from os import PathLike
from pathlib import Path, PurePosixPath
from typing import Final

import aiofiles
from loguru import logger
from typing_extensions import override

from ..utils.image_formats import base_name
from .errors import StorageDirectoryCreationError, StorageError
from .image_storage import ImageStorage
from .schemas import ResizeOutcome, SavedImageFile


class LocalFileStorage(ImageStorage):
    """
    Local filesystem implementation of ImageStorage.

    Layout:
        base_dir/
            uploads/
                <original_name>
                resized/
                    <resized_name>
    """

    UPLOADS_DIR: Final[str] = "uploads"
    RESIZED_DIR: Final[str] = "uploads/resized"

    def __init__(self, base_dir: str | PathLike[str]):
        self._base_dir: Path = Path(base_dir).expanduser().resolve()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _safe_path(self, relative_path: str) -> Path:
        """
        Resolve and validate a storage-relative path.
        Prevents path traversal.
        """
        resolved = (self._base_dir / relative_path).resolve()

        if self._base_dir not in resolved.parents:
            raise StorageError(f"Invalid relative path '{relative_path}'")

        return resolved

    async def _write(self, relative_path: str, data: bytes) -> SavedImageFile:
        dst = self._safe_path(relative_path)

        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(dst, "wb") as f:
                _ = await f.write(data)
        except OSError as exc:
            logger.error(f"Failed to write {dst}: {exc}")
            raise StorageError() from exc

        return SavedImageFile(
            relative_path=relative_path,
            size=len(data),
            hash=hashlib.sha256(data).hexdigest(),
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    @override
    def public_dir(self) -> Path:
        return self._base_dir / self.UPLOADS_DIR

    @override
    def create_directories(self) -> None:
        for relative in (self.UPLOADS_DIR, self.RESIZED_DIR):
            directory = self._base_dir / relative
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageDirectoryCreationError(str(directory)) from exc

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    @override
    async def save_original(self, original_name: str, data: bytes) -> SavedImageFile:
        return await self._write(
            str(PurePosixPath(self.UPLOADS_DIR, base_name(original_name))),
            data,
        )

    @override
    async def save_resized(self, outcome: ResizeOutcome) -> SavedImageFile:
        return await self._write(
            str(PurePosixPath(self.RESIZED_DIR, base_name(outcome.resized_name))),
            outcome.data,
        )

    # ------------------------------------------------------------------
    # Resolving
    # ------------------------------------------------------------------

    @override
    def resolve_path(self, relative_path: str) -> Path:
        return self._safe_path(relative_path)
