"""Pydantic schemas for the resize pipeline and its HTTP envelopes."""

from collections.abc import Sequence
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..utils.image_formats import ImageFormat, base_name, classify_format

# ─────────────────────────────────────────────────────────────
# Pipeline models
# ─────────────────────────────────────────────────────────────


class UploadItem(BaseModel):
    """One received file. Format comes from the extension, never the content."""

    original_name: str = Field(..., description="Filename as uploaded (basename only)")
    data: bytes = Field(..., repr=False, description="Raw uploaded bytes")
    detected_format: ImageFormat = Field(..., description="Format derived from the extension")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @classmethod
    def from_upload(cls, filename: str, data: bytes) -> "UploadItem":
        name = base_name(filename)
        return cls(original_name=name, data=data, detected_format=classify_format(name))


class ResizeRequest(BaseModel):
    """Target dimensions plus ordered items.

    Dimensions are checked by ``BatchResizer.validate_request`` so that a bad
    request surfaces as ``InvalidDimensionsError`` rather than a pydantic error.
    """

    target_width: int
    target_height: int
    items: Sequence[UploadItem] = Field(default_factory=tuple)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class ResizeOutcome(BaseModel):
    original_name: str
    resized_name: str
    data: bytes = Field(..., repr=False)
    format: ImageFormat
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class ItemFailure(BaseModel):
    """Per-item failure, only recorded when the batch is not fail-fast."""

    original_name: str
    kind: str
    message: str

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class BatchResult(BaseModel):
    outcomes: list[ResizeOutcome] = Field(default_factory=list)
    failures: list[ItemFailure] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


# ─────────────────────────────────────────────────────────────
# Storage
# ─────────────────────────────────────────────────────────────


class SavedImageFile(BaseModel):
    """Metadata of a persisted image."""

    relative_path: str = Field(
        ...,
        description="Posix path relative to the storage root, served as-is over HTTP",
    )
    size: int = Field(..., ge=0, description="File size in bytes")
    hash: str | None = Field(None, description="SHA256 of the content")

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


# ─────────────────────────────────────────────────────────────
# Wire envelopes (camelCase, as consumed by the browser client)
# ─────────────────────────────────────────────────────────────


class ResizedImageInfo(BaseModel):
    original_name: str = Field(..., serialization_alias="originalName")
    resized_name: str = Field(..., serialization_alias="resizedName")
    path: str


class FailedImageInfo(BaseModel):
    original_name: str = Field(..., serialization_alias="originalName")
    message: str


class BatchResizeResponse(BaseModel):
    status: Literal["success"] = "success"
    results: list[ResizedImageInfo]
    failures: list[FailedImageInfo] | None = None


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
