from enum import StrEnum
from typing import Final


class ImageFormat(StrEnum):
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    UNSUPPORTED = "unsupported"

    @property
    def pil_format(self) -> str:
        """Pillow format name used for both decode checks and encoding."""
        if self is ImageFormat.UNSUPPORTED:
            raise ValueError("Unsupported format has no Pillow equivalent")
        return self.value.upper()


EXTENSION_FORMATS: Final[dict[str, ImageFormat]] = {
    "jpg": ImageFormat.JPEG,
    "jpeg": ImageFormat.JPEG,
    "png": ImageFormat.PNG,
    "gif": ImageFormat.GIF,
}

RESIZED_SUFFIX: Final[str] = "_resized"


def base_name(filename: str) -> str:
    """Strip any directory part, accepting both separators."""
    return filename.replace("\\", "/").rsplit("/", 1)[-1]


def split_extension(filename: str) -> tuple[str, str]:
    """Split a basename into (stem, extension) at the final dot.

    ``".png"`` yields ``("", "png")`` and ``"archive"`` yields ``("archive", "")``.
    """
    name = base_name(filename)
    stem, dot, extension = name.rpartition(".")
    if not dot:
        return name, ""
    return stem, extension


def get_extension(filename: str) -> str:
    return split_extension(filename)[1].lower()


def classify_format(filename: str) -> ImageFormat:
    return EXTENSION_FORMATS.get(get_extension(filename), ImageFormat.UNSUPPORTED)


def resized_name(filename: str) -> str:
    stem, extension = split_extension(filename)
    return f"{stem}{RESIZED_SUFFIX}.{extension.lower()}"
