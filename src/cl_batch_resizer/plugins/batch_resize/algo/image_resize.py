"""Pure image resize computation logic (single in-memory item)."""

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from io import BytesIO
from typing import Final

from loguru import logger
from PIL import Image

from ....common.errors import DecodeError, EncodeError
from ....common.schemas import ResizeOutcome, UploadItem
from ....utils.image_formats import ImageFormat, resized_name

RESAMPLE: Final[Image.Resampling] = Image.Resampling.BILINEAR
DEFAULT_JPEG_QUALITY: Final[int] = 75


@dataclass(frozen=True)
class ImageCodec:
    """Decode/encode pair for one supported format."""

    decode: Callable[[bytes], Image.Image]
    encode: Callable[[Image.Image, int], bytes]


# ─────────────────────────────────────────────────────────────
# Decoding
# ─────────────────────────────────────────────────────────────


def _decode(pil_format: str, data: bytes) -> Image.Image:
    # Restricting the decoder list rejects a valid image of another format
    img = Image.open(BytesIO(data), formats=[pil_format])
    img.load()

    width, height = img.size
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid source dimensions {width}x{height}")
    return img


# ─────────────────────────────────────────────────────────────
# Encoding
# ─────────────────────────────────────────────────────────────


def _to_bytes(img: Image.Image, pil_format: str, **save_kwargs: object) -> bytes:
    buffer = BytesIO()
    img.save(buffer, format=pil_format, **save_kwargs)
    return buffer.getvalue()


def _encode_jpeg(img: Image.Image, quality: int) -> bytes:
    # JPEG does not support alpha channel
    if img.mode not in ("RGB", "L", "CMYK"):
        img = img.convert("RGB")
    return _to_bytes(img, "JPEG", quality=quality)


def _encode_png(img: Image.Image, quality: int) -> bytes:
    _ = quality
    return _to_bytes(img, "PNG")


def _encode_gif(img: Image.Image, quality: int) -> bytes:
    _ = quality
    # Pillow quantizes RGB(A) to an adaptive palette on save
    return _to_bytes(img, "GIF")


CODECS: Final[dict[ImageFormat, ImageCodec]] = {
    fmt: ImageCodec(decode=partial(_decode, fmt.pil_format), encode=encode)
    for fmt, encode in (
        (ImageFormat.JPEG, _encode_jpeg),
        (ImageFormat.PNG, _encode_png),
        (ImageFormat.GIF, _encode_gif),
    )
}


# ─────────────────────────────────────────────────────────────
# Resampling
# ─────────────────────────────────────────────────────────────


def _interpolatable(img: Image.Image) -> Image.Image:
    """Expand modes Pillow would otherwise resize with nearest-neighbour."""
    if img.mode in ("P", "PA"):
        has_alpha = img.mode == "PA" or "transparency" in img.info
        return img.convert("RGBA" if has_alpha else "RGB")
    if img.mode == "1":
        return img.convert("L")
    return img


def resample(img: Image.Image, width: int, height: int) -> Image.Image:
    """Force ``img`` to exactly ``width`` x ``height``; aspect ratio is not kept."""
    return _interpolatable(img).resize((width, height), RESAMPLE)


def resize_one(
    item: UploadItem,
    target_width: int,
    target_height: int,
    *,
    jpeg_quality: int = DEFAULT_JPEG_QUALITY,
) -> ResizeOutcome | None:
    """
    Resize a single uploaded image in memory.

    Args:
        item: Uploaded image with its extension-derived format
        target_width: Output width in pixels
        target_height: Output height in pixels
        jpeg_quality: Encoder quality for JPEG output

    Returns:
        ResizeOutcome, or None when the format is unsupported (skip)

    Raises:
        DecodeError: If the bytes are not a valid image of the claimed format
        EncodeError: If the image cannot be resampled or re-encoded
    """
    codec = CODECS.get(item.detected_format)
    if codec is None:
        logger.info(f"Skipping unsupported file: {item.original_name}")
        return None

    try:
        source = codec.decode(item.data)
    except Exception as exc:
        logger.warning(f"Decode failed for {item.original_name}: {exc}")
        raise DecodeError(item.original_name) from exc

    with source:
        logger.debug(
            f"Resizing {item.original_name} from {source.width}x{source.height} "
            + f"to {target_width}x{target_height}"
        )
        # A decoded image that cannot be resampled yields no output: EncodeError
        try:
            resized = resample(source, target_width, target_height)
        except Exception as exc:
            logger.warning(f"Resample failed for {item.original_name}: {exc}")
            raise EncodeError(item.original_name) from exc

    with resized:
        try:
            encoded = codec.encode(resized, jpeg_quality)
        except Exception as exc:
            logger.warning(f"Encode failed for {item.original_name}: {exc}")
            raise EncodeError(item.original_name) from exc

    if not encoded:
        raise EncodeError(item.original_name)

    return ResizeOutcome(
        original_name=item.original_name,
        resized_name=resized_name(item.original_name),
        data=encoded,
        format=item.detected_format,
        width=target_width,
        height=target_height,
    )
