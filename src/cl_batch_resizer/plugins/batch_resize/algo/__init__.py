"""Image resize algorithms."""

from .image_resize import CODECS, resample, resize_one

__all__ = ["CODECS", "resample", "resize_one"]
