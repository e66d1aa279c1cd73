"""Region cropping for screenshot analysis."""

from .regions import binarize, crop, decode_image, pixel_rect

__all__ = ["binarize", "crop", "decode_image", "pixel_rect"]
