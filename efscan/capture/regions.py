"""Region cropping and per-region binarization."""

from typing import Tuple

import cv2
import numpy as np

from ..core.constants import LUMA_B, LUMA_G, LUMA_R, REGION_ENCODING
from ..core.types import Region
from ..utils.error_handler import ImageDecodeError, InvalidRegionError


def decode_image(image_bytes: bytes) -> np.ndarray:
    """Decode raster image bytes to a BGR pixel buffer."""
    if not image_bytes:
        raise ImageDecodeError("Empty image data")

    buffer = np.frombuffer(image_bytes, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageDecodeError(
            "Image data could not be decoded",
            details={"size_bytes": len(image_bytes)},
        )
    return image


def pixel_rect(width: int, height: int, region: Region) -> Tuple[int, int, int, int]:
    """Absolute (x, y, w, h) of ``region``, rounded to the nearest pixel."""
    if not region.is_within_bounds():
        raise InvalidRegionError(
            "Region extends outside the source image",
            details={"region": region, "image_size": f"{width}x{height}"},
        )

    x = int(width * region.x + 0.5)
    y = int(height * region.y + 0.5)
    w = min(int(width * region.w + 0.5), width - x)
    h = min(int(height * region.h + 0.5), height - y)

    if w <= 0 or h <= 0:
        raise InvalidRegionError(
            "Region crops to an empty area",
            details={"region": region, "image_size": f"{width}x{height}"},
        )
    return x, y, w, h


def binarize(image: np.ndarray, threshold: int) -> np.ndarray:
    """Map bright pixels to black and everything else to white.

    Game labels render as light text on a dark background, so pixels whose
    BT.709 luminance exceeds ``threshold`` become glyph (black) pixels.
    """
    if image.ndim == 2:
        luminance = image.astype(np.float32)
    else:
        # cv2 channel order is BGR
        blue = image[..., 0].astype(np.float32)
        green = image[..., 1].astype(np.float32)
        red = image[..., 2].astype(np.float32)
        luminance = LUMA_R * red + LUMA_G * green + LUMA_B * blue

    return np.where(luminance > threshold, 0, 255).astype(np.uint8)


def crop(image: np.ndarray, region: Region) -> bytes:
    """Crop ``region`` out of ``image`` and return encoded image bytes."""
    height, width = image.shape[:2]
    x, y, w, h = pixel_rect(width, height, region)

    roi = image[y:y + h, x:x + w]
    if region.binarize:
        roi = binarize(roi, region.threshold)

    ok, encoded = cv2.imencode(REGION_ENCODING, roi)
    if not ok:
        raise InvalidRegionError(
            "Cropped region could not be encoded",
            details={"region": region, "rect": (x, y, w, h)},
        )
    return encoded.tobytes()
