"""Ordered (Bayer) dithering.

Two output modes:
  - grayscale: integer Rec.709 luma thresholded to pure black/white.
  - color: original RGB kept, the thresholded weighted luma goes to alpha.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from PIL import Image

from bayer_dither.core.luminance import luminance_array, rec709_luma_array
from bayer_dither.core.matrices import BayerMatrix, threshold_map

# Pillow modes holding more than 8 bits per sample
WIDE_MODES = ("I;16", "I;16B", "I;16L", "I;16N", "I")


class PreserveOrder(str, Enum):
    DARK = "dark"
    LIGHT = "light"

    @classmethod
    def parse(cls, text: str) -> PreserveOrder:
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            raise ValueError(
                "Invalid preserve order option. Choose from: dark, light."
            ) from None


def _to_rgb(image: Image.Image) -> np.ndarray:
    """(H, W, 3) uint8 RGB; 16-bit samples are scaled down, not clipped."""
    if image.mode in WIDE_MODES:
        wide = np.clip(np.asarray(image).astype(np.int64), 0, 0xFFFF)
        image = Image.fromarray((wide >> 8).astype(np.uint8))
    return np.asarray(image.convert("RGB"), dtype=np.uint8)


def dither_grayscale(image: Image.Image, option: BayerMatrix) -> Image.Image:
    """Binarize an image against the tiled Bayer matrix.

    Args:
        image: any decoded PIL image; not modified.
        option: matrix size.

    Returns:
        Mode "L" image of the same size, every pixel 0 or 255.
    """
    gray = rec709_luma_array(_to_rgb(image))
    h, w = gray.shape
    thresholds = threshold_map(option, w, h)

    out = np.where(gray > thresholds, 255, 0).astype(np.uint8)
    return Image.fromarray(out)


def dither_color(
    image: Image.Image,
    option: BayerMatrix,
    preserve: PreserveOrder = PreserveOrder.DARK,
) -> Image.Image:
    """Dither through the alpha channel, keeping the original colors.

    With LIGHT, pixels brighter than their threshold stay opaque; with DARK
    the mapping is inverted so bright pixels turn transparent.

    Returns:
        Mode "RGBA" image of the same size.
    """
    rgb = _to_rgb(image)
    h, w = rgb.shape[:2]
    thresholds = threshold_map(option, w, h)
    brighter = luminance_array(rgb) > thresholds

    if preserve == PreserveOrder.LIGHT:
        alpha = np.where(brighter, 255, 0)
    else:
        alpha = np.where(brighter, 0, 255)

    out = np.empty((h, w, 4), dtype=np.uint8)
    out[..., :3] = rgb
    out[..., 3] = alpha
    return Image.fromarray(out)


def luma_to_rgba(image: Image.Image) -> Image.Image:
    """Expand a single-channel result to opaque RGBA (v, v, v, 255)."""
    gray = np.asarray(image.convert("L"), dtype=np.uint8)
    h, w = gray.shape
    out = np.full((h, w, 4), 255, dtype=np.uint8)
    out[..., 0] = gray
    out[..., 1] = gray
    out[..., 2] = gray
    return Image.fromarray(out)
