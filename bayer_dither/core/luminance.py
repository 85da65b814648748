"""Luminance from RGB.

Two formulas are used on purpose:
  - weighted luma (ITU-R BT.601 weights, rounded) for the color-preserving mode;
  - integer Rec.709 luma (2126/7152/722 over 10000, truncated) for the
    grayscale mode, matching the image codec's own grayscale conversion.
"""

from __future__ import annotations

import numpy as np

LUMA_WEIGHTS = (0.299, 0.587, 0.114)

REC709_WEIGHTS = (2126, 7152, 722)
REC709_DIVISOR = 10000


def compute_luminance(r: int, g: int, b: int) -> int:
    """Weighted luma of an RGB triple, rounded and clamped to [0, 255].

    Rounding is half-to-even, the same as `np.rint` in luminance_array.
    """
    value = LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b
    return int(max(0.0, min(255.0, round(value))))


def luminance_array(rgb: np.ndarray) -> np.ndarray:
    """Vectorized compute_luminance over an (H, W, 3) array.

    Returns a uint8 array of shape (H, W).
    """
    channels = rgb[..., :3].astype(np.float64)
    value = (
        LUMA_WEIGHTS[0] * channels[..., 0]
        + LUMA_WEIGHTS[1] * channels[..., 1]
        + LUMA_WEIGHTS[2] * channels[..., 2]
    )
    return np.clip(np.rint(value), 0.0, 255.0).astype(np.uint8)


def rec709_luma_array(rgb: np.ndarray) -> np.ndarray:
    """Integer Rec.709 luma over an (H, W, 3) uint8 array, truncated."""
    channels = rgb[..., :3].astype(np.uint32)
    value = (
        REC709_WEIGHTS[0] * channels[..., 0]
        + REC709_WEIGHTS[1] * channels[..., 1]
        + REC709_WEIGHTS[2] * channels[..., 2]
    ) // REC709_DIVISOR
    return np.minimum(value, 255).astype(np.uint8)
