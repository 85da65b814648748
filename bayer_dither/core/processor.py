"""Image processing pipeline.

Decoded image → grayscale or color-preserving dither → RGBA output.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from bayer_dither.core.dither import (
    PreserveOrder,
    dither_color,
    dither_grayscale,
    luma_to_rgba,
)
from bayer_dither.core.matrices import BayerMatrix


@dataclass(frozen=True)
class Settings:
    """Processing settings that affect output."""

    matrix: BayerMatrix
    color: bool = False
    preserve_order: PreserveOrder | None = None  # only used in color mode

    @property
    def effective_preserve_order(self) -> PreserveOrder:
        return self.preserve_order or PreserveOrder.DARK

    def as_dict(self) -> dict[str, object]:
        return {
            "matrix": self.matrix.value,
            "color": self.color,
            "preserve_order": (
                self.effective_preserve_order.value if self.color else None
            ),
        }


def process_image(image: Image.Image, settings: Settings) -> Image.Image:
    """Dither a decoded image; the result is always RGBA."""
    if settings.color:
        return dither_color(image, settings.matrix, settings.effective_preserve_order)
    return luma_to_rgba(dither_grayscale(image, settings.matrix))
