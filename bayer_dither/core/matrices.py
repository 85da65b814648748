"""Bayer threshold matrices for ordered dithering.

Three fixed tables (2x2, 4x4, 8x8) of 8-bit thresholds, stored row-major and
tiled periodically across the image.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

BAYER_MATRIX_2X2: tuple[int, ...] = (0, 2, 3, 1)

BAYER_MATRIX_4X4: tuple[int, ...] = (
    0, 128, 32, 160,
    192, 64, 224, 96,
    48, 176, 16, 144,
    240, 112, 208, 80,
)

BAYER_MATRIX_8X8: tuple[int, ...] = (
    0, 128, 32, 160, 48, 176, 16, 144,
    192, 64, 224, 96, 240, 112, 208, 80,
    32, 160, 48, 176, 16, 144, 32, 160,
    160, 96, 224, 64, 240, 80, 192, 128,
    48, 176, 16, 144, 32, 160, 48, 176,
    176, 224, 96, 64, 240, 80, 192, 128,
    16, 144, 32, 160, 48, 176, 16, 144,
    144, 80, 208, 128, 192, 128, 160, 96,
)


class BayerMatrix(str, Enum):
    M2 = "m2"
    M4 = "m4"
    M8 = "m8"

    @property
    def order(self) -> int:
        return _ORDERS[self]

    @property
    def table(self) -> tuple[int, ...]:
        return _TABLES[self]

    @classmethod
    def parse(cls, text: str) -> BayerMatrix:
        """Parse "m2"/"m4"/"m8" (any case) or a bare order "2"/"4"/"8"."""
        value = str(text).strip().lower()
        if value in ("2", "4", "8"):
            value = f"m{value}"
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                "Invalid Bayer Matrix option. Choose from: m2, m4, m8."
            ) from None


_ORDERS = {BayerMatrix.M2: 2, BayerMatrix.M4: 4, BayerMatrix.M8: 8}
_TABLES = {
    BayerMatrix.M2: BAYER_MATRIX_2X2,
    BayerMatrix.M4: BAYER_MATRIX_4X4,
    BayerMatrix.M8: BAYER_MATRIX_8X8,
}


def lookup(option: BayerMatrix) -> tuple[tuple[int, ...], int]:
    """Return (table, order) for a matrix option."""
    return option.table, option.order


def threshold_index(x: int, y: int, order: int) -> int:
    """Row-major index into an order x order table for pixel (x, y)."""
    return (y % order) * order + (x % order)


def threshold_map(option: BayerMatrix, width: int, height: int) -> np.ndarray:
    """Tile the matrix over a (height, width) grid.

    Returns a uint8 array where out[y, x] == table[threshold_index(x, y, order)].
    """
    table, order = lookup(option)
    matrix = np.array(table, dtype=np.uint8).reshape(order, order)
    ys = np.arange(height) % order
    xs = np.arange(width) % order
    return matrix[ys[:, None], xs[None, :]]
