"""Encode dithered images to a file or a byte stream."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import BinaryIO

from PIL import Image

# Output extensions handed to Pillow; JPEG rejects RGBA at save time
SUPPORTED_SUFFIXES = (
    ".png",
    ".bmp",
    ".gif",
    ".tif",
    ".tiff",
    ".webp",
    ".jpg",
    ".jpeg",
    ".ppm",
    ".pgm",
    ".tga",
    ".ico",
)


class EncodeError(ValueError):
    """Output image could not be written."""


def save_image(image: Image.Image, output_path: Path) -> None:
    """Save in the format implied by the output file extension."""
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise EncodeError(f"Unsupported output format: {suffix or '(none)'}")
    try:
        image.save(output_path)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Cannot write {output_path}: {e}") from e


def encode_png(image: Image.Image) -> bytes:
    """Serialize an image as PNG bytes."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def write_png(image: Image.Image, stream: BinaryIO | None = None) -> None:
    """Write PNG bytes to `stream` (stdout by default) and flush."""
    out = stream if stream is not None else sys.stdout.buffer
    out.write(encode_png(image))
    out.flush()
