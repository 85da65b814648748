"""Image decoding from files or raw bytes (stdin).

Images are fully loaded on open so decode errors surface here rather than
inside the dithering pass.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError


class DecodeError(ValueError):
    """Input data could not be decoded as an image."""


def _decode(fp: BinaryIO | Path, source: str) -> Image.Image:
    try:
        img = Image.open(fp)
        img.load()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise DecodeError(f"Cannot decode image from {source}: {e}") from e
    return img


def load_image(path: str | Path) -> Image.Image:
    """Open and decode an image file.

    Raises:
        FileNotFoundError: if the path does not exist.
        DecodeError: if the file is not a readable image.
    """
    local_path = Path(path)
    if not local_path.exists():
        raise FileNotFoundError(f"File not found: {local_path}")
    return _decode(local_path, str(local_path))


def load_image_bytes(data: bytes) -> Image.Image:
    """Decode an image held in memory."""
    if not data:
        raise DecodeError("Cannot decode image from stdin: no data")
    return _decode(io.BytesIO(data), "stdin")


def read_input(path: str | Path | None = None, stdin: BinaryIO | None = None) -> Image.Image:
    """Decode from `path`, or from all of stdin when no path is given."""
    if path is not None:
        return load_image(path)
    stream = stdin if stdin is not None else sys.stdin.buffer
    return load_image_bytes(stream.read())
