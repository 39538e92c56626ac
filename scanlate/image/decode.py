"""Image decoding, the shared upscale rule, and transport encodings.

Decoding goes through Pillow so that any raster format it understands
(PNG, JPEG, WebP, BMP, GIF, TIFF) lands as RGBA; resampling and PNG
encoding use OpenCV.
"""

from __future__ import annotations

import base64
import io
import logging
from typing import Tuple

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from scanlate.errors import DecodeError

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)

# Small images are resampled so that their longer side reaches this size.
TARGET_LONG_SIDE = 2000


def compute_upscale(width: int, height: int, target: int = TARGET_LONG_SIDE) -> Tuple[int, int, float]:
    """Return ``(new_width, new_height, scale)`` for the shared upscale rule.

    ``scale = max(1, target / max(width, height))``; images whose longer side
    already reaches ``target`` keep their size.
    """
    longer = max(width, height)
    scale = max(1.0, target / float(longer))
    return int(width * scale), int(height * scale), scale


def upscale_if_small(buffer: PixelBuffer, target: int = TARGET_LONG_SIDE) -> PixelBuffer:
    """Resample ``buffer`` with bicubic interpolation when it is below ``target``."""
    new_w, new_h, scale = compute_upscale(buffer.width, buffer.height, target)
    if scale == 1.0 or (new_w, new_h) == (buffer.width, buffer.height):
        return buffer
    logger.debug("[RESIZE] %dx%d -> %dx%d (scale=%.3f)", buffer.width, buffer.height, new_w, new_h, scale)
    resized = cv2.resize(buffer.pixels, (new_w, new_h), interpolation=cv2.INTER_CUBIC)
    return PixelBuffer(resized)


def decode_image(data: bytes, upscale: bool = True) -> Tuple[PixelBuffer, Tuple[int, int]]:
    """Decode encoded image bytes into an RGBA buffer.

    Doxygen:
    - @param data: Raw encoded image bytes.
    - @param upscale: Apply the shared upscale rule before returning.
    - @return: (buffer, (original_width, original_height)).
    - @throws DecodeError: Empty input, unsupported format, truncated data, zero size
      or a pixel count over Pillow's decompression-bomb limit.
    """
    if not data:
        raise DecodeError("The selected file is empty; please choose an image.")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            rgba = img.convert("RGBA")
    except Image.DecompressionBombError as exc:
        raise DecodeError("The selected image is too large.") from exc
    except (UnidentifiedImageError, OSError, SyntaxError, EOFError, ValueError) as exc:
        raise DecodeError("The selected file is not a supported image.") from exc

    width, height = rgba.size
    if width <= 0 or height <= 0:
        raise DecodeError("The selected image has no pixels.")

    buffer = PixelBuffer(np.asarray(rgba, dtype=np.uint8).copy())
    if upscale:
        buffer = upscale_if_small(buffer)
    return buffer, (width, height)


def encode_png(buffer: PixelBuffer) -> bytes:
    """Encode ``buffer`` as PNG bytes (lossless, alpha preserved)."""
    bgra = cv2.cvtColor(buffer.pixels, cv2.COLOR_RGBA2BGRA)
    ok, encoded = cv2.imencode(".png", bgra)
    if not ok:
        raise RuntimeError("PNG encoding failed")
    return encoded.tobytes()


def to_base64_png(buffer: PixelBuffer) -> str:
    return base64.b64encode(encode_png(buffer)).decode("ascii")


def to_data_url(buffer: PixelBuffer) -> str:
    """Return a ``data:image/png;base64,...`` URL for multimodal chat requests."""
    return f"data:image/png;base64,{to_base64_png(buffer)}"
