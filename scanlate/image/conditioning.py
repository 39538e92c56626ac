"""Pixel conditioning applied before recognition.

Three stages run in a fixed order on an RGBA `PixelBuffer`:

1. grayscale with ITU-R BT.601 luma weights,
2. 3x3 sharpening on interior pixels only (borders keep their gray value),
3. a fixed contrast stretch around mid-gray.

Every stage keeps the buffer dimensions, leaves alpha untouched and rounds
to the nearest integer (ties to even) after clamping to [0, 255].
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.299, 0.587, 0.114)

SHARPEN_KERNEL = np.array(
    [
        [0, -1, 0],
        [-1, 5, -1],
        [0, -1, 0],
    ],
    dtype=np.float32,
)

CONTRAST = 1.8


def contrast_factor(contrast: float = CONTRAST) -> float:
    return 259.0 * (contrast + 255.0) / (255.0 * (259.0 - contrast))


def _set_gray(buffer: PixelBuffer, gray: np.ndarray) -> None:
    buffer.pixels[..., 0] = gray
    buffer.pixels[..., 1] = gray
    buffer.pixels[..., 2] = gray


def to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """Replace R, G and B with ``0.299*R + 0.587*G + 0.114*B`` in place."""
    rgb = buffer.pixels[..., :3].astype(np.float64)
    r, g, b = LUMA_WEIGHTS
    gray = r * rgb[..., 0] + g * rgb[..., 1] + b * rgb[..., 2]
    _set_gray(buffer, np.clip(np.rint(gray), 0, 255).astype(np.uint8))
    return buffer


def sharpen(buffer: PixelBuffer) -> PixelBuffer:
    """Convolve the gray channel with `SHARPEN_KERNEL` on interior pixels.

    The kernel reads from a snapshot of the grayscale output, never from
    pixels already sharpened. Pixels on the outer frame are not written.
    Images narrower or shorter than 3 pixels have no interior and are
    returned unchanged.
    """
    if buffer.width < 3 or buffer.height < 3:
        return buffer
    snapshot = buffer.pixels[..., 0].copy()
    # uint8 output depth saturates to [0, 255]; border mode only affects the frame we discard.
    filtered = cv2.filter2D(snapshot, -1, SHARPEN_KERNEL, borderType=cv2.BORDER_REPLICATE)
    interior = filtered[1:-1, 1:-1]
    buffer.pixels[1:-1, 1:-1, 0] = interior
    buffer.pixels[1:-1, 1:-1, 1] = interior
    buffer.pixels[1:-1, 1:-1, 2] = interior
    return buffer


def stretch_contrast(buffer: PixelBuffer, contrast: float = CONTRAST) -> PixelBuffer:
    """Apply ``clamp(factor * (v - 128) + 128)`` to every color sample."""
    factor = contrast_factor(contrast)
    rgb = buffer.pixels[..., :3].astype(np.float64)
    out = np.clip(factor * (rgb - 128.0) + 128.0, 0, 255)
    buffer.pixels[..., :3] = np.rint(out).astype(np.uint8)
    return buffer


def condition_image(buffer: PixelBuffer, in_place: bool = False) -> PixelBuffer:
    """Run grayscale, sharpen and contrast stretch in that order.

    Doxygen:
    - @param buffer: Decoded (and already upscaled) RGBA buffer.
    - @param in_place: Mutate ``buffer`` instead of working on a copy.
    - @return: Conditioned buffer with the same width and height.
    """
    out = buffer if in_place else buffer.copy()
    to_grayscale(out)
    sharpen(out)
    stretch_contrast(out)
    logger.debug("Conditioned %dx%d image", out.width, out.height)
    return out
