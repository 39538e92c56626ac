"""Image decoding and pixel conditioning for recognition."""

from .buffer import PixelBuffer
from .conditioning import (
    condition_image,
    sharpen,
    stretch_contrast,
    to_grayscale,
)
from .decode import (
    compute_upscale,
    decode_image,
    encode_png,
    to_data_url,
    upscale_if_small,
)

__all__ = [
    "PixelBuffer",
    "condition_image",
    "sharpen",
    "stretch_contrast",
    "to_grayscale",
    "compute_upscale",
    "decode_image",
    "encode_png",
    "to_data_url",
    "upscale_if_small",
]
