"""RGBA pixel buffer shared by the decoder and the conditioning stages."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class PixelBuffer:
    """Row-major RGBA pixels backed by a ``uint8`` array of shape (H, W, 4).

    Conditioning stages mutate ``pixels`` in place; the array is owned by a
    single pipeline run and dropped when the run ends.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = self.pixels
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"PixelBuffer expects an (H, W, 4) array, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            raise ValueError(f"PixelBuffer expects uint8 samples, got {arr.dtype}")
        if not arr.flags["C_CONTIGUOUS"]:
            self.pixels = np.ascontiguousarray(arr)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def data(self) -> np.ndarray:
        """Flat interleaved view; ``len(data) == width * height * 4``."""
        return self.pixels.reshape(-1)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.pixels.copy())

    @classmethod
    def blank(cls, width: int, height: int, value: int = 0) -> "PixelBuffer":
        """Create an opaque buffer filled with a single gray ``value``."""
        arr = np.full((height, width, 4), value, dtype=np.uint8)
        arr[..., 3] = 255
        return cls(arr)
