"""Pytest configuration and fixtures."""

import struct
import zlib
from typing import List, Optional

import cv2
import numpy as np
import pytest

from scanlate.ocr.engine import RecognitionOutput, Recognizer


def encode(arr: np.ndarray, ext: str = ".png") -> bytes:
    """Encode an RGB or gray uint8 array the way a camera upload would arrive."""
    if arr.ndim == 3:
        arr = cv2.cvtColor(arr, cv2.COLOR_RGB2BGR)
    ok, buf = cv2.imencode(ext, arr)
    assert ok
    return buf.tobytes()


def png_header(width: int, height: int) -> bytes:
    """PNG with a valid IHDR declaring `width` x `height` and no pixel data."""
    def chunk(kind: bytes, payload: bytes) -> bytes:
        body = kind + payload
        return struct.pack(">I", len(payload)) + body + struct.pack(">I", zlib.crc32(body) & 0xFFFFFFFF)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


class FakeRecognizer(Recognizer):
    """Recognition engine stand-in that records what the pipeline asked for."""

    def __init__(self, text: str = "HELLO WORLD", confidence: Optional[float] = 0.87,
                 load_error: Optional[Exception] = None, recognize_error: Optional[Exception] = None,
                 progress_steps: Optional[List[float]] = None) -> None:
        self.text = text
        self.confidence = confidence
        self.load_error = load_error
        self.recognize_error = recognize_error
        self.progress_steps = progress_steps or []
        self.loaded: List[str] = []
        self.images = []
        self.on_load = None

    def load(self, languages, on_progress=None):
        self.loaded.append(languages)
        if self.on_load is not None:
            self.on_load()
        if self.load_error is not None:
            raise self.load_error

    def recognize(self, image, on_progress=None):
        self.images.append(image)
        for step in self.progress_steps:
            on_progress(step, "recognizing text")
        if self.recognize_error is not None:
            raise self.recognize_error
        return RecognitionOutput(text=self.text, confidence=self.confidence)


@pytest.fixture
def text_like_png() -> bytes:
    """500x500 mid-gray page with black horizontal and vertical strokes."""
    img = np.full((500, 500, 3), 128, dtype=np.uint8)
    for row in range(100, 400, 60):
        img[row:row + 8, 60:440] = 0
        for col in range(60, 440, 45):
            img[row - 20:row + 8, col:col + 6] = 0
    return encode(img)


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer()
