"""Tesseract-backed recognition engine and script detector.

The pipeline talks to these only through `Recognizer` and a plain script
detector callable, so tests and alternative engines can stand in for them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import pytesseract

from scanlate.errors import ClassificationError, ModelLoadError, RecognitionError
from scanlate.image.buffer import PixelBuffer

logger = logging.getLogger(__name__)

# psm 6: assume a single uniform block of text, which keeps line structure.
TESSERACT_CONFIG = "--psm 6 -c preserve_interword_spaces=1"
OSD_CONFIG = "--psm 0 -c min_characters_to_try=5"

SubProgress = Callable[[float, Optional[str]], None]


@dataclass
class RecognitionOutput:
    text: str
    confidence: Optional[float]


def normalize_confidence(raw: Optional[float], scale: float = 100.0) -> Optional[float]:
    """Map an engine confidence onto [0, 1]; negative or missing means unknown."""
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if value < 0 or value != value:
        return None
    return max(0.0, min(1.0, value / scale))


class Recognizer(ABC):
    """Recognition engine collaborator."""

    @abstractmethod
    def load(self, languages: str, on_progress: Optional[SubProgress] = None) -> None:
        """Prepare the ``+``-joined language packs; raise when unavailable."""
        raise NotImplementedError

    @abstractmethod
    def recognize(self, image: PixelBuffer, on_progress: Optional[SubProgress] = None) -> RecognitionOutput:
        """Return text and a confidence already normalized to [0, 1]."""
        raise NotImplementedError


def build_dataframe_from_tesseract(data: Dict[str, Any]) -> pd.DataFrame:
    """Create and clean a DataFrame from pytesseract.image_to_data output.

    Doxygen:
    - @param data: Dict returned by `pytesseract.image_to_data(..., output_type=Output.DICT)`.
    - @return: Word rows only (non-negative confidence, non-empty text).
    """
    df = pd.DataFrame(data)
    if df.empty:
        return df
    df['conf'] = pd.to_numeric(df['conf'], errors='coerce').fillna(-1)
    df = df[df['conf'] >= 0].copy()
    df['text'] = df['text'].fillna('').astype(str).str.strip()
    df = df[df['text'] != '']
    return df


def words_to_text(df: pd.DataFrame) -> str:
    """Reassemble recognized words into lines, with a blank line between paragraphs.

    Doxygen:
    - @param df: DataFrame produced by `build_dataframe_from_tesseract`.
    - @return: Text in engine reading order.
    """
    if df.empty:
        return ""
    paragraphs: List[str] = []
    for _, par in df.groupby(['block_num', 'par_num'], sort=True):
        lines = []
        for _, line in par.groupby('line_num', sort=True):
            lines.append(' '.join(line.sort_values('left')['text'].tolist()))
        paragraphs.append('\n'.join(lines))
    return '\n\n'.join(paragraphs)


def _rgb(image: PixelBuffer):
    return image.pixels[..., :3]


class TesseractRecognizer(Recognizer):
    """Recognizer running the local Tesseract binary through pytesseract."""

    def __init__(self, config: str = TESSERACT_CONFIG, timeout: float = 0) -> None:
        self.config = config
        self.timeout = timeout
        self.languages: Optional[str] = None

    def load(self, languages: str, on_progress: Optional[SubProgress] = None) -> None:
        try:
            installed = set(pytesseract.get_languages(config=''))
        except pytesseract.TesseractNotFoundError as exc:
            raise ModelLoadError("Tesseract is not installed or not on PATH.") from exc
        except (pytesseract.TesseractError, OSError) as exc:
            raise ModelLoadError(f"Could not query installed Tesseract languages: {exc}") from exc
        requested = [lang for lang in languages.split('+') if lang]
        missing = [lang for lang in requested if lang not in installed]
        if not requested or missing:
            raise ModelLoadError(
                f"Language data not installed for: {', '.join(missing) or languages!r}. "
                "Install the matching traineddata files or choose another language."
            )
        self.languages = '+'.join(requested)
        if on_progress is not None:
            on_progress(1.0, "Language models loaded")

    def recognize(self, image: PixelBuffer, on_progress: Optional[SubProgress] = None) -> RecognitionOutput:
        if not self.languages:
            raise RecognitionError("Recognition requested before any language was loaded.")
        if on_progress is not None:
            on_progress(0.0, "Recognizing text")
        try:
            data = pytesseract.image_to_data(
                _rgb(image),
                lang=self.languages,
                config=self.config,
                timeout=self.timeout,
                output_type=pytesseract.Output.DICT,
            )
        except RuntimeError as exc:
            # pytesseract signals its own timeout with a bare RuntimeError
            raise RecognitionError(f"Text recognition timed out: {exc}") from exc
        except (pytesseract.TesseractError, OSError) as exc:
            raise RecognitionError(f"Text recognition failed: {exc}") from exc
        df = build_dataframe_from_tesseract(data)
        confidence = normalize_confidence(float(df['conf'].mean())) if not df.empty else None
        if on_progress is not None:
            on_progress(1.0, "Recognition finished")
        return RecognitionOutput(text=words_to_text(df).strip(), confidence=confidence)


class TesseractScriptDetector:
    """Script detection via Tesseract OSD; raises `ClassificationError` on bad output."""

    def __init__(self, config: str = OSD_CONFIG, timeout: float = 30) -> None:
        self.config = config
        self.timeout = timeout

    def __call__(self, image: PixelBuffer) -> str:
        try:
            osd = pytesseract.image_to_osd(
                _rgb(image),
                config=self.config,
                timeout=self.timeout,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, RuntimeError, OSError) as exc:
            raise ClassificationError(f"OSD failed: {exc}") from exc
        logger.debug("[OSD] Tesseract OSD data: %s", osd)
        script = osd.get("script") if isinstance(osd, dict) else None
        if not isinstance(script, str) or not script.strip():
            raise ClassificationError(f"OSD returned no script: {osd!r}")
        return script.strip()
