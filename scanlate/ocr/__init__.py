"""OCR collaborators built on top of pytesseract."""

from .engine import (
    TESSERACT_CONFIG,
    RecognitionOutput,
    Recognizer,
    TesseractRecognizer,
    TesseractScriptDetector,
    build_dataframe_from_tesseract,
    normalize_confidence,
    words_to_text,
)

__all__ = [
    "TESSERACT_CONFIG",
    "RecognitionOutput",
    "Recognizer",
    "TesseractRecognizer",
    "TesseractScriptDetector",
    "build_dataframe_from_tesseract",
    "normalize_confidence",
    "words_to_text",
]
