"""Interchangeable text extractors selected by the caller.

`OcrTextExtractor` runs the local conditioning + recognition pipeline;
`VisionTextExtractor` hands the decoded image to a vision model. Which one
to use is the caller's decision, usually after a `check_availability`
probe; neither probes on its own.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from openai import OpenAI

from scanlate.errors import RecognitionError, ServiceError
from scanlate.image import decode_image
from scanlate.llm.vision import extract_text_from_image
from scanlate.ocr.engine import Recognizer
from scanlate.script import ScriptDetector

from .process import OcrPipeline, PipelineResult
from .progress import ProgressObserver, ProgressReporter, Stage

logger = logging.getLogger(__name__)


class TextExtractor(ABC):
    @abstractmethod
    def extract(
        self,
        image_bytes: bytes,
        language: Optional[str] = None,
        on_progress: Optional[ProgressObserver] = None,
    ) -> PipelineResult:
        raise NotImplementedError


class OcrTextExtractor(TextExtractor):
    def __init__(self, recognizer: Recognizer, script_detector: Optional[ScriptDetector] = None) -> None:
        self.recognizer = recognizer
        self.script_detector = script_detector

    def extract(
        self,
        image_bytes: bytes,
        language: Optional[str] = None,
        on_progress: Optional[ProgressObserver] = None,
    ) -> PipelineResult:
        pipeline = OcrPipeline(self.recognizer, script_detector=self.script_detector, on_progress=on_progress)
        return pipeline.run(image_bytes, language=language)


class VisionTextExtractor(TextExtractor):
    """Extraction through a vision model; ``language`` is ignored.

    The model reports no confidence, so results carry ``None``.
    """

    def __init__(self, client: OpenAI, model: str, timeout: float | None = 180.0) -> None:
        self.client = client
        self.model = model
        self.timeout = timeout

    def extract(
        self,
        image_bytes: bytes,
        language: Optional[str] = None,
        on_progress: Optional[ProgressObserver] = None,
    ) -> PipelineResult:
        reporter = ProgressReporter(on_progress)
        reporter.checkpoint(Stage.PREPROCESSING)
        # Validate and normalize the upload; the model gets the original resolution.
        buffer, _size = decode_image(image_bytes, upscale=False)
        reporter.checkpoint(Stage.RECOGNIZING)
        try:
            text = extract_text_from_image(self.client, self.model, buffer, timeout=self.timeout)
        except ServiceError as exc:
            raise RecognitionError(
                "Failed to extract text using the vision model. Make sure the service is running "
                f"and '{self.model}' is installed."
            ) from exc
        reporter.checkpoint(Stage.DONE)
        return PipelineResult(text=text, confidence=None, detected_script=None, languages=None)


__all__ = [
    "TextExtractor",
    "OcrTextExtractor",
    "VisionTextExtractor",
]
