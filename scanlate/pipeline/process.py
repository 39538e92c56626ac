"""Extraction pipeline: decode -> condition -> classify -> route -> recognize.

`OcrPipeline.run` walks a linear state machine::

    IDLE -> PREPROCESSING -> [SCRIPT_DETECTION] -> LOADING_MODELS -> RECOGNIZING -> DONE

Script detection is skipped when the caller pins a language. Any fatal
error moves the pipeline to FAILED and is re-raised as a `PipelineError`
subclass; nothing is retried here.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from scanlate.errors import (
    ModelLoadError,
    PipelineCancelled,
    PipelineError,
    RecognitionError,
)
from scanlate.image import condition_image, decode_image
from scanlate.ocr.engine import Recognizer, normalize_confidence
from scanlate.script import ScriptDetector, classify_script, languages_for_script

from .progress import ProgressObserver, ProgressReporter, Stage

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    text: str
    confidence: Optional[float]
    detected_script: Optional[str] = None
    languages: Optional[str] = None


class OcrPipeline:
    """Single-run-at-a-time extraction pipeline.

    A caller session owns one instance and must not start a second `run`
    while one is in flight. `cancel` may be called from another thread.
    """

    def __init__(
        self,
        recognizer: Recognizer,
        script_detector: Optional[ScriptDetector] = None,
        on_progress: Optional[ProgressObserver] = None,
    ) -> None:
        self.recognizer = recognizer
        self.script_detector = script_detector
        self.on_progress = on_progress
        self.state = Stage.IDLE
        self.error: Optional[Exception] = None
        self._cancel = threading.Event()

    def cancel(self) -> None:
        self._cancel.set()

    def _check_cancelled(self) -> None:
        if self._cancel.is_set():
            raise PipelineCancelled("Text extraction was cancelled.")

    def _enter(self, reporter: ProgressReporter, stage: Stage) -> None:
        self.state = stage
        logger.info("Pipeline stage: %s", stage.value)
        reporter.checkpoint(stage)

    def run(self, image_bytes: bytes, language: Optional[str] = None) -> PipelineResult:
        """Extract text from ``image_bytes``.

        Doxygen:
        - @param image_bytes: Encoded image (PNG, JPEG, ...).
        - @param language: Pinned ``+``-joined recognition packs; None or empty
          runs script detection instead.
        - @return: PipelineResult with text, confidence in [0, 1] or None, and
          the detected script when detection ran.
        - @throws PipelineError: DecodeError, ModelLoadError, RecognitionError
          or PipelineCancelled; the state is FAILED afterwards.
        """
        self._cancel.clear()
        self.error = None
        self.state = Stage.IDLE
        reporter = ProgressReporter(self.on_progress)
        try:
            return self._run(reporter, image_bytes, language)
        except PipelineError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            # allocation or bounds failures while conditioning are terminal too
            self._fail(exc)
            raise

    def _fail(self, exc: Exception) -> None:
        self.state = Stage.FAILED
        self.error = exc
        logger.error("Text extraction failed: %s: %s", type(exc).__name__, exc)

    def _run(self, reporter: ProgressReporter, image_bytes: bytes, language: Optional[str]) -> PipelineResult:
        self._enter(reporter, Stage.PREPROCESSING)
        buffer, original_size = decode_image(image_bytes)
        logger.debug("Decoded %dx%d image, working at %dx%d",
                     original_size[0], original_size[1], buffer.width, buffer.height)
        conditioned = condition_image(buffer, in_place=True)

        detected_script: Optional[str] = None
        if language:
            languages = language
        else:
            detected_script = classify_script(
                conditioned,
                self.script_detector,
                on_checkpoint=lambda: self._enter(reporter, Stage.SCRIPT_DETECTION),
            )
            self._check_cancelled()
            languages = languages_for_script(detected_script).pack
            logger.info("Detected script: %s, using languages: %s", detected_script, languages)

        self._enter(reporter, Stage.LOADING_MODELS)
        try:
            self.recognizer.load(languages, on_progress=reporter.sub_progress)
        except ModelLoadError:
            raise
        except Exception as exc:
            raise ModelLoadError(f"Could not load recognition languages '{languages}': {exc}") from exc
        self._check_cancelled()

        self._enter(reporter, Stage.RECOGNIZING)
        try:
            output = self.recognizer.recognize(conditioned, on_progress=reporter.sub_progress)
        except RecognitionError:
            raise
        except Exception as exc:
            raise RecognitionError(f"Failed to extract text from image: {exc}") from exc
        self._check_cancelled()

        result = PipelineResult(
            text=(output.text or "").strip(),
            confidence=normalize_confidence(output.confidence, scale=1.0),
            detected_script=detected_script,
            languages=languages,
        )
        self._enter(reporter, Stage.DONE)
        return result


def extract_text(
    image_bytes: bytes,
    recognizer: Recognizer,
    language: Optional[str] = None,
    script_detector: Optional[ScriptDetector] = None,
    on_progress: Optional[ProgressObserver] = None,
) -> PipelineResult:
    """Convenience wrapper running a fresh `OcrPipeline` once."""
    pipeline = OcrPipeline(recognizer, script_detector=script_detector, on_progress=on_progress)
    return pipeline.run(image_bytes, language=language)
