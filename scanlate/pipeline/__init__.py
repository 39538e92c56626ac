"""High-level pipeline orchestration: decode -> condition -> route -> recognize."""

from .extractors import OcrTextExtractor, TextExtractor, VisionTextExtractor
from .process import OcrPipeline, PipelineResult, extract_text
from .progress import (
    CHECKPOINTS,
    ProgressEvent,
    ProgressObserver,
    ProgressReporter,
    Stage,
    print_progress_bar,
)

__all__ = [
    "OcrTextExtractor",
    "TextExtractor",
    "VisionTextExtractor",
    "OcrPipeline",
    "PipelineResult",
    "extract_text",
    "CHECKPOINTS",
    "ProgressEvent",
    "ProgressObserver",
    "ProgressReporter",
    "Stage",
    "print_progress_bar",
]
