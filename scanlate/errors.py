"""Error taxonomy shared by the extraction pipeline and its collaborators.

Every fatal error carries a human-readable message suitable for showing to
the user as-is. `ClassificationError` is the only member that never reaches
a caller: script detection is best-effort and falls back to Latin.
"""

from __future__ import annotations


class ScanlateError(Exception):
    """Base class for all errors raised by this package."""


class PipelineError(ScanlateError):
    """Fatal error that moves a pipeline run into the FAILED state."""


class DecodeError(PipelineError):
    """Input bytes are not a supported raster image or have zero size."""


class ClassificationError(ScanlateError):
    """Script detection collaborator failed or returned garbage."""


class ModelLoadError(PipelineError):
    """Recognition engine could not initialize the requested language set."""


class RecognitionError(PipelineError):
    """Recognition engine was ready but failed to produce text."""


class PipelineCancelled(PipelineError):
    """The caller tore down the run while a collaborator call was in flight."""


class ServiceError(ScanlateError):
    """Generative text/vision service request failed."""


__all__ = [
    "ScanlateError",
    "PipelineError",
    "DecodeError",
    "ClassificationError",
    "ModelLoadError",
    "RecognitionError",
    "PipelineCancelled",
    "ServiceError",
]
