"""Generative service integration.

Helpers to reach an OpenAI-compatible endpoint (Ollama by default) for
vision-based text extraction, translation and language detection.
"""

from .client import (
    CONFIG_PATH,
    ModelSelection,
    chat_completion,
    check_availability,
    get_client,
    get_picked_model,
)
from .language_detector import (
    detect_language_llm,
    detect_source_language,
    guess_source_language,
    normalize_and_validate_target_language,
)
from .translate import TranslationResult, translate_text
from .vision import extract_text_from_image

__all__ = [
    "CONFIG_PATH",
    "ModelSelection",
    "chat_completion",
    "check_availability",
    "get_client",
    "get_picked_model",
    "detect_language_llm",
    "detect_source_language",
    "guess_source_language",
    "normalize_and_validate_target_language",
    "TranslationResult",
    "translate_text",
    "extract_text_from_image",
]
