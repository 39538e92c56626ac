"""Script classification and script/text routing tables."""

from .classifier import ScriptDetector, classify_script
from .router import (
    DEFAULT_LANGUAGE_CODE,
    DEFAULT_LANGUAGES,
    DEFAULT_SCRIPT,
    SCRIPT_LANGUAGES,
    TEXT_LANGUAGE_RULES,
    LanguageSpec,
    detect_language_code,
    languages_for_script,
)

__all__ = [
    "ScriptDetector",
    "classify_script",
    "DEFAULT_LANGUAGE_CODE",
    "DEFAULT_LANGUAGES",
    "DEFAULT_SCRIPT",
    "SCRIPT_LANGUAGES",
    "TEXT_LANGUAGE_RULES",
    "LanguageSpec",
    "detect_language_code",
    "languages_for_script",
]
