"""Static routing tables: script -> recognition packs, text -> language code.

Both lookups are total. An unknown script resolves to the English pack and
text without any recognised characters resolves to ``"en"``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple

DEFAULT_SCRIPT = "Latin"
DEFAULT_LANGUAGES: Tuple[str, ...] = ("eng",)
DEFAULT_LANGUAGE_CODE = "en"


@dataclass(frozen=True)
class LanguageSpec:
    """Ordered recognition packs requested for one script."""

    script: str
    languages: Tuple[str, ...]

    @property
    def pack(self) -> str:
        """Identifier understood by the recognition engine, e.g. ``hin+mar+san``."""
        return "+".join(self.languages)


SCRIPT_LANGUAGES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Devanagari": ("hin", "mar", "san"),
    "Tamil": ("tam",),
    "Telugu": ("tel",),
    "Kannada": ("kan",),
    "Malayalam": ("mal",),
    "Bengali": ("ben",),
    "Gujarati": ("guj",),
    "Gurmukhi": ("pan",),
    "Arabic": ("ara", "urd"),
    "Oriya": ("ori",),
    "Latin": ("eng", "spa", "fra", "deu", "ita", "por"),
    "Han": ("chi_sim", "chi_tra"),
    "Hiragana": ("jpn",),
    "Hangul": ("kor",),
    "Cyrillic": ("rus",),
    # Names Tesseract OSD reports for the same writing systems
    "Katakana": ("jpn",),
    "Japanese": ("jpn",),
    "Korean": ("kor",),
})


def languages_for_script(script: str | None) -> LanguageSpec:
    """Map a script label to its recognition packs.

    Doxygen:
    - @param script: Script label such as ``"Devanagari"``; may be None.
    - @return: LanguageSpec; ``eng`` alone for labels not in the table.
    """
    label = (script or "").strip()
    languages = SCRIPT_LANGUAGES.get(label, DEFAULT_LANGUAGES)
    return LanguageSpec(script=label or DEFAULT_SCRIPT, languages=languages)


# Checked top to bottom; the first hit wins.
TEXT_LANGUAGE_RULES: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("hi", re.compile(r"[\u0900-\u097F]")),  # Devanagari
    ("ta", re.compile(r"[\u0B80-\u0BFF]")),
    ("te", re.compile(r"[\u0C00-\u0C7F]")),
    ("kn", re.compile(r"[\u0C80-\u0CFF]")),
    ("ml", re.compile(r"[\u0D00-\u0D7F]")),
    ("gu", re.compile(r"[\u0A80-\u0AFF]")),
    ("bn", re.compile(r"[\u0980-\u09FF]")),
    ("pa", re.compile(r"[\u0A00-\u0A7F]")),  # Gurmukhi
    ("or", re.compile(r"[\u0B00-\u0B7F]")),
    ("ar", re.compile(r"[\u0600-\u06FF]")),
    ("zh", re.compile(r"[\u4E00-\u9FFF]")),
    ("ja", re.compile(r"[\u3040-\u309F\u30A0-\u30FF]")),
    ("ko", re.compile(r"[\uAC00-\uD7AF]")),
    ("th", re.compile(r"[\u0E00-\u0E7F]")),
    ("ru", re.compile(r"[\u0400-\u04FF]")),
    # Latin-script diacritics, most specific first
    ("es", re.compile("[áéíóúñ¿¡]", re.IGNORECASE)),
    ("fr", re.compile("[àâçéèêëîïôûùüÿœæ]", re.IGNORECASE)),
    ("de", re.compile("[äöüß]", re.IGNORECASE)),
    ("it", re.compile("[àèéìíîòóùú]", re.IGNORECASE)),
    ("pt", re.compile("[ãõçâêôáéíóú]", re.IGNORECASE)),
)


def detect_language_code(text: str | None) -> str:
    """Guess a UI language code from the characters present in ``text``.

    Empty or whitespace-only input gives ``"en"``. Mixed-script text resolves
    to whichever rule appears first in `TEXT_LANGUAGE_RULES`.
    """
    if not text or not text.strip():
        return DEFAULT_LANGUAGE_CODE
    for code, pattern in TEXT_LANGUAGE_RULES:
        if pattern.search(text):
            return code
    return DEFAULT_LANGUAGE_CODE
