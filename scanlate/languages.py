"""Catalogue of languages offered for source/target selection."""

from __future__ import annotations

from typing import List, NamedTuple, Optional


class Language(NamedTuple):
    code: str
    name: str
    native_name: str
    region: Optional[str] = None


LANGUAGES: List[Language] = [
    # Indian languages
    Language("hi", "Hindi", "हिन्दी", "India"),
    Language("ta", "Tamil", "தமிழ்", "India"),
    Language("te", "Telugu", "తెలుగు", "India"),
    Language("kn", "Kannada", "ಕನ್ನಡ", "India"),
    Language("ml", "Malayalam", "മലയാളം", "India"),
    Language("mr", "Marathi", "मराठी", "India"),
    Language("bn", "Bengali", "বাংলা", "India"),
    Language("gu", "Gujarati", "ગુજરાતી", "India"),
    Language("pa", "Punjabi", "ਪੰਜਾਬੀ", "India"),
    Language("ur", "Urdu", "اردو", "India"),
    Language("or", "Odia", "ଓଡ଼ିଆ", "India"),
    Language("as", "Assamese", "অসমীয়া", "India"),
    Language("sa", "Sanskrit", "संस्कृतम्", "India"),
    # Global languages
    Language("en", "English", "English", "Global"),
    Language("es", "Spanish", "Español", "Global"),
    Language("fr", "French", "Français", "Global"),
    Language("de", "German", "Deutsch", "Europe"),
    Language("zh", "Chinese", "中文", "Asia"),
    Language("ja", "Japanese", "日本語", "Asia"),
    Language("ko", "Korean", "한국어", "Asia"),
    Language("ar", "Arabic", "العربية", "Middle East"),
    Language("ru", "Russian", "Русский", "Global"),
    Language("pt", "Portuguese", "Português", "Global"),
    Language("it", "Italian", "Italiano", "Europe"),
    Language("nl", "Dutch", "Nederlands", "Europe"),
    Language("tr", "Turkish", "Türkçe", "Middle East"),
    Language("pl", "Polish", "Polski", "Europe"),
    Language("vi", "Vietnamese", "Tiếng Việt", "Asia"),
    Language("th", "Thai", "ไทย", "Asia"),
    Language("id", "Indonesian", "Bahasa Indonesia", "Asia"),
    Language("ms", "Malay", "Bahasa Melayu", "Asia"),
    Language("sw", "Swahili", "Kiswahili", "Africa"),
]

# Recognition packs shipped with the product
OCR_LANGUAGES = [
    "eng", "hin", "tam", "tel", "kan", "mal", "mar", "ben", "guj", "pan", "ori", "asm",
    "spa", "fra", "deu", "chi_sim", "jpn", "kor", "ara", "rus", "por", "ita",
]


def get_language_by_code(code: str | None) -> Optional[Language]:
    if not code:
        return None
    code = code.strip().lower()
    for lang in LANGUAGES:
        if lang.code == code:
            return lang
    return None


def get_languages_by_region(region: str) -> List[Language]:
    return [lang for lang in LANGUAGES if lang.region == region]


def search_languages(query: str) -> List[Language]:
    q = (query or "").lower()
    return [
        lang for lang in LANGUAGES
        if q in lang.name.lower() or q in lang.native_name.lower() or q in lang.code.lower()
    ]


def language_name(code: str | None) -> str | None:
    """English name for ``code``, or None when it is not in the catalogue."""
    lang = get_language_by_code(code)
    return lang.name if lang else None


def missing_ocr_languages(pack: str | None) -> List[str]:
    """Entries of a ``+``-joined recognition pack that are not in `OCR_LANGUAGES`."""
    return [code for code in (pack or "").split("+") if code and code not in OCR_LANGUAGES]
