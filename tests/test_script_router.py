import pytest

from scanlate.script.router import (
    SCRIPT_LANGUAGES,
    LanguageSpec,
    detect_language_code,
    languages_for_script,
)


def test_every_known_script_routes_to_non_empty_languages():
    for script in SCRIPT_LANGUAGES:
        spec = languages_for_script(script)
        assert isinstance(spec, LanguageSpec)
        assert spec.languages
        assert spec.pack == "+".join(spec.languages)


@pytest.mark.parametrize("label", ["Runic", "", None, "  "])
def test_unknown_script_falls_back_to_english(label):
    assert languages_for_script(label).languages == ("eng",)
    assert languages_for_script(label).pack == "eng"


def test_script_table_entries():
    assert languages_for_script("Latin").languages == ("eng", "spa", "fra", "deu", "ita", "por")
    assert languages_for_script("Devanagari").pack == "hin+mar+san"
    assert languages_for_script("Arabic").pack == "ara+urd"
    assert languages_for_script("Han").pack == "chi_sim+chi_tra"
    assert languages_for_script("Hiragana").pack == "jpn"
    assert languages_for_script("Hangul").pack == "kor"
    assert languages_for_script("Gurmukhi").pack == "pan"
    assert languages_for_script("Oriya").pack == "ori"


def test_script_table_is_read_only():
    with pytest.raises(TypeError):
        SCRIPT_LANGUAGES["Latin"] = ("eng",)


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_text_is_english(text):
    assert detect_language_code(text) == "en"


def test_devanagari_wins_over_latin():
    assert detect_language_code("नमस्ते hello") == "hi"


@pytest.mark.parametrize(
    "text, code",
    [
        ("வணக்கம்", "ta"),
        ("ನಮಸ್ಕಾರ", "kn"),
        ("ਸਤ ਸ੍ਰੀ ਅਕਾਲ", "pa"),
        ("مرحبا", "ar"),
        ("你好", "zh"),
        ("こんにちは", "ja"),
        ("カタカナ", "ja"),
        ("안녕하세요", "ko"),
        ("สวัสดี", "th"),
        ("Привет", "ru"),
        ("¿Qué tal, señor?", "es"),
        ("Ça va", "fr"),
        ("Straße", "de"),
        ("così", "it"),
        ("não", "pt"),
        ("hello world", "en"),
    ],
)
def test_detect_language_code(text, code):
    assert detect_language_code(text) == code


def test_mixed_non_latin_scripts_resolve_by_table_order():
    # Han is checked before Hangul and Cyrillic
    assert detect_language_code("Привет 你好 안녕") == "zh"
