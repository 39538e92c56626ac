"""Translation through the generative text model."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from openai import OpenAI

from scanlate.languages import language_name

from .client import chat_completion
from .language_detector import guess_source_language
from .prompts import get_prompt

logger = logging.getLogger(__name__)

TRANSLATION_TEMPERATURE = 0.3


@dataclass
class TranslationResult:
    translated_text: str
    source_language: str
    target_language: str


def translate_text(
    client: OpenAI,
    model: str,
    text: str,
    target_language: str,
    source_language: str = "auto",
    timeout: float | None = 120.0,
) -> TranslationResult:
    """Translate ``text`` into ``target_language``.

    Doxygen:
    - @param client: OpenAI instance to use for requests.
    - @param model: Text model id.
    - @param text: Source text; empty text is returned as-is without a request.
    - @param target_language: Catalogue code, e.g. ``"hi"``.
    - @param source_language: Catalogue code or ``"auto"``.
    - @param timeout: Request timeout in seconds.
    - @return: TranslationResult with the resolved source code.
    - @throws ServiceError: If the request fails.
    """
    if not text or not text.strip():
        return TranslationResult("", source_language, target_language)

    if source_language == "auto":
        source_code = guess_source_language(text) or "en"
        source_name = language_name(source_code) or "the source language"
    else:
        source_code = source_language
        source_name = language_name(source_language) or source_language
    target_name = language_name(target_language) or target_language

    prompt = get_prompt(
        "translate",
        source_language=source_name,
        target_language=target_name,
        source_text=text,
    )
    logger.info("Translating %d characters %s -> %s", len(text), source_code, target_language)
    out = chat_completion(
        client,
        model,
        messages=[{"role": "user", "content": prompt}],
        timeout=timeout,
        temperature=TRANSLATION_TEMPERATURE,
    )
    return TranslationResult(out.strip(), source_code, target_language)
