from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from langdetect import DetectorFactory, LangDetectException, detect_langs
from openai import OpenAI

from scanlate.errors import ServiceError
from scanlate.languages import LANGUAGES, get_language_by_code
from scanlate.script.router import DEFAULT_LANGUAGE_CODE, detect_language_code

from .client import chat_completion
from .prompts import get_prompt

DetectorFactory.seed = 0

logger = logging.getLogger(__name__)


def _normalize_texts(texts: Iterable[str]) -> str:
    chunks: List[str] = []
    total_len = 0
    for t in texts:
        if not t:
            continue
        s = str(t).strip()
        if not s:
            continue
        chunks.append(s)
        total_len += len(s)
        if total_len >= 4000:
            break
    return "\n".join(chunks)


def detect_source_language(texts: Iterable[str]) -> Tuple[str | None, float | None]:
    """Statistical language guess via langdetect; ``(None, None)`` when unsure."""
    sample = _normalize_texts(texts)
    if not sample:
        return None, None
    try:
        candidates = detect_langs(sample)
    except LangDetectException:
        return None, None
    if not candidates:
        return None, None
    best = max(candidates, key=lambda c: c.prob)
    # zh-cn / zh-tw collapse to the catalogue's single Chinese entry
    code = best.lang.split("-")[0]
    return code, float(best.prob)


def guess_source_language(text: str) -> str | None:
    """Pick a source language for translation prompts.

    Non-Latin scripts are decided by the Unicode table; plain Latin text is
    handed to langdetect, which tells English from other Latin languages
    without diacritics.
    """
    if not text or not text.strip():
        return None
    code = detect_language_code(text)
    if code != DEFAULT_LANGUAGE_CODE:
        return code
    detected, _prob = detect_source_language([text])
    return detected or DEFAULT_LANGUAGE_CODE


def detect_language_llm(client: OpenAI, model: str, text: str, timeout: float | None = 30.0) -> str:
    """Ask the text model for an ISO 639-1 code; fall back to the Unicode table."""
    if not text or not text.strip():
        return DEFAULT_LANGUAGE_CODE
    prompt = get_prompt("detect_language", source_text=text[:200])
    try:
        reply = chat_completion(client, model, messages=[{"role": "user", "content": prompt}], timeout=timeout)
    except ServiceError as e:
        logger.warning("LLM language detection failed, using script table: %s", e)
        return detect_language_code(text)
    code = reply.strip().strip("'\"`.").lower()[:2]
    if len(code) != 2 or not code.isalpha():
        logger.warning("LLM language detection returned %r, using script table", reply)
        return detect_language_code(text)
    return code


def normalize_and_validate_target_language(name: str) -> str:
    """Accept a catalogue code ("de") or English name ("German"); return the code."""
    if not name or not str(name).strip():
        raise ValueError(
            "Target language must be given as a language code or English name, e.g. 'de' or 'german'."
        )
    norm = str(name).strip().lower()
    lang = get_language_by_code(norm)
    if lang is not None:
        return lang.code
    for lang in LANGUAGES:
        if lang.name.lower() == norm:
            return lang.code
    allowed = ", ".join(sorted(lang.code for lang in LANGUAGES))
    raise ValueError(
        f"Unsupported target language: '{name}'. Allowed codes: {allowed}."
    )


__all__ = [
    "detect_source_language",
    "guess_source_language",
    "detect_language_llm",
    "normalize_and_validate_target_language",
]
