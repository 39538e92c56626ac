"""Prompt templates for the generative service.

Defaults live here; ``config/prompts.json`` may override any of them by key.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict

logger = logging.getLogger(__name__)

_ROOT_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
PROMPTS_PATH = os.path.join(_ROOT_DIR, "config", "prompts.json")

DEFAULT_PROMPTS: Dict[str, str] = {
    "vision_extract": (
        "Extract ALL text from this image exactly as it appears. Include:\n"
        "- Every word, number, symbol, and punctuation mark\n"
        "- Preserve the exact line breaks and formatting\n"
        "- Keep the original case (uppercase/lowercase)\n"
        "- Include any signs like @, #, $, %, &, *, +, =, etc.\n"
        "- Extract text in any language present\n\n"
        "Return ONLY the extracted text, nothing else. Do not add any explanations or commentary."
    ),
    "translate": (
        "Translate the following text from {source_language} to {target_language}.\n\n"
        "Important instructions:\n"
        "- Provide ONLY the translation, no explanations\n"
        "- Preserve all formatting, line breaks, and punctuation\n"
        "- Keep numbers, symbols, and special characters as they are\n"
        "- Maintain the original tone and meaning\n"
        "- Do not add any commentary or notes\n\n"
        "Text to translate:\n{source_text}\n\n"
        "Translation:"
    ),
    "detect_language": (
        "What language is this text written in? Reply with ONLY the ISO 639-1 language code "
        "(e.g., 'en' for English, 'hi' for Hindi, 'es' for Spanish, etc.). Do not include any other text.\n\n"
        "Text: {source_text}"
    ),
}


def load_prompts(path: str = PROMPTS_PATH) -> Dict[str, str]:
    prompts = dict(DEFAULT_PROMPTS)
    if not os.path.exists(path):
        return prompts
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not load prompts from %s, using defaults: %s", path, e)
        return prompts
    if isinstance(data, dict):
        prompts.update({str(k): v for k, v in data.items() if isinstance(v, str) and k in DEFAULT_PROMPTS})
    return prompts


def fill_prompt_template(tmpl: str, **values: str) -> str:
    """Safely fill a user-editable template that may contain braces in examples.

    All braces are escaped first, then only the placeholders given in
    ``values`` are restored before calling `str.format`, so literal examples
    like ``{id: number}`` inside a template do not raise KeyError.
    """
    safe = str(tmpl).replace("{", "{{").replace("}", "}}")
    for key in values.keys():
        safe = safe.replace("{{" + key + "}}", "{" + key + "}")
    return safe.format(**values)


def get_prompt(name: str, **values: str) -> str:
    return fill_prompt_template(load_prompts().get(name, DEFAULT_PROMPTS[name]), **values)
