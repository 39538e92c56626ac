"""Client utilities for the generative text/vision service.

The service is reached through an OpenAI-compatible endpoint; the default
configuration points at a local Ollama server (``/v1`` API).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from openai import OpenAI

from scanlate.errors import ServiceError

logger = logging.getLogger(__name__)

# Path to the JSON configuration file with models and keys
CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "config", "models.json")


@dataclass(frozen=True)
class ModelSelection:
    provider: str
    base_url: str
    vision_model: str
    text_model: str
    api_key: str


def _load_config(path: str = CONFIG_PATH) -> Dict:
    """Load and return the JSON configuration.

    Doxygen:
    - @param path: Absolute path to the JSON configuration file.
    - @return: Parsed configuration dictionary.
    - @throws FileNotFoundError: If the file is missing.
    - @throws json.JSONDecodeError: If the file content is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_picked_model(path: str = CONFIG_PATH) -> ModelSelection:
    """Return the selected service entry.

    The configuration file must contain the following structure:
    - model_number_picked: integer index into the "models" array
    - models: list of items with fields:
      - provider: string (e.g., "ollama")
      - base_url: OpenAI-compatible endpoint
      - vision_model: model used for text extraction from images
      - text_model: model used for translation and language detection
      - api_key: string (any non-empty value for Ollama)

    Doxygen:
    - @param path: Absolute path to the JSON configuration file.
    - @return: ModelSelection for the picked entry.
    - @throws ValueError: If index is invalid or fields are missing.
    """
    cfg = _load_config(path)
    models: List[Dict] = cfg.get("models", [])
    idx = cfg.get("model_number_picked")

    if not isinstance(idx, int) or isinstance(idx, bool):
        raise ValueError("Config must include integer 'model_number_picked'.")
    if idx < 0 or idx >= len(models):
        raise ValueError("'model_number_picked' is out of range for available models.")

    item = models[idx]
    required = ("base_url", "vision_model", "text_model", "api_key")
    missing = [key for key in required if not item.get(key)]
    if missing:
        raise ValueError(f"Selected model entry is missing: {', '.join(missing)}.")
    return ModelSelection(
        provider=str(item.get("provider", "openai")),
        base_url=str(item["base_url"]),
        vision_model=str(item["vision_model"]),
        text_model=str(item["text_model"]),
        api_key=str(item["api_key"]),
    )


def get_client(selection: ModelSelection) -> OpenAI:
    """Create an OpenAI client for the selected endpoint.

    Doxygen:
    - @param selection: Entry returned by `get_picked_model`.
    - @return: Configured `OpenAI` client instance.
    """
    return OpenAI(
        base_url=selection.base_url,
        api_key=selection.api_key,
    )


def chat_completion(
    client: OpenAI,
    model: str,
    messages: List[Dict[str, Any]],
    timeout: float | None = 60.0,
    temperature: float | None = None,
) -> str:
    """Send a chat completion request and return text content.

    Doxygen:
    - @param client: OpenAI instance created by `get_client`.
    - @param model: Target model identifier.
    - @param messages: List of role/content dictionaries for the chat.
    - @param timeout: Request timeout in seconds; None disables timeout.
    - @param temperature: Sampling temperature; None keeps the server default.
    - @return: Text content of the first completion choice.
    - @throws ServiceError: If the request fails or returns no content.
    """
    kwargs: Dict[str, Any] = {"model": model, "messages": messages, "timeout": timeout}
    if temperature is not None:
        kwargs["temperature"] = temperature
    try:
        completion = client.chat.completions.create(**kwargs)
    except Exception as e:
        raise ServiceError(f"Request to model '{model}' failed: {e}") from e
    if not completion.choices:
        raise ServiceError(f"Model '{model}' returned no choices.")
    content = completion.choices[0].message.content
    if content is None:
        raise ServiceError(f"Model '{model}' returned an empty message.")
    return content


def check_availability(client: OpenAI, timeout: float | None = 5.0) -> Tuple[bool, List[str]]:
    """Liveness probe: list the models the service exposes.

    Never raises; an unreachable service reports ``(False, [])``.
    """
    try:
        page = client.models.list(timeout=timeout)
        names = [m.id for m in page.data]
    except Exception as e:
        logger.warning("Generative service not available: %s", e)
        return False, []
    return True, names
