"""Text extraction with the vision model of the generative service."""

from __future__ import annotations

import logging

from openai import OpenAI

from scanlate.image.buffer import PixelBuffer
from scanlate.image.decode import to_data_url

from .client import chat_completion
from .prompts import get_prompt

logger = logging.getLogger(__name__)


def extract_text_from_image(
    client: OpenAI,
    model: str,
    image: PixelBuffer,
    timeout: float | None = 180.0,
) -> str:
    """Send ``image`` as a PNG data URL and return the model's transcription.

    Doxygen:
    - @param client: OpenAI instance.
    - @param model: Vision-capable model id.
    - @param image: Decoded image buffer.
    - @param timeout: Request timeout in seconds.
    - @return: Extracted text, stripped.
    - @throws ServiceError: If the request fails.
    """
    messages = [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": get_prompt("vision_extract")},
                {"type": "image_url", "image_url": {"url": to_data_url(image)}},
            ],
        }
    ]
    logger.info("Sending %dx%d image to vision model %s", image.width, image.height, model)
    return chat_completion(client, model, messages=messages, timeout=timeout).strip()
