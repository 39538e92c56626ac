"""Best-effort script classification for conditioned images.

The actual detection is delegated to a collaborator (Tesseract OSD in
production). Any failure collapses to the default ``"Latin"`` label so that
a broken or missing detector only costs accuracy, never the whole run.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from scanlate.image.buffer import PixelBuffer

from .router import DEFAULT_SCRIPT

logger = logging.getLogger(__name__)

# Detector collaborator: conditioned image in, script label out.
ScriptDetector = Callable[[PixelBuffer], Optional[str]]


def classify_script(
    image: PixelBuffer,
    detector: Optional[ScriptDetector],
    on_checkpoint: Optional[Callable[[], None]] = None,
) -> str:
    """Return the script label reported by ``detector`` or the default.

    Doxygen:
    - @param image: Conditioned image.
    - @param detector: Callable returning a script label; None means unavailable.
    - @param on_checkpoint: Called once before the detector is invoked.
    - @return: Non-empty script label.
    """
    if on_checkpoint is not None:
        on_checkpoint()
    if detector is None:
        logger.warning("No script detector configured; defaulting to %s", DEFAULT_SCRIPT)
        return DEFAULT_SCRIPT
    try:
        label = detector(image)
    except Exception as exc:
        logger.warning("Script detection failed, defaulting to %s: %s: %s",
                       DEFAULT_SCRIPT, type(exc).__name__, exc)
        return DEFAULT_SCRIPT
    if not isinstance(label, str) or not label.strip():
        logger.warning("Script detector returned %r; defaulting to %s", label, DEFAULT_SCRIPT)
        return DEFAULT_SCRIPT
    return label.strip()
