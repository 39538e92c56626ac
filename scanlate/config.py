import json
import logging
import os
from typing import Optional

import pytesseract

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
DEPENDENCIES_PATH = os.path.join(PROJECT_ROOT, "config", "dependencies.json")


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def configure_dependencies(deps_path: str = DEPENDENCIES_PATH) -> Optional[str]:
    """Point pytesseract at the Tesseract binary named in config/dependencies.json.

    Returns the absolute executable path that was applied, or None when the
    system default is kept.
    """
    if not os.path.exists(deps_path):
        logger.debug("dependencies.json not found at %s; using Tesseract from PATH", deps_path)
        return None

    try:
        with open(deps_path, "r", encoding="utf-8") as deps_file:
            deps = json.load(deps_file) or {}
    except (OSError, ValueError) as exc:
        logger.warning("Could not load dependencies from %s: %s", deps_path, exc)
        return None

    tess_rel = deps.get("tesseract_path")
    if not tess_rel:
        return None
    tess_abs = _resolve_path(os.path.dirname(os.path.dirname(deps_path)), tess_rel)
    if not os.path.exists(tess_abs):
        logger.warning("Tesseract path from config does not exist: %s", tess_abs)
        return None
    pytesseract.pytesseract.tesseract_cmd = tess_abs
    return tess_abs
