"""
Entry point and compatibility facade for the image → text → translation flow.

This module exposes a stable API and a CLI suitable for PyInstaller builds.

Packages:
- scanlate.image: Decoding, upscaling and pixel conditioning
- scanlate.script: Script classification and routing tables
- scanlate.ocr: Tesseract recognition engine and script detector
- scanlate.pipeline: Orchestration (`OcrPipeline`, text extractors, progress)
- scanlate.llm: OpenAI-compatible client, vision extraction and translation
"""

from __future__ import annotations

import logging
import os
import sys

from scanlate.errors import PipelineError, ServiceError
from scanlate.image import condition_image, decode_image, encode_png
from scanlate.languages import LANGUAGES, OCR_LANGUAGES, get_language_by_code, missing_ocr_languages
from scanlate.llm import (
    check_availability,
    get_client,
    get_picked_model,
    normalize_and_validate_target_language,
    translate_text,
)
from scanlate.ocr import TesseractRecognizer, TesseractScriptDetector
from scanlate.pipeline import (
    OcrPipeline,
    OcrTextExtractor,
    PipelineResult,
    VisionTextExtractor,
    extract_text,
    print_progress_bar,
)
from scanlate.script import detect_language_code, languages_for_script

__all__ = [
    "condition_image",
    "decode_image",
    "encode_png",
    "detect_language_code",
    "languages_for_script",
    "OcrPipeline",
    "OcrTextExtractor",
    "VisionTextExtractor",
    "PipelineResult",
    "extract_text",
    "translate_text",
]

logger = logging.getLogger("scanlate")


def _setup_logging(log_level: str = "WARNING") -> None:
    if logger.handlers:
        return
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def _write_text(out_dir: str, name: str, text: str) -> None:
    try:
        with open(os.path.join(out_dir, name), "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        logger.warning("Failed to write %s: %s", name, e)


def _cli(argv: list[str] | None = None) -> None:
    """CLI for extracting and translating text from an image.

    --image / -i: Path to input image
    --lang: Pinned Tesseract languages, e.g. hin+mar (default: detect script)
    --engine: tesseract (local OCR) or vision (generative service)
    --target / -t: Translate extracted text into this language code
    --out / -o: Directory for original.txt / translated.txt
    --timeout: Per-request timeout seconds for the generative service (<=0: none)
    --log-level: Logging level (default: WARNING)
    --list-languages: Print the supported languages and exit
    """
    import argparse

    parser = argparse.ArgumentParser(description="Extract text from an image and optionally translate it.")
    parser.add_argument("--image", "-i", type=str, help="Path to input image")
    parser.add_argument("--lang", type=str, default=None, help="Tesseract languages, e.g. 'hin+mar' (default: detect script)")
    parser.add_argument("--engine", type=str, default="tesseract", choices=["tesseract", "vision"], help="Text extraction engine (default: tesseract)")
    parser.add_argument("--target", "-t", type=str, default=None, help="Target language code or English name for translation")
    parser.add_argument("--out", "-o", type=str, default=None, help="Directory to save original.txt and translated.txt")
    parser.add_argument("--timeout", type=float, default=120.0, help="Per-request timeout in seconds for the generative service (default: 120; 0 or negative for none)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--list-languages", action="store_true", help="List supported languages and exit")

    args = parser.parse_args(argv)
    _setup_logging(args.log_level)

    if args.list_languages:
        for lang in LANGUAGES:
            print(f"{lang.code:3} {lang.name} ({lang.native_name})")
        print(f"Recognition packs: {', '.join(OCR_LANGUAGES)}")
        return

    if not args.image:
        print("Please provide --image path to extract text from.")
        print("Examples:\n  python main.py --image sign.jpg\n  python main.py --image menu.png --target en --engine vision")
        raise SystemExit(2)

    target = None
    if args.target:
        try:
            target = normalize_and_validate_target_language(args.target)
        except ValueError as e:
            print(str(e))
            raise SystemExit(2)

    try:
        with open(args.image, "rb") as f:
            image_bytes = f.read()
    except OSError as e:
        print(f"Could not read image: {e}")
        raise SystemExit(2)

    missing = missing_ocr_languages(args.lang)
    if args.engine == "tesseract" and missing:
        logger.warning("Recognition packs not shipped with scanlate: %s", ", ".join(missing))

    timeout_value = None if args.timeout is not None and args.timeout <= 0 else args.timeout

    # The generative service is only needed for the vision engine or translation.
    client = selection = None
    if args.engine == "vision" or target:
        try:
            selection = get_picked_model()
            client = get_client(selection)
        except (OSError, ValueError) as e:
            print(f"Could not read model configuration: {e}")
            raise SystemExit(1)
        available, models = check_availability(client)
        if not available:
            print(f"Generative service at {selection.base_url} is not reachable.")
            raise SystemExit(1)
        logger.info("Service models: %s", ", ".join(models))

    if args.engine == "vision":
        extractor = VisionTextExtractor(client, selection.vision_model, timeout=timeout_value)
    else:
        from scanlate.config import configure_dependencies
        configure_dependencies()
        extractor = OcrTextExtractor(TesseractRecognizer(), TesseractScriptDetector())

    try:
        result = extractor.extract(image_bytes, language=args.lang, on_progress=print_progress_bar)
    except PipelineError as e:
        print()
        print(f"Error: {e}")
        raise SystemExit(1)

    source_code = detect_language_code(result.text)
    source = get_language_by_code(source_code)
    print(result.text)
    print("---")
    confidence = f"{result.confidence:.0%}" if result.confidence is not None else "unknown"
    print(f"Confidence: {confidence}")
    if result.detected_script:
        print(f"Detected script: {result.detected_script} (languages: {result.languages})")
    print(f"Detected language: {source.name if source else source_code}")

    translated_text = None
    if target:
        try:
            translation = translate_text(
                client, selection.text_model, result.text, target, timeout=timeout_value,
            )
        except ServiceError as e:
            print(f"Error: {e}")
            raise SystemExit(1)
        translated_text = translation.translated_text
        print("---")
        print(translated_text)

    if args.out:
        os.makedirs(args.out, exist_ok=True)
        _write_text(args.out, "original.txt", result.text)
        if translated_text is not None:
            _write_text(args.out, "translated.txt", translated_text)


if __name__ == "__main__":
    _cli()
