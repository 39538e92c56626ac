import pytesseract
import pytest

from scanlate.errors import ClassificationError, ModelLoadError, RecognitionError
from scanlate.image.buffer import PixelBuffer
from scanlate.ocr.engine import (
    TESSERACT_CONFIG,
    TesseractRecognizer,
    TesseractScriptDetector,
    build_dataframe_from_tesseract,
    normalize_confidence,
    words_to_text,
)


def _tesseract_data():
    return {
        'level': [1, 5, 5, 5, 5, 5],
        'block_num': [0, 1, 1, 1, 1, 2],
        'par_num': [0, 1, 1, 1, 1, 1],
        'line_num': [0, 1, 1, 2, 1, 1],
        'word_num': [0, 1, 2, 1, 3, 1],
        'left': [0, 10, 60, 10, 110, 10],
        'top': [0, 10, 10, 40, 10, 90],
        'width': [500, 40, 40, 40, 40, 40],
        'height': [500, 12, 12, 12, 12, 12],
        'conf': ['-1', '90', '80', '70', '60', '100'],
        'text': ['', 'Hello', 'big', 'second', 'world', 'Bye'],
    }


def test_build_dataframe_from_tesseract_filters_empty_and_non_words():
    data = {
        'block_num': [1, 1, 1],
        'par_num': [1, 1, 1],
        'line_num': [1, 1, 1],
        'left': [10, 30, 50],
        'conf': ['-1', '85', '95'],
        'text': [' ', 'Hello', ''],
    }
    df = build_dataframe_from_tesseract(data)
    # Only one valid row should remain ('Hello')
    assert len(df) == 1
    assert df.iloc[0]['text'] == 'Hello'


def test_words_to_text_orders_words_lines_and_paragraphs():
    df = build_dataframe_from_tesseract(_tesseract_data())
    assert words_to_text(df) == "Hello big world\nsecond\n\nBye"


def test_words_to_text_empty():
    assert words_to_text(build_dataframe_from_tesseract({'conf': [], 'text': []})) == ""


@pytest.mark.parametrize(
    "raw, expected",
    [(87.0, 0.87), ("95", 0.95), (0, 0.0), (150, 1.0), (-1, None), (None, None), ("n/a", None)],
)
def test_normalize_confidence(raw, expected):
    assert normalize_confidence(raw) == (pytest.approx(expected) if expected is not None else None)


def test_load_rejects_missing_language_packs(monkeypatch):
    monkeypatch.setattr(pytesseract, "get_languages", lambda config='': ['eng', 'osd'])
    recognizer = TesseractRecognizer()
    with pytest.raises(ModelLoadError, match="hin"):
        recognizer.load("hin+eng")


def test_load_reports_missing_binary(monkeypatch):
    def missing(config=''):
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "get_languages", missing)
    with pytest.raises(ModelLoadError):
        TesseractRecognizer().load("eng")


def test_recognize_returns_text_and_normalized_confidence(monkeypatch):
    monkeypatch.setattr(pytesseract, "get_languages", lambda config='': ['eng', 'spa'])
    calls = {}

    def fake_image_to_data(image, **kwargs):
        calls.update(kwargs)
        calls['shape'] = image.shape
        return _tesseract_data()

    monkeypatch.setattr(pytesseract, "image_to_data", fake_image_to_data)
    progress = []
    recognizer = TesseractRecognizer()
    recognizer.load("eng+spa", on_progress=lambda f, s=None: progress.append(f))
    out = recognizer.recognize(PixelBuffer.blank(20, 10), on_progress=lambda f, s=None: progress.append(f))

    assert out.text == "Hello big world\nsecond\n\nBye"
    assert out.confidence == pytest.approx(0.80)
    assert calls['lang'] == "eng+spa"
    assert calls['config'] == TESSERACT_CONFIG
    assert calls['shape'] == (10, 20, 3)
    assert progress == [1.0, 0.0, 1.0]


def test_recognize_wraps_engine_errors(monkeypatch):
    monkeypatch.setattr(pytesseract, "get_languages", lambda config='': ['eng'])

    def boom(image, **kwargs):
        raise pytesseract.TesseractError(1, "bad image")

    monkeypatch.setattr(pytesseract, "image_to_data", boom)
    recognizer = TesseractRecognizer()
    recognizer.load("eng")
    with pytest.raises(RecognitionError):
        recognizer.recognize(PixelBuffer.blank(5, 5))


def test_recognize_before_load_fails():
    with pytest.raises(RecognitionError):
        TesseractRecognizer().recognize(PixelBuffer.blank(5, 5))


def test_script_detector_reads_osd_script(monkeypatch):
    monkeypatch.setattr(pytesseract, "image_to_osd", lambda image, **kw: {'rotate': 0, 'script': 'Cyrillic'})
    assert TesseractScriptDetector()(PixelBuffer.blank(5, 5)) == "Cyrillic"


def test_script_detector_raises_classification_error(monkeypatch):
    monkeypatch.setattr(pytesseract, "image_to_osd", lambda image, **kw: {'rotate': 0})
    with pytest.raises(ClassificationError):
        TesseractScriptDetector()(PixelBuffer.blank(5, 5))

    def too_few_characters(image, **kw):
        raise pytesseract.TesseractError(1, "Too few characters. Skipping this page")

    monkeypatch.setattr(pytesseract, "image_to_osd", too_few_characters)
    with pytest.raises(ClassificationError):
        TesseractScriptDetector()(PixelBuffer.blank(5, 5))
