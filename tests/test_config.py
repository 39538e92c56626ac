import json

import pytesseract

from scanlate.config import configure_dependencies


def _write_deps(root, payload):
    config_dir = root / "config"
    config_dir.mkdir(exist_ok=True)
    path = config_dir / "dependencies.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_configure_dependencies_points_pytesseract_at_binary(tmp_path, monkeypatch):
    monkeypatch.setattr(pytesseract.pytesseract, "tesseract_cmd", "tesseract")
    binary = tmp_path / "bin" / "tesseract"
    binary.parent.mkdir()
    binary.write_bytes(b"")
    deps = _write_deps(tmp_path, {"tesseract_path": "bin/tesseract"})

    applied = configure_dependencies(str(deps))
    assert applied == str(binary)
    assert pytesseract.pytesseract.tesseract_cmd == str(binary)


def test_configure_dependencies_keeps_default_when_unset(tmp_path, monkeypatch):
    monkeypatch.setattr(pytesseract.pytesseract, "tesseract_cmd", "tesseract")
    assert configure_dependencies(str(tmp_path / "config" / "missing.json")) is None
    assert configure_dependencies(str(_write_deps(tmp_path, {"tesseract_path": ""}))) is None
    assert configure_dependencies(str(_write_deps(tmp_path, {"tesseract_path": "nope/tesseract"}))) is None
    assert pytesseract.pytesseract.tesseract_cmd == "tesseract"
