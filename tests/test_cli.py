import numpy as np
import pytest

import main
from conftest import encode


def _image(tmp_path):
    path = tmp_path / "sign.png"
    path.write_bytes(encode(np.full((20, 20, 3), 255, dtype=np.uint8)))
    return str(path)


def test_list_languages_includes_recognition_packs(capsys):
    main._cli(["--list-languages"])
    out = capsys.readouterr().out
    assert "ta  Tamil (தமிழ்)" in out
    assert "Recognition packs: eng, hin, tam" in out


def test_missing_image_is_an_argument_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main._cli([])
    assert exc_info.value.code == 2


def test_bad_model_config_exits_with_message(tmp_path, monkeypatch, capsys):
    def broken_config():
        raise ValueError("'model_number_picked' is out of range for available models.")

    monkeypatch.setattr(main, "get_picked_model", broken_config)
    with pytest.raises(SystemExit) as exc_info:
        main._cli(["--image", _image(tmp_path), "--engine", "vision"])
    assert exc_info.value.code == 1
    assert "Could not read model configuration" in capsys.readouterr().out


def test_missing_model_config_exits_with_message(tmp_path, monkeypatch, capsys):
    def absent_config():
        raise FileNotFoundError(2, "No such file or directory", "config/models.json")

    monkeypatch.setattr(main, "get_picked_model", absent_config)
    with pytest.raises(SystemExit) as exc_info:
        main._cli(["--image", _image(tmp_path), "--target", "en"])
    assert exc_info.value.code == 1
