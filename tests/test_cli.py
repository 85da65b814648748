"""Tests for the command-line interface."""

import io
import json
import sys

import numpy as np
import pytest
from PIL import Image

from bayer_dither.cli import main


@pytest.fixture
def gray_png(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("RGB", (4, 4), (128, 128, 128)).save(str(path))
    return path


def _png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (2, 2), (128, 128, 128)).save(buf, format="PNG")
    return buf.getvalue()


class TestFileToFile:
    def test_grayscale(self, gray_png, tmp_path, capsys):
        out = tmp_path / "out.png"
        main(["-i", str(gray_png), "-o", str(out), "-m", "m2"])
        with Image.open(out) as img:
            arr = np.asarray(img)
            assert img.mode == "RGBA"
            assert img.size == (4, 4)
        assert np.all(arr == 255)
        assert "Saved to" in capsys.readouterr().err

    def test_color_light(self, gray_png, tmp_path):
        out = tmp_path / "out.png"
        main(["-i", str(gray_png), "-o", str(out), "-m", "M2", "-c", "-p", "Light"])
        with Image.open(out) as img:
            arr = np.asarray(img)
        assert np.all(arr[..., :3] == 128)
        assert np.all(arr[..., 3] == 255)

    def test_color_defaults_to_dark(self, gray_png, tmp_path):
        out = tmp_path / "out.png"
        main(["--input", str(gray_png), "--output", str(out), "--matrix-size", "m2", "--color"])
        with Image.open(out) as img:
            assert np.all(np.asarray(img)[..., 3] == 0)

    def test_json_result(self, gray_png, tmp_path, capsys):
        out = tmp_path / "out.png"
        main(["-i", str(gray_png), "-o", str(out), "-m", "m8", "--json"])
        result = json.loads(capsys.readouterr().out)
        assert result["status"] == "success"
        assert result["settings"] == {"matrix": "m8", "color": False, "preserve_order": None}
        assert result["metadata"]["width"] == 4


class TestStdio:
    def test_stdin_to_stdout(self, monkeypatch, capsysbinary):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(_png_bytes())))
        main(["-m", "m2"])
        data = capsysbinary.readouterr().out
        assert data.startswith(b"\x89PNG")
        with Image.open(io.BytesIO(data)) as img:
            assert img.size == (2, 2)
            assert img.mode == "RGBA"


class TestArguments:
    def test_matrix_required(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2

    def test_invalid_matrix(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-m", "m3"])
        assert exc.value.code == 2
        assert "Invalid Bayer Matrix option" in capsys.readouterr().err

    def test_invalid_preserve_order(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-m", "m4", "-c", "-p", "grey"])
        assert exc.value.code == 2
        assert "Invalid preserve order option" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "bayer-dither" in capsys.readouterr().out


class TestErrors:
    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-i", str(tmp_path / "missing.png"), "-o", str(tmp_path / "o.png"), "-m", "m4"])
        assert exc.value.code == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_missing_input_json(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["-i", str(tmp_path / "missing.png"), "-m", "m4", "--json"])
        err = json.loads(capsys.readouterr().err)
        assert err["status"] == "error"
        assert err["code"] == "FILE_NOT_FOUND"

    def test_undecodable_input_json(self, tmp_path, capsys):
        path = tmp_path / "bad.png"
        path.write_bytes(b"not an image")
        with pytest.raises(SystemExit):
            main(["-i", str(path), "-m", "m4", "--json"])
        assert json.loads(capsys.readouterr().err)["code"] == "DECODE_FAILED"

    def test_unsupported_output_json(self, gray_png, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-i", str(gray_png), "-o", str(tmp_path / "out.txt"), "-m", "m4", "--json"])
        assert exc.value.code == 1
        assert json.loads(capsys.readouterr().err)["code"] == "ENCODE_FAILED"
