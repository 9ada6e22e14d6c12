import os

import numpy as np
import pytest
from PIL import Image

from colour_reduce.errors import DecodeError, EncodeError
from colour_reduce.image_io import format_for_path, load_image_rgb, save_image_rgb

from _images import gradient


def test_png_round_trip_keeps_pixels(tmp_path):
    rgb = gradient(9, 5)
    path = tmp_path / "g.png"

    save_image_rgb(path, rgb)
    loaded = load_image_rgb(path)

    assert loaded.shape == (5, 9, 3)
    assert np.array_equal(loaded, rgb)


def test_load_converts_to_rgb(tmp_path):
    path = tmp_path / "grey.png"
    Image.new("L", (4, 3), color=200).save(path)

    loaded = load_image_rgb(path)

    assert loaded.shape == (3, 4, 3)
    assert loaded.dtype == np.uint8
    assert np.all(loaded == 200)


def test_load_drops_alpha(tmp_path):
    path = tmp_path / "rgba.png"
    Image.new("RGBA", (2, 2), color=(255, 255, 255, 0)).save(path)

    loaded = load_image_rgb(path)

    assert loaded.shape == (2, 2, 3)
    # fully transparent pixels come out black
    assert np.all(loaded == 0)


def test_missing_file_is_decode_error(tmp_path):
    with pytest.raises(DecodeError) as info:
        load_image_rgb(tmp_path / "nope.png")
    assert info.value.stage == "decode"


def test_garbage_file_is_decode_error(tmp_path):
    path = tmp_path / "junk.png"
    path.write_bytes(b"definitely not an image")

    with pytest.raises(DecodeError):
        load_image_rgb(path)


def test_unknown_extension_is_encode_error(tmp_path):
    with pytest.raises(EncodeError):
        save_image_rgb(tmp_path / "out.nothing", gradient())
    with pytest.raises(EncodeError):
        format_for_path(tmp_path / "out")


def test_missing_folder_is_encode_error(tmp_path):
    target = tmp_path / "missing" / "out.png"
    with pytest.raises(EncodeError):
        save_image_rgb(target, gradient())
    assert not target.exists()


def test_failed_encode_leaves_no_files(tmp_path, monkeypatch):
    def broken_save(self, fp, format=None, **params):
        fp.write(b"partial")
        raise OSError("disk full")

    monkeypatch.setattr(Image.Image, "save", broken_save)

    with pytest.raises(EncodeError):
        save_image_rgb(tmp_path / "out.png", gradient())

    assert os.listdir(tmp_path) == []


@pytest.mark.parametrize("exc", [RuntimeError("encoder bug"), KeyboardInterrupt()])
def test_interrupted_encode_leaves_no_files(tmp_path, monkeypatch, exc):
    def broken_save(self, fp, format=None, **params):
        fp.write(b"partial")
        raise exc

    monkeypatch.setattr(Image.Image, "save", broken_save)

    with pytest.raises(type(exc)):
        save_image_rgb(tmp_path / "out.png", gradient())

    assert os.listdir(tmp_path) == []


def test_failed_encode_keeps_previous_output(tmp_path, monkeypatch):
    target = tmp_path / "out.png"
    target.write_bytes(b"previous")

    def broken_save(self, fp, format=None, **params):
        raise OSError("disk full")

    monkeypatch.setattr(Image.Image, "save", broken_save)

    with pytest.raises(EncodeError):
        save_image_rgb(target, gradient())

    assert target.read_bytes() == b"previous"
    assert os.listdir(tmp_path) == ["out.png"]


def test_jpeg_output(tmp_path):
    path = save_image_rgb(tmp_path / "out.jpg", gradient())
    with Image.open(path) as im:
        assert im.format == "JPEG"
        assert im.size == (16, 12)


def test_format_for_path():
    assert format_for_path("a.PNG") == "PNG"
    assert format_for_path("a.jpeg") == "JPEG"
