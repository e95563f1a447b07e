"""Tests for encoded image validation and decoding."""

from __future__ import annotations

import base64

import numpy as np
import pytest

from bcs_finder.errors import DecodeError, ValidationError
from bcs_finder.image_utils import EncodedImage, decode, downscale, ensure_color, ensure_encoded_image

from . import image_factory as factory


def test_data_uri_round_trip_keeps_mime_and_bytes():
    image = factory.encode_png(factory.create_blank_image(8, 8))
    parsed = EncodedImage.from_data_uri(image.data_uri)

    assert parsed == image
    assert parsed.data_uri.startswith("data:image/png;base64,")


@pytest.mark.parametrize(
    "uri",
    [
        "not-a-data-uri",
        "data:text/plain;base64,aGVsbG8=",
        "data:image/png,rawbytes",
        "data:image/png;base64,@@@not-base64@@@",
    ],
)
def test_malformed_data_uris_are_validation_errors(uri):
    with pytest.raises(ValidationError):
        ensure_encoded_image(uri)


@pytest.mark.parametrize("value", [None, "", 42, b"\x89PNG", np.zeros((2, 4, 3), dtype=np.uint8)])
def test_missing_or_wrong_type_inputs_are_rejected(value):
    with pytest.raises(ValidationError):
        ensure_encoded_image(value)


def test_unsupported_mime_type_is_rejected():
    payload = base64.b64encode(b"BM....").decode()
    with pytest.raises(ValidationError, match="image/bmp"):
        ensure_encoded_image(f"data:image/bmp;base64,{payload}")


def test_empty_payload_is_rejected():
    with pytest.raises(ValidationError):
        ensure_encoded_image(EncodedImage(mime_type="image/png", data=b""))


def test_decode_returns_read_only_rgb_grid():
    source = factory.create_blank_image(40, 30, color=(10, 20, 30))
    grid = decode(factory.encode_png(source))

    assert grid.shape == (30, 40, 3)
    assert grid.dtype == np.uint8
    assert not grid.flags.writeable
    # OpenCV encodes BGR, the decoded grid is RGB
    assert grid[0, 0].tolist() == [30, 20, 10]


def test_decode_accepts_data_uri_strings():
    uri = factory.encode_jpeg(factory.create_uniform_gray_image(32)).data_uri
    assert decode(uri).shape == (32, 32, 3)


def test_decode_downscales_to_max_edge():
    grid = decode(factory.encode_png(factory.create_blank_image(400, 100)), max_edge=200)
    assert grid.shape == (50, 200, 3)


def test_corrupt_image_raises_decode_error():
    with pytest.raises(DecodeError):
        decode(EncodedImage(mime_type="image/jpeg", data=b"definitely not an image"))


def test_from_path_infers_mime_type(tmp_path):
    path = tmp_path / "side.png"
    path.write_bytes(factory.encode_png(factory.create_blank_image(4, 4)).data)

    image = EncodedImage.from_path(path)
    assert image.mime_type == "image/png"
    assert decode(image).shape == (4, 4, 3)


def test_from_path_missing_file(tmp_path):
    with pytest.raises(ValidationError):
        EncodedImage.from_path(tmp_path / "missing.jpg")


def test_downscale_leaves_small_images_untouched():
    image = factory.create_blank_image(64, 32)
    assert downscale(image, 1024) is image


def test_ensure_color_expands_grayscale():
    gray = np.zeros((5, 6), dtype=np.uint8)
    assert ensure_color(gray).shape == (5, 6, 3)
