"""Helpers that generate synthetic images for scorer tests."""

from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np

from bcs_finder.image_utils import EncodedImage


Color = Tuple[int, int, int]


def create_blank_image(width: int = 200, height: int = 200, color: Color = (255, 255, 255)) -> np.ndarray:
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:] = color
    return image


def create_uniform_gray_image(size: int = 200) -> np.ndarray:
    """No interior edges at all; only the zero-padded border responds."""

    return create_blank_image(size, size, color=(128, 128, 128))


def create_thin_dog_image(width: int = 200, height: int = 200) -> np.ndarray:
    """Dense vertical stripes everywhere except a black band across the middle.

    Stripes two pixels wide give every column a strong horizontal gradient,
    and the rows inside the black band carry no edge energy, so the waist
    ratio collapses to zero while edge strength stays high.
    """

    image = np.zeros((height, width, 3), dtype=np.uint8)
    stripes = (np.arange(width) // 2) % 2 == 0
    image[:, stripes] = 255
    band_top = int(height * 0.45)
    band_bottom = int(height * 0.55)
    image[band_top:band_bottom] = 0
    return image


def create_waisted_scene(width: int = 200, height: int = 200, depth: float = 0.6) -> np.ndarray:
    """Striped body whose contrast dips smoothly around the middle rows.

    The dip is a Gaussian in the row index, so adjacent rows differ very
    little and almost all edge energy is horizontal gradient. The trough sits
    at half height with roughly ``1 - depth`` of the full-contrast energy.
    """

    rows = np.arange(height, dtype=np.float64)
    sigma = 0.1 * height
    amplitude = 1.0 - depth * np.exp(-(((rows - height / 2.0) / sigma) ** 2))
    stripes = ((np.arange(width) // 2) % 2 == 0).astype(np.float64)
    gray = np.round(255.0 * amplitude[:, None] * stripes[None, :]).astype(np.uint8)
    return np.repeat(gray[:, :, None], 3, axis=2)


def upscale_nearest(image: np.ndarray, factor: int = 2) -> np.ndarray:
    return np.repeat(np.repeat(image, factor, axis=0), factor, axis=1)


def encode_png(image: np.ndarray) -> EncodedImage:
    ok, buffer = cv2.imencode(".png", image)
    assert ok, "PNG encoding failed"
    return EncodedImage(mime_type="image/png", data=buffer.tobytes())


def encode_jpeg(image: np.ndarray) -> EncodedImage:
    ok, buffer = cv2.imencode(".jpg", image)
    assert ok, "JPEG encoding failed"
    return EncodedImage(mime_type="image/jpeg", data=buffer.tobytes())
