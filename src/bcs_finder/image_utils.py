"""Utility helpers for image payloads, decoding and preprocessing."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, ValidationError
from .types import PixelGrid

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
DEFAULT_MAX_EDGE = 1024

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[^;,]+);base64,(?P<payload>.+)$", re.DOTALL)


@dataclass(frozen=True)
class EncodedImage:
    """An encoded image as delivered by camera capture or file upload."""

    mime_type: str
    data: bytes

    @classmethod
    def from_data_uri(cls, uri: str) -> "EncodedImage":
        if not uri.startswith("data:image/"):
            raise ValidationError("Invalid image format. Expected a data:image/... URI.")
        match = _DATA_URI_RE.match(uri)
        if match is None:
            raise ValidationError("Invalid base64 image format.")
        try:
            data = base64.b64decode(match.group("payload"), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError("Image payload is not valid base64.") from exc
        return cls(mime_type=match.group("mime").lower(), data=data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "EncodedImage":
        path = Path(path)
        if not path.exists():
            raise ValidationError(f"Image path not found: {path}")
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(mime_type=mime_type or "application/octet-stream", data=path.read_bytes())

    @property
    def base64(self) -> str:
        return base64.standard_b64encode(self.data).decode("ascii")

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


ImageInput = Union[EncodedImage, str]


def ensure_encoded_image(image_input: ImageInput) -> EncodedImage:
    """Validate an image input and return it as an ``EncodedImage``."""

    if isinstance(image_input, EncodedImage):
        image = image_input
    elif isinstance(image_input, str):
        if not image_input:
            raise ValidationError("No image provided.")
        image = EncodedImage.from_data_uri(image_input)
    elif image_input is None:
        raise ValidationError("No image provided.")
    else:
        raise ValidationError(f"Unsupported image input type: {type(image_input).__name__}")

    if image.mime_type not in SUPPORTED_MIME_TYPES:
        raise ValidationError(f"Unsupported image type: {image.mime_type}")
    if not image.data:
        raise ValidationError("Image payload is empty.")
    return image


def decode(image_input: ImageInput, max_edge: int = DEFAULT_MAX_EDGE) -> PixelGrid:
    """Decode an encoded image into a read-only RGB ``uint8`` pixel grid."""

    encoded = ensure_encoded_image(image_input)
    try:
        with Image.open(io.BytesIO(encoded.data)) as img:
            img.load()
            grid = np.array(img.convert("RGB"), dtype=np.uint8)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise DecodeError("Could not load the image. Please try a different photo.") from exc

    logger.debug("Decoded %s image with shape %s", encoded.mime_type, grid.shape)
    grid = downscale(grid, max_edge)
    grid.setflags(write=False)
    return grid


def downscale(image: np.ndarray, max_edge: int) -> np.ndarray:
    """Shrink ``image`` so its long edge is at most ``max_edge`` pixels."""

    h, w = image.shape[:2]
    long_edge = max(h, w)
    if max_edge <= 0 or long_edge <= max_edge:
        return image
    scale = max_edge / float(long_edge)
    size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
    logger.debug("Downscaling image from %sx%s to %sx%s", w, h, size[0], size[1])
    return cv2.resize(image, size, interpolation=cv2.INTER_AREA)


def pixel_scale(grid: np.ndarray) -> float:
    """Full-scale intensity of ``grid``: 255 for integer or 0-255 float data, 1 for normalized floats."""

    if np.issubdtype(grid.dtype, np.integer):
        return 255.0
    if grid.size and float(np.max(grid)) > 1.0:
        return 255.0
    return 1.0


def ensure_color(image: np.ndarray) -> np.ndarray:
    """Ensure the ndarray is three-channel RGB."""

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image

