"""Base scorer definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence, Union

from ..errors import ValidationError
from ..image_utils import EncodedImage, ImageInput, ensure_encoded_image
from ..types import PredictionResult

ImagesInput = Union[ImageInput, Sequence[ImageInput]]

MAX_IMAGES = 2


def normalize_images(images: ImagesInput) -> List[EncodedImage]:
    """Validate one or two images (side view first, then top view)."""

    if isinstance(images, (list, tuple)):
        candidates = [image for image in images if image is not None]
    else:
        candidates = [images]

    if not candidates:
        raise ValidationError("No image provided.")
    if len(candidates) > MAX_IMAGES:
        raise ValidationError(f"At most {MAX_IMAGES} images are supported, got {len(candidates)}.")
    return [ensure_encoded_image(image) for image in candidates]


class BCSScorer(ABC):
    """A strategy that turns photos of a dog into a ``PredictionResult``."""

    method: str

    @abstractmethod
    async def predict(self, images: ImagesInput) -> PredictionResult:
        """Score one image or a (side, top) pair."""

    async def close(self) -> None:
        """Release backend resources; nothing to do by default."""
