"""Turns ranked classifier labels into the feature set used for scoring."""

from __future__ import annotations

import logging
from typing import Sequence

from .classifiers import ClassifierBackend
from .errors import ClassificationError
from .types import FeatureSet, PixelGrid

logger = logging.getLogger(__name__)

DOG_KEYWORDS = ("dog", "canine")


class FeatureClassifier:
    """Runs a classifier backend and decides whether the image shows a dog."""

    def __init__(
        self,
        backend: ClassifierBackend,
        top_k: int = 3,
        keywords: Sequence[str] = DOG_KEYWORDS,
    ) -> None:
        self.backend = backend
        self.top_k = top_k
        self.keywords = tuple(keyword.lower() for keyword in keywords)

    def classify(self, grid: PixelGrid) -> FeatureSet:
        """Return the top labels and dog detection for ``grid``."""

        try:
            labels = self.backend.top_k(grid, self.top_k)
        except ClassificationError:
            raise
        except Exception as exc:
            raise ClassificationError(f"Image classification failed: {exc}") from exc

        ranked = tuple(sorted(labels, key=lambda label: label.probability, reverse=True)[: self.top_k])
        is_dog = any(self.is_dog_label(label.class_name) for label in ranked)
        dog_confidence = ranked[0].probability if is_dog and ranked else 0.0

        logger.debug(
            "Classifier %s labels=%s dog=%s",
            self.backend.name,
            [label.class_name for label in ranked],
            is_dog,
        )
        return FeatureSet(is_dog_detected=is_dog, top_labels=ranked, dog_confidence=dog_confidence)

    def is_dog_label(self, class_name: str) -> bool:
        lowered = class_name.lower()
        return any(keyword in lowered for keyword in self.keywords)
