"""On-device heuristic scorer built on edge measurements and a classifier."""

from __future__ import annotations

import asyncio
import logging
import math
import random
from typing import Callable, Optional

from ..contours import ContourAnalyzer
from ..features import FeatureClassifier
from ..image_utils import DEFAULT_MAX_EDGE, EncodedImage, decode
from ..recommendations import recommendations_for
from ..types import (
    MAX_BCS,
    MIN_BCS,
    BodyMeasurements,
    FeatureSet,
    PixelGrid,
    PredictionAnalysis,
    PredictionResult,
)
from .base import BCSScorer, ImagesInput, normalize_images

logger = logging.getLogger(__name__)

# Returns -1, 0 or +1 each time it is called.
JitterSource = Callable[[], int]

WAIST_WEIGHT = 0.6
SHAPE_WEIGHT = 0.4

BASE_CONFIDENCE = 0.5
DOG_CONFIDENCE_BONUS = 0.3
EDGE_CONFIDENCE_BONUS = 0.1
EDGE_CONFIDENCE_RANGE = (0.1, 0.3)
MAX_CONFIDENCE = 0.85


class RandomJitter:
    """Uniform draw from {-1, 0, +1}."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def __call__(self) -> int:
        return self._rng.choice((-1, 0, 1))


class FixedJitter:
    def __init__(self, value: int = 0) -> None:
        self.value = value

    def __call__(self) -> int:
        return self.value


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _clamp_bcs(score: int) -> int:
    return int(max(MIN_BCS, min(MAX_BCS, score)))


def score_waist(waist_ratio: float) -> float:
    """Lower ratio means a more defined waist and a thinner dog."""

    return _clamp(waist_ratio)


def score_shape(edge_strength: float) -> float:
    """Strong edges read as visible ribs and bones, pushing the score down."""

    return _clamp(1.0 - edge_strength * 2.0)


def bias_toward_ideal(score: int) -> int:
    """Pull extreme scores one step toward the 4-6 range.

    Scores below 4 never end under 3 and scores above 6 never end over 7,
    so heuristic output is confined to [3, 7].
    """

    if score < 4:
        return max(3, score + 1)
    if score > 6:
        return min(7, score - 1)
    return score


class LocalHeuristicScorer(BCSScorer):
    """Scores a single side-view photo without any network access.

    This is a demonstration heuristic, not a trained model: it never reports
    more than 85% confidence.
    """

    method = "local"

    def __init__(
        self,
        classifier: FeatureClassifier,
        analyzer: Optional[ContourAnalyzer] = None,
        jitter: Optional[JitterSource] = None,
        max_image_edge: int = DEFAULT_MAX_EDGE,
    ) -> None:
        self.classifier = classifier
        self.analyzer = analyzer or ContourAnalyzer()
        self.jitter = jitter or RandomJitter()
        self.max_image_edge = max_image_edge

    async def predict(self, images: ImagesInput) -> PredictionResult:
        encoded = normalize_images(images)
        if len(encoded) > 1:
            logger.debug("Local scorer uses the side view only; ignoring %d extra image(s)", len(encoded) - 1)
        return await asyncio.to_thread(self._predict_encoded, encoded[0])

    def _predict_encoded(self, image: EncodedImage) -> PredictionResult:
        return self.score_local(decode(image, max_edge=self.max_image_edge))

    def score_local(self, grid: PixelGrid) -> PredictionResult:
        """Score an already decoded pixel grid."""

        measurements = self.analyzer.analyze(grid)
        features = self.classifier.classify(grid)

        waist_score = score_waist(measurements.waist_ratio)
        shape_score = score_shape(measurements.edge_strength)
        overall_score = (waist_score + shape_score) / 2.0

        bcs_score = self.calculate_bcs(waist_score, shape_score)
        confidence = self.calculate_confidence(features, measurements)
        logger.info("Local BCS estimate %d (confidence %.2f)", bcs_score, confidence)

        return PredictionResult(
            bcs_score=bcs_score,
            confidence=confidence,
            analysis=PredictionAnalysis(
                waist_definition=waist_score,
                body_shape=shape_score,
                overall_condition=overall_score,
                is_dog_detected=features.is_dog_detected,
                detected_objects=features.top_labels,
            ),
            recommendations=recommendations_for(bcs_score),
            measurements=measurements,
        )

    def calculate_bcs(self, waist_score: float, shape_score: float) -> int:
        combined = waist_score * WAIST_WEIGHT + shape_score * SHAPE_WEIGHT
        raw_score = _clamp_bcs(math.floor(1 + combined * 8 + 0.5))
        jittered = _clamp_bcs(raw_score + self.jitter())
        return bias_toward_ideal(jittered)

    @staticmethod
    def calculate_confidence(features: FeatureSet, measurements: BodyMeasurements) -> float:
        confidence = BASE_CONFIDENCE
        if features.is_dog_detected:
            confidence += DOG_CONFIDENCE_BONUS
        low, high = EDGE_CONFIDENCE_RANGE
        if low < measurements.edge_strength < high:
            confidence += EDGE_CONFIDENCE_BONUS
        return min(MAX_CONFIDENCE, confidence)
