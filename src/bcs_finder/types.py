"""Common types used throughout the scoring pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np

# Height x width x channels intensity array (uint8 0-255 or float 0-1).
PixelGrid = np.ndarray

MIN_BCS = 1
MAX_BCS = 9


@dataclass(frozen=True)
class BodyMeasurements:
    """Geometric proxies derived from an edge map."""

    waist_ratio: float
    edge_strength: float
    height: int
    width: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "waistRatio": self.waist_ratio,
            "edgeStrength": self.edge_strength,
            "height": self.height,
            "width": self.width,
        }


@dataclass(frozen=True)
class ClassificationLabel:
    """A single label returned by an image classifier."""

    class_name: str
    probability: float

    def to_dict(self) -> Dict[str, Any]:
        return {"className": self.class_name, "probability": self.probability}


@dataclass(frozen=True)
class FeatureSet:
    """Classifier output condensed to what the scorer needs."""

    is_dog_detected: bool
    top_labels: Tuple[ClassificationLabel, ...]
    dog_confidence: float


@dataclass(frozen=True)
class AnalysisBreakdown:
    """Sub-scores on a 0-1 scale."""

    waist_definition: float
    body_shape: float
    overall_condition: float


@dataclass(frozen=True)
class PredictionAnalysis(AnalysisBreakdown):
    """Breakdown plus what the image content looked like."""

    is_dog_detected: bool = False
    detected_objects: Tuple[ClassificationLabel, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "waistDefinition": self.waist_definition,
            "bodyShape": self.body_shape,
            "overallCondition": self.overall_condition,
            "isDogDetected": self.is_dog_detected,
            "detectedObjects": [label.to_dict() for label in self.detected_objects],
        }


@dataclass(frozen=True)
class PredictionResult:
    """Output contract shared by every scoring strategy."""

    bcs_score: int
    confidence: float
    analysis: PredictionAnalysis
    recommendations: Tuple[str, ...]
    measurements: Optional[BodyMeasurements] = None
    reasoning: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.bcs_score, bool) or not isinstance(self.bcs_score, int):
            raise ValueError(f"bcs_score must be an integer, got {self.bcs_score!r}")
        if not MIN_BCS <= self.bcs_score <= MAX_BCS:
            raise ValueError(f"bcs_score must be within [{MIN_BCS}, {MAX_BCS}], got {self.bcs_score}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        if not self.recommendations:
            raise ValueError("recommendations must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase structure consumed by presentation code."""

        payload: Dict[str, Any] = {
            "bcsScore": self.bcs_score,
            "confidence": self.confidence,
            "analysis": self.analysis.to_dict(),
            "recommendations": list(self.recommendations),
        }
        if self.measurements is not None:
            payload["measurements"] = self.measurements.to_dict()
        if self.reasoning is not None:
            payload["reasoning"] = self.reasoning
        return payload
