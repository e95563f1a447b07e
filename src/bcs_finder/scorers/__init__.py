"""Scorer exports and strategy selection."""

from __future__ import annotations

from typing import Optional

from ..classifiers import YOLOClassifierBackend
from ..config import BCSSettings, get_settings
from ..features import FeatureClassifier
from .base import BCSScorer, normalize_images
from .local import FixedJitter, LocalHeuristicScorer, RandomJitter
from .remote import RemoteVisionScorer

METHODS = ("local", "remote")


def build_scorer(method: str, settings: Optional[BCSSettings] = None) -> BCSScorer:
    """Create the scorer for ``method`` ("local" or "remote")."""

    settings = settings or get_settings()
    if method == "local":
        backend = YOLOClassifierBackend(
            model_name=settings.bcs_classifier_model,
            device=settings.bcs_classifier_device,
        )
        return LocalHeuristicScorer(
            FeatureClassifier(backend),
            max_image_edge=settings.bcs_max_image_edge,
        )
    if method == "remote":
        return RemoteVisionScorer(settings=settings)
    raise ValueError(f"Unknown scoring method {method!r}; expected one of {METHODS}")


__all__ = [
    "BCSScorer",
    "FixedJitter",
    "LocalHeuristicScorer",
    "METHODS",
    "RandomJitter",
    "RemoteVisionScorer",
    "build_scorer",
    "normalize_images",
]
