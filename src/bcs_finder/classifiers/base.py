"""Base classifier definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..types import ClassificationLabel, PixelGrid


class ClassifierBackend(ABC):
    """Abstract base class for an off-the-shelf image classifier."""

    name: str = "classifier"

    @abstractmethod
    def top_k(self, grid: PixelGrid, k: int) -> List[ClassificationLabel]:
        """Return up to ``k`` labels ordered by descending probability."""

    def _clip_probability(self, value: float) -> float:
        return float(max(0.0, min(1.0, value)))
