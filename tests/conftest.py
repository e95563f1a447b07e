"""Shared fixtures and test doubles."""

from __future__ import annotations

from typing import List, Sequence

import pytest

from bcs_finder.buffers import ScratchBuffers
from bcs_finder.classifiers import ClassifierBackend
from bcs_finder.config import get_settings
from bcs_finder.features import FeatureClassifier
from bcs_finder.types import ClassificationLabel


class FakeBackend(ClassifierBackend):
    """Returns canned labels and counts calls."""

    name = "fake"

    def __init__(self, labels: Sequence[ClassificationLabel]) -> None:
        self.labels = list(labels)
        self.calls = 0

    def top_k(self, grid, k: int) -> List[ClassificationLabel]:
        self.calls += 1
        return self.labels[:k]


class FailingBackend(ClassifierBackend):
    name = "failing"

    def top_k(self, grid, k: int) -> List[ClassificationLabel]:
        raise RuntimeError("model weights missing")


class CountingBuffers(ScratchBuffers):
    """Scratch buffers that report every scope they were used in."""

    scopes: List["CountingBuffers"] = []

    def __init__(self) -> None:
        super().__init__()
        self.released = False
        CountingBuffers.scopes.append(self)

    def release(self) -> None:
        super().release()
        self.released = True


DOG_LABELS = (
    ClassificationLabel("Labrador retriever dog", 0.72),
    ClassificationLabel("golden retriever", 0.18),
    ClassificationLabel("tennis ball", 0.05),
)

OTHER_LABELS = (
    ClassificationLabel("sofa", 0.6),
    ClassificationLabel("pillow", 0.3),
    ClassificationLabel("window shade", 0.1),
)


@pytest.fixture
def dog_classifier() -> FeatureClassifier:
    return FeatureClassifier(FakeBackend(DOG_LABELS))


@pytest.fixture
def no_dog_classifier() -> FeatureClassifier:
    return FeatureClassifier(FakeBackend(OTHER_LABELS))


@pytest.fixture
def counting_buffers():
    CountingBuffers.scopes = []
    yield CountingBuffers
    CountingBuffers.scopes = []


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
