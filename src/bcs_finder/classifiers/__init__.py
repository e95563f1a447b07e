"""Classifier backend exports."""

from .base import ClassifierBackend
from .yolo import YOLOClassifierBackend

__all__ = [
    "ClassifierBackend",
    "YOLOClassifierBackend",
]
