"""YOLO-based image classification backend."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

import cv2
import numpy as np

from ..errors import ClassificationError
from ..image_utils import ensure_color, pixel_scale
from ..lazy import LazyHandle
from ..types import ClassificationLabel, PixelGrid
from .base import ClassifierBackend

try:
    from ultralytics import YOLO
    YOLO_AVAILABLE = True
except ImportError:
    YOLO_AVAILABLE = False

logger = logging.getLogger(__name__)


class YOLOClassifierBackend(ClassifierBackend):
    """Ranks ImageNet labels with a pre-trained YOLO classification model."""

    name = "yolo-cls"

    def __init__(
        self,
        model_name: str = "yolov8n-cls.pt",
        device: str = "cpu",
        handle: Optional[LazyHandle] = None,
    ) -> None:
        """
        Initialize the backend without loading weights.

        Args:
            model_name: Ultralytics classification weights (yolov8n-cls.pt, yolov8s-cls.pt, etc.)
            device: Device to run inference on ('cpu' or 'cuda')
            handle: Shared load-once handle; a private one is created when omitted
        """
        self.model_name = model_name
        self.device = device
        self._model = handle if handle is not None else LazyHandle(self._load_model)
        # Ultralytics models are not safe to call from several threads at once.
        self._inference_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._model.is_loaded

    def top_k(self, grid: PixelGrid, k: int = 3) -> List[ClassificationLabel]:
        model = self._model.get()

        image = self._to_bgr(grid)
        try:
            with self._inference_lock:
                results = model(image, device=self.device, verbose=False)
        except Exception as exc:
            raise ClassificationError(f"Image classification failed: {exc}") from exc

        if not results or results[0].probs is None:
            raise ClassificationError("Image classifier returned no predictions.")

        result = results[0]
        probs = result.probs
        # top5 is already sorted by descending confidence
        indices = list(probs.top5)[:k]
        confidences = [float(conf) for conf in probs.top5conf][:k]
        return [
            ClassificationLabel(
                class_name=str(result.names[idx]).replace("_", " "),
                probability=self._clip_probability(conf),
            )
            for idx, conf in zip(indices, confidences)
        ]

    def _load_model(self):
        if not YOLO_AVAILABLE:
            raise ClassificationError(
                "ultralytics is not installed. Install it with: pip install ultralytics"
            )
        logger.info("Loading classification model %s", self.model_name)
        try:
            model = YOLO(self.model_name)
        except Exception as exc:
            raise ClassificationError(f"Failed to load classification model {self.model_name}: {exc}") from exc
        logger.info("Classification model loaded")
        return model

    @staticmethod
    def _to_bgr(grid: PixelGrid) -> np.ndarray:
        image = np.asarray(grid)
        if image.dtype != np.uint8:
            image = np.clip(image * (255.0 / pixel_scale(image)), 0, 255).astype(np.uint8)
        # Ultralytics treats numpy input as BGR like OpenCV.
        return cv2.cvtColor(np.ascontiguousarray(ensure_color(image)), cv2.COLOR_RGB2BGR)
