"""Edge map and body-shape measurements from a pixel grid.

The measurements are coarse proxies, not a trained contour model:

* ``edge_strength`` is the mean Sobel gradient magnitude of the image and
  stands in for visible rib and bone definition.
* ``waist_ratio`` compares the weakest and the strongest row of edge energy
  inside the vertical middle band of the image. A pronounced waist shows up
  as a trough (ratio near 0); a body without a waist keeps a flat profile
  (ratio near 1).

Cost is linear in the pixel count, so callers are expected to downscale
large photos first (see ``image_utils.downscale``).
"""

from __future__ import annotations

import logging
from typing import Callable, Tuple

import cv2
import numpy as np

from .buffers import ScratchBuffers
from .errors import ValidationError
from .image_utils import pixel_scale
from .types import BodyMeasurements, PixelGrid

logger = logging.getLogger(__name__)

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float32)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float32)

# Rows [floor(0.3 * h), floor(0.7 * h)) form the mid-body band.
MID_BAND: Tuple[float, float] = (0.3, 0.7)
EPSILON = 1e-6


def mid_band(profile: np.ndarray, band: Tuple[float, float] = MID_BAND) -> np.ndarray:
    """Slice the middle band out of a row profile, or the whole profile if it is empty."""

    n = profile.shape[0]
    start = int(np.floor(n * band[0]))
    end = int(np.floor(n * band[1]))
    segment = profile[start:end]
    if segment.size == 0:
        return profile
    return segment


class ContourAnalyzer:
    """Derives waist ratio and edge strength from an image."""

    def __init__(
        self,
        band: Tuple[float, float] = MID_BAND,
        buffer_factory: Callable[[], ScratchBuffers] = ScratchBuffers,
    ) -> None:
        self.band = band
        self._buffer_factory = buffer_factory

    def analyze(self, grid: PixelGrid) -> BodyMeasurements:
        if grid.ndim not in (2, 3) or grid.shape[0] == 0 or grid.shape[1] == 0:
            raise ValidationError(f"Cannot analyze an image with shape {grid.shape}")

        h, w = grid.shape[:2]
        with self._buffer_factory() as buffers:
            intensity = self._intensity(grid, buffers)
            edges = self._edge_map(intensity, buffers)
            edge_strength = float(edges.mean())

            profile = buffers.empty(h, dtype=np.float64)
            np.sum(edges, axis=1, dtype=np.float64, out=profile)
            band = mid_band(profile, self.band)
            waist_ratio = float(band.min() / (band.max() + EPSILON))

        logger.debug(
            "Measured %sx%s image: waist_ratio=%.4f edge_strength=%.4f",
            w,
            h,
            waist_ratio,
            edge_strength,
        )
        return BodyMeasurements(
            waist_ratio=waist_ratio,
            edge_strength=edge_strength,
            height=int(h),
            width=int(w),
        )

    @staticmethod
    def _intensity(grid: PixelGrid, buffers: ScratchBuffers) -> np.ndarray:
        intensity = buffers.empty(grid.shape[:2], dtype=np.float32)
        if grid.ndim == 2:
            intensity[...] = grid
        else:
            np.mean(grid, axis=2, dtype=np.float32, out=intensity)
        scale = pixel_scale(grid)
        if scale != 1.0:
            intensity /= scale
        return intensity

    @staticmethod
    def _edge_map(intensity: np.ndarray, buffers: ScratchBuffers) -> np.ndarray:
        # filter2D correlates rather than convolves; the flipped kernel only
        # changes the sign, which the magnitude discards.
        grad_x = buffers.empty(intensity.shape, dtype=np.float32)
        grad_y = buffers.empty(intensity.shape, dtype=np.float32)
        grad_x = cv2.filter2D(intensity, cv2.CV_32F, SOBEL_X, dst=grad_x, borderType=cv2.BORDER_CONSTANT)
        grad_y = cv2.filter2D(intensity, cv2.CV_32F, SOBEL_Y, dst=grad_y, borderType=cv2.BORDER_CONSTANT)

        edges = buffers.empty(intensity.shape, dtype=np.float32)
        return cv2.magnitude(grad_x, grad_y, edges)
