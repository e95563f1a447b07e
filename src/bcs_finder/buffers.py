"""Scoped numpy buffers for a single prediction call."""

from __future__ import annotations

from typing import List, Sequence, Union

import numpy as np

Shape = Union[int, Sequence[int]]


class ScratchBuffers:
    """Hands out intermediate arrays and drops them all when the scope ends.

    Use as a context manager; references are released on every exit path so
    repeated predictions on megapixel images do not pile up memory.
    """

    def __init__(self) -> None:
        self._buffers: List[np.ndarray] = []
        self.allocated = 0

    def empty(self, shape: Shape, dtype=np.float32) -> np.ndarray:
        buffer = np.empty(shape, dtype=dtype)
        self._buffers.append(buffer)
        self.allocated += 1
        return buffer

    @property
    def live(self) -> int:
        return len(self._buffers)

    def release(self) -> None:
        self._buffers.clear()

    def __enter__(self) -> "ScratchBuffers":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
