"""
Output accumulation buffer.

Keeps a running weighted average per pixel so the image can be read (for
progressive display) while later passes are still being added.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import numpy as np

from .vec3 import Color


class ArrayOutput:
    """Per-pixel weighted accumulator backed by numpy arrays."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._sum = np.zeros((height, width, 3), dtype=np.float64)
        self._weight = np.zeros((height, width), dtype=np.float64)

    def add_samples(self, x: int, y: int, colour: Color, weight: float) -> None:
        """Fold ``colour`` into pixel (x, y) with the given weight."""
        self._sum[y, x] += colour.to_array() * weight
        self._weight[y, x] += weight

    def weight(self, x: int, y: int) -> float:
        """Total weight accumulated at pixel (x, y)."""
        return float(self._weight[y, x])

    def pixel(self, x: int, y: int) -> Color:
        """Current average colour at pixel (x, y)."""
        weight = self._weight[y, x]
        if weight == 0:
            return Color(0, 0, 0)
        return Color.from_array(self._sum[y, x] / weight)

    def image(self) -> np.ndarray:
        """Return the averaged HDR image, shape (height, width, 3).

        Pixels that have received no weight are black.
        """
        weights = self._weight[:, :, np.newaxis]
        return np.divide(
            self._sum, weights,
            out=np.zeros_like(self._sum),
            where=weights != 0
        )

    def to_ldr(self, gamma: float = 2.2) -> np.ndarray:
        """Convert the current image to 8-bit with gamma correction."""
        corrected = np.power(np.clip(self.image(), 0, None), 1.0 / gamma)
        return np.clip(corrected * 255, 0, 255).astype(np.uint8)

    def save(self, filename: Union[str, Path], gamma: float = 2.2) -> None:
        """Save the current image as an 8-bit file (format from extension)."""
        from PIL import Image as PILImage

        PILImage.fromarray(self.to_ldr(gamma), 'RGB').save(str(filename))

    def __repr__(self) -> str:
        return f"ArrayOutput({self.width}x{self.height})"
