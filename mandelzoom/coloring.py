"""
Color mapping for the zoom animation.

Iteration counts are turned into RGBA floats by a single brightness
modulation: count / 100 scaled by the current color scalar (never
less than 0.05), with fixed channel weights giving a blue-violet tint.
Saturated points are black. Channels are deliberately not clamped;
to_rgb8() clamps for display.
"""

import numpy as np

from .compute import (
    BLUE_WEIGHT,
    COUNT_DIVISOR,
    GREEN_WEIGHT,
    MIN_SCALAR,
    RED_WEIGHT,
    apply_color_scalar,
)

BLACK = (0.0, 0.0, 0.0, 1.0)


class ColorMapper:
    """
    Maps iteration counts plus the color scalar to RGBA.

    Args:
        iterations: Iteration cap; counts equal to it are drawn black
        shape: Expected (rows, cols) of grids passed to map_grid, or None
            to accept any 2D grid
    """

    def __init__(self, iterations, shape=None):
        self.iterations = iterations
        self.shape = None if shape is None else tuple(shape)

    def map(self, count, scalar):
        """Return the RGBA tuple for one cell."""
        if count == self.iterations:
            return BLACK
        modulation = count / COUNT_DIVISOR * (scalar if scalar > MIN_SCALAR else MIN_SCALAR)
        return (modulation * RED_WEIGHT, modulation * GREEN_WEIGHT, modulation * BLUE_WEIGHT, 1.0)

    def map_grid(self, grid, scalar):
        """
        Color a whole iteration grid.

        Args:
            grid: 2D integer array of iteration counts
            scalar: Color scalar of the viewport that produced the grid

        Returns:
            Float64 array of shape grid.shape + (4,)
        """
        if grid.ndim != 2:
            raise ValueError(f"Expected a 2D iteration grid, got shape {grid.shape}")
        if self.shape is not None and grid.shape != self.shape:
            raise ValueError(f"Expected an iteration grid of shape {self.shape}, got {grid.shape}")
        out = np.empty(grid.shape + (4,), dtype=np.float64)
        apply_color_scalar(grid, self.iterations, float(scalar), out)
        return out


def to_rgb8(colors):
    """
    Convert an RGBA float buffer to a uint8 RGB image.

    Channels are clamped to [0, 1] before scaling to 0-255.
    The alpha channel is dropped.
    """
    rgb = np.clip(colors[..., :3], 0.0, 1.0)
    return (rgb * 255.0 + 0.5).astype(np.uint8)
