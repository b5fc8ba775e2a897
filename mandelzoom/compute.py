"""
Escape-time and coloring kernels using Numba JIT compilation.

This module contains the performance-critical functions executed once
per animation frame:
- Single-point escape time for z² + c
- Whole-grid escape time, row-parallel (prange) or strictly sequential
- Color scalar modulation of an iteration grid into RGBA floats

The parallel and sequential grid kernels share the same per-cell
arithmetic, so their results are bit-identical. Neither is compiled
with fastmath, which would allow Numba to reorder floating point
operations inside a cell.
"""

import numpy as np
from numba import jit, prange


ESCAPE_RADIUS_SQ = 4.0  # |z| >= 2 escapes, tested on the squared norm

# Fixed channel weights of the color modulation
RED_WEIGHT = 2.4
GREEN_WEIGHT = 2.0
BLUE_WEIGHT = 3.0
MIN_SCALAR = 0.05
COUNT_DIVISOR = 100.0


@jit(nopython=True, cache=True)
def escape_time(c_re, c_im, max_iter):
    """
    Iterate z <- z² + c from z = 0 and return the escape count.

    Args:
        c_re, c_im: Real and imaginary parts of c
        max_iter: Iteration cap; a point reaching it is inside the set

    Returns:
        Number of iterations performed, in [0, max_iter]
    """
    zr = 0.0
    zi = 0.0
    count = 0
    while count < max_iter and zr * zr + zi * zi < ESCAPE_RADIUS_SQ:
        # Same operation order as complex multiplication z*z + c
        new_zr = zr * zr - zi * zi + c_re
        zi = zr * zi + zi * zr + c_im
        zr = new_zr
        count += 1
    return count


@jit(nopython=True, cache=True)
def _fill_row(out, row, re_min, im_min, re_scale, im_scale, max_iter):
    """Compute one grid row in place. Writes only out[row, :]."""
    c_im = row / im_scale + im_min
    for col in range(out.shape[1]):
        c_re = col / re_scale + re_min
        out[row, col] = escape_time(c_re, c_im, max_iter)


@jit(nopython=True, parallel=True, cache=True)
def compute_grid_parallel(re_min, im_min, re_scale, im_scale, max_iter, out):
    """
    Compute the iteration grid with rows distributed over Numba threads.

    Each prange iteration owns exactly one row of `out`, so no
    synchronization is needed until the implicit join at loop exit.

    Args:
        re_min, im_min: Plane coordinates of pixel (0, 0)
        re_scale, im_scale: Pixels per plane unit on each axis
        max_iter: Iteration cap
        out: 2D integer array (rows x cols), overwritten in place
    """
    for row in prange(out.shape[0]):
        _fill_row(out, row, re_min, im_min, re_scale, im_scale, max_iter)


@jit(nopython=True, cache=True)
def compute_grid_sequential(re_min, im_min, re_scale, im_scale, max_iter, out):
    """Row-major single-threaded version of compute_grid_parallel."""
    for row in range(out.shape[0]):
        _fill_row(out, row, re_min, im_min, re_scale, im_scale, max_iter)


@jit(nopython=True, cache=True)
def modulation_factor(scalar):
    """Color scalar clamped from below at MIN_SCALAR."""
    if scalar > MIN_SCALAR:
        return scalar
    return MIN_SCALAR


@jit(nopython=True, parallel=True, cache=True)
def apply_color_scalar(grid, max_iter, scalar, out):
    """
    Convert an iteration grid into RGBA floats.

    Saturated cells are opaque black. Other cells are scaled by
    count / 100 * max(scalar, 0.05) with fixed per-channel weights.
    Values are not clamped.

    Args:
        grid: 2D integer array of iteration counts
        max_iter: Iteration cap (saturation value)
        scalar: Current color animation scalar
        out: Float array of shape grid.shape + (4,), modified in place
    """
    factor = modulation_factor(scalar)
    height, width = grid.shape
    for py in prange(height):
        for px in range(width):
            count = grid[py, px]
            out[py, px, 3] = 1.0
            if count == max_iter:
                out[py, px, 0] = 0.0
                out[py, px, 1] = 0.0
                out[py, px, 2] = 0.0
            else:
                modulation = count / COUNT_DIVISOR * factor
                out[py, px, 0] = modulation * RED_WEIGHT
                out[py, px, 1] = modulation * GREEN_WEIGHT
                out[py, px, 2] = modulation * BLUE_WEIGHT


def warmup_jit():
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first frame.
    """
    grid = np.zeros((4, 4), dtype=np.int32)
    compute_grid_parallel(-2.0, -1.0, 1.0, 1.0, 10, grid)
    compute_grid_sequential(-2.0, -1.0, 1.0, 1.0, 10, grid)
    colors = np.empty((4, 4, 4), dtype=np.float64)
    apply_color_scalar(grid, 10, 2.0, colors)
