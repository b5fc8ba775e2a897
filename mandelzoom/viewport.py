"""
Viewport state for the continuous zoom.

The Viewport holds the visible rectangle of the complex plane, the
pixel scale factors, and the color animation parameters. advance()
moves it forward by one frame with a deterministic recurrence that
shrinks the rectangle toward its center while keeping the pixel
mapping continuous.
"""

import logging
import math

import numpy as np

logger = logging.getLogger(__name__)

INITIAL_ZOOM = 0.10
ZOOM_DECAY = 0.95
INITIAL_SCALAR = 2.0
INITIAL_STEP_FACTOR = 0.01

# (threshold, step) pairs, loosest first; the last exceeded threshold wins
STEP_LADDER = (
    (0.000005, 0.000001),
    (0.00005, 0.00001),
    (0.0005, 0.0001),
    (0.01, 0.001),
    (0.23, 0.01),
)

DIAGNOSTIC_FIELDS = (
    're_min', 're_max', 'im_min', 'im_max',
    're_scale', 'im_scale', 'zoom', 'scalar', 'step_factor',
)


def select_step_factor(scalar, current):
    """Return the scalar decrement for the given scalar value."""
    step = current
    for threshold, candidate in STEP_LADDER:
        if scalar > threshold:
            step = candidate
    return step


class Viewport:
    """
    Mutable view of the complex plane, advanced once per frame.

    Pixel (row, col) maps to the plane point
    (col / re_scale + re_min, row / im_scale + im_min).

    Attributes:
        re_min, re_max, im_min, im_max: Visible rectangle
        re_scale, im_scale: Pixels per plane unit
        zoom: Real-axis shrink applied per side on the next advance
        scalar: Color animation driver, never increases
        step_factor: Current decrement of scalar
        paused: User pause flag
        frozen: Set when further zooming would lose float precision
        aspect_ratio: Height / width of the initial rectangle (fixed)
    """

    def __init__(self, re_min, re_max, im_min, im_max, re_scale, im_scale,
                 zoom=INITIAL_ZOOM, scalar=INITIAL_SCALAR,
                 step_factor=INITIAL_STEP_FACTOR, paused=False):
        if not (re_min < re_max and im_min < im_max):
            raise ValueError("Viewport rectangle must have positive width and height")
        if not (re_scale > 0 and im_scale > 0):
            raise ValueError("Viewport scales must be positive")
        self.re_min = float(re_min)
        self.re_max = float(re_max)
        self.im_min = float(im_min)
        self.im_max = float(im_max)
        self.re_scale = float(re_scale)
        self.im_scale = float(im_scale)
        self.zoom = float(zoom)
        self.scalar = float(scalar)
        self.step_factor = float(step_factor)
        self.paused = paused
        self.frozen = False
        self.aspect_ratio = (self.im_max - self.im_min) / (self.re_max - self.re_min)

    @classmethod
    def from_config(cls, config):
        """Create the first-frame viewport described by a ZoomConfig."""
        re_min, re_max, im_min, im_max = config.initial_bounds
        return cls(re_min, re_max, im_min, im_max,
                   config.graph_scale, config.graph_scale)

    @property
    def halted(self):
        """True when advance() and the renderer must do nothing."""
        return self.paused or self.frozen

    def toggle_pause(self):
        """Flip the pause flag and return the new value."""
        self.paused = not self.paused
        return self.paused

    def advance(self):
        """
        Move the viewport forward by one frame.

        Shrinks the rectangle by zoom on each real side (zoom scaled by
        the initial aspect ratio on the imaginary sides), rescales so
        the pixel mapping stays continuous, decays zoom, and steps the
        color scalar down. Does nothing while paused or frozen.
        """
        if self.halted:
            return

        re_zoom = self.zoom
        im_zoom = re_zoom * self.aspect_ratio

        re_width = self.re_max - self.re_min
        im_height = self.im_max - self.im_min
        re_scalar = re_width / (re_width - 2.0 * re_zoom)
        im_scalar = im_height / (im_height - 2.0 * im_zoom)

        re_min = self.re_min + re_zoom
        re_max = self.re_max - re_zoom
        im_min = self.im_min + im_zoom
        im_max = self.im_max - im_zoom
        re_scale = self.re_scale * re_scalar
        im_scale = self.im_scale * im_scalar

        if _degenerate(re_min, re_max, re_scale) or _degenerate(im_min, im_max, im_scale):
            self.frozen = True
            logger.warning(
                "Zoom reached float64 resolution at re_scale=%g, im_scale=%g; freezing viewport",
                self.re_scale, self.im_scale,
            )
            return

        self.re_min, self.re_max = re_min, re_max
        self.im_min, self.im_max = im_min, im_max
        self.re_scale, self.im_scale = re_scale, im_scale

        self.zoom *= ZOOM_DECAY

        self.step_factor = select_step_factor(self.scalar, self.step_factor)
        self.scalar -= self.step_factor

    def snapshot(self):
        """Read-only copy of the diagnostic fields as a dict."""
        return {name: getattr(self, name) for name in DIAGNOSTIC_FIELDS}

    def describe(self, graph_scale):
        """Format the diagnostic dump block."""
        lines = [">===---"]
        lines.extend(f"{name}={value}" for name, value in self.snapshot().items())
        lines.append(f"GRAPH_SCALE={graph_scale}")
        lines.append(">===---")
        return "\n".join(lines)

    def __repr__(self):
        return (f"Viewport(re=[{self.re_min!r}, {self.re_max!r}], "
                f"im=[{self.im_min!r}, {self.im_max!r}], zoom={self.zoom!r})")


def _degenerate(low, high, scale):
    """
    True when the interval is empty or non-finite, or when one pixel
    (1 / scale) is smaller than the float spacing at the interval ends,
    meaning neighbouring pixels would collapse onto the same value.
    """
    if not (math.isfinite(low) and math.isfinite(high) and math.isfinite(scale)):
        return True
    if not high > low or not scale > 0:
        return True
    return 1.0 / scale < np.spacing(max(abs(low), abs(high)))
