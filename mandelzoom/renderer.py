"""
Per-frame driver for the zoom animation.

ZoomRenderer ties the Viewport, EscapeTimeEvaluator and ColorMapper
together. Each unpaused frame computes the grid and colors from the
current viewport and only then advances the viewport for the next
frame, so a frame always reflects the state it was computed from.
"""

import logging
from collections import namedtuple

from .coloring import ColorMapper, to_rgb8
from .compute import warmup_jit
from .evaluator import EscapeTimeEvaluator
from .viewport import Viewport

logger = logging.getLogger(__name__)


class Frame(namedtuple('Frame', ['index', 'grid', 'colors'])):
    """One produced frame: iteration grid and RGBA color buffer."""

    __slots__ = ()

    def to_rgb8(self):
        return to_rgb8(self.colors)


class ZoomRenderer:
    """
    Produces one Frame per call to render_frame() until paused or frozen.

    Usage:
        renderer = ZoomRenderer(ZoomConfig())
        frame = renderer.render_frame()
        if frame is not None:
            display(frame.to_rgb8())

    Attributes:
        config: The ZoomConfig in use
        viewport: Viewport owned by this renderer
        evaluator: EscapeTimeEvaluator for the configured grid
        mapper: ColorMapper for the configured iteration cap
        frames_rendered: Number of frames produced so far
    """

    def __init__(self, config, viewport=None):
        config.validate()
        self.config = config
        self.viewport = viewport if viewport is not None else Viewport.from_config(config)
        self.evaluator = EscapeTimeEvaluator.from_config(config)
        self.mapper = ColorMapper(config.iterations, config.shape)
        self.frames_rendered = 0

    def warmup(self):
        """Compile the Numba kernels before the first real frame."""
        logger.debug("Compiling kernels (first run only)")
        warmup_jit()

    def render_frame(self):
        """
        Compute the next frame, then advance the viewport.

        Returns:
            Frame, or None while the viewport is paused or frozen
        """
        viewport = self.viewport
        if viewport.halted:
            return None
        grid = self.evaluator.compute(viewport)
        colors = self.mapper.map_grid(grid, viewport.scalar)
        frame = Frame(self.frames_rendered, grid, colors)
        self.frames_rendered += 1
        viewport.advance()
        return frame

    def toggle_pause(self):
        """Pause or resume the animation. Returns the new paused flag."""
        paused = self.viewport.toggle_pause()
        if self.viewport.frozen:
            logger.info("frozen at float64 resolution; no further frames")
        else:
            logger.info("paused" if paused else "playing")
        return paused

    def diagnostics(self):
        """Diagnostic dump of the current viewport."""
        return self.viewport.describe(self.config.graph_scale)
