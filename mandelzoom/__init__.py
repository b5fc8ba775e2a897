"""
Mandelbrot Zoom Package

A continuously zooming view of the Mandelbrot set, using Pygame for
display and Numba for JIT-compiled, row-parallel computation.

Quick Start:
    from mandelzoom import ZoomConfig, run
    run(ZoomConfig())

Or from command line:
    python -m mandelzoom

Package Structure:
    - config.py: Startup configuration and derived grid size
    - viewport.py: Per-frame viewport and color scalar recurrence
    - compute.py: JIT-compiled escape-time and coloring kernels
    - evaluator.py: Grid evaluation with parallel or sequential rows
    - coloring.py: Iteration count to RGBA mapping
    - renderer.py: Compute-then-advance frame driver
    - app.py: Window and event loop

Controls:
    - Space: Pause / resume
    - P: Print the current viewport state
    - ESC: Quit
"""

from .app import run, ZoomApp
from .coloring import ColorMapper
from .config import ConfigurationError, ZoomConfig
from .evaluator import EscapeTimeEvaluator
from .renderer import Frame, ZoomRenderer
from .viewport import Viewport

__version__ = "1.0.0"
__all__ = [
    "run",
    "ZoomApp",
    "ColorMapper",
    "ConfigurationError",
    "ZoomConfig",
    "EscapeTimeEvaluator",
    "Frame",
    "ZoomRenderer",
    "Viewport",
]
