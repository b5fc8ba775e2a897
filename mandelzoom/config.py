"""
Startup configuration for the zoom animation.

Values come from, in increasing priority: the defaults below, the
packaged settings.json, an optional user JSON file, and explicit
overrides (usually command line flags). All values are fixed once the
frame loop starts.
"""

import json
import logging
import math
import os

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

STRATEGIES = ('parallel', 'sequential')

DEFAULTS = {
    # Arbitrary point on the set boundary which produces a pleasing zoom
    'anchor_re': 0.3602404434376143632361252444495453084826,
    'anchor_im': -0.641313061064803174860375015179302066579,
    'iterations': 1200,
    'graph_scale': 100.0,
    'radius_re': 2.0,
    'radius_im': 1.0,
    'strategy': 'parallel',
    'workers': None,
    'fps': 30,
    'max_frames': None,
}


class ConfigurationError(ValueError):
    """Raised for invalid startup configuration. Fatal before the frame loop."""


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: File to read. None reads the packaged settings.json, in
            which case a missing or broken file only logs a warning.

    Returns:
        Dictionary of settings (possibly empty)

    Raises:
        ConfigurationError if an explicitly given file cannot be read
    """
    explicit = path is not None
    path = path if explicit else SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            settings = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        if explicit:
            raise ConfigurationError(f"Could not load settings from {path}: {e}") from e
        logger.warning("Could not load settings.json: %s", e)
        return {}
    if not isinstance(settings, dict):
        if explicit:
            raise ConfigurationError(f"Settings file {path} must contain a JSON object")
        logger.warning("Ignoring settings.json: top level is not an object")
        return {}
    return settings


def _integer(name, value):
    """Convert a whole number to int, rejecting fractional values."""
    if isinstance(value, float) and not value.is_integer():
        raise ConfigurationError(f"{name} must be a whole number, got {value}")
    return int(value)


class ZoomConfig:
    """
    Immutable-by-convention configuration of one zoom run.

    Attributes:
        anchor_re, anchor_im: Zoom target in the complex plane
        iterations: Iteration cap (ITERATIONS)
        graph_scale: Pixels per plane unit of the initial view (GRAPH_SCALE)
        radius_re, radius_im: Half extents of the initial view around the anchor
        strategy: 'parallel' or 'sequential' grid evaluation
        workers: Upper bound on evaluator threads (None = all cores)
        fps: Frame clock rate of the window loop
        max_frames: Stop the window loop after this many frames (None = never)
    """

    def __init__(self, **values):
        unknown = set(values) - set(DEFAULTS)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        merged = dict(DEFAULTS)
        merged.update(values)
        try:
            self.anchor_re = float(merged['anchor_re'])
            self.anchor_im = float(merged['anchor_im'])
            self.iterations = _integer('iterations', merged['iterations'])
            self.graph_scale = float(merged['graph_scale'])
            self.radius_re = float(merged['radius_re'])
            self.radius_im = float(merged['radius_im'])
            self.strategy = str(merged['strategy'])
            self.workers = None if merged['workers'] is None else _integer('workers', merged['workers'])
            self.fps = _integer('fps', merged['fps'])
            self.max_frames = None if merged['max_frames'] is None else _integer('max_frames', merged['max_frames'])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e
        self.validate()

    @classmethod
    def from_settings(cls, path=None, **overrides):
        """
        Build a configuration from the packaged settings, an optional
        user file and keyword overrides. Overrides set to None are ignored.
        """
        values = {k: v for k, v in load_settings().items() if k in DEFAULTS}
        if path is not None:
            values.update(load_settings(path))
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def initial_bounds(self):
        """(re_min, re_max, im_min, im_max) of the first frame."""
        return (
            self.anchor_re - self.radius_re,
            self.anchor_re + self.radius_re,
            self.anchor_im - self.radius_im,
            self.anchor_im + self.radius_im,
        )

    @property
    def domain(self):
        """Grid width in pixels (DOMAIN)."""
        re_min, re_max, _, _ = self.initial_bounds
        return round(re_max * self.graph_scale) - round(re_min * self.graph_scale)

    @property
    def range(self):
        """Grid height in pixels (RANGE)."""
        _, _, im_min, im_max = self.initial_bounds
        return round(im_max * self.graph_scale) - round(im_min * self.graph_scale)

    @property
    def shape(self):
        """Grid shape as (rows, cols)."""
        return self.range, self.domain

    def validate(self):
        """Raise ConfigurationError if any value is out of range."""
        for name in ('anchor_re', 'anchor_im', 'graph_scale', 'radius_re', 'radius_im'):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite, got {getattr(self, name)}")
        if not self.graph_scale > 0:
            raise ConfigurationError(f"graph_scale must be positive, got {self.graph_scale}")
        if self.iterations < 1:
            raise ConfigurationError(f"iterations must be at least 1, got {self.iterations}")
        if not (self.radius_re > 0 and self.radius_im > 0):
            raise ConfigurationError("radius_re and radius_im must be positive")
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"strategy must be one of {', '.join(STRATEGIES)}, got {self.strategy!r}"
            )
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"workers must be positive, got {self.workers}")
        if self.fps < 1:
            raise ConfigurationError(f"fps must be positive, got {self.fps}")
        if self.max_frames is not None and self.max_frames < 0:
            raise ConfigurationError(f"max_frames must not be negative, got {self.max_frames}")
        # Derived sizes depend on the values checked above
        if not all(math.isfinite(bound * self.graph_scale) for bound in self.initial_bounds):
            raise ConfigurationError(
                f"graph_scale {self.graph_scale} is too large for the initial bounds"
            )
        if self.domain < 1 or self.range < 1:
            raise ConfigurationError(
                f"Derived grid {self.domain}x{self.range} is empty; increase graph_scale"
            )

    def to_dict(self):
        return {key: getattr(self, key) for key in DEFAULTS}

    def __repr__(self):
        return f"ZoomConfig({self.domain}x{self.range}, iterations={self.iterations}, strategy={self.strategy!r})"
