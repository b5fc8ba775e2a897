"""
Escape-time evaluation of the whole pixel grid for one viewport.
"""

import logging

import numba
import numpy as np

from .compute import compute_grid_parallel, compute_grid_sequential

logger = logging.getLogger(__name__)

GRID_DTYPE = np.int32

_KERNELS = {
    'parallel': compute_grid_parallel,
    'sequential': compute_grid_sequential,
}


class EscapeTimeEvaluator:
    """
    Computes the iteration-count grid of a viewport.

    The grid shape and iteration cap are fixed at construction. Each
    compute() call allocates a fresh grid, so a returned grid is never
    touched again by the evaluator.

    Usage:
        evaluator = EscapeTimeEvaluator(domain=400, range_=200, iterations=1200)
        grid = evaluator.compute(viewport)

    Attributes:
        domain: Grid width (columns)
        range: Grid height (rows)
        iterations: Iteration cap
        strategy: 'parallel' (rows spread over Numba threads) or 'sequential'
        workers: Thread bound for the parallel strategy (None = Numba default)
    """

    def __init__(self, domain, range_, iterations, strategy='parallel', workers=None):
        if strategy not in _KERNELS:
            raise ValueError(f"Unknown evaluation strategy: {strategy!r}")
        if domain < 1 or range_ < 1:
            raise ValueError(f"Grid shape must be positive, got {domain}x{range_}")
        self.domain = domain
        self.range = range_
        self.iterations = iterations
        self.strategy = strategy
        self.workers = workers
        self._kernel = _KERNELS[strategy]

    @classmethod
    def from_config(cls, config):
        return cls(config.domain, config.range, config.iterations,
                   strategy=config.strategy, workers=config.workers)

    @property
    def shape(self):
        return self.range, self.domain

    def compute(self, viewport):
        """
        Compute the iteration grid for the viewport.

        Reads re_min, im_min, re_scale and im_scale; never modifies
        the viewport. The kernel returns only after every row is done.

        Returns:
            (range, domain) int32 array with values in [0, iterations]
        """
        grid = np.empty(self.shape, dtype=GRID_DTYPE)
        if self.strategy == 'parallel' and self.workers is not None:
            # Bound the thread pool for this call only
            previous = numba.get_num_threads()
            numba.set_num_threads(min(self.workers, numba.config.NUMBA_NUM_THREADS))
            try:
                self._run(viewport, grid)
            finally:
                numba.set_num_threads(previous)
        else:
            self._run(viewport, grid)
        return grid

    def _run(self, viewport, grid):
        self._kernel(
            viewport.re_min, viewport.im_min,
            viewport.re_scale, viewport.im_scale,
            self.iterations, grid,
        )

    def __repr__(self):
        return f"EscapeTimeEvaluator({self.domain}x{self.range}, iterations={self.iterations}, strategy={self.strategy!r})"
