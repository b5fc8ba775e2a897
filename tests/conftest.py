import logging

import pytest

from mandelzoom.config import ZoomConfig
from mandelzoom.viewport import Viewport


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("mandelzoom")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def small_config():
    """40x20 grid around the default anchor."""
    return ZoomConfig(graph_scale=10.0, iterations=50)


@pytest.fixture
def unit_viewport():
    """[-2, 2] x [-1.5, 1.5] at 100 pixels per unit."""
    return Viewport(-2.0, 2.0, -1.5, 1.5, 100.0, 100.0)
