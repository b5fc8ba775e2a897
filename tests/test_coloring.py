import numpy as np
import pytest

from mandelzoom.coloring import BLACK, ColorMapper, to_rgb8


@pytest.fixture
def mapper():
    return ColorMapper(1200)


@pytest.mark.parametrize('scalar', [2.0, 0.5, 0.05, 0.0, -1.0])
def test_saturated_is_black(mapper, scalar):
    assert mapper.map(1200, scalar) == BLACK


@pytest.mark.parametrize('scalar', [2.0, 0.01])
def test_zero_count_is_black(mapper, scalar):
    assert mapper.map(0, scalar) == (0.0, 0.0, 0.0, 1.0)


def test_channel_weights(mapper):
    assert mapper.map(50, 1.0) == pytest.approx((1.2, 1.0, 1.5, 1.0))


def test_small_scalar_uses_floor(mapper):
    assert mapper.map(100, 0.01) == pytest.approx((0.12, 0.1, 0.15, 1.0))
    assert mapper.map(100, 0.05) == mapper.map(100, 0.01)


def test_values_are_not_clamped(mapper):
    red, green, blue, alpha = mapper.map(1000, 2.0)
    assert red == pytest.approx(48.0)
    assert blue == pytest.approx(60.0)
    assert alpha == 1.0


def test_map_grid_matches_map(mapper):
    grid = np.array([[0, 1, 7], [1200, 300, 1199]], dtype=np.int32)
    colors = mapper.map_grid(grid, 0.3)
    assert colors.shape == (2, 3, 4)
    for row in range(2):
        for col in range(3):
            assert tuple(colors[row, col]) == pytest.approx(mapper.map(int(grid[row, col]), 0.3))


def test_map_grid_rejects_wrong_rank(mapper):
    with pytest.raises(ValueError):
        mapper.map_grid(np.zeros(5, dtype=np.int32), 1.0)


def test_to_rgb8_clamps():
    colors = np.array([[[48.0, 0.5, -1.0, 1.0]]])
    rgb = to_rgb8(colors)
    assert rgb.dtype == np.uint8
    assert rgb.shape == (1, 1, 3)
    assert rgb[0, 0].tolist() == [255, 128, 0]


def test_map_grid_checks_configured_shape():
    mapper = ColorMapper(50, shape=(2, 3))
    assert mapper.map_grid(np.ones((2, 3), dtype=np.int32), 1.0).shape == (2, 3, 4)
    with pytest.raises(ValueError):
        mapper.map_grid(np.ones((3, 2), dtype=np.int32), 1.0)
