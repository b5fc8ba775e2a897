import json

import pytest

from mandelzoom.config import ConfigurationError, ZoomConfig, load_settings


def test_defaults_derive_grid():
    config = ZoomConfig()
    assert config.domain == 400
    assert config.range == 200
    assert config.shape == (200, 400)
    assert config.iterations == 1200
    assert config.strategy == 'parallel'


def test_initial_bounds():
    config = ZoomConfig(anchor_re=0.0, anchor_im=0.0)
    assert config.initial_bounds == (-2.0, 2.0, -1.0, 1.0)


def test_smaller_scale():
    config = ZoomConfig(graph_scale=10.0)
    assert (config.domain, config.range) == (40, 20)


@pytest.mark.parametrize('values', [
    {'graph_scale': 0.0},
    {'graph_scale': -100.0},
    {'graph_scale': 0.1},
    {'iterations': 0},
    {'radius_re': 0.0},
    {'strategy': 'gpu'},
    {'workers': 0},
    {'fps': 0},
    {'max_frames': -1},
    {'iterations': 'many'},
    {'colour': 'blue'},
    {'graph_scale': float('inf')},
    {'graph_scale': float('nan')},
    {'graph_scale': 1e308},
    {'anchor_re': float('nan')},
    {'anchor_im': float('-inf')},
    {'radius_im': float('inf')},
    {'anchor_re': 1e308, 'radius_re': 1e308},
    {'iterations': 1.7},
    {'fps': 29.5},
    {'workers': 2.5},
    {'max_frames': 10.25},
])
def test_invalid_configuration(values):
    with pytest.raises(ConfigurationError):
        ZoomConfig(**values)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_packaged_settings_match_defaults():
    settings = load_settings()
    assert settings['iterations'] == 1200
    assert ZoomConfig.from_settings().to_dict() == ZoomConfig().to_dict()


def test_user_file_and_overrides(tmp_path):
    path = tmp_path / 'zoom.json'
    path.write_text(json.dumps({'iterations': 300, 'graph_scale': 50.0, 'strategy': 'sequential'}))
    config = ZoomConfig.from_settings(str(path), iterations=None, graph_scale=20.0)
    assert config.iterations == 300
    assert config.graph_scale == 20.0
    assert config.strategy == 'sequential'


def test_missing_user_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ZoomConfig.from_settings(str(tmp_path / 'missing.json'))


def test_malformed_user_file(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"iterations": ')
    with pytest.raises(ConfigurationError):
        load_settings(str(path))


def test_non_object_user_file(tmp_path):
    path = tmp_path / 'list.json'
    path.write_text('[1, 2]')
    with pytest.raises(ConfigurationError):
        load_settings(str(path))


def test_unknown_key_in_user_file(tmp_path):
    path = tmp_path / 'extra.json'
    path.write_text(json.dumps({'zoom_speed': 2}))
    with pytest.raises(ConfigurationError):
        ZoomConfig.from_settings(str(path))


def test_whole_number_floats_are_accepted():
    config = ZoomConfig(iterations=300.0, fps=60.0)
    assert config.iterations == 300
    assert isinstance(config.iterations, int)
    assert config.fps == 60


def test_fractional_iterations_in_user_file(tmp_path):
    path = tmp_path / 'fractional.json'
    path.write_text(json.dumps({'iterations': 1.7}))
    with pytest.raises(ConfigurationError):
        ZoomConfig.from_settings(str(path))
