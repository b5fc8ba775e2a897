import pytest

from mandelzoom.__main__ import build_parser, main


def test_dump_prints_initial_state(capsys):
    assert main(['--dump', '--log-level', 'WARNING']) == 0
    out = capsys.readouterr().out
    assert out.startswith(">===---")
    assert "zoom=0.1\n" in out
    assert "GRAPH_SCALE=100.0\n" in out


def test_dump_with_overrides(capsys):
    assert main(['--dump', '--graph-scale', '50', '--anchor-re', '0', '--anchor-im', '0',
                 '--log-level', 'WARNING']) == 0
    out = capsys.readouterr().out
    assert "re_min=-2.0\n" in out
    assert "re_scale=50.0\n" in out


def test_invalid_configuration_exits(capsys):
    assert main(['--dump', '--graph-scale', '0']) == 2
    out = capsys.readouterr().out
    assert "Configuration error" in out
    assert ">===---" not in out


@pytest.mark.parametrize('args', [
    ['--graph-scale', 'inf'],
    ['--graph-scale', '1e308'],
    ['--anchor-re', 'nan'],
])
def test_non_finite_configuration_exits(capsys, args):
    assert main(['--dump', *args]) == 2
    out = capsys.readouterr().out
    assert "Configuration error" in out
    assert ">===---" not in out


def test_missing_config_file_exits(tmp_path):
    assert main(['--dump', '--config', str(tmp_path / 'nope.json')]) == 2


def test_parser_defaults():
    opt = build_parser().parse_args([])
    assert opt.iterations is None
    assert opt.strategy is None
    assert opt.log_level == 'INFO'
    assert not opt.dump
