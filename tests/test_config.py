import json
import pytest

from nbodybench.config import ConfigError, load_config


def test_defaults():
    config = load_config()
    assert config['G'] == 6.6743
    assert config['dt'] == 0.001
    assert config['softening'] == 0.0001
    assert config['seed'] == 100


def test_dt_override():
    assert load_config(dt=0.01)['dt'] == 0.01


def test_custom_file(tmp_path):
    path = tmp_path / 'constants.json'
    path.write_text(json.dumps({'G': 1, 'dt': 0.5, 'softening': 0.01, 'seed': 7}))
    config = load_config(path)
    assert config['dt'] == 0.5
    assert config['seed'] == 7
    assert isinstance(config['G'], float)


def test_missing_key(tmp_path):
    path = tmp_path / 'constants.json'
    path.write_text(json.dumps({'G': 1, 'dt': 0.5, 'seed': 7}))
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_config(tmp_path / 'nope.json')
