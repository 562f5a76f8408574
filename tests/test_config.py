"""Tests for configuration loading."""

import pytest

from winget_sources.config import (
    ENV_EXECUTABLE,
    ENV_TIMEOUT,
    SourceManagerConfig,
    load_config,
)


def test_config_defaults():
    config = load_config(environ={})

    assert config.executable is None
    assert config.timeout is None


def test_config_from_yaml(tmp_path):
    cfg = tmp_path / 'winget-sources.yaml'
    cfg.write_text('executable: C:/tools/winget.exe\ntimeout: 300\n')

    config = load_config(cfg, environ={})

    assert config.executable == 'C:/tools/winget.exe'
    assert config.timeout == 300.0


def test_config_empty_yaml(tmp_path):
    cfg = tmp_path / 'empty.yaml'
    cfg.write_text('')

    config = SourceManagerConfig.from_file(cfg)

    assert config.executable is None


def test_config_unknown_key_rejected(tmp_path):
    cfg = tmp_path / 'bad.yaml'
    cfg.write_text('executable: winget\nretries: 3\n')

    with pytest.raises(ValueError, match='Unknown keys.*retries'):
        SourceManagerConfig.from_file(cfg)


def test_config_non_mapping_rejected(tmp_path):
    cfg = tmp_path / 'list.yaml'
    cfg.write_text('- winget\n')

    with pytest.raises(ValueError, match='mapping'):
        SourceManagerConfig.from_file(cfg)


@pytest.mark.parametrize('content', ['false\n', '0\n'])
def test_config_falsy_scalar_rejected(tmp_path, content):
    """Falsy scalars are not mistaken for an empty file."""
    cfg = tmp_path / 'scalar.yaml'
    cfg.write_text(content)

    with pytest.raises(ValueError, match='mapping'):
        SourceManagerConfig.from_file(cfg)


def test_config_bool_timeout_rejected(tmp_path):
    cfg = tmp_path / 'bool.yaml'
    cfg.write_text('timeout: true\n')

    with pytest.raises(ValueError, match='Invalid timeout'):
        SourceManagerConfig.from_file(cfg)


@pytest.mark.parametrize('value', [float('nan'), float('inf'), 'inf'])
def test_config_non_finite_timeout_rejected(value):
    with pytest.raises(ValueError, match='finite'):
        load_config(timeout=value, environ={})


def test_config_non_finite_env_timeout_rejected():
    with pytest.raises(ValueError, match='finite'):
        load_config(environ={ENV_TIMEOUT: 'nan'})


def test_config_invalid_yaml(tmp_path):
    cfg = tmp_path / 'broken.yaml'
    cfg.write_text('executable: [unclosed\n')

    with pytest.raises(ValueError, match='Invalid YAML'):
        SourceManagerConfig.from_file(cfg)


def test_config_invalid_timeout(tmp_path):
    cfg = tmp_path / 'bad.yaml'
    cfg.write_text('timeout: soon\n')

    with pytest.raises(ValueError, match='Invalid timeout'):
        SourceManagerConfig.from_file(cfg)


def test_config_env_overrides_file(tmp_path):
    cfg = tmp_path / 'winget-sources.yaml'
    cfg.write_text('executable: from-file\ntimeout: 10\n')

    config = load_config(cfg, environ={ENV_EXECUTABLE: 'from-env', ENV_TIMEOUT: '20'})

    assert config.executable == 'from-env'
    assert config.timeout == 20.0


def test_config_flags_override_env():
    config = load_config(
        executable='from-flag',
        timeout=5,
        environ={ENV_EXECUTABLE: 'from-env', ENV_TIMEOUT: '20'},
    )

    assert config.executable == 'from-flag'
    assert config.timeout == 5.0


def test_config_negative_timeout_rejected():
    with pytest.raises(ValueError, match='positive'):
        load_config(timeout=-1, environ={})
