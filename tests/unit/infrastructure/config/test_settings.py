import os
from pathlib import Path

import pytest

from ghfetch.domain.exceptions import ConfigError
from ghfetch.infrastructure.config.settings import Settings, DEFAULTS

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Removes GHFETCH_* variables leaking in from the host environment."""
    for key in list(os.environ):
        if key.startswith("GHFETCH_"):
            monkeypatch.delenv(key)

@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "mirror:\n"
        "  cache_mode: prod\n"
        "  reqrate: 40\n"
        "  attach_ip: 192.0.2.10\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )
    return path

def make_settings(config_file: Path, tmp_path: Path) -> Settings:
    return Settings(config_file=config_file, env_file=tmp_path / "missing.env")

def test_defaults_without_config_file(tmp_path: Path):
    settings = make_settings(tmp_path / "absent.yaml", tmp_path)

    assert settings.get('mirror.cache_mode') == 'dev'
    assert settings.reqrate() == 80
    assert settings.attach_ip() is None
    assert settings.cache_stale_age() == DEFAULTS['mirror.cache_stale_age']
    assert settings.token() is None

def test_yaml_values_are_read_by_dotted_key(config_file: Path, tmp_path: Path):
    settings = make_settings(config_file, tmp_path)

    assert settings.cache_mode() == 'prod'
    assert settings.reqrate() == 40
    assert settings.attach_ip() == "192.0.2.10"
    assert settings.get('logging.level') == 'DEBUG'

def test_flat_dotted_keys_are_accepted(tmp_path: Path):
    path = tmp_path / "flat.yaml"
    path.write_text("mirror.reqrate: 12\n", encoding="utf-8")

    assert make_settings(path, tmp_path).reqrate() == 12

def test_environment_overrides_yaml(config_file: Path, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GHFETCH_MIRROR_REQRATE", "7")
    monkeypatch.setenv("GHFETCH_MIRROR_CACHE_MODE", "dev")

    settings = make_settings(config_file, tmp_path)

    assert settings.reqrate() == 7
    assert settings.cache_mode() == 'dev'

def test_dotenv_file_is_loaded(tmp_path: Path, mocker):
    mocker.patch.dict(os.environ)  # restored after the test, dotenv writes into it
    env_file = tmp_path / ".env"
    env_file.write_text("GHFETCH_MIRROR_TOKEN=from-dotenv\n", encoding="utf-8")

    settings = Settings(config_file=tmp_path / "absent.yaml", env_file=env_file)

    assert settings.token() == "from-dotenv"

def test_real_environment_beats_dotenv(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GHFETCH_MIRROR_TOKEN", "from-env")
    env_file = tmp_path / ".env"
    env_file.write_text("GHFETCH_MIRROR_TOKEN=from-dotenv\n", encoding="utf-8")

    settings = Settings(config_file=tmp_path / "absent.yaml", env_file=env_file)

    assert settings.token() == "from-env"

def test_explicit_default_is_used_when_unset(tmp_path: Path):
    settings = make_settings(tmp_path / "absent.yaml", tmp_path)

    assert settings.get('mirror.unknown', 'fallback') == 'fallback'
    assert settings.get('mirror.unknown') is None

def test_test_overrides_win(config_file: Path, tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GHFETCH_MIRROR_REQRATE", "7")
    settings = make_settings(config_file, tmp_path)

    settings.set_for_testing({'mirror.reqrate': 3})
    assert settings.reqrate() == 3

    settings.clear_test_config()
    assert settings.reqrate() == 7

def test_zero_attach_ip_means_unbound(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GHFETCH_MIRROR_ATTACH_IP", "0.0.0.0")

    assert make_settings(tmp_path / "absent.yaml", tmp_path).attach_ip() is None

@pytest.mark.parametrize("value", ["0", "-5", "fast"])
def test_invalid_reqrate_raises(tmp_path: Path, monkeypatch, value):
    monkeypatch.setenv("GHFETCH_MIRROR_REQRATE", value)

    with pytest.raises(ConfigError, match="mirror.reqrate"):
        make_settings(tmp_path / "absent.yaml", tmp_path).reqrate()

def test_cache_dir_expands_user(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GHFETCH_MIRROR_CACHE_DIR", "~/mirror-cache")

    cache_dir = make_settings(tmp_path / "absent.yaml", tmp_path).cache_dir()

    assert cache_dir == Path("~/mirror-cache").expanduser()

def test_malformed_yaml_raises(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("mirror: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="broken.yaml"):
        make_settings(path, tmp_path)

@pytest.mark.parametrize("key, accessor, value", [
    ("MIRROR_TIMEOUT", "timeout", "soon"),
    ("MIRROR_TIMEOUT", "timeout", "0"),
    ("MIRROR_CACHE_STALE_AGE", "cache_stale_age", "forever"),
    ("MIRROR_CACHE_STALE_AGE", "cache_stale_age", "-1"),
])
def test_invalid_numeric_settings_raise_config_error(tmp_path: Path, monkeypatch, key, accessor, value):
    monkeypatch.setenv(f"GHFETCH_{key}", value)
    settings = make_settings(tmp_path / "absent.yaml", tmp_path)

    with pytest.raises(ConfigError, match=key.lower().replace("_", ".", 1)):
        getattr(settings, accessor)()

def test_numeric_settings_from_yaml(tmp_path: Path):
    path = tmp_path / "numbers.yaml"
    path.write_text("mirror:\n  timeout: 2.5\n  cache_stale_age: 60\n", encoding="utf-8")
    settings = make_settings(path, tmp_path)

    assert settings.timeout() == 2.5
    assert settings.cache_stale_age() == 60
