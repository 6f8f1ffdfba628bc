"""
Unit tests for config module
"""

import json
import os

import pytest

from veo.client import DEFAULT_BASE_URL
from veo.config import Config, ConfigError

ENV_KEYS = ["VEO_TOKEN", "VEO_CLUB", "VEO_API_BASE_URL", "VEO_TIMEOUT", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("veo.config.user_config_dir", lambda _: str(tmp_path / "cfg"))


def test_config_loads_from_env(monkeypatch):
    monkeypatch.setenv("VEO_TOKEN", "test_token")
    monkeypatch.setenv("VEO_CLUB", "my-club")
    monkeypatch.setenv("VEO_TIMEOUT", "12.5")

    config = Config()
    assert config.token == "test_token"
    assert config.club == "my-club"
    assert config.timeout == 12.5


def test_config_defaults():
    config = Config()
    assert config.token is None
    assert config.club is None
    assert config.api_base_url == DEFAULT_BASE_URL
    assert config.timeout == 30.0
    assert config.log_level == "WARNING"


def test_validation_fails_without_token():
    config = Config(config_file=os.devnull)
    with pytest.raises(ConfigError) as exc_info:
        config.validate()
    assert "VEO_TOKEN environment variable is required" in str(exc_info.value)


def test_validation_success(monkeypatch):
    monkeypatch.setenv("VEO_TOKEN", "test_token")
    Config().validate()


def test_require_club_prefers_flag(monkeypatch):
    monkeypatch.setenv("VEO_CLUB", "env-club")
    config = Config()
    assert config.require_club("flag-club") == "flag-club"
    assert config.require_club(None) == "env-club"


def test_require_club_missing():
    with pytest.raises(ConfigError, match="--club flag or VEO_CLUB"):
        Config().require_club(None)


def test_repr_excludes_token(monkeypatch):
    monkeypatch.setenv("VEO_TOKEN", "super-secret")
    repr_str = repr(Config())
    assert "super-secret" not in repr_str
    assert "token=configured" in repr_str


def test_json_config_file_overrides_env(monkeypatch, tmp_path):
    monkeypatch.setenv("VEO_CLUB", "env-club")
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"token": "file-token", "club": "file-club", "timeout": 5}))

    config = Config(config_file=str(path))
    assert config.token == "file-token"
    assert config.club == "file-club"
    assert config.timeout == 5.0


def test_default_config_file_is_read_but_env_wins(monkeypatch, tmp_path):
    cfg_dir = tmp_path / "cfg"
    cfg_dir.mkdir()
    (cfg_dir / "config.json").write_text(json.dumps({"token": "file-token", "club": "file-club"}))
    monkeypatch.setenv("VEO_TOKEN", "env-token")

    config = Config()
    assert config.token == "env-token"
    assert config.club == "file-club"


def test_dotenv_config_file(monkeypatch, tmp_path):
    # load_dotenv writes straight into os.environ; keep that out of other tests
    monkeypatch.setattr(os, "environ", dict(os.environ))
    path = tmp_path / "veo.env"
    path.write_text("VEO_TOKEN=dotenv-token\nVEO_CLUB=dotenv-club\n")

    config = Config(config_file=str(path))
    assert config.token == "dotenv-token"
    assert config.club == "dotenv-club"


def test_missing_config_file_raises_error(tmp_path):
    with pytest.raises(ConfigError, match="does not exist"):
        Config(config_file=str(tmp_path / "missing.json"))


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"token": "x", "api_key": "y"}))
    with pytest.raises(ConfigError, match="Unknown keys"):
        Config(config_file=str(path))


@pytest.mark.parametrize(
    "data,message",
    [
        ({"token": 123}, "token must be a string"),
        ({"timeout": "fast"}, "timeout must be a number"),
        ({"log_level": "LOUD"}, "log_level must be one of"),
    ],
)
def test_invalid_types_rejected(tmp_path, data, message):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ConfigError, match=message):
        Config(config_file=str(path))


def test_invalid_json_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        Config(config_file=str(path))


@pytest.mark.parametrize("value", ["0", "-3", "soon"])
def test_invalid_timeout_env(monkeypatch, value):
    monkeypatch.setenv("VEO_TIMEOUT", value)
    with pytest.raises(ConfigError, match="timeout"):
        Config()
