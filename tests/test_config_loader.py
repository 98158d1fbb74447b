"""Tests for config loading and environment overrides."""

import pytest

import disasteriq.config.loader as loader_mod
from disasteriq.config.loader import load_config, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for var in ("EONET_API_KEY", "EONET_BASE_URL", "DISASTERIQ_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(loader_mod, "DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")


def test_defaults_when_default_file_missing():
    settings = load_settings()
    assert settings.eonet.base_url == "https://eonet.gsfc.nasa.gov/api/v3"
    assert settings.eonet.api_key is None
    assert settings.eonet.cache_ttl_seconds == 60
    assert settings.notifications.test_alert_delay_seconds == 1.0
    assert settings.server.port == 8000


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_non_mapping_yaml_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a dictionary"):
        load_config(path)


def test_yaml_values_are_loaded(tmp_path):
    path = tmp_path / "disasteriq.config.yaml"
    path.write_text(
        "eonet:\n"
        "  timeout_seconds: 5\n"
        "  cache_ttl_seconds: 0\n"
        "notifications:\n"
        "  bulk_batch_size: 10\n"
        "log_level: DEBUG\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.eonet.timeout_seconds == 5
    assert settings.eonet.cache_ttl_seconds == 0
    assert settings.notifications.bulk_batch_size == 10
    assert settings.log_level == "DEBUG"


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("eonet:\n  api_key: from-file\n", encoding="utf-8")
    monkeypatch.setenv("EONET_API_KEY", "from-env")
    monkeypatch.setenv("EONET_BASE_URL", "http://localhost:9999/api/v3")

    settings = load_settings(path)

    assert settings.eonet.api_key == "from-env"
    assert settings.eonet.base_url == "http://localhost:9999/api/v3"


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("server:\n  port: 9100\n", encoding="utf-8")
    monkeypatch.setenv("DISASTERIQ_CONFIG", str(path))
    assert load_settings().server.port == 9100
