import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path("disasteriq.config.yaml")
CONFIG_PATH_ENV = "DISASTERIQ_CONFIG"
API_KEY_ENV = "EONET_API_KEY"
BASE_URL_ENV = "EONET_BASE_URL"


class EonetSettings(BaseModel):
    base_url: str = "https://eonet.gsfc.nasa.gov/api/v3"
    api_key: Optional[str] = None
    timeout_seconds: float = 20
    user_agent: str = "disasteriq/0.4"
    cache_ttl_seconds: float = 60


class NotificationSettings(BaseModel):
    subscribe_delay_seconds: float = 0.5
    test_alert_delay_seconds: float = 1.0
    bulk_batch_size: int = 50


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class Settings(BaseModel):
    eonet: EonetSettings = Field(default_factory=EonetSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the raw YAML config.

    An explicit path (argument or DISASTERIQ_CONFIG) must exist. The default
    path is optional: if it is missing an empty config is returned.

    Raises:
        FileNotFoundError: If an explicitly requested config file doesn't exist
        ValueError: If the file does not contain a mapping
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    explicit = path or (Path(env_path) if env_path else None)
    cfg_path = explicit or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if explicit is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return config


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay EONET_API_KEY / EONET_BASE_URL onto the eonet section."""
    result = dict(config)
    eonet = dict(result.get("eonet") or {})
    if os.environ.get(API_KEY_ENV):
        eonet["api_key"] = os.environ[API_KEY_ENV]
    if os.environ.get(BASE_URL_ENV):
        eonet["base_url"] = os.environ[BASE_URL_ENV]
    result["eonet"] = eonet
    return result


def load_settings(path: Path | None = None) -> Settings:
    """Load config file, apply environment overrides and validate into Settings."""
    config = apply_env_overrides(load_config(path))
    return Settings.model_validate(config)
