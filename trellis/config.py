"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from trellis.utils.platform import get_config_dir


class TrelloConfig(BaseModel):
    base_url: str = "https://api.trello.com/1"
    api_key: str = ""
    token: str = ""
    timeout: float = 30.0


class WebhooksConfig(BaseModel):
    bind: str = "0.0.0.0"
    port: int = 8420
    path: str = "/webhooks/trello"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TRELLIS_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    trello: TrelloConfig = Field(default_factory=TrelloConfig)
    webhooks: WebhooksConfig = Field(default_factory=WebhooksConfig)
    log_level: str = "INFO"
    log_json: bool = False


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("TRELLIS_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Env vars win over YAML for any section both define
    env_data = Settings().model_dump(exclude_unset=True)
    return Settings(**_deep_merge(yaml_data, env_data))
