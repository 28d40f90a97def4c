"""Pydantic settings for macvendor configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_OUI_URL = "https://standards-oui.ieee.org/oui/oui.txt"
DEFAULT_SEARCH_URL = "https://services13.ieee.org/RST/standards-ra-web/rest/assignments/"
DEFAULT_USER_AGENT = "macvendor/1.0 (+https://pypi.org/project/macvendor/)"


def _load_yaml_config() -> dict[str, Any]:
    """Load config from ~/.macvendor/config.yaml, falling back to project config.yaml."""
    user_cfg = Path.home() / ".macvendor" / "config.yaml"
    if user_cfg.exists():
        with open(user_cfg) as f:
            return yaml.safe_load(f) or {}
    project_cfg = Path(__file__).parent.parent / "config.yaml"
    if project_cfg.exists():
        with open(project_cfg) as f:
            return yaml.safe_load(f) or {}
    return {}


class Settings(BaseSettings):
    """macvendor settings.

    Priority (highest to lowest): environment variables, config.yaml, defaults.
    """

    model_config = SettingsConfigDict(env_prefix="MACVENDOR_")

    # Sources
    oui_url: str = DEFAULT_OUI_URL
    oui_source: str | None = None
    search_url: str = DEFAULT_SEARCH_URL

    # Transport
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    # Logging
    log_level: str = "WARNING"

    # Cache
    cache_path: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        yaml_values = _load_yaml_config()
        # YAML values serve as defaults; explicit env/init values take priority
        merged = {**yaml_values, **{k: v for k, v in values.items() if v is not None}}
        return merged

    @property
    def resolved_cache_path(self) -> Path | None:
        if self.cache_path:
            return Path(self.cache_path).expanduser()
        return None


def get_settings(**overrides: Any) -> Settings:
    """Create a Settings instance, optionally with overrides."""
    return Settings(**overrides)
