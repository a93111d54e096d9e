from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "MODELMUX_CONFIG"
CONFIG_HOME_ENV = "MODELMUX_HOME"


def get_home_directory() -> Path:
    """Directory that ``~/`` in credential paths expands against."""
    return Path.home()


def get_config_directory() -> Path:
    """Get config directory based on environment."""
    configured = os.getenv(CONFIG_HOME_ENV)
    if configured:
        return Path(configured).expanduser()
    return get_home_directory() / ".modelmux"


def get_config_path() -> Path:
    """Get full path to the config file."""
    configured = os.getenv(CONFIG_PATH_ENV)
    if configured:
        return Path(configured).expanduser()
    return get_config_directory() / "config.yaml"


def get_token_store_path() -> Path:
    return get_config_directory() / "oauth_tokens.json"


class AuthType(str, Enum):
    API_KEY = "api_key"
    OAUTH = "oauth"


class ProviderConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    provider_type: str
    auth_type: AuthType = AuthType.API_KEY
    api_key: Optional[str] = None
    api_key_path: Optional[str] = None
    base_url: Optional[str] = None
    # Deprecated for routing; adapters still answer supports_model from it.
    models: List[str] = Field(default_factory=list)
    oauth_provider: Optional[str] = None
    enabled: bool = True

    @field_validator("name", "provider_type")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    def is_enabled(self) -> bool:
        return self.enabled


class MuxConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    providers: List[ProviderConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> "MuxConfig":
        seen: set[str] = set()
        for provider in self.providers:
            if provider.name in seen:
                raise ValueError(f"Duplicate provider name: {provider.name}")
            seen.add(provider.name)
        return self


def parse_config(raw: Any, *, source: str = "<config>") -> MuxConfig:
    if raw is None:
        return MuxConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {source} must be a YAML object")
    try:
        return MuxConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {source}: {exc}") from exc


def load_config(path: Optional[Path | str] = None) -> MuxConfig:
    """Load the provider list from a YAML config file.

    Without an explicit *path*, ``.env`` is loaded first so that
    ``MODELMUX_CONFIG`` / ``MODELMUX_HOME`` can be set there.
    """
    if path is None:
        load_dotenv()
        config_path = get_config_path()
    else:
        config_path = Path(path).expanduser()

    try:
        text = config_path.read_text()
    except OSError as exc:
        raise ConfigError(f"Failed to read config {config_path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML from {config_path}: {exc}") from exc

    config = parse_config(raw, source=str(config_path))
    logger.info("Loaded %d provider(s) from %s", len(config.providers), config_path)
    return config
