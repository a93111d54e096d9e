"""Credential resolution for configured providers.

API keys come either inline from the config or from a file on disk. Key
files are bare text, or JSON auth files written by other CLIs, in which case
the first token-like field found (pre-order, shallowest first within each
subtree) is used.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from ..config import AuthType, ProviderConfig, get_home_directory
from ..errors import ConfigError

TOKEN_KEYS = (
    "api_key",
    "token",
    "access_token",
    "key",
    "oauth_token",
    "bearer_token",
)


def resolve_credential(config: ProviderConfig, *, home: Optional[Path] = None) -> str:
    """Return the secret (or OAuth reference) an adapter is constructed with."""
    if config.auth_type == AuthType.OAUTH:
        return config.oauth_provider or config.name
    return resolve_api_key(config, home=home)


def resolve_api_key(config: ProviderConfig, *, home: Optional[Path] = None) -> str:
    if config.api_key is not None and config.api_key.strip():
        return config.api_key

    if config.api_key_path:
        try:
            return load_api_key_from_file(config.api_key_path, home=home)
        except ConfigError as exc:
            raise ConfigError(
                f"Failed to read api_key for provider '{config.name}' "
                f"from {config.api_key_path}: {exc.message}",
                provider=config.name,
            ) from exc

    raise ConfigError(
        f"Provider '{config.name}' requires api_key or api_key_path for api_key auth",
        provider=config.name,
    )


def expand_home(path: str, home: Optional[Path] = None) -> Path:
    if path.startswith("~/"):
        return (home or get_home_directory()) / path[2:]
    return Path(path)


def load_api_key_from_file(path_str: str, *, home: Optional[Path] = None) -> str:
    path = expand_home(path_str, home)

    try:
        content = path.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    trimmed = content.strip()
    if trimmed.startswith("{"):
        try:
            value = json.loads(trimmed)
        except (ValueError, RecursionError) as exc:
            raise ConfigError(f"Failed to parse JSON from {path}: {exc}") from exc

        found = extract_api_key_from_json(value)
        if found is None:
            raise ConfigError(f"No api_key/access_token/token field found in {path}")
        return found

    if not trimmed:
        raise ConfigError(f"{path} is empty")
    return trimmed


def extract_api_key_from_json(value: Any) -> Optional[str]:
    # Explicit stack; children are pushed reversed so they pop in document order.
    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            for key in TOKEN_KEYS:
                candidate = node.get(key)
                if isinstance(candidate, str) and candidate.strip():
                    return candidate.strip()
            children = list(node.values())
        elif isinstance(node, list):
            children = node
        else:
            continue
        stack.extend(
            child for child in reversed(children) if isinstance(child, (dict, list))
        )
    return None
