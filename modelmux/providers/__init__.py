"""Provider routing.

``ProviderRegistry.from_configs`` turns the configured provider list into
adapter instances (one per enabled entry) and answers "which provider serves
model M?" and "give me provider P" for the request router.
"""

from __future__ import annotations

from ..errors import ConfigError, ModelNotSupported, ProviderError
from .adapters import create_adapter, get_adapter, list_adapters, register_adapter
from .base import BaseProvider, Provider
from .credentials import resolve_api_key, resolve_credential
from .registry import ProviderRegistry

__all__ = [
    "BaseProvider",
    "ConfigError",
    "ModelNotSupported",
    "Provider",
    "ProviderError",
    "ProviderRegistry",
    "create_adapter",
    "get_adapter",
    "list_adapters",
    "register_adapter",
    "resolve_api_key",
    "resolve_credential",
]
