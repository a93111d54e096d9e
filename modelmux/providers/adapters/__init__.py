"""Provider adapter registry.

Each adapter module knows how to build providers for a specific protocol
family (OpenAI-compatible, Anthropic-compatible) and registers one factory
per provider type tag it serves, presets included. The provider registry
calls ``create_adapter`` to resolve a config's ``provider_type``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence

from ...auth import TokenStore
from ...errors import ConfigError
from ..base import BaseProvider

AdapterFactory = Callable[..., BaseProvider]

ADAPTER_REGISTRY: Dict[str, AdapterFactory] = {}


def register_adapter(provider_type: str, create_fn: AdapterFactory) -> None:
    ADAPTER_REGISTRY[provider_type] = create_fn


def get_adapter(provider_type: str) -> AdapterFactory:
    # Tags match exactly; "OpenAI" is not "openai".
    if provider_type not in ADAPTER_REGISTRY:
        raise ConfigError(f"Unknown provider type: {provider_type}")
    return ADAPTER_REGISTRY[provider_type]


def list_adapters() -> List[str]:
    return sorted(ADAPTER_REGISTRY)


def create_adapter(
    provider_type: str,
    *,
    name: str,
    api_key: str,
    base_url: Optional[str] = None,
    models: Sequence[str] = (),
    oauth_provider: Optional[str] = None,
    token_store: Optional[TokenStore] = None,
    **kwargs: Any,
) -> BaseProvider:
    factory = get_adapter(provider_type)
    return factory(
        name=name,
        api_key=api_key,
        base_url=base_url,
        models=models,
        oauth_provider=oauth_provider,
        token_store=token_store,
        **kwargs,
    )


# Adapter modules register themselves on import.
from . import anthropic_compatible, openai_compatible  # noqa: E402,F401
