from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from ..auth import TokenStore
from ..config import AuthType, ProviderConfig
from ..errors import ConfigError, ModelNotSupported
from .adapters import create_adapter
from .base import Provider
from .credentials import resolve_credential

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Build-once index of configured providers.

    Both mappings are read-only after construction, so lookups need no
    locking and provider handles can outlive any particular lookup.
    """

    def __init__(
        self,
        providers: Optional[Mapping[str, Provider]] = None,
        model_to_provider: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._providers: Mapping[str, Provider] = MappingProxyType(dict(providers or {}))
        self._model_to_provider: Mapping[str, str] = MappingProxyType(
            dict(model_to_provider or {})
        )

    @classmethod
    def from_configs(
        cls,
        configs: Iterable[ProviderConfig],
        token_store: Optional[TokenStore] = None,
        *,
        home: Optional[Path] = None,
    ) -> "ProviderRegistry":
        """Construct every enabled provider, failing on the first bad entry.

        The ``models`` field of a provider config does not populate the
        model index; explicit model mappings are passed to the constructor.
        """
        providers: Dict[str, Provider] = {}

        for config in configs:
            if not config.is_enabled():
                logger.debug("Skipping disabled provider '%s'", config.name)
                continue

            if config.name in providers:
                raise ConfigError(
                    f"Duplicate provider name: {config.name}", provider=config.name
                )

            secret = resolve_credential(config, home=home)
            oauth_provider = secret if config.auth_type == AuthType.OAUTH else None

            try:
                provider = create_adapter(
                    config.provider_type,
                    name=config.name,
                    api_key=secret,
                    base_url=config.base_url,
                    models=config.models,
                    oauth_provider=oauth_provider,
                    token_store=token_store,
                )
            except ConfigError as exc:
                raise ConfigError(exc.message, provider=config.name) from exc

            providers[config.name] = provider
            logger.info(
                "Registered provider '%s' (%s)", config.name, config.provider_type
            )

        return cls(providers)

    def get_provider(self, name: str) -> Optional[Provider]:
        return self._providers.get(name)

    def get_provider_for_model(self, model: str) -> Provider:
        provider_name = self._model_to_provider.get(model)
        if provider_name is not None:
            provider = self._providers.get(provider_name)
            if provider is not None:
                return provider
            logger.debug(
                "Model '%s' maps to unknown provider '%s', scanning providers",
                model,
                provider_name,
            )

        for provider in self._providers.values():
            if provider.supports_model(model):
                return provider

        raise ModelNotSupported(model)

    def list_models(self) -> List[str]:
        return list(self._model_to_provider.keys())

    def list_providers(self) -> List[str]:
        return list(self._providers.keys())

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers
