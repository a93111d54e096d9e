from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

import httpx
from agno.models.litellm import LiteLLM

from ..auth import TokenStore

logger = logging.getLogger(__name__)


@runtime_checkable
class Provider(Protocol):
    """Capability interface the registry and router depend on."""

    def name(self) -> str: ...

    def supports_model(self, model_id: str) -> bool: ...


def models_url(base_url: str) -> str:
    base = base_url.rstrip("/")
    return f"{base}/models" if base.endswith("/v1") else f"{base}/v1/models"


@dataclass(frozen=True)
class BaseProvider:
    """Shared state for one configured backend.

    Instances are immutable so a single handle can be held by the registry
    and any number of in-flight requests at once.
    """

    provider_name: str
    api_key: str
    base_url: str
    models: Tuple[str, ...] = ()
    oauth_provider: Optional[str] = None
    token_store: Optional[TokenStore] = field(default=None, compare=False, repr=False)

    # LiteLLM routing prefix for the family.
    litellm_prefix = "openai"

    def name(self) -> str:
        return self.provider_name

    def supports_model(self, model_id: str) -> bool:
        return model_id in self.models

    @property
    def uses_oauth(self) -> bool:
        return self.oauth_provider is not None

    def resolve_token(self) -> str:
        if not self.uses_oauth:
            if not self.api_key:
                raise RuntimeError(f"API key not configured for provider '{self.provider_name}'")
            return self.api_key

        token = self.token_store.get_access_token(self.oauth_provider) if self.token_store else None
        if not token:
            raise RuntimeError(
                f"No OAuth token available for '{self.oauth_provider}' "
                f"(provider '{self.provider_name}')"
            )
        return token

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.resolve_token()}"}

    def get_model(self, model_id: str, **options: Any) -> LiteLLM:
        return LiteLLM(
            id=f"{self.litellm_prefix}/{model_id}",
            api_key=self.resolve_token(),
            api_base=self.base_url,
            **options,
        )

    async def fetch_models(self) -> List[Dict[str, Any]]:
        try:
            headers = self.auth_headers()
        except RuntimeError:
            return []

        try:
            async with httpx.AsyncClient(timeout=5) as client:
                response = await client.get(models_url(self.base_url), headers=headers)
                if not response.is_success:
                    return []
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("[%s] Failed to fetch models: %s", self.provider_name, exc)
            return []

        models = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(models, list):
            logger.warning("[%s] Unexpected model listing payload", self.provider_name)
            return []

        return [
            {
                "id": model.get("id"),
                "name": model.get("display_name") or model.get("id"),
            }
            for model in models
            if isinstance(model, dict) and model.get("id")
        ]

    async def test_connection(self) -> tuple[bool, str | None]:
        try:
            headers = self.auth_headers()
        except RuntimeError as exc:
            return False, str(exc)

        try:
            async with httpx.AsyncClient(timeout=5) as client:
                response = await client.get(models_url(self.base_url), headers=headers)
        except httpx.HTTPError as exc:
            return False, f"Connection failed: {str(exc)[:100]}"

        if self._connection_ok(response):
            return True, None
        if response.status_code == 401:
            return False, "Invalid API key"
        if response.status_code == 403:
            return False, "Access forbidden - check API key permissions"
        return False, f"API returned status {response.status_code}"

    def _connection_ok(self, response: httpx.Response) -> bool:
        return response.is_success
