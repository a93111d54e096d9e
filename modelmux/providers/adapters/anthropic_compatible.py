"""Anthropic-compatible provider adapter.

Builds providers for endpoints exposing Anthropic-style model and messages
APIs, using x-api-key authentication (or a bearer token for OAuth).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Optional, Sequence

import httpx

from ...auth import TokenStore
from ..base import BaseProvider
from . import register_adapter

DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_VERSION = "2023-06-01"
OAUTH_BETA = "oauth-2025-04-20"

PRESET_BASE_URLS: Dict[str, str] = {
    "z.ai": "https://api.z.ai/api/anthropic",
    "minimax": "https://api.minimax.io/anthropic",
    "zenmux": "https://zenmux.ai/api/anthropic",
    "kimi-coding": "https://api.kimi.com/coding",
}


@dataclass(frozen=True)
class AnthropicCompatibleProvider(BaseProvider):
    litellm_prefix = "anthropic"

    def auth_headers(self) -> Dict[str, str]:
        token = self.resolve_token()
        if self.uses_oauth:
            return {
                "Authorization": f"Bearer {token}",
                "anthropic-version": ANTHROPIC_VERSION,
                "anthropic-beta": OAUTH_BETA,
            }
        return {"x-api-key": token, "anthropic-version": ANTHROPIC_VERSION}

    def _connection_ok(self, response: httpx.Response) -> bool:
        # Some compatible endpoints reject the model listing with 400 but
        # still authenticate the request.
        return response.is_success or response.status_code == 400


def create_provider(
    *,
    name: str,
    api_key: str,
    base_url: Optional[str] = None,
    models: Sequence[str] = (),
    oauth_provider: Optional[str] = None,
    token_store: Optional[TokenStore] = None,
    default_base_url: str = DEFAULT_BASE_URL,
    **_kwargs: Any,
) -> AnthropicCompatibleProvider:
    """Build a provider entry for Anthropic-compatible endpoints."""
    return AnthropicCompatibleProvider(
        provider_name=name,
        api_key=api_key,
        base_url=base_url or default_base_url,
        models=tuple(models),
        oauth_provider=oauth_provider,
        token_store=token_store,
    )


register_adapter("anthropic", create_provider)

for _preset, _url in PRESET_BASE_URLS.items():
    register_adapter(_preset, partial(create_provider, default_base_url=_url))
