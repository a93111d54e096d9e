"""OpenAI-compatible provider adapter.

Builds providers for anything speaking the OpenAI chat/completions protocol:
OpenAI itself, hosted OpenAI-compatible services, and local servers.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Optional, Sequence

from ...auth import TokenStore
from ..base import BaseProvider
from . import register_adapter

DEFAULT_BASE_URL = "https://api.openai.com/v1"

PRESET_BASE_URLS: Dict[str, str] = {
    "openrouter": "https://openrouter.ai/api/v1",
    "deepinfra": "https://api.deepinfra.com/v1/openai",
    "novita": "https://api.novita.ai/v3/openai",
    "baseten": "https://inference.baseten.co/v1",
    "together": "https://api.together.xyz/v1",
    "github-copilot": "https://api.githubcopilot.com",
    "fireworks": "https://api.fireworks.ai/inference/v1",
    "groq": "https://api.groq.com/openai/v1",
    "nebius": "https://api.studio.nebius.ai/v1",
    "cerebras": "https://api.cerebras.ai/v1",
    "moonshot": "https://api.moonshot.ai/v1",
    "qwen": "https://dashscope-intl.aliyuncs.com/compatible-mode/v1",
    "gemini": "https://generativelanguage.googleapis.com/v1beta/openai",
    "longcat": "https://api.longcat.ai/v1",
    "ollama": "http://localhost:11434/v1",
    "lmstudio": "http://localhost:1234/v1",
}

ALIASES: Dict[str, str] = {
    "copilot": "github-copilot",
}


@dataclass(frozen=True)
class OpenAICompatibleProvider(BaseProvider):
    litellm_prefix = "openai"


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
) -> OpenAICompatibleProvider:
    """Build a provider for an OpenAI-compatible endpoint.

    *base_url* from the config wins over the family/preset *default_base_url*.
    """
    return OpenAICompatibleProvider(
        provider_name=name,
        api_key=api_key,
        base_url=base_url or default_base_url,
        models=tuple(models),
        oauth_provider=oauth_provider,
        token_store=token_store,
    )


register_adapter("openai", create_provider)

for _preset, _url in PRESET_BASE_URLS.items():
    register_adapter(_preset, partial(create_provider, default_base_url=_url))

for _alias, _preset in ALIASES.items():
    register_adapter(_alias, partial(create_provider, default_base_url=PRESET_BASE_URLS[_preset]))
