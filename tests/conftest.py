"""Shared fixtures and helpers for the provider routing test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from modelmux.auth import TokenStore
from modelmux.config import ProviderConfig


# ---------------------------------------------------------------------------
# Config helpers
# ---------------------------------------------------------------------------


def make_config(
    name: str,
    provider_type: str = "openai",
    *,
    api_key: str | None = "sk-test",
    **extra: Any,
) -> ProviderConfig:
    """Build a ProviderConfig with an inline key unless told otherwise."""
    return ProviderConfig(name=name, provider_type=provider_type, api_key=api_key, **extra)


# ---------------------------------------------------------------------------
# Fake providers: capability interface only, no backend behind them
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FakeProvider:
    provider_name: str
    models: tuple[str, ...] = field(default_factory=tuple)

    def name(self) -> str:
        return self.provider_name

    def supports_model(self, model_id: str) -> bool:
        return model_id in self.models


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def token_store(tmp_path: Path) -> TokenStore:
    return TokenStore(tmp_path / "oauth_tokens.json")


# ---------------------------------------------------------------------------
# httpx helpers
# ---------------------------------------------------------------------------


def mock_async_client(response: Any) -> AsyncMock:
    """An ``httpx.AsyncClient`` stand-in whose ``get`` returns *response*."""
    client = AsyncMock()
    client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def mock_response(*, is_success: bool = True, status_code: int = 200, payload: Any = None) -> MagicMock:
    response = MagicMock(is_success=is_success, status_code=status_code)
    response.json.return_value = payload if payload is not None else {}
    return response
