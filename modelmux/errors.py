from __future__ import annotations

from typing import Optional


class ProviderError(Exception):
    """Base class for provider registry failures."""


class ConfigError(ProviderError):
    def __init__(self, message: str, provider: Optional[str] = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class ModelNotSupported(ProviderError):
    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__(f"Model not supported: {model_id}")
