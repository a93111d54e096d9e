from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_token_store_path

logger = logging.getLogger(__name__)


def _normalize_provider(provider: str) -> str:
    return provider.lower().strip().replace("-", "_")


def _is_expired(expires_at: Optional[str]) -> bool:
    if not expires_at:
        return False
    try:
        parsed = datetime.fromisoformat(expires_at)
    except (TypeError, ValueError):
        return False
    # Naive timestamps are local time; astimezone() makes them comparable.
    return parsed.astimezone(timezone.utc) < datetime.now(timezone.utc)


class TokenStore:
    """OAuth credentials shared by every adapter, persisted as one JSON file.

    Keys are OAuth provider references (``oauth_provider`` in the config, or
    the backend name). Acquiring and refreshing tokens happens elsewhere;
    adapters only read from here.
    """

    def __init__(self, path: Optional[Path | str] = None) -> None:
        self._path = Path(path) if path is not None else get_token_store_path()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, Dict[str, Any]]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except (OSError, ValueError) as exc:
            logger.warning("Failed to read token store %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring token store %s: expected a JSON object", self._path)
            return {}
        return {key: value for key, value in data.items() if isinstance(value, dict)}

    def _write(self, data: Dict[str, Dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(data, indent=2))
        tmp_path.replace(self._path)

    def get(self, provider: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._read().get(_normalize_provider(provider))

    def save(
        self,
        provider: str,
        *,
        access_token: str,
        refresh_token: Optional[str] = None,
        token_type: Optional[str] = None,
        expires_at: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        key = _normalize_provider(provider)
        with self._lock:
            data = self._read()
            data[key] = {
                "access_token": access_token,
                "refresh_token": refresh_token,
                "token_type": token_type,
                "expires_at": expires_at,
                "extra": extra,
            }
            self._write(data)

    def remove(self, provider: str) -> bool:
        key = _normalize_provider(provider)
        with self._lock:
            data = self._read()
            if key not in data:
                return False
            del data[key]
            self._write(data)
            return True

    def has_valid_tokens(self, provider: str) -> bool:
        return self.get_access_token(provider) is not None

    def get_access_token(self, provider: str) -> Optional[str]:
        data = self.get(provider)
        if not data:
            return None
        token = data.get("access_token")
        if not isinstance(token, str) or not token.strip():
            return None
        if _is_expired(data.get("expires_at")):
            return None
        return token
