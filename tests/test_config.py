from __future__ import annotations

from pathlib import Path

import pytest

from modelmux import config as mux_config
from modelmux.config import AuthType, ProviderConfig, load_config, parse_config
from modelmux.errors import ConfigError


def _write_config(path: Path) -> Path:
    path.write_text(
        "\n".join(
            [
                "providers:",
                "  - name: openai-main",
                "    provider_type: openai",
                "    api_key_path: ~/.config/openai.key",
                "    models: [gpt-4o]",
                "  - name: claude-max",
                "    provider_type: anthropic",
                "    auth_type: oauth",
                "    oauth_provider: anthropic-oauth",
                "  - name: local",
                "    provider_type: ollama",
                "    api_key: ollama",
                "    base_url: http://localhost:11434/v1",
                "    enabled: false",
                "    unknown_field: ignored",
            ]
        )
    )
    return path


def test_load_config_parses_providers(tmp_path: Path) -> None:
    config = load_config(_write_config(tmp_path / "config.yaml"))

    assert [p.name for p in config.providers] == ["openai-main", "claude-max", "local"]
    first, second, third = config.providers
    assert first.auth_type == AuthType.API_KEY
    assert first.api_key_path == "~/.config/openai.key"
    assert first.models == ["gpt-4o"]
    assert second.auth_type == AuthType.OAUTH
    assert second.oauth_provider == "anthropic-oauth"
    assert third.is_enabled() is False


def test_enabled_defaults_to_true() -> None:
    config = ProviderConfig(name="a", provider_type="openai")

    assert config.is_enabled() is True
    assert config.models == []


def test_blank_name_is_rejected() -> None:
    with pytest.raises(ConfigError, match="Invalid config"):
        parse_config({"providers": [{"name": "  ", "provider_type": "openai"}]})


def test_duplicate_names_are_rejected() -> None:
    raw = {
        "providers": [
            {"name": "a", "provider_type": "openai"},
            {"name": "a", "provider_type": "groq", "enabled": False},
        ]
    }

    with pytest.raises(ConfigError, match="Duplicate provider name: a"):
        parse_config(raw)


def test_empty_file_yields_no_providers(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")

    assert load_config(path).providers == []


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="must be a YAML object"):
        load_config(path)


def test_bad_yaml_is_a_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("providers: [unclosed")

    with pytest.raises(ConfigError, match="Failed to parse YAML"):
        load_config(path)


def test_missing_file_is_a_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Failed to read config"):
        load_config(tmp_path / "nope.yaml")


def test_default_path_comes_from_environment(monkeypatch, tmp_path: Path) -> None:
    path = _write_config(tmp_path / "custom.yaml")
    monkeypatch.setattr(mux_config, "load_dotenv", lambda: False)
    monkeypatch.setenv("MODELMUX_CONFIG", str(path))

    assert len(load_config().providers) == 3


def test_config_directory_honours_modelmux_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("MODELMUX_CONFIG", raising=False)
    monkeypatch.setenv("MODELMUX_HOME", str(tmp_path / "mux"))

    assert mux_config.get_config_directory() == tmp_path / "mux"
    assert mux_config.get_config_path() == tmp_path / "mux" / "config.yaml"
    assert mux_config.get_token_store_path() == tmp_path / "mux" / "oauth_tokens.json"


def test_config_directory_defaults_under_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("MODELMUX_HOME", raising=False)
    monkeypatch.setattr(mux_config, "get_home_directory", lambda: tmp_path)

    assert mux_config.get_config_directory() == tmp_path / ".modelmux"
