"""Process-wide settings and provider configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field

from tubescribe.errors import ConfigurationError
from tubescribe.models.config import AppConfig, ProviderConfig
from tubescribe.models.summary import ProviderKey
from tubescribe.utils.io import read_yaml

DEFAULT_CONFIG_FILE = "tubescribe.yaml"

PROVIDER_CONFIGS: dict[ProviderKey, ProviderConfig] = {
    ProviderKey.ANTHROPIC: ProviderConfig(
        api_key_env="ANTHROPIC_API_KEY",
        model_env="ANTHROPIC_MODEL",
        model_name_env="ANTHROPIC_MODEL_NAME",
        default_model="claude-sonnet-4-5-20250929",
        default_model_name="Anthropic Sonnet 4.5",
        api_version="2023-06-01",
    ),
    ProviderKey.GOOGLE_GEMINI: ProviderConfig(
        api_key_env="GOOGLE_GEMINI_API_KEY",
        model_env="GOOGLE_GEMINI_MODEL",
        model_name_env="GOOGLE_GEMINI_MODEL_NAME",
        default_model="gemini-2.5-flash",
        default_model_name="Google Gemini 2.5 Flash",
    ),
    ProviderKey.PERPLEXITY: ProviderConfig(
        api_key_env="PERPLEXITY_API_KEY",
        model_env="PERPLEXITY_MODEL",
        model_name_env="PERPLEXITY_MODEL_NAME",
        default_model="sonar",
        default_model_name="Perplexity Sonar",
    ),
}

ALL_PROVIDERS: tuple[ProviderKey, ...] = tuple(PROVIDER_CONFIGS)


def provider_config(provider: ProviderKey | str) -> ProviderConfig:
    """Look up the static configuration for a provider."""
    key = ProviderKey(provider)
    try:
        return PROVIDER_CONFIGS[key]
    except KeyError:
        raise ConfigurationError(f"Provider configuration not found for: {key.value}") from None


class Settings(BaseModel):
    """Read-only named string settings (API keys, model ids).

    Safe to share between concurrent pipelines; nothing mutates it after
    construction.
    """

    model_config = ConfigDict(frozen=True)

    values: Mapping[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, env_file: Path | str | None = ".env") -> Settings:
        """Environment variables layered over an optional .env file."""
        values: dict[str, str] = {}
        if env_file and Path(env_file).is_file():
            values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        values.update(os.environ)
        return cls(values=values)

    def get(self, name: str) -> str | None:
        """Return the setting, or None when unset or blank."""
        value = self.values.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def api_key(self, provider: ProviderKey | str) -> str | None:
        return self.get(provider_config(provider).api_key_env)

    def model(self, provider: ProviderKey | str) -> str:
        config = provider_config(provider)
        return self.get(config.model_env) or config.default_model

    def model_name(self, provider: ProviderKey | str) -> str:
        config = provider_config(provider)
        return self.get(config.model_name_env) or config.default_model_name

    def configured_providers(self) -> dict[ProviderKey, bool]:
        """Which providers have an API key set (booleans only)."""
        return {key: self.api_key(key) is not None for key in ALL_PROVIDERS}


def load_app_config(path: Path | str | None = None) -> AppConfig:
    """Load tubescribe.yaml; a missing default file means defaults.

    An explicitly requested file must exist.
    """
    if path is None:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.is_file():
            return AppConfig()

    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        return AppConfig(**read_yaml(path))
    except ValueError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e
