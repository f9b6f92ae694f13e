"""
Universal Method — Configuration

Process-level settings read from UNIVERSAL_METHOD_* environment variables
(or a .env file), loaded once and frozen.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .providers import resolve_provider
from .types import MissingCredentialError, Provider, UnsupportedProviderError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="UNIVERSAL_METHOD_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    # Provider selector, e.g. "openai" or "gemini"
    model: str = "openai"
    key: SecretStr | None = None

    @property
    def provider(self) -> Provider | None:
        return resolve_provider(self.model)

    def require_provider(self) -> Provider:
        provider = self.provider
        if provider is None:
            raise UnsupportedProviderError(
                f"Unsupported model: {self.model}. Please use 'openai' or 'gemini'."
            )
        return provider

    def require_key(self) -> str:
        secret = self.key.get_secret_value() if self.key is not None else ""
        if not secret:
            raise MissingCredentialError(
                "API key not found. Please set UNIVERSAL_METHOD_KEY in environment variables."
            )
        return secret


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
