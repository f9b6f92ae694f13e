"""
conftest.py — Shared fixtures: explicit settings (so tests never read the
process environment or a .env file) and a factory for scripted providers.
"""

from __future__ import annotations

from typing import Callable

import pytest

from universal_method import MockProvider, MockProviderConfig, Provider, Settings


def make_settings(model: str = "openai", key: str | None = "test-key") -> Settings:
    return Settings(model=model, key=key, _env_file=None)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def scripted() -> Callable[..., MockProvider]:
    """Build a MockProvider that replies with the given raw texts in order."""

    def _build(*responses: str, failure_rate: float = 0.0) -> MockProvider:
        return MockProvider(MockProviderConfig(responses=list(responses), failure_rate=failure_rate))

    return _build


def invokers_for(provider: MockProvider, *targets: Provider) -> dict:
    """Register one mock under every given provider (both when none given)."""
    targets = targets or (Provider.OPENAI, Provider.GEMINI)
    return {target: provider.invoke for target in targets}
