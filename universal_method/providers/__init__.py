"""
Universal Method — Provider Selection

A table from Provider to Model Invoker, built once at import time, plus
the selector parsing and per-provider model defaults.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ..types import ModelInvoker, ModelOptions, Provider, UniversalMethodOptions
from .gemini import invoke_gemini
from .openai import invoke_openai

__all__ = [
    "DEFAULT_INVOKERS",
    "DEFAULT_MODELS",
    "DEFAULT_TEMPERATURE",
    "invoke_gemini",
    "invoke_openai",
    "resolve_model_options",
    "resolve_provider",
]

DEFAULT_INVOKERS: Mapping[Provider, ModelInvoker] = MappingProxyType({
    Provider.OPENAI: invoke_openai,
    Provider.GEMINI: invoke_gemini,
})

DEFAULT_MODELS: Mapping[Provider, str] = MappingProxyType({
    Provider.OPENAI: "gpt-4o",
    Provider.GEMINI: "gemini-2.0-flash",
})

DEFAULT_TEMPERATURE = 0.3


def resolve_provider(selector: str | None) -> Provider | None:
    """
    Map a free-form selector such as "openai" or "Gemini-Pro" to a Provider.
    Matching is a case-insensitive substring test; OpenAI wins when both match.
    """
    if not selector:
        return None
    lowered = selector.lower()
    if Provider.OPENAI.value in lowered:
        return Provider.OPENAI
    if Provider.GEMINI.value in lowered:
        return Provider.GEMINI
    return None


def resolve_model_options(
    provider: Provider, overrides: UniversalMethodOptions | None = None
) -> ModelOptions:
    """Apply caller overrides on top of the provider defaults."""
    overrides = overrides or UniversalMethodOptions()
    model_name = overrides.model_name or DEFAULT_MODELS[provider]
    temperature = DEFAULT_TEMPERATURE if overrides.temperature is None else overrides.temperature
    return ModelOptions(model_name=model_name, temperature=temperature)
