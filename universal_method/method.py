"""
Universal Method — Entry Point

universal_method() asks a model to answer a query in a type-constrained
form and always resolves to a value of the requested type or its default.
Nothing raised inside escapes to the caller; failures are logged.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .config import Settings, get_settings
from .orchestrator import RetryOrchestrator
from .prompt import build_prompt
from .providers import DEFAULT_INVOKERS, resolve_model_options
from .types import (
    STRING,
    ConversionRequest,
    InvalidQueryError,
    InvalidTargetTypeError,
    ModelInvoker,
    Provider,
    TargetType,
    UniversalMethodOptions,
    UnsupportedProviderError,
    default_value,
)

__all__ = ["universal_method", "as_target_type"]

logger = logging.getLogger(__name__)


def as_target_type(target_type: TargetType | Callable[[Any], Any]) -> TargetType:
    """Accept a TargetType tag or wrap a one-argument constructor as a custom tag."""
    if isinstance(target_type, TargetType):
        return target_type
    if callable(target_type):
        return TargetType.custom(target_type)
    raise InvalidTargetTypeError("Invalid return type")


async def universal_method(
    query: str,
    target_type: TargetType | Callable[[Any], Any] = STRING,
    options: UniversalMethodOptions | None = None,
    *,
    settings: Settings | None = None,
    invokers: Mapping[Provider, ModelInvoker] | None = None,
    on_retry: Callable[[str, int], None] | None = None,
) -> Any:
    """
    Answer query as target_type.

    settings defaults to the process-wide configuration. invokers replaces
    the provider-selection table, e.g. with a scripted provider in tests.
    """
    fallback = target_type if isinstance(target_type, TargetType) else None
    try:
        if not isinstance(query, str):
            raise InvalidQueryError("Query must be a string")
        resolved_type = as_target_type(target_type)
        fallback = resolved_type

        settings = settings or get_settings()
        api_key = settings.require_key()
        provider = settings.require_provider()

        table = DEFAULT_INVOKERS if invokers is None else invokers
        invoker = table.get(provider)
        if invoker is None:
            raise UnsupportedProviderError(f"No invoker registered for provider: {provider.value}")

        request = ConversionRequest(
            query=query,
            target_type=resolved_type,
            original_query=query,
            provider=provider,
            api_key=api_key,
            model_options=resolve_model_options(provider, options),
        )

        raw = await invoker(build_prompt(query, resolved_type), api_key, request.model_options)
        result = await RetryOrchestrator(table, on_retry=on_retry).run(raw, request)
        return result.value
    except Exception as exc:
        logger.error("UniversalMethod Error: %s", exc)
        return default_value(fallback)
