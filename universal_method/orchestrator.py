"""
Universal Method — Retry Orchestrator

Drives the bounded self-correction loop:

    Attempting(0) -> coerce -> Succeeded
                  -> Failure -> re-prompt with the error -> Attempting(1) -> ...
                  -> budget spent or context missing -> Defaulted

The first model call happens upstream; run() starts with that response in
hand. Only coercion failures drive retries. Errors raised by a Model
Invoker propagate to the caller unchanged.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Mapping

from .coercion import coerce
from .prompt import build_retry_prompt
from .types import (
    ConversionRequest,
    ConversionResult,
    Failure,
    ModelInvoker,
    Provider,
    default_value,
)

__all__ = ["RetryOrchestrator", "MAX_RETRIES"]

logger = logging.getLogger(__name__)

# Corrective re-prompts after the first response (3 coercion attempts total).
MAX_RETRIES = 2


class RetryOrchestrator:
    """Coerces a model response, re-prompting on failure up to MAX_RETRIES times."""

    def __init__(
        self,
        invokers: Mapping[Provider, ModelInvoker],
        on_retry: Callable[[str, int], None] | None = None,
    ) -> None:
        self._invokers = invokers
        self._on_retry = on_retry

    async def run(self, raw: str, request: ConversionRequest) -> ConversionResult:
        """
        Coerce raw into request.target_type, retrying with error feedback.

        Always returns a ConversionResult; defaulted is True when every
        allowed attempt failed or the loop could not continue.
        """
        current = request
        text = raw
        errors: list[str] = []

        while True:
            outcome = coerce(text, current.target_type)
            attempts = current.retry_count + 1

            if not isinstance(outcome, Failure):
                return ConversionResult(value=outcome.value, attempts=attempts, defaulted=False, errors=errors)

            errors.append(outcome.reason)

            if not self._can_retry(current):
                return self._defaulted(current, attempts, errors)

            invoker = self._invokers.get(current.provider) if current.provider is not None else None
            if invoker is None:
                logger.error("Unsupported provider during retry: %s", current.provider)
                return self._defaulted(current, attempts, errors)

            retry_number = current.retry_count + 1
            logger.info(
                "Retrying %s conversion (%d/%d): %s",
                current.target_type.name,
                retry_number,
                MAX_RETRIES,
                outcome.reason,
            )
            if self._on_retry:
                self._on_retry(outcome.reason, retry_number)

            prompt = build_retry_prompt(outcome.reason, current.original_query, current.target_type)
            text = await invoker(prompt, current.api_key, current.model_options)
            current = dataclasses.replace(current, retry_count=retry_number)

    @staticmethod
    def _can_retry(request: ConversionRequest) -> bool:
        return (
            request.retry_count < MAX_RETRIES
            and bool(request.original_query)
            and request.provider is not None
            and bool(request.api_key)
        )

    @staticmethod
    def _defaulted(request: ConversionRequest, attempts: int, errors: list[str]) -> ConversionResult:
        value = default_value(request.target_type)
        logger.warning(
            "Returning default for %s after %d attempt(s): %s",
            request.target_type.name,
            attempts,
            errors[-1],
        )
        return ConversionResult(value=value, attempts=attempts, defaulted=True, errors=errors)
