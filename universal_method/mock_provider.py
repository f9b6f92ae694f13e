"""
Universal Method — Mock Model Invoker

Simulates a provider with scripted replies:
- A fixed sequence of raw responses, cycled per call
- Configurable latency
- Transport failure injection

No API keys needed. Used for testing and offline experiments.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field

from .types import ModelOptions


@dataclass
class MockProviderConfig:
    """Configuration for the mock provider."""

    # Raw replies returned in order. Cycles once the end is reached.
    responses: list[str] = field(default_factory=lambda: ["mock response"])

    # Simulated response latency in milliseconds.
    latency_ms: float = 0

    # Probability of raising a transport error instead of replying.
    failure_rate: float = 0.0

    # Error message when failure triggers.
    error_message: str = "Provider unavailable"


class MockProvider:
    """Scripted stand-in for a real Model Invoker."""

    def __init__(self, config: MockProviderConfig | None = None) -> None:
        self._config = config or MockProviderConfig()
        if not self._config.responses:
            raise ValueError("MockProvider requires at least one response")
        self._call_count = 0
        self._prompts: list[str] = []
        self._options: list[ModelOptions] = []

    async def invoke(self, prompt: str, api_key: str, options: ModelOptions) -> str:
        self._call_count += 1
        self._prompts.append(prompt)
        self._options.append(options)

        if self._config.latency_ms > 0:
            await asyncio.sleep(self._config.latency_ms / 1000)

        if random.random() < self._config.failure_rate:
            raise RuntimeError(self._config.error_message)

        index = (self._call_count - 1) % len(self._config.responses)
        return self._config.responses[index].strip()

    @property
    def call_count(self) -> int:
        """Total calls made to this provider instance."""
        return self._call_count

    @property
    def prompts(self) -> list[str]:
        """Every prompt received, oldest first."""
        return list(self._prompts)

    @property
    def options(self) -> list[ModelOptions]:
        return list(self._options)

    def reset(self) -> None:
        self._call_count = 0
        self._prompts.clear()
        self._options.clear()
