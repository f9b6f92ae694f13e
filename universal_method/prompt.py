"""
Universal Method — Prompt Builder

Composes the outbound instruction text. The retry prompt carries only the
most recent failure reason, never a growing transcript.
"""

from __future__ import annotations

from .type_classifier import describe
from .types import TargetType

__all__ = ["build_prompt", "build_retry_prompt"]


def _format_rules(rules: tuple[str, ...]) -> str:
    return "\n".join(f"- {rule}" for rule in rules)


def build_prompt(query: str, target_type: TargetType) -> str:
    """Build the first prompt sent to the model for a query."""
    description = describe(target_type)
    label = description.label
    return "\n".join([
        f'Please respond to the following query: "{query}"',
        "",
        f"Important: Your response must be {label} without any additional text, explanations, or formatting.",
        f"Just provide the direct answer that can be parsed as {label}.",
        "Do not wrap the answer in markdown.",
        "",
        "Response will be converted using these rules:",
        _format_rules(description.rules),
        "",
        "Note: If any conversion error occurs, the function will:",
        "1. Log the error",
        "2. Return a default value based on the return type",
    ])


def build_retry_prompt(prior_error: str, original_query: str, target_type: TargetType) -> str:
    """Build a corrective prompt that embeds the previous coercion error."""
    description = describe(target_type)
    label = description.label
    return "\n".join([
        f'Previous attempt failed with error: "{prior_error}"',
        f'Original query: "{original_query}"',
        f"Expected return type: {label}",
        "",
        f"Please fix your response to match the expected type. Your response must be {label} "
        "without any additional text, explanations, or formatting.",
        f"Just provide the direct answer that can be parsed as {label}.",
        "",
        "Response will be converted using these rules:",
        _format_rules(description.rules),
    ])
