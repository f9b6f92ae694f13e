"""
Universal Method — Type Classifier

Maps a TargetType to the label and conversion rules shown to the model,
so it knows in advance how strictly its output will be read. The rules
are prompt content only; enforcement lives in coercion.py.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import InvalidTargetTypeError, TargetType, TypeKind

__all__ = ["TypeDescription", "describe"]


@dataclass(frozen=True)
class TypeDescription:
    """Human-readable description of a target type."""

    label: str
    rules: tuple[str, ...]


_LABELS: dict[TypeKind, str] = {
    TypeKind.NUMBER: "a number only",
    TypeKind.BOOLEAN: "true or false only",
    TypeKind.ARRAY: "an array in JSON format",
    TypeKind.OBJECT: "an object in JSON format",
    TypeKind.STRING: "a string",
}

_FALLBACK_LABEL = "a response"

_RULES: dict[TypeKind, tuple[str, ...]] = {
    TypeKind.NUMBER: (
        "Response will be cleaned to keep only digits, decimal points, and minus signs",
        "Will be converted to a number by reading the leading decimal literal",
        "If conversion fails, will return 0",
    ),
    TypeKind.BOOLEAN: (
        "Response will be converted to lowercase and trimmed",
        'Returns true for: "true", "yes", "1"',
        'Returns false for: "false", "no", "0"',
        "If conversion fails, will return false",
    ),
    TypeKind.ARRAY: (
        "Response must be valid JSON array format",
        "If not an array or invalid JSON, will return empty array []",
    ),
    TypeKind.OBJECT: (
        "Response must be valid JSON object format",
        "If not an object or invalid JSON, will return empty object {}",
    ),
    TypeKind.STRING: (
        "Response will be returned as is",
        'If conversion fails, will return empty string ""',
    ),
}

_CUSTOM_RULES: tuple[str, ...] = (
    "Response will be attempted to be parsed as JSON first",
    "If JSON parsing fails, will be used as string",
    "If conversion fails, will return null",
)


def describe(target_type: TargetType) -> TypeDescription:
    """Return the prompt label and conversion rules for a target type."""
    if not isinstance(target_type, TargetType):
        raise InvalidTargetTypeError(f"Invalid return type: {target_type!r}")
    label = _LABELS.get(target_type.kind, _FALLBACK_LABEL)
    rules = _RULES.get(target_type.kind, _CUSTOM_RULES)
    return TypeDescription(label=label, rules=rules)
