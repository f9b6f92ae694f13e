"""
Universal Method — Response Coercer

Deterministic parsing of free-text model output into a target type.
Every failure is reported as Failure(reason) with a reason suitable for
feeding straight back to the model; coerce() itself never raises.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Callable

from .types import (
    CoercionError,
    CoercionOutcome,
    ConstructionError,
    Failure,
    Success,
    TargetType,
    TypeKind,
)

__all__ = ["coerce", "strip_json_fence"]

logger = logging.getLogger(__name__)

_FENCE_OPEN = "```json\n"
_FENCE_CLOSE = "\n```"

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
# Leading decimal literal, read the way a lenient float parser would:
# "12.5.3" -> 12.5, "7-2" -> 7, "--1" -> no match.
_LEADING_FLOAT = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")

_TRUE_WORDS = frozenset({"true", "yes", "1"})
_FALSE_WORDS = frozenset({"false", "no", "0"})


# --- Preprocessing ---


def strip_json_fence(raw: str) -> str:
    """
    Strip a literal ```json\\n opener and \\n``` closer from model output.
    Only these exact markers are removed; anything else is left untouched.
    """
    text = raw
    if text.startswith(_FENCE_OPEN):
        text = text[len(_FENCE_OPEN):]
    if text.endswith(_FENCE_CLOSE):
        text = text[: -len(_FENCE_CLOSE)]
    return text


# --- Per-type converters ---


def _to_string(cleaned: str, target_type: TargetType) -> str:
    return cleaned


def _to_number(cleaned: str, target_type: TargetType) -> float:
    digits = _NON_NUMERIC.sub("", cleaned)
    match = _LEADING_FLOAT.match(digits)
    if match is None:
        raise CoercionError("Could not convert response to number")
    value = float(match.group(0))
    if not math.isfinite(value):
        raise CoercionError("Could not convert response to number")
    return value


def _to_boolean(cleaned: str, target_type: TargetType) -> bool:
    word = cleaned.lower().strip()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise CoercionError("Could not convert response to boolean")


def _reject_constant(name: str) -> Any:
    raise CoercionError(f"Invalid JSON literal: {name}")


def _parse_json(cleaned: str) -> Any:
    """Strict JSON: NaN and Infinity are rejected, as is runaway nesting."""
    try:
        return json.loads(cleaned, parse_constant=_reject_constant)
    except json.JSONDecodeError as err:
        raise CoercionError(str(err)) from err
    except RecursionError as err:
        raise CoercionError("Response JSON is nested too deeply") from err


def _to_array(cleaned: str, target_type: TargetType) -> list[Any]:
    parsed = _parse_json(cleaned)
    if not isinstance(parsed, list):
        raise CoercionError("Response is not an array")
    return parsed


def _to_object(cleaned: str, target_type: TargetType) -> dict[str, Any]:
    parsed = _parse_json(cleaned)
    if not isinstance(parsed, dict):
        raise CoercionError("Response is not an object")
    return parsed


def _to_custom(cleaned: str, target_type: TargetType) -> Any:
    try:
        argument: Any = _parse_json(cleaned)
    except CoercionError:
        argument = cleaned

    constructor = target_type.constructor
    if constructor is None:
        raise ConstructionError("Custom return type has no constructor")
    try:
        return constructor(argument)
    except Exception as exc:
        raise ConstructionError(str(exc) or type(exc).__name__, exc) from exc


_CONVERTERS: dict[TypeKind, Callable[[str, TargetType], Any]] = {
    TypeKind.STRING: _to_string,
    TypeKind.NUMBER: _to_number,
    TypeKind.BOOLEAN: _to_boolean,
    TypeKind.ARRAY: _to_array,
    TypeKind.OBJECT: _to_object,
    TypeKind.CUSTOM: _to_custom,
}


# --- Coercer ---


def coerce(raw: str, target_type: TargetType) -> CoercionOutcome:
    """Read raw model text as the target type."""
    cleaned = strip_json_fence(raw)

    kind = target_type.kind if isinstance(target_type, TargetType) else None
    converter = _CONVERTERS.get(kind) if kind is not None else None
    if converter is None:
        # Only reachable when entry-point validation was bypassed.
        return Success(cleaned)

    try:
        return Success(converter(cleaned, target_type))
    except CoercionError as err:
        logger.warning("Type conversion error: %s", err.reason)
        return Failure(err.reason)
