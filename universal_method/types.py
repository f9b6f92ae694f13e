"""
Universal Method — Type Definitions

Core types for the prompt -> invoke -> coerce -> retry pipeline.
Provider-agnostic, no external dependencies beyond stdlib.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Union


# --- Errors ---


class UniversalMethodError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(UniversalMethodError):
    """Input rejected before or outside the retry loop. Never retried."""


class InvalidQueryError(InvalidInputError):
    pass


class InvalidTargetTypeError(InvalidInputError):
    pass


class MissingCredentialError(InvalidInputError):
    pass


class UnsupportedProviderError(InvalidInputError):
    pass


class CoercionError(UniversalMethodError):
    """Raw model text could not be read as the target type."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ConstructionError(CoercionError):
    """A custom constructor rejected the value it was given."""

    def __init__(self, reason: str, cause: BaseException | None = None) -> None:
        super().__init__(reason)
        self.cause = cause


class TypeKind(str, Enum):
    """The closed set of shapes a caller can ask for."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    CUSTOM = "custom"


@dataclass(frozen=True)
class TargetType:
    """
    The caller-declared shape of the final result.

    Built-in kinds carry no constructor. CUSTOM carries a one-argument
    callable that receives either the parsed JSON value or the cleaned text.
    """

    kind: TypeKind
    constructor: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TypeKind):
            raise InvalidTargetTypeError(f"Invalid return type: {self.kind!r}")
        if self.kind is TypeKind.CUSTOM:
            if not callable(self.constructor):
                raise InvalidTargetTypeError("Custom return type requires a callable constructor")
        elif self.constructor is not None:
            raise InvalidTargetTypeError(f"{self.kind.value} return type does not take a constructor")

    @classmethod
    def custom(cls, constructor: Callable[[Any], Any]) -> TargetType:
        return cls(TypeKind.CUSTOM, constructor)

    @property
    def name(self) -> str:
        if self.kind is TypeKind.CUSTOM:
            return getattr(self.constructor, "__name__", "custom")
        return self.kind.value


STRING = TargetType(TypeKind.STRING)
NUMBER = TargetType(TypeKind.NUMBER)
BOOLEAN = TargetType(TypeKind.BOOLEAN)
ARRAY = TargetType(TypeKind.ARRAY)
OBJECT = TargetType(TypeKind.OBJECT)


class Provider(str, Enum):
    """Supported large-language-model providers."""

    OPENAI = "openai"
    GEMINI = "gemini"


@dataclass(frozen=True)
class ModelOptions:
    """Resolved per-call model settings handed to a Model Invoker."""

    model_name: str
    temperature: float


@dataclass(frozen=True)
class UniversalMethodOptions:
    """Caller overrides. None means use the provider default."""

    model_name: str | None = None
    temperature: float | None = None


# A Model Invoker: any async function matching this signature works.
# Must return already-trimmed text and raise on transport/auth failure.
ModelInvoker = Callable[[str, str, ModelOptions], Awaitable[str]]


@dataclass(frozen=True)
class ConversionRequest:
    """Everything the retry loop needs to re-prompt the model."""

    query: str
    target_type: TargetType
    original_query: str
    provider: Provider | None
    api_key: str = field(repr=False)
    model_options: ModelOptions
    retry_count: int = 0


@dataclass(frozen=True)
class Success:
    """Coercion produced a value of the target type."""

    value: Any


@dataclass(frozen=True)
class Failure:
    """Coercion failed. The reason is fed back to the model verbatim."""

    reason: str


CoercionOutcome = Union[Success, Failure]


@dataclass
class ConversionResult:
    """The result of running a response through the retry loop."""

    # The coerced value, or the per-type default when defaulted is True.
    value: Any

    # Total coercion attempts made (1 = first response parsed).
    attempts: int

    # Whether the default value was returned instead of a parsed one.
    defaulted: bool

    # Every coercion failure reason, oldest first.
    errors: list[str] = field(default_factory=list)


def default_value(target_type: TargetType | None) -> Any:
    """Fallback value returned when no attempt produced a usable result."""
    kind = target_type.kind if isinstance(target_type, TargetType) else None
    if kind is TypeKind.STRING:
        return ""
    if kind is TypeKind.NUMBER:
        return 0
    if kind is TypeKind.BOOLEAN:
        return False
    if kind is TypeKind.ARRAY:
        return []
    if kind is TypeKind.OBJECT:
        return {}
    return None


