"""
Universal Method

Ask a language model a question and get the answer back as a typed value.
Prompt -> invoke -> coerce -> self-correcting retry -> value or default.
Package entry point — re-exports from the submodules.
"""

from .method import universal_method, as_target_type
from .coercion import coerce, strip_json_fence
from .orchestrator import RetryOrchestrator, MAX_RETRIES
from .prompt import build_prompt, build_retry_prompt
from .type_classifier import TypeDescription, describe
from .config import Settings, get_settings
from .providers import DEFAULT_INVOKERS, resolve_model_options, resolve_provider
from .types import (
    STRING,
    NUMBER,
    BOOLEAN,
    ARRAY,
    OBJECT,
    TypeKind,
    TargetType,
    Provider,
    ModelOptions,
    UniversalMethodOptions,
    ModelInvoker,
    ConversionRequest,
    ConversionResult,
    CoercionOutcome,
    Success,
    Failure,
    default_value,
    UniversalMethodError,
    InvalidInputError,
    InvalidQueryError,
    InvalidTargetTypeError,
    MissingCredentialError,
    UnsupportedProviderError,
    CoercionError,
    ConstructionError,
)
from .mock_provider import MockProvider, MockProviderConfig

__all__ = [
    "universal_method",
    "as_target_type",
    "coerce",
    "strip_json_fence",
    "RetryOrchestrator",
    "MAX_RETRIES",
    "build_prompt",
    "build_retry_prompt",
    "TypeDescription",
    "describe",
    "Settings",
    "get_settings",
    "DEFAULT_INVOKERS",
    "resolve_model_options",
    "resolve_provider",
    "STRING",
    "NUMBER",
    "BOOLEAN",
    "ARRAY",
    "OBJECT",
    "TypeKind",
    "TargetType",
    "Provider",
    "ModelOptions",
    "UniversalMethodOptions",
    "ModelInvoker",
    "ConversionRequest",
    "ConversionResult",
    "CoercionOutcome",
    "Success",
    "Failure",
    "default_value",
    "UniversalMethodError",
    "InvalidInputError",
    "InvalidQueryError",
    "InvalidTargetTypeError",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "CoercionError",
    "ConstructionError",
    "MockProvider",
    "MockProviderConfig",
]
