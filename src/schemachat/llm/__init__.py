"""Schema-constrained completions over LLM vendor APIs.

Design goals:
- Keep vendor wire formats isolated in one adapter per vendor.
- One small interface: `Model.call(prompt, schema) -> JSON value`.
- Recover JSON from free-form answers, and tell a malformed answer
  (ModelResponseError, worth a retry) apart from transport failures.
"""

import httpx
from openai import APIError

from ._json import classify_error, extract_json_block, parse_completion
from ._schema import augment_prompt, wrap_schema
from ._transport import CircuitOpenError, ResponseTooLargeError
from .azure_client import AzureOpenAIModel
from .base import Model
from .connection import (
    ApiKeyAuth,
    BearerTokenAuth,
    CircuitBreakerConfig,
    ConnectionConfig,
    PoolConfig,
    ResponseLimits,
    RetryPolicy,
    TimeoutConfig,
    TlsConfig,
)
from .errors import (
    ConfigurationError,
    EmptyCompletionError,
    LLMError,
    ModelResponseError,
)
from .factory import build_model
from .openai_client import OpenAIModel
from .typed import call_typed
from .types import SCHEMA_NAME, Message, StructuredOutputDescriptor

# Failures from the HTTP layer; passed through to callers unchanged.
TRANSPORT_ERRORS = (httpx.HTTPError, APIError)

__all__ = [
    "ApiKeyAuth",
    "AzureOpenAIModel",
    "BearerTokenAuth",
    "CircuitBreakerConfig",
    "CircuitOpenError",
    "ConfigurationError",
    "ConnectionConfig",
    "EmptyCompletionError",
    "LLMError",
    "Message",
    "Model",
    "ModelResponseError",
    "OpenAIModel",
    "PoolConfig",
    "ResponseLimits",
    "ResponseTooLargeError",
    "RetryPolicy",
    "SCHEMA_NAME",
    "StructuredOutputDescriptor",
    "TRANSPORT_ERRORS",
    "TimeoutConfig",
    "TlsConfig",
    "augment_prompt",
    "build_model",
    "call_typed",
    "classify_error",
    "extract_json_block",
    "parse_completion",
    "wrap_schema",
]
