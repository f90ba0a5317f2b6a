"""Error taxonomy and xREL error payload handling."""

from xrel_client.errors.exceptions import (
    APIError,
    ConfigurationError,
    EmptyResultError,
    InvalidArgumentError,
    RateLimitExceededError,
    ScopeError,
    TransportError,
    UnauthorizedError,
    XrelError,
)
from xrel_client.errors.handler import decode_json, raise_for_api_error
from xrel_client.errors.models import ApiErrorPayload

__all__ = [
    "APIError",
    "ApiErrorPayload",
    "ConfigurationError",
    "EmptyResultError",
    "InvalidArgumentError",
    "RateLimitExceededError",
    "ScopeError",
    "TransportError",
    "UnauthorizedError",
    "XrelError",
    "decode_json",
    "raise_for_api_error",
]
