"""Structured exceptions for xREL client errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from xrel_client.errors.models import ApiErrorPayload


class XrelError(Exception):
    """Base exception for everything raised by this library."""

    pass


class ConfigurationError(XrelError):
    """Client credentials, redirect URI or scope missing for the operation.

    Attributes:
        missing: Names of the parameters that were not set, in the order
            they were checked.
    """

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing if missing is not None else []


class InvalidArgumentError(XrelError, ValueError):
    """Caller-supplied value out of contract. Raised before any network call."""

    pass


class ScopeError(XrelError):
    """Required OAuth2 scope was not granted. Raised before any network call."""

    def __init__(self, message: str, scope: str | None = None):
        super().__init__(message)
        self.scope = scope


class APIError(XrelError):
    """The service answered with a structured error payload.

    The status code is kept as observed; xREL is known to send error
    payloads with 2xx codes. `response.request` is the request that
    produced the payload.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        error: "ApiErrorPayload | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.error = error

    @property
    def is_auth_failure(self) -> bool:
        """True when the token was rejected and the caller should re-authenticate."""
        if self.status_code == 401:
            return True
        return self.error is not None and self.error.error_type == "oauth2"


class TransportError(XrelError):
    """Network failure, non-2xx response without payload, or undecodable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(TransportError):
    """401 without an error payload."""

    pass


class RateLimitExceededError(TransportError):
    """429 without an error payload."""

    def __init__(self, message: str, reset: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reset = reset


class EmptyResultError(TransportError):
    """The response decoded to nothing for an operation that must return a value."""

    pass
