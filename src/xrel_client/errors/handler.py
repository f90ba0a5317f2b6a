"""Error detection for buffered xREL responses."""

import logging
from typing import Any

import httpx

from xrel_client.errors.exceptions import (
    APIError,
    EmptyResultError,
    RateLimitExceededError,
    TransportError,
    UnauthorizedError,
)
from xrel_client.errors.models import ApiErrorPayload

logger = logging.getLogger(__name__)


def raise_for_api_error(response: httpx.Response) -> None:
    """Raise the appropriate exception for an xREL response.

    The body is trusted over the status code: an error payload raises
    APIError even for 2xx responses. Only when no payload is present does
    the status code decide.

    Args:
        response: HTTP response whose body has already been read

    Raises:
        APIError: Body is an error envelope
        TransportError: Non-2xx status without an error envelope
    """
    status_code = response.status_code
    error = ApiErrorPayload.from_response(response)

    if error is not None:
        logger.debug(f"xREL error payload with HTTP {status_code}: {error.error} ({error.error_type})")
        raise APIError(
            error.to_exception_message(),
            status_code=status_code,
            response=response,
            error=error,
        )

    if response.is_success:
        return

    message = f"HTTP {status_code}"
    if status_code == 401:
        raise UnauthorizedError(message, status_code=status_code)
    if status_code == 429:
        reset = None
        if "x-ratelimit-reset" in response.headers:
            try:
                reset = int(response.headers["x-ratelimit-reset"])
            except (ValueError, TypeError):
                reset = None
        raise RateLimitExceededError(message, reset=reset, status_code=status_code)
    raise TransportError(message, status_code=status_code)


def decode_json(response: httpx.Response) -> Any:
    """Decode a successful response body, refusing empty results.

    Raises:
        EmptyResultError: Empty body or JSON null
        TransportError: Body is not valid JSON
    """
    if not response.content:
        raise EmptyResultError("Empty response body", status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise TransportError(
            f"Response body is not valid JSON: {e}", status_code=response.status_code
        ) from e

    if data is None:
        raise EmptyResultError("Response body decoded to null", status_code=response.status_code)
    return data
