"""The long-lived HTTP client every xREL call goes through."""

import logging
from typing import Any

import httpx

from xrel_client.errors.exceptions import TransportError
from xrel_client.transport.interceptor import RateLimitSnapshot, ResponseInterceptor

logger = logging.getLogger(__name__)

BASE_URL = "https://api.xrel.to/v2/"
DEFAULT_TIMEOUT = 30.0


def _drop_none(values: dict[str, Any] | None) -> dict[str, Any] | None:
    if values is None:
        return None
    return {key: value for key, value in values.items() if value is not None}


class TransportClient:
    """Owns one `httpx.Client` wired through a `ResponseInterceptor`.

    Construct one instance and pass it to every `XrelClient` and
    `OAuth2Session` that should share connections and rate-limit state.
    Nothing on the instance is mutated after construction apart from the
    interceptor's snapshot, so it can be shared across threads.

    Args:
        base_url: API root, ending in a slash
        timeout: Timeout in seconds applied to every request
        wrapped_transport: Transport to send requests through. Defaults to
            `httpx.HTTPTransport()`; tests pass an `httpx.MockTransport`.

    Example:
        ```python
        with TransportClient(timeout=10.0) as http:
            response = http.request("GET", "release/categories.json")
        ```
    """

    def __init__(
        self,
        *,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        wrapped_transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self._interceptor = ResponseInterceptor(wrapped_transport=wrapped_transport or httpx.HTTPTransport())
        self._client = httpx.Client(
            base_url=base_url,
            transport=self._interceptor,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> "TransportClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the httpx client and release connections."""
        self._client.close()

    @property
    def rate_limit(self) -> RateLimitSnapshot:
        return self._interceptor.rate_limit

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute exactly one request.

        `None` values in `params` and `data` are left out of the request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters
            data: Form fields (sent form-encoded)
            headers: Extra request headers

        Returns:
            The buffered response

        Raises:
            APIError: The interceptor found an error payload
            TransportError: Network failure or non-2xx status
        """
        logger.debug(f"{method} {path}")
        try:
            return self._client.request(
                method,
                path,
                params=_drop_none(params),
                data=_drop_none(data),
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
