"""Rate-limit tracking and error detection for every xREL response.

The xREL API cannot be trusted to send meaningful status codes: error
payloads regularly arrive with 2xx responses. `ResponseInterceptor` wraps
the real transport, buffers each body once, probes it for the error
envelope, and only then lets the response through.

## Example

```python
import httpx
from xrel_client.transport.interceptor import ResponseInterceptor

interceptor = ResponseInterceptor(wrapped_transport=httpx.HTTPTransport())

with httpx.Client(transport=interceptor) as client:
    response = client.get("https://api.xrel.to/v2/release/categories.json")

print(interceptor.rate_limit.remaining)
```
"""

import logging
from dataclasses import dataclass, replace

import httpx

from xrel_client.errors.handler import raise_for_api_error

logger = logging.getLogger(__name__)

UNKNOWN = -1


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit state as reported by the most recently completed response.

    Every field is -1 until a response has provided it.

    See: https://www.xrel.to/wiki/2727/api-rate-limiting.html
    """

    limit: int = UNKNOWN  # Requests permitted per window
    remaining: int = UNKNOWN  # Requests left in the current window
    reset: int = UNKNOWN  # UTC epoch seconds at which the window resets
    status_code: int = UNKNOWN  # Status of the last response


class ResponseInterceptor(httpx.BaseTransport):
    """Transport that records rate limits and raises on xREL error payloads.

    The snapshot is an immutable value replaced after each response, so a
    reader always sees one consistent snapshot. Under concurrent use the
    snapshot reflects whichever response finished last.

    Args:
        wrapped_transport: The underlying transport to wrap

    Example:
        ```python
        transport = ResponseInterceptor(wrapped_transport=httpx.HTTPTransport(retries=0))
        ```
    """

    HEADER_LIMIT = "X-RateLimit-Limit"
    HEADER_REMAINING = "X-RateLimit-Remaining"
    HEADER_RESET = "X-RateLimit-Reset"

    def __init__(self, *, wrapped_transport: httpx.BaseTransport) -> None:
        self._wrapped_transport = wrapped_transport
        self._rate_limit = RateLimitSnapshot()

    @property
    def rate_limit(self) -> RateLimitSnapshot:
        """The current rate-limit snapshot."""
        return self._rate_limit

    def __enter__(self):
        """Enter context, delegating to wrapped transport."""
        self._wrapped_transport.__enter__()
        return self

    def __exit__(self, exc_type=None, exc_value=None, traceback=None) -> None:
        """Exit context, delegating to wrapped transport."""
        self._wrapped_transport.__exit__(exc_type, exc_value, traceback)

    def close(self) -> None:
        self._wrapped_transport.close()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request and inspect the response before handing it back.

        Args:
            request: The HTTP request to send

        Returns:
            The unmodified response, with its body buffered

        Raises:
            APIError: Body carries an xREL error payload (any status code)
            TransportError: Non-2xx status without an error payload
        """
        response = self._wrapped_transport.handle_request(request)
        # httpx binds the request only after the transport returns; errors raised here carry the response
        response.request = request
        self._record(response)

        # Buffer once; the probe below and the caller share these bytes
        response.read()

        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")

        raise_for_api_error(response)
        return response

    def _record(self, response: httpx.Response) -> None:
        """Swap in a new snapshot built from the response headers."""
        snapshot = replace(self._rate_limit, status_code=response.status_code)

        limit = self._parse_header(response, self.HEADER_LIMIT)
        if limit is not None:
            snapshot = replace(snapshot, limit=limit)
        remaining = self._parse_header(response, self.HEADER_REMAINING)
        if remaining is not None:
            snapshot = replace(snapshot, remaining=remaining)
        reset = self._parse_header(response, self.HEADER_RESET)
        if reset is not None:
            snapshot = replace(snapshot, reset=reset)

        self._rate_limit = snapshot
        if limit is not None or remaining is not None or reset is not None:
            logger.debug(f"Rate limit updated: {snapshot.remaining}/{snapshot.limit}, reset at {snapshot.reset}")

    def _parse_header(self, response: httpx.Response, name: str) -> int | None:
        """Parse an integer rate-limit header.

        Returns:
            The value, or None if the header is missing or not an integer
        """
        value = response.headers.get(name)
        if value is None:
            return None

        try:
            return int(value.strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer {name} header: {value!r}")
            return None
