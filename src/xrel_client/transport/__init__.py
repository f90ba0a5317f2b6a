"""Transport layer for xREL API calls.

Every request goes through one `httpx.Client` whose transport is a
`ResponseInterceptor`: it records the rate-limit headers and raises on xREL
error payloads before the caller ever sees the response.

Modules:
    interceptor: Rate-limit tracking and error detection
    client: The shared HTTP client

Example:
    ```python
    from xrel_client.transport import TransportClient

    http = TransportClient(timeout=10.0)
    response = http.request("GET", "release/filters.json")
    print(http.rate_limit.remaining)
    ```
"""

from xrel_client.transport.client import BASE_URL, TransportClient
from xrel_client.transport.interceptor import RateLimitSnapshot, ResponseInterceptor

__all__ = ["BASE_URL", "RateLimitSnapshot", "ResponseInterceptor", "TransportClient"]
