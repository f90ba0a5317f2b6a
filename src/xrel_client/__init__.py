"""xrel-client - a Python client for the xREL v2 API.

The library is built around the parts every call shares:
- A response interceptor that tracks rate limits and raises on xREL error
  payloads even when the status code claims success
- An OAuth2 session (authorization code, client credentials, refresh token)
- Pagination normalization and scope gating before any request is sent

Example:
    ```python
    from xrel_client import OAuth2Session, TransportClient, XrelClient

    http = TransportClient()
    session = OAuth2Session("client-id", "client-secret", scope=["viewnfo"], http=http)
    xrel = XrelClient(http=http, session=session)

    token = xrel.exchange_token("client_credentials")
    release = xrel.release_info(dirname="Some.Release-GRP")
    nfo = xrel.nfo_release(release["id"], token)
    ```
"""

from xrel_client.auth.oauth2 import OAuth2Session, Token
from xrel_client.client import XrelClient
from xrel_client.config import XrelSettings
from xrel_client.transport.client import TransportClient

__version__ = "0.1.0"

__all__ = ["OAuth2Session", "Token", "TransportClient", "XrelClient", "XrelSettings", "__version__"]
