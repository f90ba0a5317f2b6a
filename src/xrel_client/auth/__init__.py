"""Authentication for the xREL API.

- OAuth2 session with the authorization-code, client-credentials and
  refresh-token grants
- Scope gating for restricted endpoints
- Credential resolution (value → env → .env → default)

Example:
    ```python
    from xrel_client.auth import OAuth2Session

    session = OAuth2Session("client-id", "client-secret", scope=["viewnfo"])
    token = session.exchange_token("client_credentials")
    ```
"""

from xrel_client.auth.credentials import CredentialResolver
from xrel_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from xrel_client.auth.oauth2 import (
    GRANT_AUTHORIZATION_CODE,
    GRANT_CLIENT_CREDENTIALS,
    GRANT_REFRESH_TOKEN,
    OAuth2Session,
    Token,
)
from xrel_client.auth.scopes import SCOPE_ADD_PROOF, SCOPE_VIEW_NFO, require_scope

__all__ = [
    "GRANT_AUTHORIZATION_CODE",
    "GRANT_CLIENT_CREDENTIALS",
    "GRANT_REFRESH_TOKEN",
    "SCOPE_ADD_PROOF",
    "SCOPE_VIEW_NFO",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "OAuth2Session",
    "Token",
    "require_scope",
]
