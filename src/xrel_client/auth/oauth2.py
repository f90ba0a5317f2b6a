"""OAuth2 session and token handling for the xREL API.

Three grants are supported: `authorization_code` (user authorizes in the
browser and the redirect carries a code), `client_credentials` (application
only) and `refresh_token` (swap a token's refresh value for a new token).

The session never stores tokens. Each exchange returns a new, frozen
`Token`; the caller keeps it and passes it to user-restricted calls. There
is no automatic refresh: when a call fails with `UnauthorizedError` or an
`APIError` whose `is_auth_failure` is set, call `refresh()` and retry.

Example:
    ```python
    session = OAuth2Session(
        client_id="abc",
        client_secret="secret",
        redirect_uri="https://example.com/callback",
        scope=["viewnfo"],
        http=TransportClient(),
    )
    url = session.build_authorization_url()
    # ... user authorizes, redirect delivers ?code=...
    token = session.exchange_token("authorization_code", code=code)
    token = session.refresh(token)
    ```
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from xrel_client.auth.scopes import require_scope
from xrel_client.errors.exceptions import ConfigurationError, InvalidArgumentError, TransportError
from xrel_client.errors.handler import decode_json
from xrel_client.transport.client import TransportClient

if TYPE_CHECKING:
    from xrel_client.config import XrelSettings

logger = logging.getLogger(__name__)

GRANT_AUTHORIZATION_CODE = "authorization_code"
GRANT_CLIENT_CREDENTIALS = "client_credentials"
GRANT_REFRESH_TOKEN = "refresh_token"
GRANT_TYPES = frozenset([GRANT_AUTHORIZATION_CODE, GRANT_CLIENT_CREDENTIALS, GRANT_REFRESH_TOKEN])

RESPONSE_TYPE = "code"
AUTHORIZE_PATH = "oauth2/auth"
TOKEN_PATH = "oauth2/token.json"


@dataclass(frozen=True)
class Token:
    """An access token returned by one grant exchange.

    Never mutated: a refresh produces a new Token. When a Token is shared
    between threads, swap the reference to the new one.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None  # Lifetime in seconds as reported by the service
    refresh_token: str | None = None
    scope: tuple[str, ...] = ()
    grant_type: str | None = None
    issued_at: float = field(default_factory=time.time)

    @classmethod
    def from_response(cls, data: dict[str, Any], grant_type: str | None = None) -> "Token":
        """Build a Token from the token endpoint's JSON body.

        Raises:
            TransportError: The body has no access token or a malformed field
        """
        access_token = data.get("access_token")
        if not access_token:
            raise TransportError("Token response did not contain an access_token")

        expires_in = data.get("expires_in")
        scope = data.get("scope") or ""
        if isinstance(scope, str):
            scope = scope.split()

        try:
            return cls(
                access_token=str(access_token),
                token_type=data.get("token_type") or "Bearer",
                expires_in=int(expires_in) if expires_in is not None else None,
                refresh_token=data.get("refresh_token") or None,
                scope=tuple(scope),
                grant_type=grant_type,
            )
        except (TypeError, ValueError) as e:
            raise TransportError(f"Malformed token response: {e!r}") from e

    @property
    def expires_at(self) -> float | None:
        """Epoch seconds after which the token is no longer valid."""
        if self.expires_in is None:
            return None
        return self.issued_at + self.expires_in

    def is_expired(self, now: float | None = None) -> bool:
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return (time.time() if now is None else now) >= expires_at

    def bearer_header(self) -> str:
        return f"Bearer {self.access_token}"

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks
        return f"Token(token_type={self.token_type!r}, grant_type={self.grant_type!r}, expires_in={self.expires_in!r})"


class OAuth2Session:
    """Client credentials plus the grant exchanges built on them.

    Every argument is optional so that anonymous use (public endpoints only)
    needs no configuration. The scope list is fixed at construction.

    Args:
        client_id: OAuth2 client id
        client_secret: OAuth2 client secret
        redirect_uri: Redirect URI registered for the client
        state: Anti-CSRF value echoed back on the redirect
        scope: Requested permissions, e.g. ["viewnfo", "addproof"]
        http: Transport client used for the token endpoint
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        *,
        redirect_uri: str | None = None,
        state: str | None = None,
        scope: Sequence[str] | None = None,
        http: TransportClient | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.state = state
        self._scope = tuple(scope) if scope is not None else None
        self.http = http if http is not None else TransportClient()

    @classmethod
    def from_settings(cls, settings: "XrelSettings", http: TransportClient | None = None) -> "OAuth2Session":
        return cls(
            settings.client_id,
            settings.client_secret,
            redirect_uri=settings.redirect_uri,
            state=settings.state,
            scope=settings.scope,
            http=http,
        )

    @property
    def scope(self) -> tuple[str, ...] | None:
        return self._scope

    def require_scope(self, name: str) -> None:
        """Fail with ScopeError unless `name` was configured. No network access."""
        require_scope(self._scope, name)

    def _scope_param(self) -> str | None:
        if not self._scope:
            return None
        return " ".join(self._scope)

    def build_authorization_url(self) -> str:
        """URL to send the user's browser to for the authorization-code grant.

        Raises:
            ConfigurationError: No client id configured
        """
        if not self.client_id:
            raise ConfigurationError("No client_id provided", missing=["client_id"])

        params = {"response_type": RESPONSE_TYPE, "client_id": self.client_id}
        if self.redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        if self.state:
            params["state"] = self.state
        scope = self._scope_param()
        if scope:
            params["scope"] = scope

        return f"{self.http.base_url}{AUTHORIZE_PATH}?{urlencode(params)}"

    def exchange_token(self, grant_type: str, code: str | None = None, token: Token | None = None) -> Token:
        """Perform one grant exchange against the token endpoint.

        Args:
            grant_type: authorization_code, client_credentials or refresh_token
            code: Authorization code, required for authorization_code
            token: Previous token, required for refresh_token

        Returns:
            A new Token

        Raises:
            InvalidArgumentError: Unknown grant type
            ConfigurationError: Required parameters missing; `missing` names all of them
            APIError: The service rejected the exchange
            TransportError: Network failure or unusable response
        """
        if not grant_type:
            raise InvalidArgumentError("grant_type missing")
        if grant_type not in GRANT_TYPES:
            raise InvalidArgumentError(f"Invalid grant_type: {grant_type}")

        is_refresh = grant_type == GRANT_REFRESH_TOKEN
        missing = []
        if not self.client_id:
            missing.append("client_id")
        if not self.client_secret:
            missing.append("client_secret")
        if grant_type == GRANT_AUTHORIZATION_CODE and not code:
            missing.append("code")
        if is_refresh and (token is None or not token.refresh_token):
            missing.append("refresh_token")
        if missing:
            raise ConfigurationError(f"Needed parameters not set: {' '.join(missing)}", missing=missing)

        data = {
            "grant_type": grant_type,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code if grant_type == GRANT_AUTHORIZATION_CODE else None,
            "refresh_token": token.refresh_token if is_refresh else None,
            "redirect_uri": self.redirect_uri if not is_refresh else None,
            "scope": self._scope_param(),
        }

        logger.debug(f"Requesting token with grant {grant_type}")
        response = self.http.request("POST", TOKEN_PATH, data=data)
        body = decode_json(response)
        if not isinstance(body, dict):
            raise TransportError("Unexpected token response", status_code=response.status_code)
        return Token.from_response(body, grant_type=grant_type)

    def refresh(self, token: Token) -> Token:
        """Exchange `token`'s refresh value for a new Token."""
        return self.exchange_token(GRANT_REFRESH_TOKEN, token=token)
