"""Settings for building an xREL client from the environment.

| field | env var |
|---|---|
| client_id | XREL_CLIENT_ID |
| client_secret | XREL_CLIENT_SECRET, or a file named by XREL_CLIENT_SECRET_FILE |
| redirect_uri | XREL_REDIRECT_URI |
| state | XREL_STATE |
| scope | XREL_SCOPE (space separated) |
| base_url | XREL_BASE_URL |
| timeout | XREL_TIMEOUT (seconds) |
"""

import logging
from dataclasses import dataclass

from xrel_client.auth.credentials import CredentialResolver
from xrel_client.errors.exceptions import ConfigurationError
from xrel_client.transport.client import BASE_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

ENV_PREFIX = "XREL_"


@dataclass(frozen=True)
class XrelSettings:
    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    state: str | None = None
    scope: tuple[str, ...] | None = None
    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(
        cls,
        resolver: CredentialResolver | None = None,
        **overrides: str | None,
    ) -> "XrelSettings":
        """Resolve every setting: explicit override, then environment, then .env.

        Args:
            resolver: Resolver to use; a default one loads .env
            **overrides: Explicit values keyed by field name

        Raises:
            ConfigurationError: XREL_TIMEOUT is not a number
        """
        resolver = resolver or CredentialResolver()

        def get(name: str, *, default: str | None = None, secret: bool = False) -> str | None:
            return resolver.resolve(
                value=overrides.get(name),
                env_var_name=f"{ENV_PREFIX}{name.upper()}",
                default=default,
                mask_in_logs=secret,
            )

        client_secret = get("client_secret", secret=True)
        if client_secret is None:
            client_secret = resolver.resolve_from_file(env_var_name=f"{ENV_PREFIX}CLIENT_SECRET_FILE")

        scope = get("scope")
        timeout = get("timeout", default=str(DEFAULT_TIMEOUT))
        try:
            timeout_value = float(timeout)
        except ValueError:
            raise ConfigurationError(f"{ENV_PREFIX}TIMEOUT must be a number, got {timeout!r}") from None

        return cls(
            client_id=get("client_id"),
            client_secret=client_secret,
            redirect_uri=get("redirect_uri"),
            state=get("state"),
            scope=tuple(scope.split()) if scope is not None else None,
            base_url=get("base_url", default=BASE_URL),
            timeout=timeout_value,
        )
