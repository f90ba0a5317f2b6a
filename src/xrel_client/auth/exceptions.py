"""Exceptions raised while resolving xREL client credentials.

They are configuration errors: the caller has to supply the missing value
before retrying.

Example:
    ```python
    from xrel_client.auth.exceptions import CredentialNotFoundError

    if not client_secret:
        raise CredentialNotFoundError("client secret not found", env_var_name="XREL_CLIENT_SECRET")
    ```
"""

from xrel_client.errors.exceptions import ConfigurationError


class CredentialError(ConfigurationError):
    """Base exception for credential resolution errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """A required credential was not found in any source.

    Attributes:
        env_var_name: The environment variable that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message, missing=[env_var_name] if env_var_name else None)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """A credential file could not be read."""

    pass
