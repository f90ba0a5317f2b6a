"""OAuth2 scope gating for restricted xREL endpoints."""

from collections.abc import Sequence

from xrel_client.errors.exceptions import ScopeError

SCOPE_ADD_PROOF = "addproof"
SCOPE_VIEW_NFO = "viewnfo"


def require_scope(scopes: Sequence[str] | None, name: str) -> None:
    """Fail unless `name` is among the configured scopes.

    Fails closed: a session created without any scope list is denied every
    scope-restricted operation.

    Raises:
        ScopeError: No scopes configured, or `name` not among them
    """
    if scopes is None:
        raise ScopeError(f"No scope configured, {name} scope required", scope=name)
    if name not in scopes:
        raise ScopeError(f"{name} scope not provided", scope=name)
