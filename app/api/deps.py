"""Request dependencies: token issuer, access guard (bearer JWT) and role guard."""

from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.security import TokenConfig, TokenInvalid, TokenIssuer, TokenKind
from app.models.user import Role
from app.schemas.auth import Identity

security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Single issuer built from settings at first use."""
    return TokenIssuer(TokenConfig.from_settings(get_settings()))


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> Identity:
    """
    Access guard: require a valid Bearer access token and return {id, role}.
    Stateless: the datastore is not consulted. Raises 401 if missing or invalid.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = issuer.verify(credentials.credentials, TokenKind.ACCESS)
        return Identity(id=UUID(payload.subject), role=Role(payload.role))
    except (TokenInvalid, ValueError, ValidationError):
        raise _unauthorized("Invalid or expired token") from None


def effective_roles(
    method_roles: Iterable[Role] | None,
    router_roles: Iterable[Role] | None,
) -> frozenset[Role] | None:
    """A route-level declaration overrides the router-level one; None means undeclared."""
    if method_roles is not None:
        return frozenset(method_roles)
    if router_roles is not None:
        return frozenset(router_roles)
    return None


def check_roles(identity: Identity | None, allowed: frozenset[Role] | None) -> None:
    """Role guard: no declaration allows everyone; otherwise the role must be listed."""
    if allowed is None:
        return
    if identity is None or identity.role not in allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )


def require_roles(
    *roles: Role,
    router_roles: Iterable[Role] | None = None,
) -> Callable[..., Identity]:
    """
    Declare the roles a route accepts and return the dependency enforcing them.

    Usage: identity: Annotated[Identity, Depends(require_roles(Role.SUPER_ADMIN))]
    """
    allowed = effective_roles(roles or None, router_roles)

    def dependency(
        identity: Annotated[Identity, Depends(get_current_identity)],
    ) -> Identity:
        check_roles(identity, allowed)
        return identity

    return dependency
