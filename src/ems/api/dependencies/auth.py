"""Authentication and authorization dependencies.

The bearer token is decoded once per request by `AuthContextMiddleware`;
these dependencies only read the outcome from `request.state` and decide
whether the route may run.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, Request

from src.ems.core.errors import AuthenticationError, AuthorizationError, TokenError
from src.ems.core.logging import bind_user_context
from src.ems.models.enums import ADMIN_ROLES
from src.ems.schemas.token import TokenClaims


def get_token_claims(request: Request) -> TokenClaims:
    """Return the verified claims of the request's access token.

    Raises:
        TokenError: The token was present but expired, invalid or malformed.
        AuthenticationError: No bearer token was sent.
    """
    token_error: TokenError | None = getattr(request.state, "token_error", None)
    if token_error is not None:
        raise token_error

    claims: TokenClaims | None = getattr(request.state, "claims", None)
    if claims is None:
        raise AuthenticationError("Authentication required", code="AUTHENTICATION_REQUIRED")

    bind_user_context(claims.user_id, claims.workspace_id)
    return claims


AuthenticatedClaims = Annotated[TokenClaims, Depends(get_token_claims)]


def get_workspace_claims(
    claims: AuthenticatedClaims,
    x_workspace_id: Annotated[str | None, Header()] = None,
) -> TokenClaims:
    """Require an X-Workspace-ID header naming the token's own workspace."""
    if not x_workspace_id:
        raise AuthenticationError("X-Workspace-ID header is required", code="WORKSPACE_REQUIRED")

    try:
        requested = UUID(x_workspace_id)
    except ValueError as e:
        raise AuthorizationError("Access to this workspace is not allowed") from e

    if claims.workspace_id != requested:
        raise AuthorizationError("Access to this workspace is not allowed")
    return claims


WorkspaceClaims = Annotated[TokenClaims, Depends(get_workspace_claims)]


def require_admin(claims: WorkspaceClaims) -> TokenClaims:
    """Require the Super Admin or Admin role."""
    if claims.role_id not in ADMIN_ROLES:
        raise AuthorizationError("Admin privileges required")
    return claims


AdminClaims = Annotated[TokenClaims, Depends(require_admin)]
