"""Bearer token decoding middleware.

Decodes the access token once per request and leaves the result on
`request.state` for the auth dependencies and the response cache:

- `claims`: verified `TokenClaims`, or None
- `token_error`: the `TokenError` raised by verification, or None

A missing or bad token never fails the request here; routes that need a
user reject it through `get_token_claims`.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.ems.core.errors import TokenError
from src.ems.core.security import TokenService

_BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    return token or None


class AuthContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, token_service: TokenService):
        super().__init__(app)
        self.token_service = token_service

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.claims = None
        request.state.token_error = None

        token = extract_bearer_token(request.headers.get("authorization"))
        if token is not None:
            try:
                request.state.claims = self.token_service.verify(token)
            except TokenError as e:
                request.state.token_error = e

        return await call_next(request)
