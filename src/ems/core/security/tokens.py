"""Signed, time-limited access and refresh tokens (JWT via python-jose)."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from pydantic import ValidationError

from src.ems.core.config import MIN_JWT_SECRET_LENGTH, Settings
from src.ems.core.errors import TokenExpiredError, TokenInvalidError, TokenMalformedError
from src.ems.schemas.token import TokenClaims


class TokenType:
    """Token type constants."""

    ACCESS = "access"
    REFRESH = "refresh"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies tokens carrying `TokenClaims`.

    Expiry is checked against the injected clock rather than the wall clock
    so tests can move time forward without sleeping.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        access_token_ttl: timedelta = timedelta(hours=1),
        refresh_token_ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = _utc_now,
    ):
        if len(secret_key.encode()) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"Token signing key must be at least {MIN_JWT_SECRET_LENGTH} bytes"
            )
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            access_token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_token_ttl=timedelta(days=settings.refresh_token_expire_days),
        )

    def issue_access_token(self, claims: TokenClaims) -> str:
        return self._issue(claims, TokenType.ACCESS, self.access_token_ttl)

    def issue_refresh_token(self, claims: TokenClaims) -> str:
        return self._issue(claims, TokenType.REFRESH, self.refresh_token_ttl)

    def _issue(self, claims: TokenClaims, token_type: str, ttl: timedelta) -> str:
        issued_at = self._clock()
        payload: dict[str, Any] = claims.model_dump(mode="json", by_alias=True, exclude_none=True)
        payload.update(
            {
                "sub": str(claims.user_id),
                "type": token_type,
                "iat": int(issued_at.timestamp()),
                "exp": int((issued_at + ttl).timestamp()),
                # Unique per token so two tokens minted in the same second differ
                "jti": str(uuid4()),
            }
        )
        return jwt.encode(  # type: ignore[no-any-return]
            payload,
            self._secret_key,
            algorithm=self._algorithm,
        )

    def verify(self, token: str, expected_type: str = TokenType.ACCESS) -> TokenClaims:
        """Return the claims of a valid token.

        Raises:
            TokenMalformedError: The string is not a JWT at all.
            TokenInvalidError: Bad signature, wrong type or unusable claims.
            TokenExpiredError: Signature is valid but the expiry has passed.
        """
        try:
            jwt.get_unverified_header(token)
        except JWTError as e:
            raise TokenMalformedError() from e

        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise TokenInvalidError() from e

        expires_at = payload.get("exp")
        if not isinstance(expires_at, int):
            raise TokenInvalidError("Token has no expiry")
        if self._clock().timestamp() >= expires_at:
            raise TokenExpiredError()

        if payload.get("type") != expected_type:
            raise TokenInvalidError("Invalid token type")

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise TokenInvalidError("Invalid token payload") from e
