"""Authentication service - login, token refresh and email availability."""

from src.ems.core.errors import AuthenticationError, ConflictError, InternalError, NotFoundError
from src.ems.core.logging import get_logger
from src.ems.core.security import PasswordHasher, TokenService, TokenType
from src.ems.repositories import Identity, UserRepository
from src.ems.schemas.auth import LoginResponse
from src.ems.schemas.token import UNKNOWN_WORKSPACE, TokenClaims

logger = get_logger(__name__)

EMAIL_TAKEN_MESSAGE = "User with this email already exists."


class AuthService:
    """Verifies credentials and mints workspace-scoped tokens.

    Read-only: every lookup is a single query, no transaction is opened
    beyond the session's implicit one.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.token_service = token_service

    async def authenticate(self, email: str, password: str) -> LoginResponse:
        """Check email and password and return a fresh token pair.

        An unknown email is NOT_FOUND (404) while a wrong password is
        AUTHENTICATION (401), so the two cases are distinguishable.
        """
        identity = await self.user_repo.get_identity_by_email(email)
        if identity is None:
            raise NotFoundError("User does not exist.")

        user = identity.user
        if not user.password_hash:
            logger.error("User has no password hash stored", user_id=str(user.id))
            raise InternalError("Unable to verify credentials.", code="PASSWORD_HASH_MISSING")

        if not await self.password_hasher.verify_async(password, user.password_hash):
            logger.info("Login rejected: incorrect password", user_id=str(user.id))
            raise AuthenticationError("Incorrect password.", code="INVALID_CREDENTIALS")

        if user.is_inactive:
            logger.info("Login rejected: inactive user", user_id=str(user.id))
            raise AuthenticationError("User is inactive.", code="USER_INACTIVE")

        logger.info("User logged in", user_id=str(user.id))
        return self._issue(identity)

    async def refresh(self, refresh_token: str) -> LoginResponse:
        """Exchange a refresh token for a new token pair with current claims."""
        claims = self.token_service.verify(refresh_token, expected_type=TokenType.REFRESH)

        identity = await self.user_repo.get_identity_by_id(claims.user_id)
        if identity is None or identity.user.is_inactive:
            raise AuthenticationError("User is inactive.", code="USER_INACTIVE")

        return self._issue(identity)

    async def ensure_email_available(self, email: str) -> None:
        if await self.user_repo.exists_by_email(email):
            raise ConflictError(EMAIL_TAKEN_MESSAGE)

    def _issue(self, identity: Identity) -> LoginResponse:
        claims = build_claims(identity)
        return LoginResponse(
            token=self.token_service.issue_access_token(claims),
            refresh_token=self.token_service.issue_refresh_token(claims),
        )


def build_claims(identity: Identity) -> TokenClaims:
    """Token claims for an identity, the same shape however the token is minted."""
    user = identity.user
    return TokenClaims(
        user_id=user.id,
        role_id=user.role_id,
        role_name=identity.role_name,
        status_id=user.status_id,
        status_name=identity.status_name,
        workspace_id=identity.workspace_id,
        workspace_name=identity.workspace_name or UNKNOWN_WORKSPACE,
    )
