"""Authentication endpoints: signup, login, token refresh and identity."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.ems.api.dependencies import AuthenticatedClaims, AuthServiceDep, ProvisioningServiceDep
from src.ems.core.rate_limit import (
    LOGIN_RATE_LIMIT,
    REFRESH_RATE_LIMIT,
    SIGNUP_RATE_LIMIT,
    VERIFY_EMAIL_RATE_LIMIT,
    limiter,
)
from src.ems.schemas import (
    Envelope,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    SignupRequest,
    SignupResponse,
    TokenClaims,
    VerifyEmailRequest,
    VerifyEmailResponse,
    envelope,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=Envelope[SignupResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Unknown role, department or designation id"},
        409: {"description": "Email already registered"},
        422: {"description": "Request validation failed"},
    },
)
@limiter.limit(SIGNUP_RATE_LIMIT)
async def signup(
    request: Request, signup_data: SignupRequest, service: ProvisioningServiceDep
) -> Envelope[SignupResponse]:
    """Create a user and a fully configured workspace, then sign the user in.

    The user, workspace, membership, department and designation mappings and
    shifts are written in one transaction.
    """
    result = await service.provision(signup_data)
    return envelope(result, "SUCCESSFULLY_CREATED")


@router.post(
    "/login",
    response_model=Envelope[LoginResponse],
    responses={
        401: {"description": "Incorrect password or inactive user"},
        404: {"description": "User does not exist"},
    },
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request, login_data: LoginRequest, service: AuthServiceDep
) -> Envelope[LoginResponse]:
    """Authenticate with email and password and return an access/refresh token pair."""
    result = await service.authenticate(login_data.email_id, login_data.password)
    return envelope(result, "SUCCESSFULLY_LOGGED_IN")


@router.post(
    "/refresh",
    response_model=Envelope[LoginResponse],
    responses={401: {"description": "Invalid or expired refresh token"}},
)
@limiter.limit(REFRESH_RATE_LIMIT)
async def refresh(
    request: Request, refresh_data: RefreshRequest, service: AuthServiceDep
) -> Envelope[LoginResponse]:
    """Exchange a refresh token for a new token pair (rotation)."""
    result = await service.refresh(refresh_data.refresh_token)
    return envelope(result, "SUCCESSFULLY_REFRESHED")


@router.post(
    "/verify-email",
    response_model=Envelope[VerifyEmailResponse],
    responses={409: {"description": "Email already registered"}},
)
@limiter.limit(VERIFY_EMAIL_RATE_LIMIT)
async def verify_email(
    request: Request, verify_data: VerifyEmailRequest, service: AuthServiceDep
) -> Envelope[VerifyEmailResponse]:
    """Check whether an email is still free for signup."""
    await service.ensure_email_available(verify_data.email_id)
    return envelope(VerifyEmailResponse(available=True), "EMAIL_AVAILABLE")


@router.get("/me", response_model=Envelope[TokenClaims])
async def me(claims: AuthenticatedClaims) -> Envelope[TokenClaims]:
    """Return the claims carried by the caller's access token."""
    return envelope(claims)
