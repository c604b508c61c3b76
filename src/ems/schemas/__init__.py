from src.ems.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    ShiftCreate,
    SignupRequest,
    SignupResponse,
    UserSummary,
    VerifyEmailRequest,
    VerifyEmailResponse,
    WorkspaceSummary,
)
from src.ems.schemas.base import CamelModel, Envelope, Meta, envelope
from src.ems.schemas.pagination import Page, Pagination, PaginationLinks, build_pagination
from src.ems.schemas.reference import CatalogItemRead, CatalogQuery
from src.ems.schemas.token import UNKNOWN_WORKSPACE, TokenClaims

__all__ = [
    # Base
    "CamelModel",
    "Envelope",
    "Meta",
    "envelope",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "RefreshRequest",
    "ShiftCreate",
    "SignupRequest",
    "SignupResponse",
    "UserSummary",
    "VerifyEmailRequest",
    "VerifyEmailResponse",
    "WorkspaceSummary",
    # Tokens
    "UNKNOWN_WORKSPACE",
    "TokenClaims",
    # Pagination
    "Page",
    "Pagination",
    "PaginationLinks",
    "build_pagination",
    # Reference data
    "CatalogItemRead",
    "CatalogQuery",
]
