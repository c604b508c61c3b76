"""FastAPI dependency injection definitions."""

from src.ems.api.dependencies.auth import (
    AdminClaims,
    AuthenticatedClaims,
    WorkspaceClaims,
    get_token_claims,
    get_workspace_claims,
    require_admin,
)
from src.ems.api.dependencies.db import DBSession, get_db_session
from src.ems.api.dependencies.repositories import (
    DepartmentRepo,
    DesignationRepo,
    UserRepo,
    get_department_repository,
    get_designation_repository,
    get_user_repository,
)
from src.ems.api.dependencies.services import (
    AppSettings,
    AuthServiceDep,
    CacheServiceDep,
    DepartmentServiceDep,
    DesignationServiceDep,
    PasswordHasherDep,
    ProvisioningServiceDep,
    ResponseCacheDep,
    TokenServiceDep,
    get_auth_service,
    get_cache_service,
    get_department_service,
    get_designation_service,
    get_provisioning_service,
    get_response_cache,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminClaims",
    "AuthenticatedClaims",
    "WorkspaceClaims",
    "get_token_claims",
    "get_workspace_claims",
    "require_admin",
    # Repositories
    "DepartmentRepo",
    "DesignationRepo",
    "UserRepo",
    "get_department_repository",
    "get_designation_repository",
    "get_user_repository",
    # Services
    "AppSettings",
    "AuthServiceDep",
    "CacheServiceDep",
    "DepartmentServiceDep",
    "DesignationServiceDep",
    "PasswordHasherDep",
    "ProvisioningServiceDep",
    "ResponseCacheDep",
    "TokenServiceDep",
    "get_auth_service",
    "get_cache_service",
    "get_department_service",
    "get_designation_service",
    "get_provisioning_service",
    "get_response_cache",
]
