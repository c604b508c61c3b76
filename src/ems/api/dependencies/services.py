"""Service factory dependencies.

Long-lived collaborators (token service, password hasher, caches) are built
once in `create_app` and read from `app.state`; request-scoped services are
assembled here around them.
"""

from typing import Annotated

from fastapi import Depends, Request

from src.ems.api.dependencies.db import DBSession
from src.ems.api.dependencies.repositories import DepartmentRepo, DesignationRepo, UserRepo
from src.ems.core.cache import TAG_DEPARTMENTS, TAG_DESIGNATIONS, CacheService, CacheStore
from src.ems.core.config import Settings
from src.ems.core.security import PasswordHasher, TokenService
from src.ems.services import AuthService, ReferenceDataService, WorkspaceProvisioningService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_cache_service(request: Request) -> CacheService:
    return request.app.state.cache_service


def get_response_cache(request: Request) -> CacheStore:
    return request.app.state.response_cache


AppSettings = Annotated[Settings, Depends(get_app_settings)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
CacheServiceDep = Annotated[CacheService, Depends(get_cache_service)]
ResponseCacheDep = Annotated[CacheStore, Depends(get_response_cache)]


def get_auth_service(
    user_repo: UserRepo,
    password_hasher: PasswordHasherDep,
    token_service: TokenServiceDep,
) -> AuthService:
    return AuthService(user_repo, password_hasher, token_service)


def get_provisioning_service(
    user_repo: UserRepo,
    session: DBSession,
    password_hasher: PasswordHasherDep,
    token_service: TokenServiceDep,
) -> WorkspaceProvisioningService:
    """Get provisioning service; the repository and service share one session."""
    return WorkspaceProvisioningService(user_repo, session, password_hasher, token_service)


def get_department_service(
    repository: DepartmentRepo, cache: CacheServiceDep
) -> ReferenceDataService:
    return ReferenceDataService(repository, cache, entity=TAG_DEPARTMENTS)


def get_designation_service(
    repository: DesignationRepo, cache: CacheServiceDep
) -> ReferenceDataService:
    return ReferenceDataService(repository, cache, entity=TAG_DESIGNATIONS)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProvisioningServiceDep = Annotated[
    WorkspaceProvisioningService, Depends(get_provisioning_service)
]
DepartmentServiceDep = Annotated[ReferenceDataService, Depends(get_department_service)]
DesignationServiceDep = Annotated[ReferenceDataService, Depends(get_designation_service)]
