"""Workspace provisioning - signup creates a user and a fully configured workspace.

Everything up to the commit happens in one transaction: the user, the
workspace, the owner's membership, department and designation mappings and
the shifts either all exist afterwards or none do.
"""

from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ems.core.errors import ConflictError, InternalError
from src.ems.core.logging import get_logger
from src.ems.core.security import PasswordHasher, TokenService
from src.ems.models import (
    EmployeeInformation,
    StatusId,
    User,
    Workspace,
    WorkspaceDepartment,
    WorkspaceDesignation,
    WorkspaceShift,
)
from src.ems.repositories import UserRepository
from src.ems.schemas.auth import SignupRequest, SignupResponse, UserSummary, WorkspaceSummary
from src.ems.services.auth_service import EMAIL_TAKEN_MESSAGE, build_claims

logger = get_logger(__name__)


def _is_email_conflict(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "email" in message and ("unique" in message or "duplicate" in message)


class WorkspaceProvisioningService:
    """Creates a workspace and its owner atomically, then signs them in."""

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.user_repo = user_repo
        self.session = session
        self.password_hasher = password_hasher
        self.token_service = token_service

    async def provision(self, request: SignupRequest) -> SignupResponse:
        """Run the signup transaction and issue tokens for the new owner.

        Raises:
            ConflictError: The email is already registered. Two concurrent
                signups may both pass the pre-check; the unique constraint
                on users.email_id decides and the loser lands here too.
            IntegrityError: Any other constraint violation (e.g. an unknown
                department id), re-raised after rollback.
            InternalError: Data was committed but tokens could not be issued.
        """
        try:
            if await self.user_repo.exists_by_email(request.email_id):
                raise ConflictError(EMAIL_TAKEN_MESSAGE)

            password_hash = await self.password_hasher.hash_async(request.password)
            user = await self._create_user(request, password_hash)
            workspace = await self._create_workspace(request, user)
            await self._create_membership(request, user, workspace)
            await self._create_configuration(request, user, workspace)
            identity = await self.user_repo.get_identity_by_id(user.id)

            await self.session.commit()
        except IntegrityError as e:
            await self._rollback()
            if _is_email_conflict(e):
                raise ConflictError(EMAIL_TAKEN_MESSAGE) from e
            raise
        except Exception:
            await self._rollback()
            raise

        logger.info(
            "Workspace provisioned",
            user_id=str(user.id),
            workspace_id=str(workspace.id),
            departments=len(request.departments),
            designations=len(request.designations),
            shifts=len(request.shifts),
        )

        if identity is None:
            raise InternalError(
                "Workspace was created but the account could not be read back. Please log in.",
                code="TOKEN_ISSUANCE_FAILED",
            )
        claims = build_claims(identity)
        try:
            token = self.token_service.issue_access_token(claims)
            refresh_token = self.token_service.issue_refresh_token(claims)
        except (JWTError, TypeError, ValueError) as e:
            # Committed data stays; there is no compensating delete
            logger.error(
                "Token issuance failed after workspace commit",
                user_id=str(user.id),
                workspace_id=str(workspace.id),
                error=str(e),
            )
            raise InternalError(
                "Workspace was created but the access token could not be issued. Please log in.",
                code="TOKEN_ISSUANCE_FAILED",
            ) from e

        return SignupResponse(
            token=token,
            refresh_token=refresh_token,
            workspace=WorkspaceSummary(
                id=workspace.id,
                workspace_name=workspace.workspace_name,
                workspace_logo=workspace.workspace_logo,
            ),
            user=UserSummary(id=user.id, email_id=user.email_id),
        )

    async def _create_user(self, request: SignupRequest, password_hash: str) -> User:
        user = User(
            email_id=request.email_id,
            password_hash=password_hash,
            role_id=request.role,
            status_id=StatusId.ACTIVE.value,
        )
        self.user_repo.add(user)
        await self.session.flush()
        return user

    async def _create_workspace(self, request: SignupRequest, owner: User) -> Workspace:
        workspace = Workspace(
            workspace_name=request.workspace_name,
            workspace_logo=request.logo,
            created_by=owner.id,
            updated_by=owner.id,
        )
        self.session.add(workspace)
        await self.session.flush()
        return workspace

    async def _create_membership(
        self, request: SignupRequest, owner: User, workspace: Workspace
    ) -> EmployeeInformation:
        membership = EmployeeInformation(
            user_id=owner.id,
            workspace_id=workspace.id,
            name=request.admin_name,
            email=request.email_id,
            created_by=owner.id,
        )
        self.session.add(membership)
        await self.session.flush()
        return membership

    async def _create_configuration(
        self, request: SignupRequest, owner: User, workspace: Workspace
    ) -> None:
        """Department and designation mappings plus the workspace's shifts."""
        self.session.add_all(
            WorkspaceDepartment(
                workspace_id=workspace.id,
                department_id=department_id,
                created_by=owner.id,
            )
            for department_id in request.departments
        )
        self.session.add_all(
            WorkspaceDesignation(
                workspace_id=workspace.id,
                designation_id=designation_id,
                created_by=owner.id,
            )
            for designation_id in request.designations
        )
        self.session.add_all(
            WorkspaceShift(
                workspace_id=workspace.id,
                name=shift.name,
                description=shift.description,
                start_time=shift.start_time,
                end_time=shift.end_time,
                created_by=owner.id,
            )
            for shift in request.shifts
        )
        await self.session.flush()

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except Exception as rollback_error:
            # Logged only; the original failure is what propagates
            logger.error("Rollback failed during workspace provisioning", error=str(rollback_error))
