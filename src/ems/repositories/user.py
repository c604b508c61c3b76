"""Repository for User entity."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy import and_, select

from src.ems.models import (
    EmployeeInformation,
    MasterUserRole,
    MasterUserStatus,
    User,
    Workspace,
)
from src.ems.repositories.base import BaseRepository


@dataclass(frozen=True, slots=True)
class Identity:
    """A user joined with role, status and its first workspace."""

    user: User
    role_name: str | None
    status_name: str | None
    workspace_id: UUID | None
    workspace_name: str | None


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email_id == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def get_identity_by_email(self, email: str) -> Identity | None:
        return await self._get_identity(User.email_id == email)

    async def get_identity_by_id(self, user_id: UUID) -> Identity | None:
        return await self._get_identity(User.id == user_id)

    async def _get_identity(self, condition: Any) -> Identity | None:
        """Single read joining role, status and the earliest live membership."""
        query = (
            select(
                User,
                MasterUserRole.name,
                MasterUserStatus.name,
                Workspace.id,
                Workspace.workspace_name,
            )
            .join(MasterUserRole, MasterUserRole.id == User.role_id)
            .join(MasterUserStatus, MasterUserStatus.id == User.status_id)
            .outerjoin(
                EmployeeInformation,
                and_(
                    EmployeeInformation.user_id == User.id,
                    EmployeeInformation.is_deleted == False,  # noqa: E712
                ),
            )
            .outerjoin(Workspace, Workspace.id == EmployeeInformation.workspace_id)
            .where(condition)
            .order_by(EmployeeInformation.created_at.asc())
            .limit(1)
        )
        row = (await self.session.execute(query)).first()
        if row is None:
            return None
        user, role_name, status_name, workspace_id, workspace_name = row
        return Identity(
            user=user,
            role_name=role_name,
            status_name=status_name,
            workspace_id=workspace_id,
            workspace_name=workspace_name,
        )
