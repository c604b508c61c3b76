"""Identity model - one login-capable principal across all workspaces."""

from uuid import UUID, uuid4

from sqlmodel import Field

from src.ems.models.base import Timestamped
from src.ems.models.enums import StatusId, is_inactive


class User(Timestamped, table=True):
    """A user. Never hard-deleted: removal is `is_deleted` or the Deleted status."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email_id: str = Field(max_length=255, unique=True, index=True)
    # Nullable so imported users can exist before setting a password
    password_hash: str | None = Field(default=None, max_length=255)
    role_id: int = Field(foreign_key="master_user_roles.id")
    status_id: int = Field(default=StatusId.ACTIVE.value, foreign_key="master_user_statuses.id")
    is_active: bool = Field(default=True)
    is_deleted: bool = Field(default=False)

    @property
    def is_inactive(self) -> bool:
        return is_inactive(self.is_deleted, self.status_id)
