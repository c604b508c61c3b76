from typing import Final
from uuid import UUID

from pydantic import ConfigDict

from src.ems.schemas.base import CamelModel

UNKNOWN_WORKSPACE: Final[str] = "Unknown Workspace"


class TokenClaims(CamelModel):
    """Identity and workspace context signed into every token."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    role_id: int
    role_name: str | None = None
    status_id: int | None = None
    status_name: str | None = None
    workspace_id: UUID | None = None
    workspace_name: str = UNKNOWN_WORKSPACE
