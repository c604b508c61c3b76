"""Workspace (tenant) and the records it owns."""

from datetime import datetime, time
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.ems.models.base import Timestamped, timestamp_field


class Workspace(Timestamped, table=True):
    """An isolated organization. Created once, by the provisioning workflow."""

    __tablename__ = "workspaces"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workspace_name: str = Field(max_length=100, index=True)
    workspace_logo: str = Field(default="", max_length=500)
    is_active: bool = Field(default=True)
    is_deleted: bool = Field(default=False)
    created_by: UUID | None = Field(default=None, foreign_key="users.id")
    updated_by: UUID | None = Field(default=None, foreign_key="users.id")


class EmployeeInformation(Timestamped, table=True):
    """Membership: places a user inside a workspace with a display name."""

    __tablename__ = "employee_information"
    __table_args__ = (
        UniqueConstraint("user_id", "workspace_id", name="uq_employee_information_user_workspace"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    workspace_id: UUID | None = Field(default=None, foreign_key="workspaces.id", index=True)
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    mobile_number: str | None = Field(default=None, max_length=50)
    gender_id: int | None = Field(default=None, foreign_key="master_genders.id")
    is_active: bool = Field(default=True)
    is_deleted: bool = Field(default=False)
    created_by: UUID | None = Field(default=None, foreign_key="users.id")


class WorkspaceDepartment(SQLModel, table=True):
    __tablename__ = "workspace_departments"
    __table_args__ = (
        UniqueConstraint("workspace_id", "department_id", name="uq_workspace_departments"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workspace_id: UUID = Field(foreign_key="workspaces.id", index=True)
    department_id: int = Field(foreign_key="master_departments.id")
    is_active: bool = Field(default=True)
    created_by: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = timestamp_field()


class WorkspaceDesignation(SQLModel, table=True):
    __tablename__ = "workspace_designations"
    __table_args__ = (
        UniqueConstraint("workspace_id", "designation_id", name="uq_workspace_designations"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workspace_id: UUID = Field(foreign_key="workspaces.id", index=True)
    designation_id: int = Field(foreign_key="master_designations.id")
    is_active: bool = Field(default=True)
    created_by: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = timestamp_field()


class WorkspaceShift(SQLModel, table=True):
    """Work schedule owned by a single workspace."""

    __tablename__ = "workspace_shifts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workspace_id: UUID = Field(foreign_key="workspaces.id", index=True)
    name: str = Field(max_length=50)
    description: str | None = Field(default=None, max_length=200)
    start_time: time
    end_time: time
    is_active: bool = Field(default=True)
    is_deleted: bool = Field(default=False)
    created_by: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = timestamp_field()
