"""Initial schema: master data, users, workspaces and workspace configuration

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op
from src.ems.models.seed import DEPARTMENTS, DESIGNATIONS, GENDERS, ROLES, STATUSES

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_MASTER_TABLES = (
    ("master_user_roles", ROLES, False),
    ("master_user_statuses", STATUSES, False),
    ("master_genders", GENDERS, False),
    ("master_departments", DEPARTMENTS, True),
    ("master_designations", DESIGNATIONS, True),
)


def _master_columns(soft_delete: bool) -> list[sa.Column]:
    columns = [
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]
    if soft_delete:
        columns.append(
            sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false"))
        )
    return columns


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_by", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    # 1. Master lookup tables, seeded with fixed ids
    for table_name, rows, soft_delete in _MASTER_TABLES:
        table = op.create_table(
            table_name,
            *_master_columns(soft_delete),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table_name}_name", table_name, ["name"], unique=False)
        op.bulk_insert(table, [{"id": row["id"], "name": row["name"]} for row in rows])

    # 2. Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email_id", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("password_hash", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("master_user_roles.id"), nullable=False),
        sa.Column(
            "status_id",
            sa.Integer(),
            sa.ForeignKey("master_user_statuses.id"),
            nullable=False,
            server_default="1",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email_id", "users", ["email_id"], unique=True)

    # 3. Workspaces
    op.create_table(
        "workspaces",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workspace_name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column(
            "workspace_logo",
            sqlmodel.sql.sqltypes.AutoString(length=500),
            nullable=False,
            server_default="",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_by", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("updated_by", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workspaces_workspace_name", "workspaces", ["workspace_name"])

    # 4. Membership
    op.create_table(
        "employee_information",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("workspace_id", sa.Uuid(), sa.ForeignKey("workspaces.id"), nullable=True),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("mobile_number", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("gender_id", sa.Integer(), sa.ForeignKey("master_genders.id"), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_audit_columns(),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "workspace_id", name="uq_employee_information_user_workspace"
        ),
    )
    op.create_index("ix_employee_information_user_id", "employee_information", ["user_id"])
    op.create_index(
        "ix_employee_information_workspace_id", "employee_information", ["workspace_id"]
    )

    # 5. Workspace configuration
    op.create_table(
        "workspace_departments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workspace_id", sa.Uuid(), sa.ForeignKey("workspaces.id"), nullable=False),
        sa.Column(
            "department_id", sa.Integer(), sa.ForeignKey("master_departments.id"), nullable=False
        ),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("workspace_id", "department_id", name="uq_workspace_departments"),
    )
    op.create_index(
        "ix_workspace_departments_workspace_id", "workspace_departments", ["workspace_id"]
    )

    op.create_table(
        "workspace_designations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workspace_id", sa.Uuid(), sa.ForeignKey("workspaces.id"), nullable=False),
        sa.Column(
            "designation_id",
            sa.Integer(),
            sa.ForeignKey("master_designations.id"),
            nullable=False,
        ),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("workspace_id", "designation_id", name="uq_workspace_designations"),
    )
    op.create_index(
        "ix_workspace_designations_workspace_id", "workspace_designations", ["workspace_id"]
    )

    op.create_table(
        "workspace_shifts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workspace_id", sa.Uuid(), sa.ForeignKey("workspaces.id"), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workspace_shifts_workspace_id", "workspace_shifts", ["workspace_id"])


def downgrade() -> None:
    op.drop_table("workspace_shifts")
    op.drop_table("workspace_designations")
    op.drop_table("workspace_departments")
    op.drop_table("employee_information")
    op.drop_table("workspaces")
    op.drop_table("users")
    for table_name, _, _ in reversed(_MASTER_TABLES):
        op.drop_table(table_name)
