"""Model exports.

Import from here: `from src.ems.models import User, Workspace`
"""

from src.ems.models.enums import ADMIN_ROLES, GenderId, RoleId, StatusId, is_inactive
from src.ems.models.master import (
    MasterDepartment,
    MasterDesignation,
    MasterGender,
    MasterUserRole,
    MasterUserStatus,
)
from src.ems.models.user import User
from src.ems.models.workspace import (
    EmployeeInformation,
    Workspace,
    WorkspaceDepartment,
    WorkspaceDesignation,
    WorkspaceShift,
)

__all__ = [
    # Enums
    "ADMIN_ROLES",
    "GenderId",
    "RoleId",
    "StatusId",
    "is_inactive",
    # Master data
    "MasterDepartment",
    "MasterDesignation",
    "MasterGender",
    "MasterUserRole",
    "MasterUserStatus",
    # Identity and workspace
    "EmployeeInformation",
    "User",
    "Workspace",
    "WorkspaceDepartment",
    "WorkspaceDesignation",
    "WorkspaceShift",
]
