"""Master lookup tables: roles, statuses, genders, departments, designations."""

from sqlmodel import Field

from src.ems.models.base import Timestamped


class MasterLookup(Timestamped):
    """Columns shared by every master table. Ids are seeded, not generated."""

    id: int = Field(primary_key=True)
    name: str = Field(max_length=255, index=True)
    description: str | None = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)


class MasterUserRole(MasterLookup, table=True):
    __tablename__ = "master_user_roles"


class MasterUserStatus(MasterLookup, table=True):
    __tablename__ = "master_user_statuses"


class MasterGender(MasterLookup, table=True):
    __tablename__ = "master_genders"


class MasterDepartment(MasterLookup, table=True):
    """Department catalog shared by all workspaces."""

    __tablename__ = "master_departments"

    is_deleted: bool = Field(default=False)


class MasterDesignation(MasterLookup, table=True):
    """Designation catalog shared by all workspaces."""

    __tablename__ = "master_designations"

    is_deleted: bool = Field(default=False)
