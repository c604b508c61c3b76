"""Ids of seeded master rows that code refers to directly."""

from enum import IntEnum


class RoleId(IntEnum):
    """Rows of master_user_roles."""

    SUPER_ADMIN = 1
    ADMIN = 2
    HR = 3
    EMPLOYEE = 4


class StatusId(IntEnum):
    """Rows of master_user_statuses."""

    ACTIVE = 1
    INACTIVE = 2
    BLOCKED = 3
    DELETED = 4


class GenderId(IntEnum):
    """Rows of master_genders."""

    MALE = 1
    FEMALE = 2
    OTHER = 3


ADMIN_ROLES = frozenset({RoleId.SUPER_ADMIN, RoleId.ADMIN})


def is_inactive(is_deleted: bool | None, status_id: int | None) -> bool:
    """Authoritative inactivity rule for soft-deletable records.

    A record is inactive if it is flagged deleted OR its status is Deleted.
    Both signals exist in the data model and either one is sufficient.
    """
    return bool(is_deleted) or status_id == StatusId.DELETED
