"""Repository layer - data access abstraction."""

from src.ems.repositories.base import BaseRepository
from src.ems.repositories.reference import DepartmentRepository, DesignationRepository
from src.ems.repositories.user import Identity, UserRepository

__all__ = [
    # Base
    "BaseRepository",
    # Identity
    "Identity",
    "UserRepository",
    # Reference data
    "DepartmentRepository",
    "DesignationRepository",
]
