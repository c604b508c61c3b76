"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.ems.api.dependencies.db import DBSession
from src.ems.repositories import DepartmentRepository, DesignationRepository, UserRepository


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_department_repository(session: DBSession) -> DepartmentRepository:
    return DepartmentRepository(session)


def get_designation_repository(session: DBSession) -> DesignationRepository:
    return DesignationRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
DepartmentRepo = Annotated[DepartmentRepository, Depends(get_department_repository)]
DesignationRepo = Annotated[DesignationRepository, Depends(get_designation_repository)]
