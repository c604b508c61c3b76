"""Repositories for the department and designation catalogs."""

from typing import TypeVar

from sqlmodel import select

from src.ems.models import MasterDepartment, MasterDesignation
from src.ems.repositories.base import BaseRepository

CatalogModel = TypeVar("CatalogModel", MasterDepartment, MasterDesignation)


class _CatalogRepository(BaseRepository[CatalogModel]):
    async def find_active(
        self,
        search: str | None,
        offset: int,
        limit: int,
    ) -> tuple[list[CatalogModel], int]:
        """Active rows, optionally filtered by case-insensitive name substring.

        Ordered by id so consecutive pages never overlap or skip rows.
        """
        model = self.model
        query = select(model).where(
            model.is_active == True,  # noqa: E712
            model.is_deleted == False,  # noqa: E712
        )
        if search:
            query = query.where(model.name.icontains(search, autoescape=True))  # type: ignore[attr-defined]
        return await self.paginate(query, offset, limit, model.id)


class DepartmentRepository(_CatalogRepository[MasterDepartment]):
    model = MasterDepartment


class DesignationRepository(_CatalogRepository[MasterDesignation]):
    model = MasterDesignation
