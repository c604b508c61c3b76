"""Reference data endpoints: departments and designations."""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from src.ems.api.dependencies import (
    AppSettings,
    DepartmentServiceDep,
    DesignationServiceDep,
    WorkspaceClaims,
)
from src.ems.schemas import CatalogItemRead, CatalogQuery, Envelope, Page, build_pagination, envelope
from src.ems.services import ReferenceDataService

router = APIRouter(tags=["reference-data"])


def _page_url(request: Request, settings: AppSettings) -> str:
    """Absolute URL of this listing as the front end addresses it."""
    base = settings.front_end_url.rstrip("/") + request.url.path
    return f"{base}?{request.url.query}" if request.url.query else base


async def _list(
    request: Request,
    settings: AppSettings,
    service: ReferenceDataService,
    query: CatalogQuery,
) -> Envelope[Page[CatalogItemRead]]:
    page = await service.find(query.search, query.offset, query.limit)
    page.pagination = build_pagination(
        query.offset, query.limit, page.total_count, _page_url(request, settings)
    )
    return envelope(page)


@router.get("/departments", response_model=Envelope[Page[CatalogItemRead]])
async def list_departments(
    request: Request,
    settings: AppSettings,
    claims: WorkspaceClaims,
    service: DepartmentServiceDep,
    query: Annotated[CatalogQuery, Query()],
) -> Envelope[Page[CatalogItemRead]]:
    """List active departments, optionally filtered by a case-insensitive name search."""
    return await _list(request, settings, service, query)


@router.get("/designations", response_model=Envelope[Page[CatalogItemRead]])
async def list_designations(
    request: Request,
    settings: AppSettings,
    claims: WorkspaceClaims,
    service: DesignationServiceDep,
    query: Annotated[CatalogQuery, Query()],
) -> Envelope[Page[CatalogItemRead]]:
    """List active designations, optionally filtered by a case-insensitive name search."""
    return await _list(request, settings, service, query)
