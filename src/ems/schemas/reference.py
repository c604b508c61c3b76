from pydantic import ConfigDict, Field

from src.ems.schemas.base import CamelModel
from src.ems.schemas.pagination import DEFAULT_LIMIT, DEFAULT_OFFSET, MAX_LIMIT


class CatalogItemRead(CamelModel):
    """A department or designation as exposed to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class CatalogQuery(CamelModel):
    """Query string for catalog listings."""

    search: str = Field(default="", max_length=100)
    offset: int = Field(default=DEFAULT_OFFSET, ge=0)
    limit: int = Field(default=DEFAULT_LIMIT, gt=0, le=MAX_LIMIT)
