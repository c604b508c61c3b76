"""Reference data (departments, designations) with explicit cache-aside reads."""

from src.ems.core.cache import NAMESPACE_DATA, CacheService, reference_list_key
from src.ems.core.cache.policy import TTL_LONG
from src.ems.core.logging import get_logger
from src.ems.repositories.reference import DepartmentRepository, DesignationRepository
from src.ems.schemas.pagination import Page
from src.ems.schemas.reference import CatalogItemRead

logger = get_logger(__name__)


class ReferenceDataService:
    """Paginated, searchable listing of one catalog.

    The cache is consulted first and filled after a database read. A cache
    outage only costs latency: every path still answers from the database.
    """

    def __init__(
        self,
        repository: DepartmentRepository | DesignationRepository,
        cache: CacheService,
        *,
        entity: str,
        ttl: int = TTL_LONG,
    ):
        self.repository = repository
        self.cache = cache
        self.entity = entity
        self.ttl = ttl

    async def find(self, search: str, offset: int, limit: int) -> Page[CatalogItemRead]:
        search = search.strip()
        key = reference_list_key(self.entity, search=search, offset=offset, limit=limit)

        cached = await self.cache.get(key, namespace=NAMESPACE_DATA)
        if cached is not None:
            logger.debug("Reference data served from cache", entity=self.entity, key=key)
            return Page[CatalogItemRead].model_validate(cached)

        rows, total = await self.repository.find_active(search or None, offset, limit)
        page = Page[CatalogItemRead](
            items=[CatalogItemRead.model_validate(row) for row in rows],
            count=len(rows),
            total_count=total,
        )
        await self.cache.set(
            key,
            page.model_dump(mode="json", exclude={"pagination"}),
            ttl=self.ttl,
            tags=[self.entity],
            namespace=NAMESPACE_DATA,
        )
        return page
