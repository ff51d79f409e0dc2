"""
Catalog Repository

Public, read-only listing of talents from the v_talent_catalog view.
"""

import logging
from typing import Optional
from pydantic import ValidationError
from supabase import AsyncClient

from linkgo import config
from linkgo.dal.base import BaseRepository, invalid_input
from linkgo.dal.result import Result, normalize
from linkgo.models import CATALOG_COLUMNS, CatalogQuery, TalentRole

logger = logging.getLogger(__name__)

ROLE_COLUMNS = {
    TalentRole.referee: "is_referee",
    TalentRole.coach: "is_coach",
}


class CatalogRepository(BaseRepository):
    """Repository for the talent catalog view. No login required."""

    def __init__(self, client: AsyncClient):
        super().__init__(client, "v_talent_catalog")

    async def list(
        self,
        q: Optional[str] = None,
        region: Optional[str] = None,
        role: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Result:
        """
        List talents ordered by name.

        Args:
            q: Case-insensitive substring of full_name
            region: Exact region match
            role: "referee" or "coach"
            limit: Page size (default: CATALOG_PAGE_SIZE)
            offset: Rows to skip

        Returns:
            Result with a list of catalog rows
        """
        try:
            params = CatalogQuery(
                q=q,
                region=region,
                role=role or None,
                limit=config.CATALOG_PAGE_SIZE if limit is None else limit,
                offset=offset,
            )
        except ValidationError as e:
            return invalid_input(e)

        query = self.table.select(CATALOG_COLUMNS)

        if params.q and params.q.strip():
            query = query.ilike("full_name", f"%{params.q.strip()}%")
        if params.region:
            query = query.eq("region", params.region)
        if params.role:
            query = query.eq(ROLE_COLUMNS[params.role], True)

        query = query.order("full_name", desc=False).range(
            params.offset, params.offset + params.limit - 1
        )

        result = await normalize(self.execute(query))
        if result.ok and result.data is None:
            return Result.success([])
        return result
