"""
Profile Repository

Read and write the signed-in user's own profile row.
"""

import logging
from typing import Any, Dict, Optional, Union
from pydantic import ValidationError
from supabase import AsyncClient

from linkgo.dal.base import BaseRepository, invalid_input
from linkgo.dal.result import BAD_REQUEST, Result, normalize
from linkgo.models import ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    """Repository for profiles table operations"""

    def __init__(self, client: AsyncClient):
        super().__init__(client, "profiles")

    async def get_my_profile(self) -> Result:
        """Profile of the current user. data is None if no row exists yet."""
        gate = await self.assert_logged_in()
        if not gate.ok:
            return Result.failure(gate.error)

        query = self.table.select("*").eq("id", gate.user_id).maybe_single()
        return await normalize(self.execute(query))

    async def upsert_my_profile(
        self,
        update: Optional[Union[ProfileUpdate, Dict[str, Any]]] = None,
        **fields,
    ) -> Result:
        """
        Insert or update the current user's profile.

        Only fields that were given are written; the rest keep their stored
        values.

        Args:
            update: ProfileUpdate or dict, or pass full_name/region/bio as keywords

        Returns:
            Upserted profile row
        """
        gate = await self.assert_logged_in()
        if not gate.ok:
            return Result.failure(gate.error)

        if update is not None and fields:
            return Result.fail(BAD_REQUEST, "Pass either an update or keyword fields, not both")

        try:
            update = ProfileUpdate.model_validate(fields if update is None else update)
        except ValidationError as e:
            return invalid_input(e)

        row = {"id": gate.user_id, **update.model_dump(exclude_unset=True)}
        logger.debug(f"Upserting profile {gate.user_id} fields={sorted(row)}")

        query = self.table.upsert(row, on_conflict="id")
        return await normalize(self.execute_first(query))
