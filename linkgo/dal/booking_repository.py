"""
Booking Repository

Request, respond to and list bookings between managers and talents.
Overlap and status-transition rules live in the database; this layer
shapes requests and relabels the known error messages.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Union
from pydantic import ValidationError
from supabase import AsyncClient

from linkgo import config
from linkgo.dal.base import BaseRepository, invalid_input
from linkgo.dal.result import (
    BAD_REQUEST,
    NOT_FOUND,
    STATUS_TRANSITION_RULES,
    TIME_CONFLICT_RULES,
    Result,
    normalize,
    relabel,
)
from linkgo.models import BookingAction, BookingListQuery, BookingRequest, UserRole

logger = logging.getLogger(__name__)

PARTY_COLUMNS = {
    UserRole.manager: "manager_id",
    UserRole.talent: "talent_id",
}


class BookingRepository(BaseRepository):
    """Repository for bookings table operations"""

    def __init__(self, client: AsyncClient):
        super().__init__(client, "bookings")

    async def request(
        self,
        talent_id: str,
        role_at_booking: str,
        start_ts: Union[datetime, str],
        end_ts: Union[datetime, str],
        location: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Result:
        """
        Request a booking of a talent as the signed-in manager.

        Args:
            talent_id: Talent user id
            role_at_booking: "referee" or "coach"
            start_ts: Start timestamp
            end_ts: End timestamp
            location: Optional venue
            message: Optional note to the talent

        Returns:
            Created booking row with status "requested"
        """
        gate = await self.assert_logged_in()
        if not gate.ok:
            return Result.failure(gate.error)

        try:
            booking = BookingRequest(
                talent_id=talent_id,
                role_at_booking=role_at_booking,
                start_ts=start_ts,
                end_ts=end_ts,
                location=location,
                message=message,
            )
        except ValidationError as e:
            return invalid_input(e)

        query = self.table.insert(booking.to_row(gate.user_id))
        result = await normalize(self.execute_first(query))
        return relabel(result, TIME_CONFLICT_RULES)

    async def respond(self, booking_id: str, action: str) -> Result:
        """
        Accept, decline or cancel a booking.

        Args:
            booking_id: Booking id
            action: "accept", "decline" or "cancel"

        Returns:
            Updated booking row
        """
        gate = await self.assert_logged_in()
        if not gate.ok:
            return Result.failure(gate.error)

        try:
            status = BookingAction(action).status
        except ValueError:
            return Result.fail(BAD_REQUEST, f"Unknown action: {action}")

        update_data = {
            "status": status.value,
            "responded_at": datetime.now(timezone.utc).isoformat(),
        }

        query = self.table.update(update_data).eq("id", booking_id)
        result = relabel(await normalize(self.execute_first(query)), STATUS_TRANSITION_RULES)

        if result.ok and result.data is None:
            # RLS hides rows the user may not touch, so zero rows is ambiguous
            return Result.fail(NOT_FOUND, "Booking not found or not permitted")
        return result

    async def list_mine(
        self,
        role: str,
        status: Optional[str] = None,
        date_from: Optional[Union[datetime, str]] = None,
        date_to: Optional[Union[datetime, str]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Result:
        """
        List bookings where the current user is the manager or the talent.

        Args:
            role: "manager" or "talent"
            status: Optional status filter
            date_from: Only bookings starting at or after this time
            date_to: Only bookings starting at or before this time
            limit: Page size (default: BOOKINGS_PAGE_SIZE)
            offset: Rows to skip

        Returns:
            Result with booking rows ordered by start_ts ascending
        """
        gate = await self.assert_logged_in()
        if not gate.ok:
            return Result.failure(gate.error)

        try:
            params = BookingListQuery(
                role=role,
                status=status,
                date_from=date_from,
                date_to=date_to,
                limit=config.BOOKINGS_PAGE_SIZE if limit is None else limit,
                offset=offset,
            )
        except ValidationError as e:
            return invalid_input(e)

        query = self.table.select("*").eq(PARTY_COLUMNS[params.role], gate.user_id)

        if params.status:
            query = query.eq("status", params.status.value)
        if params.date_from:
            query = query.gte("start_ts", params.date_from.isoformat())
        if params.date_to:
            query = query.lte("start_ts", params.date_to.isoformat())

        query = query.order("start_ts", desc=False).range(
            params.offset, params.offset + params.limit - 1
        )

        result = await normalize(self.execute(query))
        if result.ok and result.data is None:
            return Result.success([])
        return result

    async def get_by_id(self, booking_id: str) -> Result:
        """Single booking visible to the current user"""
        gate = await self.assert_logged_in()
        if not gate.ok:
            return Result.failure(gate.error)

        query = self.table.select("*").eq("id", booking_id).single()
        return await normalize(self.execute(query))
