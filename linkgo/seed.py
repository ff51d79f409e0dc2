"""
Dev Seed

Populates a development project with managers, talents, availability,
a team and two requested bookings. Uses the service role key and must
never run against production.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from pydantic import BaseModel, Field
from supabase import AsyncClient
from supabase_auth.errors import AuthError

from linkgo import config
from linkgo.dal.supabase_client import create_async_client
from linkgo.models import (
    Availability,
    Booking,
    Profile,
    TalentDetails,
    TalentRole,
    Team,
    UserRole,
)

logger = logging.getLogger(__name__)

SEED_WEEKDAYS = [1, 3, 5]  # Mon/Wed/Fri
LIST_USERS_PAGE_SIZE = 200


class SeedError(RuntimeError):
    """Raised when seeding cannot continue"""


class SeededUser(BaseModel):
    id: str
    email: str
    role: UserRole


class SeedSummary(BaseModel):
    """What run() created or found"""
    users: List[SeededUser] = Field(default_factory=list)
    bookings: Dict[str, Optional[str]] = Field(default_factory=dict)


def _is_duplicate(error: APIError) -> bool:
    return "duplicate" in (error.message or "").lower()


def local_iso_plus_days(days: int, hour: int, minute: int, now: Optional[datetime] = None) -> str:
    """Local wall-clock time `days` from today, as an aware ISO timestamp"""
    base = (now or datetime.now()).astimezone()
    moment = (base + timedelta(days=days)).replace(hour=hour, minute=minute, second=0, microsecond=0)
    return moment.isoformat()


async def create_admin_client(url: Optional[str] = None, key: Optional[str] = None) -> AsyncClient:
    """
    Build the service-role client for seeding.

    Raises:
        SeedError: If configuration is missing or ENVIRONMENT is production
    """
    url = url or config.SUPABASE_URL
    key = key or config.SUPABASE_SERVICE_ROLE

    if not url or not key:
        raise SeedError("[dev-seed] Missing SUPABASE_URL or SUPABASE_SERVICE_ROLE")
    if config.is_production():
        raise SeedError("[dev-seed] Refusing to run in production (ENVIRONMENT=production)")

    return await create_async_client(url, key, persist_session=False)


class DevSeeder:
    """Idempotent-ish seeding helpers over an admin client"""

    def __init__(self, admin: AsyncClient, password: Optional[str] = None):
        self.admin = admin
        self.password = password or config.SEED_PASSWORD

    async def _find_user_id(self, email: str) -> Optional[str]:
        page = 1
        while True:
            users = await self.admin.auth.admin.list_users(page=page, per_page=LIST_USERS_PAGE_SIZE)
            for user in users or []:
                if (user.email or "").lower() == email.lower():
                    return user.id
            if not users or len(users) < LIST_USERS_PAGE_SIZE:
                return None
            page += 1

    async def ensure_user(
        self,
        email: str,
        full_name: str,
        role: UserRole,
        region: str,
        bio: Optional[str] = None,
        password: Optional[str] = None,
    ) -> SeededUser:
        """
        Create a confirmed auth user, or reuse the existing one, and upsert
        its profile row.
        """
        try:
            created = await self.admin.auth.admin.create_user({
                "email": email,
                "password": password or self.password,
                "email_confirm": True,
                "user_metadata": {"full_name": full_name},
            })
            user_id = created.user.id if created and created.user else None
        except AuthError as e:
            message = (e.message or "").lower()
            # Supabase: "A user with this email address has already been registered"
            if "already" not in message or "register" not in message:
                raise SeedError(f"[dev-seed] createUser failed for {email}: {e.message}") from e
            try:
                user_id = await self._find_user_id(email)
            except AuthError as list_error:
                raise SeedError(
                    f"[dev-seed] listUsers failed for {email}: {list_error.message}"
                ) from list_error
            if not user_id:
                raise SeedError(f"[dev-seed] user exists in auth but not returned by listUsers(): {email}")

        if not user_id:
            raise SeedError(f"[dev-seed] No user id for {email}")

        profile = Profile(id=str(user_id), role=role, full_name=full_name, region=region, bio=bio)
        row = profile.model_dump(mode="json", exclude={"created_at"})

        try:
            await self.admin.table("profiles").upsert(row, on_conflict="id").execute()
        except APIError as e:
            if not _is_duplicate(e):
                raise SeedError(f"[dev-seed] profiles upsert failed for {email}: {e.message}") from e
            logger.warning(f"[dev-seed] profiles upsert duplicate for {email}, continuing")

        return SeededUser(id=str(user_id), email=email, role=role)

    async def upsert_talent_details(self, talent_id: str, details: TalentDetails):
        row = details.model_copy(update={"talent_id": talent_id}).model_dump(mode="json")
        try:
            await self.admin.table("talent_details").upsert(row, on_conflict="talent_id").execute()
        except APIError as e:
            if not _is_duplicate(e):
                raise SeedError(f"[dev-seed] upsert_talent_details failed: {e.message}") from e
            logger.warning("[dev-seed] talent_details duplicate, continuing")

    async def add_availability(
        self,
        talent_id: str,
        weekday: int,
        start: str,
        end: str,
        notes: str = "",
    ):
        slot = Availability(talent_id=talent_id, weekday=weekday, start_time=start, end_time=end, notes=notes)
        try:
            await self.admin.table("availability").insert(slot.model_dump()).execute()
        except APIError as e:
            if not _is_duplicate(e):
                raise SeedError(f"[dev-seed] add_availability failed: {e.message}") from e
            logger.warning("[dev-seed] availability duplicate, continuing")

    async def insert_one(self, table: str, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Insert a row and return it, or None if it already exists"""
        try:
            response = await self.admin.table(table).insert(row).execute()
        except APIError as e:
            if _is_duplicate(e):
                logger.warning(f"[dev-seed] {table} duplicate, continuing")
                return None
            raise SeedError(f"[dev-seed] insert into {table} failed: {e.message}") from e
        return response.data[0] if response.data else None

    async def run(self) -> SeedSummary:
        """Seed the full development dataset"""
        logger.info("--- LinkGo Dev Seed ---")

        manager_alfa = await self.ensure_user(
            "manager.alfa@example.com", "Manager Alfa", UserRole.manager, "Stockholm", "Seed manager"
        )
        manager_beta = await self.ensure_user(
            "manager.beta@example.com", "Manager Beta", UserRole.manager, "Stockholm", "Seed manager"
        )

        ref1 = await self.ensure_user("ref1@example.com", "Domare 1", UserRole.talent, "Stockholm", "Seed talent")
        await self.upsert_talent_details(ref1.id, TalentDetails(
            is_referee=True, experience_years=2, primary_levels=["U11", "U13"], travel_km=15,
        ))

        ref2 = await self.ensure_user("ref2@example.com", "Domare 2", UserRole.talent, "Stockholm", "Seed talent")
        await self.upsert_talent_details(ref2.id, TalentDetails(
            is_referee=True, experience_years=4, primary_levels=["U9", "U11", "U13"], travel_km=10,
        ))

        coach1 = await self.ensure_user("coach1@example.com", "Tränare 1", UserRole.talent, "Stockholm", "Seed coach")
        await self.upsert_talent_details(coach1.id, TalentDetails(
            is_coach=True, experience_years=3, primary_levels=["U11", "U13"], travel_km=20, hourly_rate=200,
        ))

        for weekday in SEED_WEEKDAYS:
            for talent in (ref1, ref2, coach1):
                await self.add_availability(talent.id, weekday, "18:00", "20:00", "Seed slot")

        team = Team(
            manager_id=manager_alfa.id,
            club_name="LinkGo IF",
            team_name="U13",
            age_group="U13",
            level="Medel",
            region="Stockholm",
        )
        await self.insert_one("teams", team.model_dump())

        booking1 = await self.insert_one("bookings", Booking(
            manager_id=manager_alfa.id,
            talent_id=ref1.id,
            role_at_booking=TalentRole.referee,
            start_ts=local_iso_plus_days(1, 18, 0),
            end_ts=local_iso_plus_days(1, 19, 30),
            location="Skytteholms IP",
            message="Träningsmatch U13",
        ).model_dump(mode="json", exclude_none=True))

        booking2 = await self.insert_one("bookings", Booking(
            manager_id=manager_beta.id,
            talent_id=coach1.id,
            role_at_booking=TalentRole.coach,
            start_ts=local_iso_plus_days(2, 17, 0),
            end_ts=local_iso_plus_days(2, 18, 30),
            location="Zinkensdamms IP",
            message="Teknikpass",
        ).model_dump(mode="json", exclude_none=True))

        summary = SeedSummary(
            users=[manager_alfa, manager_beta, ref1, ref2, coach1],
            bookings={
                "booking1": booking1.get("id") if booking1 else None,
                "booking2": booking2.get("id") if booking2 else None,
            },
        )
        logger.info("--- Dev seed done ---")
        return summary
