"""
API Facade

Composes the operation groups around one shared Supabase client.
UI code talks to Supa and nothing else.
"""

import logging
from typing import Optional
from supabase import AsyncClient

from linkgo.dal.auth_repository import AuthRepository
from linkgo.dal.base import AuthGate, assert_logged_in
from linkgo.dal.booking_repository import BookingRepository
from linkgo.dal.catalog_repository import CatalogRepository
from linkgo.dal.profile_repository import ProfileRepository
from linkgo.dal.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class Supa:
    """Auth, Profiles, Catalog and Bookings over a single client"""

    def __init__(self, client: AsyncClient):
        self.client = client
        self.auth = AuthRepository(client)
        self.profiles = ProfileRepository(client)
        self.catalog = CatalogRepository(client)
        self.bookings = BookingRepository(client)

    async def assert_logged_in(self) -> AuthGate:
        return await assert_logged_in(self.client)


async def create_supa(url: Optional[str] = None, key: Optional[str] = None) -> Supa:
    """
    Initialize the process-wide client and build the facade.

    Reuses the client if it was already initialized.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_ANON_KEY is missing
    """
    if SupabaseClient.is_initialized() and url is None and key is None:
        return Supa(SupabaseClient.get_client())

    client = await SupabaseClient.initialize(url, key)
    return Supa(client)
