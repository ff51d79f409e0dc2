"""
Data Access Layer (DAL) Module

Operation groups over Supabase. Every operation returns a Result.

Example:
    from linkgo.dal import SupabaseClient, BookingRepository

    client = await SupabaseClient.initialize()
    bookings = BookingRepository(client)
    result = await bookings.list_mine("manager")
    if result.error:
        print(result.error.code, result.error.message)
"""

from linkgo.dal.supabase_client import get_supabase_client, create_async_client, SupabaseClient
from linkgo.dal.result import NormalizedError, Result, normalize
from linkgo.dal.base import AuthGate, BaseRepository, assert_logged_in
from linkgo.dal.auth_repository import AuthRepository
from linkgo.dal.profile_repository import ProfileRepository
from linkgo.dal.catalog_repository import CatalogRepository
from linkgo.dal.booking_repository import BookingRepository

__all__ = [
    "get_supabase_client",
    "create_async_client",
    "SupabaseClient",
    "NormalizedError",
    "Result",
    "normalize",
    "AuthGate",
    "BaseRepository",
    "assert_logged_in",
    "AuthRepository",
    "ProfileRepository",
    "CatalogRepository",
    "BookingRepository",
]
