"""
Supabase Client Connection Management

Provides the single process-wide async Supabase client.
Uses the public anon key; row-level security applies to every call.
"""

import logging
from typing import Optional
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from linkgo import config

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Holds the one AsyncClient shared by every operation group"""

    _instance: Optional[AsyncClient] = None
    _url: Optional[str] = None

    @classmethod
    async def initialize(
        cls,
        url: Optional[str] = None,
        key: Optional[str] = None,
        persist_session: bool = True,
    ) -> AsyncClient:
        """
        Create the shared client. Call once during startup.

        url and key fall back to SUPABASE_URL / SUPABASE_ANON_KEY. A missing
        value raises ValueError; the facade cannot work without both.
        """
        url = url or config.SUPABASE_URL
        key = key or config.SUPABASE_ANON_KEY

        missing = [name for name, value in (("SUPABASE_URL", url), ("SUPABASE_ANON_KEY", key)) if not value]
        if missing:
            raise ValueError(f"Missing Supabase configuration: {', '.join(missing)}")

        logger.info(f"Connecting to Supabase project {url}")
        try:
            cls._instance = await create_async_client(url, key, persist_session=persist_session)
        except Exception as e:
            logger.error(f"Supabase client creation failed for {url}: {e}")
            raise

        cls._url = url
        return cls._instance

    @classmethod
    def get_client(cls) -> AsyncClient:
        """Shared client; RuntimeError until initialize() has been awaited"""
        if cls._instance is None:
            raise RuntimeError("SupabaseClient.initialize() has not been awaited yet")
        return cls._instance

    @classmethod
    def close(cls):
        if cls._instance is not None:
            logger.info(f"Releasing Supabase client for {cls._url}")
        cls._instance = None
        cls._url = None

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._instance is not None


async def create_async_client(
    url: str,
    key: str,
    persist_session: bool = True,
) -> AsyncClient:
    """
    Build a standalone async client.

    Diagnostics and the dev seed use this with persist_session=False so
    nothing is stored or refreshed between calls.
    """
    options = AsyncClientOptions(
        auto_refresh_token=persist_session,
        persist_session=persist_session,
    )
    return await acreate_client(url, key, options=options)


def get_supabase_client() -> AsyncClient:
    """Shortcut for SupabaseClient.get_client()"""
    return SupabaseClient.get_client()
