"""
Base Repository Class

Provides the shared auth gate and query execution for all operation groups.
"""

import logging
from typing import Any, Optional
from supabase import AsyncClient
from pydantic import BaseModel, ValidationError
from supabase_auth.errors import AuthApiError, AuthSessionMissingError

from linkgo.dal.result import AUTH_REQUIRED, BAD_REQUEST, NormalizedError, Result, to_error

logger = logging.getLogger(__name__)


class AuthGate(BaseModel):
    """Outcome of assert_logged_in()"""
    ok: bool
    user_id: Optional[str] = None
    error: Optional[NormalizedError] = None


LOGIN_REQUIRED = NormalizedError(code=AUTH_REQUIRED, message="Login required")

# Statuses meaning the stored session is no longer accepted
SESSION_REJECTED_STATUSES = (401, 403)


def invalid_input(error: ValidationError) -> Result:
    """BAD_REQUEST naming the first offending field"""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "input"
    return Result.fail(BAD_REQUEST, f"Invalid {field}: {first['msg']}")


async def assert_logged_in(client: AsyncClient) -> AuthGate:
    """
    Check for an authenticated user without touching any table.

    Args:
        client: Supabase client instance

    Returns:
        AuthGate with user_id, or with AUTH_REQUIRED when nobody is signed in
    """
    try:
        response = await client.auth.get_user()
    except AuthSessionMissingError:
        return AuthGate(ok=False, error=LOGIN_REQUIRED)
    except AuthApiError as e:
        if e.status in SESSION_REJECTED_STATUSES:
            # Expired or revoked token
            return AuthGate(ok=False, error=LOGIN_REQUIRED)
        logger.warning(f"Auth gate lookup rejected: {e.message}")
        return AuthGate(ok=False, error=to_error(e))
    except Exception as e:
        logger.error(f"Auth gate lookup failed: {e!r}")
        return AuthGate(ok=False, error=to_error(e))

    user = getattr(response, "user", None)
    user_id = getattr(user, "id", None)
    if not user_id:
        return AuthGate(ok=False, error=LOGIN_REQUIRED)

    return AuthGate(ok=True, user_id=str(user_id))


class BaseRepository:
    """
    Base repository for table-backed operation groups.

    All repository classes should inherit from this base.
    """

    def __init__(self, client: AsyncClient, table_name: str):
        """
        Initialize repository.

        Args:
            client: Supabase client instance
            table_name: Name of the database table or view
        """
        self.client = client
        self.table_name = table_name

    @property
    def table(self):
        """Fresh query builder; builders are not reusable across calls"""
        return self.client.table(self.table_name)

    async def assert_logged_in(self) -> AuthGate:
        return await assert_logged_in(self.client)

    async def execute(self, query) -> Any:
        """
        Run a built query and return its rows.

        maybe_single() yields no response at all when the row is missing.
        """
        response = await query.execute()
        if response is None:
            return None
        return response.data

    async def execute_first(self, query) -> Any:
        """Run a write query and return the first returned row"""
        data = await self.execute(query)
        if isinstance(data, list):
            return data[0] if data else None
        return data
