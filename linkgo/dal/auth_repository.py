"""
Auth Repository

Sign-in, sign-up, sign-out and session access through Supabase auth.
"""

import logging
from typing import Any, Callable, Dict, Optional
from supabase import AsyncClient

from linkgo.dal.result import Result, normalize, to_error
from linkgo.models import SessionInfo

logger = logging.getLogger(__name__)


def _as_dict(record: Any) -> Optional[Dict[str, Any]]:
    """Turn a supabase_auth pydantic record (or plain object) into a dict"""
    if record is None:
        return None
    if isinstance(record, dict):
        return record
    if hasattr(record, "model_dump"):
        return record.model_dump(mode="json")
    return dict(vars(record))


def reduce_session(session: Any) -> Optional[Dict[str, Any]]:
    """Map a library session onto {user, access_token, expires_at}"""
    if session is None:
        return None
    return SessionInfo(
        user=_as_dict(getattr(session, "user", None)),
        access_token=getattr(session, "access_token", None),
        expires_at=getattr(session, "expires_at", None),
    ).model_dump()


class AuthRepository:
    """Auth operations. No table access."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def sign_in_with_password(self, email: str, password: str) -> Result:
        """
        Sign in with email and password.

        Returns:
            Result with {user, session}; AUTH_ERROR on bad credentials
        """
        async def _sign_in():
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
            return {
                "user": _as_dict(response.user),
                "session": reduce_session(response.session),
            }

        return await normalize(_sign_in())

    async def sign_up_with_email(
        self,
        email: str,
        password: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Result:
        """
        Register a new user.

        Args:
            email: User email
            password: User password
            data: Optional user metadata (e.g. full_name, role)

        Returns:
            Result with {user, session, needs_confirmation}. needs_confirmation
            is True when a user was created but no session was issued, i.e.
            the project requires email confirmation.
        """
        async def _sign_up():
            credentials: Dict[str, Any] = {"email": email, "password": password}
            if data:
                credentials["options"] = {"data": data}
            response = await self.client.auth.sign_up(credentials)
            user = _as_dict(response.user)
            session = reduce_session(response.session)
            return {
                "user": user,
                "session": session,
                "needs_confirmation": session is None and user is not None,
            }

        return await normalize(_sign_up())

    async def sign_out(self) -> Result:
        """Sign out the current user. data is True on success."""
        async def _sign_out():
            await self.client.auth.sign_out()
            return True

        return await normalize(_sign_out())

    async def get_session(self) -> Result:
        """Current session as {user, access_token, expires_at}, or None"""
        async def _get_session():
            session = await self.client.auth.get_session()
            return reduce_session(session)

        return await normalize(_get_session())

    async def on_auth_state_change(self, callback: Callable[[str, Optional[Dict[str, Any]]], Any]) -> Result:
        """
        Subscribe to auth events.

        The callback receives the event name and the reduced session.

        Returns:
            Result whose data is a zero-argument unsubscribe function
        """
        def _listener(event, session):
            callback(str(getattr(event, "value", event)), reduce_session(session))

        try:
            subscription = self.client.auth.on_auth_state_change(_listener)
        except Exception as e:
            logger.error(f"Failed to subscribe to auth changes: {e!r}")
            return Result.failure(to_error(e))

        return Result.success(subscription.unsubscribe)
