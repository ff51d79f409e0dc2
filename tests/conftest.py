"""
Pytest configuration and fixtures for all tests.

The Supabase client is replaced by an in-memory fake that records every
query-builder call, so tests assert on the request that would be sent.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

MANAGER_ID = "a1111111-1111-1111-1111-111111111111"
TALENT_ID = "b2222222-2222-2222-2222-222222222222"


class FakeQuery:
    """Chainable stand-in for a PostgREST request builder"""

    def __init__(self, client, table_name):
        self.client = client
        self.table_name = table_name
        self.calls = []

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return self

    def __getattr__(self, name):
        if name in {
            "select", "insert", "update", "upsert", "delete",
            "eq", "neq", "ilike", "gte", "lte", "in_",
            "order", "range", "limit", "single", "maybe_single",
        }:
            return lambda *args, **kwargs: self._record(name, *args, **kwargs)
        raise AttributeError(name)

    def called(self, name):
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]

    @property
    def call_names(self):
        return [call for call, _, _ in self.calls]

    async def execute(self):
        self.calls.append(("execute", (), {}))
        error = self.client.errors.get(self.table_name)
        if error is not None:
            raise error
        data = self.client.responses.get(self.table_name)
        if data is None and "maybe_single" in self.call_names:
            return None
        return SimpleNamespace(data=data, count=None)


class FakeSubscription:
    def __init__(self, auth):
        self.auth = auth

    def unsubscribe(self):
        self.auth.listeners.clear()


class FakeAuth:
    """Session layer with one known account"""

    def __init__(self):
        self.accounts = {}
        self.session = None
        self.listeners = []
        self.calls = []
        self.error = None

    def add_account(self, email, password, user_id):
        self.accounts[email] = (password, SimpleNamespace(id=user_id, email=email))

    def login_as(self, user_id, email="user@example.com"):
        user = SimpleNamespace(id=user_id, email=email)
        self.session = SimpleNamespace(user=user, access_token=f"token-{user_id}", expires_at=1900000000)

    def _emit(self, event):
        for listener in list(self.listeners):
            listener(event, self.session)

    async def get_user(self, jwt=None):
        self.calls.append("get_user")
        if self.error is not None:
            raise self.error
        if self.session is None:
            return None
        return SimpleNamespace(user=self.session.user)

    async def get_session(self):
        self.calls.append("get_session")
        if self.error is not None:
            raise self.error
        return self.session

    async def sign_in_with_password(self, credentials):
        from supabase_auth.errors import AuthApiError

        self.calls.append("sign_in_with_password")
        account = self.accounts.get(credentials["email"])
        if account is None or account[0] != credentials["password"]:
            raise AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        self.login_as(account[1].id, credentials["email"])
        self._emit("SIGNED_IN")
        return SimpleNamespace(user=self.session.user, session=self.session)

    async def sign_up(self, credentials):
        self.calls.append(("sign_up", credentials))
        user = SimpleNamespace(id="c3333333-3333-3333-3333-333333333333", email=credentials["email"])
        return SimpleNamespace(user=user, session=None)

    async def sign_out(self, options=None):
        self.calls.append("sign_out")
        self.session = None
        self._emit("SIGNED_OUT")

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return FakeSubscription(self)


class FakeClient:
    """Records table access and serves canned rows or errors per table"""

    def __init__(self):
        self.auth = FakeAuth()
        self.queries = []
        self.responses = {}
        self.errors = {}

    def table(self, name):
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    from_ = table

    def last_query(self, table_name=None):
        for query in reversed(self.queries):
            if table_name is None or query.table_name == table_name:
                return query
        return None


@pytest.fixture
def fake_client():
    """Unauthenticated fake client"""
    return FakeClient()


@pytest.fixture
def manager_client(fake_client):
    """Fake client signed in as the seed manager"""
    fake_client.auth.login_as(MANAGER_ID, "manager.alfa@example.com")
    return fake_client


@pytest.fixture
def reset_supabase_client():
    """Reset the process-wide client between tests."""
    from linkgo.dal.supabase_client import SupabaseClient

    SupabaseClient.close()
    yield
    SupabaseClient.close()
