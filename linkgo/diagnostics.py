"""
Diagnostics

Smoke checks against a live project: public catalog readable, profiles
protected by row-level security.
"""

import logging
from pydantic import BaseModel
from supabase import AsyncClient

from linkgo.dal.result import normalize

logger = logging.getLogger(__name__)


class CheckResult(BaseModel):
    """Outcome of one diagnostic check"""
    name: str
    passed: bool
    detail: str = ""


async def check_supabase_connection(client: AsyncClient) -> bool:
    """
    Test Supabase connection.

    Returns:
        True if connected, False otherwise
    """
    try:
        await client.table("v_talent_catalog").select("id").limit(1).execute()
        return True
    except Exception as e:
        logger.error(f"Supabase connection check failed: {e}")
        return False


async def run_catalog_check(client: AsyncClient) -> CheckResult:
    """Read five catalog rows anonymously"""
    async def _select():
        response = await (
            client.table("v_talent_catalog")
            .select("id,full_name,region,is_referee,is_coach")
            .limit(5)
            .execute()
        )
        return response.data or []

    result = await normalize(_select())
    if result.error:
        return CheckResult(
            name="catalog",
            passed=False,
            detail=f"ERROR [{result.error.code}]: {result.error.message}",
        )

    lines = [f"Rows: {len(result.data)}"]
    for row in result.data:
        kinds = ("ref" if row.get("is_referee") else "") + ("coach" if row.get("is_coach") else "")
        lines.append(f"{row.get('full_name')} - {row.get('region')} - {kinds}")

    logger.info(f"[catalog] ok {len(result.data)}")
    return CheckResult(name="catalog", passed=True, detail="\n".join(lines))


async def run_rls_check(client: AsyncClient) -> CheckResult:
    """
    Read one profile anonymously.

    Passes when RLS blocks the read, either with an error or by hiding
    every row.
    """
    async def _select():
        response = await client.table("profiles").select("*").limit(1).execute()
        return response.data or []

    result = await normalize(_select())
    if result.error:
        return CheckResult(
            name="rls",
            passed=True,
            detail=f"PASS (RLS blocked) code={result.error.code} message={result.error.message}",
        )

    if not result.data:
        return CheckResult(name="rls", passed=True, detail="PASS (no rows visible)")

    logger.warning(f"[rls] open? {len(result.data)} profile row(s) visible")
    return CheckResult(name="rls", passed=False, detail=f"FAIL (RLS did not block) {result.data}")
