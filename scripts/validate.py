#!/usr/bin/env python
"""
Validate a Supabase project with the public anon key

Runs the catalog smoke check and the row-level-security check.
Needs SUPABASE_URL and SUPABASE_ANON_KEY.

Usage:
    python scripts/validate.py
"""

import asyncio
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from linkgo import config
from linkgo.dal import create_async_client
from linkgo.diagnostics import check_supabase_connection, run_catalog_check, run_rls_check


async def main():
    """Run both checks and exit non-zero if one fails"""
    logging.basicConfig(
        level=logging.DEBUG if config.DEBUG else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config.log_config_summary()

    if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
        print("ENV MISSING: set SUPABASE_URL and SUPABASE_ANON_KEY")
        sys.exit(1)
    print("ENV OK")

    client = await create_async_client(
        config.SUPABASE_URL, config.SUPABASE_ANON_KEY, persist_session=False
    )

    if not await check_supabase_connection(client):
        print(f"CONNECTION FAILED: cannot reach {config.SUPABASE_URL}")
        sys.exit(1)

    results = [await run_catalog_check(client), await run_rls_check(client)]

    failed = False
    for check in results:
        print("=" * 60)
        print(f"{check.name.upper()}: {'PASS' if check.passed else 'FAIL'}")
        print(check.detail)
        failed = failed or not check.passed
    print("=" * 60)

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    asyncio.run(main())
