#!/usr/bin/env python
"""
Seed a development Supabase project

Creates seed managers and talents, talent details, availability, a team
and two requested bookings. Needs SUPABASE_URL and SUPABASE_SERVICE_ROLE.
WARNING: dev only. Refuses to run with ENVIRONMENT=production.

Usage:
    python scripts/dev_seed.py
"""

import asyncio
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from linkgo import config
from linkgo.seed import DevSeeder, SeedError, create_admin_client


async def main():
    """Run the dev seed"""
    logging.basicConfig(
        level=logging.DEBUG if config.DEBUG else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        admin = await create_admin_client()
        summary = await DevSeeder(admin).run()
    except SeedError as e:
        print(f"[dev-seed] FAILED: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        sys.exit(1)
    except Exception as e:
        # Network and unexpected client errors
        print(f"[dev-seed] FAILED: {e!r}")
        sys.exit(1)

    print()
    print("=" * 60)
    print(f"{'email':<30} {'role':<8} id")
    print("-" * 60)
    for user in summary.users:
        print(f"{user.email:<30} {user.role.value:<8} {user.id}")
    print("=" * 60)
    print("Created booking IDs:")
    for name, booking_id in summary.bookings.items():
        print(f"  {name}: {booking_id or '(existing/duplicate)'}")
    sys.exit(0)


if __name__ == "__main__":
    asyncio.run(main())
