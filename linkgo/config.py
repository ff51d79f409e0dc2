"""
Configuration for the LinkGo client

Values come from the environment. A local .env file is loaded for
development; in production the variables are injected directly.
"""

import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

if os.getenv("ENVIRONMENT") != "production":
    load_dotenv(override=False)

# =============================================================================
# Supabase
# =============================================================================

# Public (anon) credentials used by the facade
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")

# Service role key, only for the dev seed. Never ship to a client.
SUPABASE_SERVICE_ROLE = os.getenv("SUPABASE_SERVICE_ROLE")

# =============================================================================
# Paging Defaults
# =============================================================================

CATALOG_PAGE_SIZE = int(os.getenv("CATALOG_PAGE_SIZE", "20"))
BOOKINGS_PAGE_SIZE = int(os.getenv("BOOKINGS_PAGE_SIZE", "20"))

# =============================================================================
# Dev Seed
# =============================================================================

SEED_PASSWORD = os.getenv("SEED_PASSWORD", "LinkGo123!")

# =============================================================================
# Runtime
# =============================================================================

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")


def is_production() -> bool:
    """True when running against a production project"""
    return (os.getenv("ENVIRONMENT") or ENVIRONMENT).lower() == "production"


def log_config_summary():
    """Log which settings are present. Secrets are never logged."""
    logger.info("=" * 60)
    logger.info("CONFIGURATION SUMMARY:")
    logger.info(f"Environment: {ENVIRONMENT}")
    logger.info(f"SUPABASE_URL: {SUPABASE_URL}")
    logger.info(f"SUPABASE_ANON_KEY exists: {bool(SUPABASE_ANON_KEY)}")
    logger.info(f"SUPABASE_SERVICE_ROLE exists: {bool(SUPABASE_SERVICE_ROLE)}")
    logger.info(f"Catalog page size: {CATALOG_PAGE_SIZE}")
    logger.info(f"Bookings page size: {BOOKINGS_PAGE_SIZE}")
    logger.info("=" * 60)

    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        logger.warning("SUPABASE_URL or SUPABASE_ANON_KEY missing. The client cannot start.")
