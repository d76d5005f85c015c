"""
Database access for the storefront (Supabase Postgres)

This module centralizes the two ways the backend talks to Supabase:
- psycopg2 direct connections (repositories, raw SQL)
- Supabase client (auth sign-in / sign-up), one per auth call
"""
import time
import logging

import psycopg2
from psycopg2.extras import RealDictCursor
from supabase import create_client, Client

from .config import settings

logger = logging.getLogger(__name__)


# ============================================================================
# psycopg2 Direct Connections
# ============================================================================

def get_db_connection_dict():
    """
    Get a database connection with RealDictCursor (returns dictionaries)

    Returns:
        psycopg2 connection with RealDictCursor

    Raises:
        Exception if DATABASE_URL is not configured
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        raise Exception("DATABASE_URL not configured")

    return psycopg2.connect(database_url, cursor_factory=RealDictCursor)


def get_db_connection_dict_with_retry(max_retries=3, retry_delay=1.0):
    """
    Get a RealDictCursor connection, retrying on connection failures

    Supabase's pooler occasionally drops SSL connections; each failed attempt
    waits retry_delay * 2^(attempt-1) seconds before the next one.

    Args:
        max_retries: Maximum number of connection attempts (default: 3)
        retry_delay: Initial delay between retries in seconds (default: 1.0)

    Raises:
        psycopg2.OperationalError: If all retry attempts fail
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        raise Exception("DATABASE_URL not configured")

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            conn = psycopg2.connect(database_url, cursor_factory=RealDictCursor)

            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.close()

            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)

    logger.error(f"All {max_retries} connection attempts failed")
    raise last_error


# ============================================================================
# Supabase Client
# ============================================================================

def new_supabase_client() -> Client:
    """
    Fresh Supabase client

    Sign-in stores the session on the client, so per-user auth calls each get
    their own instance.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
        raise ValueError("Supabase not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY")

    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
