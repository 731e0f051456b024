"""Supabase client for the transaction ledger."""

import logging

from supabase import create_client, Client

from ..config import Settings


def create_supabase_client(settings: Settings) -> Client | None:
    """Build a Supabase client from ``settings``.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None
