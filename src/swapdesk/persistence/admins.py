"""Admin account lookups used for login."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..errors import ConfigurationError, LedgerReadError
from ..models.domain import AdminIdentity

logger = logging.getLogger(__name__)


def verify_admin_login(client: Any, phone: str, password: str, table: str = "Admin") -> Optional[AdminIdentity]:
    """Check credentials against the admin table.

    Returns:
        The admin identity on success, None when the credentials do not match.

    Raises:
        ConfigurationError: when Supabase is missing or the matching row has no ``admin_id``.
        LedgerReadError: when the query itself fails.
    """
    if client is None:
        raise ConfigurationError("Supabase not configured - admin login is unavailable.")

    try:
        # limit(1) rather than single() so duplicate rows do not error
        response = (
            client.table(table)
            .select("*")
            .eq("phone", phone)
            .eq("password", password)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logger.error(f"Login verification failed: {exc}")
        raise LedgerReadError(f"Login verification failed: {exc}") from exc

    users = response.data or []
    if not users:
        return None

    row = users[0]
    admin_id = row.get("admin_id")
    if admin_id is None:
        logger.error(f"Admin row for {phone} is missing admin_id")
        raise ConfigurationError("Account configuration error: missing admin_id.")

    name = row.get("name") or row.get("Name") or "Admin"
    return AdminIdentity(id=str(admin_id), name=str(name))
