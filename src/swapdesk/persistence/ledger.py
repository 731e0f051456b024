"""Append-only transaction ledger stored in Supabase."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..config import Settings
from ..errors import ConfigurationError, LedgerReadError, LedgerWriteError
from ..models.domain import AdminId, CollectionRecord, SwapRecord, coerce_admin_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LedgerResult:
    """Outcome of a best-effort ledger write that the caller may ignore."""

    ok: bool
    error: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def success(cls) -> "LedgerResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, exc: Exception) -> "LedgerResult":
        return cls(ok=False, error=str(exc), code=getattr(exc, "code", None))


def _error_details(exc: Exception) -> tuple[str, Optional[str]]:
    """Pull the message and error code out of a PostgREST error."""

    message = getattr(exc, "message", None) or str(exc)
    code = getattr(exc, "code", None)
    return str(message), (str(code) if code is not None else None)


class LedgerRepository:
    """Reads and appends swap and collection history rows.

    Rows are never updated or deleted here.
    """

    def __init__(self, client: Any, settings: Settings) -> None:
        self._client = client
        self.swap_table = settings.swap_history_table
        self.collection_table = settings.collection_history_table

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _table(self, name: str):
        if self._client is None:
            raise ConfigurationError(
                "Supabase not configured. Set SWAPDESK_SUPABASE_URL and SWAPDESK_SUPABASE_KEY environment variables."
            )
        return self._client.table(name)

    def _insert(self, table: str, row: dict[str, Any], label: str) -> None:
        query = self._table(table)
        try:
            query.insert([row]).execute()
        except Exception as exc:
            message, code = _error_details(exc)
            logger.error(f"Failed to record {label}: {message} ({code})")
            raise LedgerWriteError(f"{label} logging failed: {message} ({code})", code=code) from exc

    def _select(self, table: str, label: str, *, column: str | None = None, value: Any = None, descending: bool = True) -> list[dict]:
        query = self._table(table).select("*")
        if column is not None:
            query = query.eq(column, value)
        try:
            response = query.order("Date", desc=descending).execute()
        except Exception as exc:
            message, code = _error_details(exc)
            logger.error(f"Error fetching {label}: {message}")
            raise LedgerReadError(f"Failed to load {label}: {message}", code=code) from exc
        return list(response.data or [])

    # Swap history

    def record_swap_transaction(self, record: SwapRecord) -> None:
        row = record.to_row()
        row["admin_id"] = coerce_admin_id(record.admin_id)
        self._insert(self.swap_table, row, "Swap history")

    def try_record_swap_transaction(self, record: SwapRecord) -> LedgerResult:
        """Write ``record`` without raising; failures are logged and returned."""

        try:
            self.record_swap_transaction(record)
        except (LedgerWriteError, ConfigurationError) as exc:
            logger.error(f"Failed to log swap attempt to history: {exc}")
            return LedgerResult.failure(exc)
        return LedgerResult.success()

    def get_swap_history(self, admin_id: AdminId) -> list[SwapRecord]:
        rows = self._select(
            self.swap_table,
            "swap history",
            column="admin_id",
            value=coerce_admin_id(admin_id),
        )
        return [SwapRecord.from_row(row) for row in rows]

    # Collection history

    def record_collection_transaction(self, record: CollectionRecord) -> None:
        logger.info(f"Inserting collection record for agent {record.agent}")
        self._insert(self.collection_table, record.to_row(), "Collection history")

    def get_collection_history(self, agent_name: str) -> list[CollectionRecord]:
        rows = self._select(self.collection_table, "collection history", column="Agent", value=agent_name)
        return [CollectionRecord.from_row(row) for row in rows]

    def get_all_collection_history(self) -> list[CollectionRecord]:
        rows = self._select(self.collection_table, "all collection history", descending=False)
        return [CollectionRecord.from_row(row) for row in rows]
