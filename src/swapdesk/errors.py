"""Exception hierarchy for device operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .persistence.ledger import LedgerResult


class SwapDeskError(Exception):
    """Base class for all domain errors raised by the service."""


class DeviceNotFoundError(SwapDeskError):
    """No device in the inventory matched a scanned identifier."""

    def __init__(self, message: str, scanned: str = "") -> None:
        super().__init__(message)
        self.scanned = scanned


class ValidationFailedError(SwapDeskError):
    """A device was found but a business rule rejects it."""


class RemoteError(SwapDeskError):
    """The inventory service answered with a non-2xx response."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API Error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class ConfigurationError(SwapDeskError):
    """Missing credentials or an unusable admin identity."""


class LedgerError(SwapDeskError):
    """Base class for ledger failures."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code


class LedgerWriteError(LedgerError):
    """The ledger rejected an insert."""


class LedgerReadError(LedgerError):
    """The ledger could not be queried."""


class WorkflowStateError(SwapDeskError):
    """An operation was called out of the workflow's step order."""


class SwapCommitError(SwapDeskError):
    """Confirming a swap failed; carries the user-facing message."""

    def __init__(self, user_message: str, ledger_result: "LedgerResult | None" = None) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.ledger_result = ledger_result


class CollectionCommitError(SwapDeskError):
    """Committing a collection failed part-way; no undo was attempted."""


class SessionNotFoundError(SwapDeskError):
    """No live workflow session has the requested id."""
