"""Request-scoped access to the services built by ``create_app``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fastapi import Header, HTTPException, Request, status

from ..config import Settings
from ..errors import (
    CollectionCommitError,
    ConfigurationError,
    DeviceNotFoundError,
    LedgerError,
    RemoteError,
    SessionNotFoundError,
    SwapCommitError,
    SwapDeskError,
    ValidationFailedError,
    WorkflowStateError,
)
from ..gateway.base import Gateway
from ..models.domain import AdminIdentity
from ..persistence.ledger import LedgerRepository
from ..services.sessions import WorkflowRegistry


@dataclass
class ServiceContainer:
    settings: Settings
    gateway: Gateway
    ledger: LedgerRepository
    supabase: Any = None
    sessions: WorkflowRegistry = field(default_factory=WorkflowRegistry)


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_identity(
    x_admin_id: Optional[str] = Header(default=None),
    x_admin_name: Optional[str] = Header(default=None),
) -> AdminIdentity:
    """Identity of the acting admin, supplied by the login session."""
    if not x_admin_name:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-Admin-Name header is required.")
    return AdminIdentity(id=x_admin_id or "", name=x_admin_name)


_STATUS_BY_ERROR: tuple[tuple[type[SwapDeskError], int], ...] = (
    (DeviceNotFoundError, status.HTTP_404_NOT_FOUND),
    (SessionNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationFailedError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (WorkflowStateError, status.HTTP_409_CONFLICT),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (SwapCommitError, status.HTTP_502_BAD_GATEWAY),
    (CollectionCommitError, status.HTTP_502_BAD_GATEWAY),
    (RemoteError, status.HTTP_502_BAD_GATEWAY),
    (LedgerError, status.HTTP_502_BAD_GATEWAY),
)


def http_error(exc: SwapDeskError) -> HTTPException:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
