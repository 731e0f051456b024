"""Per-admin transaction history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import ConfigurationError, LedgerError
from ...models.domain import AdminIdentity
from ...schemas.workflows import CollectionRecordModel, SwapRecordModel
from ..dependencies import ServiceContainer, get_container, get_identity, http_error

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/swaps", response_model=list[SwapRecordModel])
def get_swap_history(
    identity: AdminIdentity = Depends(get_identity),
    container: ServiceContainer = Depends(get_container),
) -> list[SwapRecordModel]:
    if not identity.id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-Admin-Id header is required.")
    try:
        records = container.ledger.get_swap_history(identity.id)
    except (LedgerError, ConfigurationError) as exc:
        raise http_error(exc) from exc
    return [SwapRecordModel(id=record.id, **record.to_row()) for record in records]


@router.get("/collections", response_model=list[CollectionRecordModel])
def get_collection_history(
    identity: AdminIdentity = Depends(get_identity),
    container: ServiceContainer = Depends(get_container),
) -> list[CollectionRecordModel]:
    try:
        records = container.ledger.get_collection_history(identity.name)
    except (LedgerError, ConfigurationError) as exc:
        raise http_error(exc) from exc
    return [CollectionRecordModel.model_validate(record.to_row()) for record in records]
