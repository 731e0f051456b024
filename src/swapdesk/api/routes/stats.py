"""Collection statistics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...errors import ConfigurationError, LedgerError
from ...schemas.stats import CollectionStatsResponse
from ...services.stats import aggregate_collections, summarize_totals
from ..dependencies import ServiceContainer, get_container, http_error

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/collections", response_model=CollectionStatsResponse)
def get_collection_stats(container: ServiceContainer = Depends(get_container)) -> CollectionStatsResponse:
    try:
        records = container.ledger.get_all_collection_history()
    except (LedgerError, ConfigurationError) as exc:
        raise http_error(exc) from exc
    months = aggregate_collections(records)
    return CollectionStatsResponse.model_validate(
        {"records": len(records), "months": months, "totals": summarize_totals(months)}
    )
