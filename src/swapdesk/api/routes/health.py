"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..dependencies import ServiceContainer, get_container

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/gateway", status_code=status.HTTP_200_OK)
def health_gateway(container: ServiceContainer = Depends(get_container)) -> dict:
    """Check the inventory portal connection."""
    gateway = container.gateway
    if not gateway.live:
        return {"service": "inventory", "mode": "mock", "healthy": True}
    try:
        return {"service": "inventory", "mode": "live", "healthy": gateway.check_health()}
    except Exception as e:
        return {"service": "inventory", "mode": "live", "healthy": False, "error": str(e)}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(container: ServiceContainer = Depends(get_container)) -> dict:
    """Check the ledger connection."""
    supabase = container.supabase
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set SWAPDESK_SUPABASE_URL and SWAPDESK_SUPABASE_KEY environment variables.",
        }

    table = container.settings.swap_history_table
    try:
        supabase.table(table).select("id", count="exact").limit(1).execute()
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {"configured": True, "connected": True, "message": f"Database connected. {table} table reachable."}
