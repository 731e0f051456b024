"""Admin login and gateway settings endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import ConfigurationError, LedgerError
from ...gateway import build_gateway
from ...persistence.admins import verify_admin_login
from ...schemas.stats import LoginRequest, LoginResponse, TokenUpdateRequest, TokenUpdateResponse
from ..dependencies import ServiceContainer, get_container, http_error

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/auth/login", response_model=LoginResponse)
def login(payload: LoginRequest, container: ServiceContainer = Depends(get_container)) -> LoginResponse:
    try:
        identity = verify_admin_login(
            container.supabase,
            payload.phone,
            payload.password,
            table=container.settings.admin_table,
        )
    except (LedgerError, ConfigurationError) as exc:
        raise http_error(exc) from exc
    if identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid phone number or password.")
    return LoginResponse(id=identity.id, name=identity.name)


@router.put("/settings/token", response_model=TokenUpdateResponse)
def update_token(payload: TokenUpdateRequest, container: ServiceContainer = Depends(get_container)) -> TokenUpdateResponse:
    """Swap the inventory credential. Sessions already open keep their gateway."""
    token = (payload.token or "").strip() or None
    settings = container.settings.model_copy(update={"inventory_token": token})
    container.settings = settings
    container.gateway = build_gateway(settings)
    logger.info(f"Inventory gateway rebuilt (live={container.gateway.live})")
    return TokenUpdateResponse(live=container.gateway.live)
