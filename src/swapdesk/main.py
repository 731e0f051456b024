"""FastAPI application entry point."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.dependencies import ServiceContainer
from .api.routes import auth, collections, health, history, stats, swaps
from .config import Settings, settings as default_settings
from .db.supabase import create_supabase_client
from .gateway import Gateway, build_gateway
from .persistence.ledger import LedgerRepository
from .services.sessions import WorkflowRegistry

_UNSET: Any = object()


def create_app(
    settings: Settings | None = None,
    *,
    gateway: Gateway | None = None,
    supabase: Any = _UNSET,
) -> FastAPI:
    """Build the app. ``gateway`` and ``supabase`` override the configured clients."""
    settings = settings or default_settings
    if supabase is _UNSET:
        supabase = create_supabase_client(settings)

    app = FastAPI(title=settings.app_name)
    app.state.container = ServiceContainer(
        settings=settings,
        gateway=gateway or build_gateway(settings),
        ledger=LedgerRepository(supabase, settings),
        supabase=supabase,
        sessions=WorkflowRegistry(ttl_seconds=settings.session_ttl_seconds),
    )
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(swaps.router, prefix=settings.api_prefix)
    app.include_router(collections.router, prefix=settings.api_prefix)
    app.include_router(history.router, prefix=settings.api_prefix)
    app.include_router(stats.router, prefix=settings.api_prefix)
    return app


app = create_app()
