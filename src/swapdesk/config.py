"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SWAPDESK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "SwapDesk Device Operations API"
    api_prefix: str = "/api"

    # Umoja inventory/customer portal
    inventory_base_url: str = Field(
        default="https://portal.umoja.network/api/2.0/admin",
        description="Base URL of the inventory and customer REST service.",
    )
    inventory_token: Optional[str] = Field(
        default=None,
        description="Basic auth token for the inventory service. Unset means mock mode.",
    )
    inventory_timeout_seconds: float = Field(default=30.0, gt=0.0)
    mock_read_latency_seconds: float = Field(
        default=0.6,
        ge=0.0,
        description="Artificial delay applied to mock gateway reads.",
    )
    mock_write_latency_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Artificial delay applied to mock gateway writes.",
    )

    # Supabase ledger
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    swap_history_table: str = "Swap_History"
    collection_history_table: str = "Collection_History"
    admin_table: str = "Admin"

    session_ttl_seconds: float = Field(
        default=3600.0,
        gt=0.0,
        description="Idle time after which a swap or collection session is dropped.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @property
    def has_inventory_token(self) -> bool:
        return bool(self.inventory_token and self.inventory_token.strip())

    @field_validator("inventory_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> str:
        return str(value).rstrip("/")

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
