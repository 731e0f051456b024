"""Inventory and customer gateway implementations."""

import logging

from ..config import Settings
from .base import Gateway
from .client import InventoryGateway
from .mock import MockInventoryGateway


def build_gateway(settings: Settings) -> Gateway:
    """Return the live gateway when a token is configured, else the mock one."""

    if settings.has_inventory_token:
        return InventoryGateway.from_settings(settings)
    logging.warning("Inventory token not configured - using mock inventory data")
    return MockInventoryGateway(
        read_latency=settings.mock_read_latency_seconds,
        write_latency=settings.mock_write_latency_seconds,
    )


__all__ = ["Gateway", "InventoryGateway", "MockInventoryGateway", "build_gateway"]
