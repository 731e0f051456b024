"""Static stand-in for the portal when no token is configured."""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from ..models.domain import Customer, Device
from .aliases import normalize_customer, normalize_device
from .base import Gateway

logger = logging.getLogger(__name__)

MOCK_CUSTOMERS: tuple[dict, ...] = (
    {"id": "cust_1", "first_name": "John", "last_name": "Doe", "email": "john@example.com", "phone": "555-0101"},
    {"id": "cust_2", "first_name": "Jane", "last_name": "Smith", "email": "jane@test.com", "phone": "555-0102"},
    {"id": "cust_3", "first_name": "Alice", "last_name": "Johnson", "email": "alice@company.net", "phone": "555-0103"},
)

MOCK_INVENTORY: tuple[dict, ...] = (
    {"id": "inv_1", "deviceId": "DEV-001", "status": "assigned", "customer_id": "cust_1", "model": "Router X1"},
    {"id": "inv_2", "deviceId": "DEV-002", "status": "in_stock", "customer_id": None, "model": "Router X1"},
    {"id": "inv_3", "deviceId": "DEV-003", "status": "assigned", "customer_id": "cust_2", "model": "Modem Z2"},
    {"id": "inv_4", "deviceId": "DEV-004", "status": "returned", "customer_id": None, "model": "Modem Z2"},
    {"id": "inv_5", "deviceId": "DEV-005", "status": "in_stock", "customer_id": None, "model": "Router X1"},
)


class MockInventoryGateway(Gateway):
    """Serves fixture data with artificial latency; writes are no-ops."""

    live = False

    def __init__(
        self,
        customers: Sequence[dict] = MOCK_CUSTOMERS,
        inventory: Sequence[dict] = MOCK_INVENTORY,
        read_latency: float = 0.6,
        write_latency: float = 2.0,
    ) -> None:
        self._customers = [normalize_customer(item) for item in customers]
        self._inventory = [normalize_device(item) for item in inventory]
        self.read_latency = read_latency
        self.write_latency = write_latency

    def _pause(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    def get_customers(self) -> list[Customer]:
        self._pause(self.read_latency)
        return list(self._customers)

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return next((c for c in self._customers if c.id == customer_id), None)

    def get_inventory(self) -> list[Device]:
        self._pause(self.read_latency)
        return list(self._inventory)

    def return_device(self, device_id: str) -> None:
        logger.info("Mock gateway: return_device(%s) skipped", device_id)
        self._pause(self.write_latency)

    def assign_device(self, device_id: str, customer_key: str) -> None:
        logger.info("Mock gateway: assign_device(%s, %s) skipped", device_id, customer_key)
        self._pause(self.write_latency)

    def disable_customer(self, customer_key: str) -> None:
        logger.info("Mock gateway: disable_customer(%s) skipped", customer_key)
        self._pause(self.write_latency)
