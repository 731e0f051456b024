"""HTTP client for the Umoja inventory and customer portal."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..config import Settings
from ..errors import ConfigurationError, RemoteError
from ..models.domain import Customer, Device, DeviceStatus
from .aliases import normalize_customer, normalize_device, unwrap_list, unwrap_single
from .base import Gateway

logger = logging.getLogger(__name__)

CUSTOMERS_PATH = "/customers/customer"
INVENTORY_PATH = "/inventory/items"


class InventoryGateway(Gateway):
    """Live gateway. Every call is a single request; nothing is retried."""

    def __init__(
        self,
        token: str,
        base_url: str,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not token:
            raise ConfigurationError("Inventory token is required for the live gateway.")
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.Client(
            timeout=httpx.Timeout(timeout, connect=10.0),
        )
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Basic {token}",
        }

    @classmethod
    def from_settings(cls, settings: Settings, http_client: httpx.Client | None = None) -> "InventoryGateway":
        return cls(
            token=settings.inventory_token or "",
            base_url=settings.inventory_base_url,
            timeout=settings.inventory_timeout_seconds,
            http_client=http_client,
        )

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        try:
            response = self._client.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers,
                json=payload,
            )
        except httpx.TransportError as exc:
            # No HTTP status to report; 0 marks a connection-level failure.
            raise RemoteError(0, f"Failed to reach inventory service at {self.base_url}: {exc}") from exc
        if not response.is_success:
            raise RemoteError(response.status_code, response.text)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(response.status_code, response.text) from exc

    def get_customers(self) -> list[Customer]:
        payload = self._request("GET", CUSTOMERS_PATH)
        return [normalize_customer(item) for item in unwrap_list(payload)]

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        try:
            payload = self._request("GET", f"{CUSTOMERS_PATH}/{customer_id}")
        except (RemoteError, httpx.HTTPError, ValueError) as exc:
            logger.warning("Failed to fetch customer %s: %s", customer_id, exc)
            return None
        record = unwrap_single(payload)
        if not record:
            return None
        return normalize_customer(record)

    def get_inventory(self) -> list[Device]:
        payload = self._request("GET", INVENTORY_PATH)
        return [normalize_device(item) for item in unwrap_list(payload)]

    def return_device(self, device_id: str) -> None:
        self._request("PUT", f"{INVENTORY_PATH}/{device_id}", {"status": DeviceStatus.RETURNED})

    def assign_device(self, device_id: str, customer_key: str) -> None:
        self._request(
            "PUT",
            f"{INVENTORY_PATH}/{device_id}",
            {"customer_id": customer_key, "status": DeviceStatus.ASSIGNED},
        )

    def disable_customer(self, customer_key: str) -> None:
        self._request("PUT", f"{CUSTOMERS_PATH}/{customer_key}", {"status": "disabled"})

    def check_health(self) -> bool:
        try:
            self._request("GET", CUSTOMERS_PATH)
        except (RemoteError, httpx.HTTPError, ValueError):
            return False
        return True

    def close(self) -> None:
        self._client.close()
