"""Contract shared by the live and mock inventory gateways."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..models.domain import Customer, Device


class Gateway(ABC):
    """Reads and mutates customers and inventory in the remote portal."""

    live: bool = True

    @abstractmethod
    def get_customers(self) -> list[Customer]:
        raise NotImplementedError

    @abstractmethod
    def get_customer(self, customer_id: str) -> Optional[Customer]:
        raise NotImplementedError

    @abstractmethod
    def get_inventory(self) -> list[Device]:
        raise NotImplementedError

    @abstractmethod
    def return_device(self, device_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def assign_device(self, device_id: str, customer_key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def disable_customer(self, customer_key: str) -> None:
        raise NotImplementedError

    def check_health(self) -> bool:
        return True

    def close(self) -> None:
        return None
