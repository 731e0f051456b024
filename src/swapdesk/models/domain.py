"""Domain models for customers, devices and ledger records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

AdminId = Union[int, str]


class DeviceStatus:
    ASSIGNED = "assigned"
    RETURNED = "returned"
    IN_STOCK = "in_stock"
    DEFECTIVE = "defective"


SUCCESS_STATUS = "success"
UNKNOWN_NAME = "Unknown"
NO_CUSTOMER = "N/A"


@dataclass(frozen=True, slots=True)
class Customer:
    """A customer record as returned by the inventory portal."""

    id: str
    customer_Id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def key(self) -> str:
        """Foreign key expected by the portal's mutation endpoints."""
        return self.customer_Id or self.id

    @property
    def display_name(self) -> str:
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or self.name or UNKNOWN_NAME


@dataclass(frozen=True, slots=True)
class Device:
    """An inventory item. ``id`` addresses mutations, ``device_id`` is what gets scanned."""

    id: str
    device_id: str
    status: str
    customer_id: Optional[str] = None
    model: Optional[str] = None
    type: Optional[str] = None
    iccid: Optional[str] = None
    imei: Optional[str] = None
    barcode: Optional[str] = None
    serial_number: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_sim(self) -> bool:
        if self.iccid:
            return True
        return bool(self.model and "sim" in self.model.lower())

    @property
    def ledger_label(self) -> str:
        return self.barcode or self.device_id


@dataclass(slots=True)
class SwapRecord:
    """One swap attempt in the ``Swap_History`` ledger table."""

    customer_id: str
    customer_name: str
    admin_id: AdminId
    admin_name: str
    old_device: str
    new_device: str
    date: str
    status: str
    id: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS_STATUS

    def to_row(self) -> dict[str, Any]:
        return {
            "Customer_ID": self.customer_id,
            "Customer_Name": self.customer_name,
            "admin_id": self.admin_id,
            "Admin_Name": self.admin_name,
            "Old_Device": self.old_device,
            "New_Device": self.new_device,
            "Date": self.date,
            "status": self.status,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SwapRecord":
        return cls(
            id=row.get("id"),
            customer_id=str(row.get("Customer_ID") or ""),
            customer_name=str(row.get("Customer_Name") or ""),
            admin_id=row.get("admin_id", ""),
            admin_name=str(row.get("Admin_Name") or ""),
            old_device=str(row.get("Old_Device") or ""),
            new_device=str(row.get("New_Device") or ""),
            date=str(row.get("Date") or ""),
            status=str(row.get("status") or ""),
        )


@dataclass(slots=True)
class CollectionRecord:
    """One completed collection in the ``Collection_History`` ledger table."""

    customer_id: str
    full_name: str
    barcode: str
    sim: str
    agent: str
    province: str
    date: str
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    def to_row(self) -> dict[str, Any]:
        return {
            "Customer ID": self.customer_id,
            "Full Name": self.full_name,
            "Barcode": self.barcode,
            "SIM": self.sim,
            "Agent": self.agent,
            "Province": self.province,
            "Date": self.date,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CollectionRecord":
        return cls(
            customer_id=str(row.get("Customer ID") or NO_CUSTOMER),
            full_name=str(row.get("Full Name") or UNKNOWN_NAME),
            barcode=str(row.get("Barcode") or ""),
            sim=str(row.get("SIM") or ""),
            agent=str(row.get("Agent") or ""),
            province=str(row.get("Province") or row.get("province") or ""),
            date=str(row.get("Date") or row.get("date") or row.get("created_at") or ""),
            raw=dict(row),
        )


@dataclass(frozen=True, slots=True)
class AdminIdentity:
    """The acting admin supplied with every workflow request."""

    id: str
    name: str


def coerce_admin_id(admin_id: AdminId) -> AdminId:
    """Return ``admin_id`` as an int when it is purely numeric and non-zero."""

    if isinstance(admin_id, int):
        return admin_id
    text = str(admin_id).strip()
    if text.isdigit() and int(text) != 0:
        return int(text)
    return admin_id
