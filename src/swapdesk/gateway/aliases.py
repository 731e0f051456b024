"""Field alias tables for normalising inventory portal payloads.

The portal is inconsistent about casing and naming across endpoints, so each
canonical field lists the upstream keys it accepts, most preferred first.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..models.domain import Customer, Device

DEVICE_ALIASES: dict[str, tuple[str, ...]] = {
    "iccid": ("iccid", "ICCID", "Iccid"),
    "imei": ("imei", "IMEI", "Imei"),
    "barcode": ("barcode", "Barcode", "bar_code"),
    "serial_number": ("serial_number", "serialNumber", "sn", "SN", "serial"),
    "upstream_device_id": ("deviceId", "device_id"),
    "id": ("id",),
    "status": ("status", "Status"),
    "customer_id": ("customer_id", "customerId", "customer_Id"),
    "model": ("model", "type", "description"),
    "type": ("type",),
}

# deviceId is the first populated value in this order.
DISPLAY_ID_PRIORITY = ("iccid", "barcode", "serial_number", "imei", "upstream_device_id", "id")

CUSTOMER_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "customer_Id": ("customer_Id", "customerId", "id"),
    "first_name": ("first_name", "firstName"),
    "last_name": ("last_name", "lastName"),
    "name": ("name", "Name"),
    "email": ("email", "Email"),
    "phone": ("phone", "Phone"),
}


def pick(payload: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    """Return the first non-empty value among ``aliases`` as a string."""

    for alias in aliases:
        value = payload.get(alias)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def apply_aliases(payload: Mapping[str, Any], table: Mapping[str, Sequence[str]]) -> dict[str, Optional[str]]:
    return {name: pick(payload, aliases) for name, aliases in table.items()}


def normalize_device(payload: Mapping[str, Any]) -> Device:
    fields = apply_aliases(payload, DEVICE_ALIASES)
    display_id = next(
        (fields[name] for name in DISPLAY_ID_PRIORITY if fields[name]),
        "",
    )
    return Device(
        id=fields["id"] or display_id,
        device_id=display_id,
        status=fields["status"] or "",
        customer_id=fields["customer_id"],
        model=fields["model"],
        type=fields["type"],
        iccid=fields["iccid"],
        imei=fields["imei"],
        barcode=fields["barcode"],
        serial_number=fields["serial_number"],
        raw=dict(payload),
    )


def normalize_customer(payload: Mapping[str, Any]) -> Customer:
    fields = apply_aliases(payload, CUSTOMER_ALIASES)
    return Customer(
        id=fields["id"] or "",
        customer_Id=fields["customer_Id"],
        first_name=fields["first_name"] or "",
        last_name=fields["last_name"] or "",
        name=fields["name"] or "",
        email=fields["email"] or "",
        phone=fields["phone"] or "",
        raw=dict(payload),
    )


def unwrap_list(payload: Any) -> list[dict]:
    """Accept either a bare JSON array or a ``{"data": [...]}`` envelope."""

    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return [item for item in data if isinstance(item, dict)]
    return []


def unwrap_single(payload: Any) -> Optional[dict]:
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict):
            return data
        return payload or None
    return None
