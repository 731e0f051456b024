"""Resolve scanned text to an inventory device."""

from __future__ import annotations

from typing import Iterable, Optional

from ..errors import DeviceNotFoundError
from ..models.domain import Device

# Checked in this order for every device; the first device with any hit wins.
MATCH_FIELDS = ("device_id", "id", "iccid", "imei", "barcode", "serial_number")


def normalize_identifier(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def device_identifiers(device: Device) -> set[str]:
    """Return the normalised, non-empty identifiers carried by ``device``."""

    values = (normalize_identifier(getattr(device, name)) for name in MATCH_FIELDS)
    return {value for value in values if value}


def find_device(scanned: str, devices: Iterable[Device]) -> Optional[Device]:
    needle = normalize_identifier(scanned)
    if not needle:
        return None
    for device in devices:
        if needle in device_identifiers(device):
            return device
    return None


def resolve_device(scanned: str, devices: Iterable[Device]) -> Device:
    """Return the first device whose identifiers match ``scanned``.

    Raises:
        DeviceNotFoundError: when nothing matches.
    """

    device = find_device(scanned, devices)
    if device is None:
        raise DeviceNotFoundError(
            f"Device with Barcode/ID {scanned} not found in inventory.",
            scanned=scanned,
        )
    return device
