import pytest

from swapdesk.errors import DeviceNotFoundError
from swapdesk.models.domain import Device
from swapdesk.services.identifiers import device_identifiers, find_device, resolve_device


def _device() -> Device:
    return Device(
        id="inv_42",
        device_id="8927000000000000042",
        status="in_stock",
        model="LTE SIM",
        iccid="8927000000000000042",
        imei="356938035643809",
        barcode="BC-42",
        serial_number="SN-42",
    )


@pytest.mark.parametrize(
    "field",
    ["device_id", "id", "iccid", "imei", "barcode", "serial_number"],
)
def test_resolve_matches_every_identifier_field(field):
    target = _device()
    other = Device(id="inv_1", device_id="RTR-001", status="in_stock")
    value = getattr(target, field)

    scanned = f"  {value.upper()}  "

    assert resolve_device(scanned, [other, target]) is target


def test_resolve_raises_when_nothing_matches():
    devices = [_device(), Device(id="inv_1", device_id="RTR-001", status="in_stock")]

    with pytest.raises(DeviceNotFoundError) as excinfo:
        resolve_device("does-not-exist", devices)

    assert "does-not-exist" in str(excinfo.value)
    assert excinfo.value.scanned == "does-not-exist"


def test_resolve_returns_first_match_in_list_order():
    first = Device(id="inv_1", device_id="DUP-1", status="in_stock")
    second = Device(id="inv_2", device_id="OTHER", status="in_stock", barcode="dup-1")

    assert resolve_device("dup-1", [first, second]) is first


def test_blank_scan_never_matches_devices_with_missing_fields():
    device = Device(id="inv_1", device_id="RTR-001", status="in_stock")

    assert find_device("   ", [device]) is None
    with pytest.raises(DeviceNotFoundError):
        resolve_device("", [device])


def test_device_identifiers_skips_empty_values():
    device = Device(id="inv_1", device_id="RTR-001", status="in_stock", barcode="")

    assert device_identifiers(device) == {"inv_1", "rtr-001"}


def test_sim_classification():
    assert Device(id="a", device_id="a", status="in_stock", iccid="8927").is_sim
    assert Device(id="b", device_id="b", status="in_stock", model="Data sim 5G").is_sim
    assert not Device(id="c", device_id="c", status="in_stock", model="Router X1").is_sim
    assert not Device(id="d", device_id="d", status="in_stock").is_sim
