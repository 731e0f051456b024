"""Four-step device swap wizard.

The wizard walks select-customer, select-old-device, scan-new-device and
confirm in strict order. Confirming returns the old device, assigns the new one
and appends a ledger row. Every attempt, including rejected scans, leaves exactly
one row in the swap history.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from ..errors import (
    ConfigurationError,
    DeviceNotFoundError,
    SwapCommitError,
    ValidationFailedError,
    WorkflowStateError,
)
from ..gateway.base import Gateway
from ..models.domain import (
    SUCCESS_STATUS,
    Customer,
    Device,
    DeviceStatus,
    SwapRecord,
    coerce_admin_id,
)
from ..persistence.ledger import LedgerRepository, LedgerResult
from .identifiers import resolve_device

logger = logging.getLogger(__name__)

FOREIGN_KEY_MARKERS = ("foreign key constraint", "23503")


class SwapStep(str, Enum):
    SELECT_CUSTOMER = "select-customer"
    SELECT_OLD_DEVICE = "select-old-device"
    SCAN_NEW_DEVICE = "scan-new-device"
    CONFIRM = "confirm"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def customer_matches(customer: Customer, term: str) -> bool:
    needle = term.strip().lower()
    fields = (customer.name, customer.first_name, customer.last_name, customer.email)
    return any(needle in (value or "").lower() for value in fields)


def is_foreign_key_violation(exc: BaseException) -> bool:
    text = str(exc).lower()
    return any(marker in text for marker in FOREIGN_KEY_MARKERS)


def validate_replacement(device: Device) -> None:
    """Reject devices that cannot be handed to a customer."""

    if device.status == DeviceStatus.ASSIGNED and device.customer_id:
        raise ValidationFailedError(f"Device {device.device_id} is already assigned to another customer.")
    if device.status == DeviceStatus.DEFECTIVE:
        raise ValidationFailedError(f"Device {device.device_id} is marked as defective.")


class SwapWorkflow:
    """Stateful swap wizard for one admin session."""

    def __init__(
        self,
        gateway: Gateway,
        ledger: LedgerRepository,
        admin_id: str,
        admin_name: str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.gateway = gateway
        self.ledger = ledger
        self.admin_id = admin_id
        self.admin_name = admin_name
        self._clock = clock
        self.reset()

    def reset(self) -> None:
        self.step = SwapStep.SELECT_CUSTOMER
        self.customer: Optional[Customer] = None
        self.old_device: Optional[Device] = None
        self.new_device: Optional[Device] = None
        self.search_term = ""
        self.search_results: list[Customer] = []
        self.customers: list[Customer] = []
        self.customer_devices: list[Device] = []
        self.last_error: Optional[str] = None

    def _require(self, step: SwapStep) -> None:
        if self.step is not step:
            raise WorkflowStateError(f"Expected step '{step.value}', workflow is at '{self.step.value}'.")

    def _timestamp(self) -> str:
        return self._clock().isoformat(timespec="milliseconds")

    # Step 1

    def search_customers(self, term: str) -> list[Customer]:
        self._require(SwapStep.SELECT_CUSTOMER)
        self.search_term = term
        self.customers = self.gateway.get_customers()
        self.search_results = [c for c in self.customers if customer_matches(c, term)]
        return self.search_results

    def select_customer(self, customer: Customer) -> list[Device]:
        self._require(SwapStep.SELECT_CUSTOMER)
        inventory = self.gateway.get_inventory()
        self.customer_devices = [
            device
            for device in inventory
            if device.status == DeviceStatus.ASSIGNED and device.customer_id == customer.id
        ]
        self.customer = customer
        self.step = SwapStep.SELECT_OLD_DEVICE
        return self.customer_devices

    # Step 2

    def select_old_device(self, device: Device) -> None:
        self._require(SwapStep.SELECT_OLD_DEVICE)
        self.old_device = device
        self.step = SwapStep.SCAN_NEW_DEVICE

    # Step 3

    def scan_new_device(self, scanned: str) -> Device:
        """Resolve and validate a replacement device.

        A rejected scan is logged to the ledger and re-raised; the workflow
        stays on this step so the admin can scan again.
        """
        self._require(SwapStep.SCAN_NEW_DEVICE)
        self.last_error = None
        try:
            device = resolve_device(scanned, self.gateway.get_inventory())
            validate_replacement(device)
        except (DeviceNotFoundError, ValidationFailedError) as exc:
            self.last_error = str(exc)
            self._log_rejected_scan(scanned, str(exc))
            raise
        self.new_device = device
        self.step = SwapStep.CONFIRM
        return device

    def _log_rejected_scan(self, scanned: str, message: str) -> Optional[LedgerResult]:
        if not (self.customer and self.old_device and self.admin_id):
            return None
        record = self._build_record(new_device=scanned, status=message)
        return self.ledger.try_record_swap_transaction(record)

    # Step 4

    def confirm(self) -> SwapRecord:
        self._require(SwapStep.CONFIRM)
        if not self.admin_id or self.admin_id == "undefined":
            raise ConfigurationError(
                "Session Error: Admin ID missing. Please refresh the page or log out and log in again."
            )
        if not (self.customer and self.old_device and self.new_device):
            raise WorkflowStateError("Swap is missing a customer or device selection.")

        new_label = self.new_device.ledger_label
        try:
            self.gateway.return_device(self.old_device.id)
            self.gateway.assign_device(self.new_device.id, self.customer.key)
            record = self._build_record(new_device=new_label, status=SUCCESS_STATUS)
            self.ledger.record_swap_transaction(record)
        except Exception as exc:
            failure = self._build_record(new_device=new_label, status=str(exc) or "Unknown Error")
            ledger_result = self.ledger.try_record_swap_transaction(failure)
            if is_foreign_key_violation(exc):
                message = (
                    f"Database Error: Your login session ID ({self.admin_id}) does not match an "
                    "active Admin record. Please Log Out and Sign In again."
                )
            else:
                message = f"Swap failed: {exc}"
            self.last_error = message
            logger.warning(f"Swap for customer {self.customer.key} failed: {exc}")
            raise SwapCommitError(message, ledger_result=ledger_result) from exc

        logger.info(
            f"Swap complete for customer {self.customer.key}: "
            f"{self.old_device.device_id} -> {self.new_device.device_id}"
        )
        self.reset()
        return record

    def _build_record(self, *, new_device: str, status: str) -> SwapRecord:
        if not (self.customer and self.old_device):
            raise WorkflowStateError("Swap is missing a customer or device selection.")
        return SwapRecord(
            customer_id=self.customer.key,
            customer_name=self.customer.display_name,
            admin_id=coerce_admin_id(self.admin_id),
            admin_name=self.admin_name,
            old_device=self.old_device.ledger_label,
            new_device=new_device,
            date=self._timestamp(),
            status=status,
        )
