"""Paired router/SIM collection from departing customers."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Literal, Optional

from ..errors import CollectionCommitError, ValidationFailedError
from ..gateway.base import Gateway
from ..models.domain import NO_CUSTOMER, UNKNOWN_NAME, CollectionRecord, Device
from ..persistence.ledger import LedgerRepository
from .identifiers import resolve_device

logger = logging.getLogger(__name__)

DEFAULT_PROVINCE = "Gauteng"

# Agents working out of Limpopo. Anyone not listed is booked under Gauteng,
# so adding a field agent elsewhere needs an entry here.
PROVINCE_BY_AGENT: dict[str, str] = {
    "Neo": "Limpopo",
    "Ngoako David Railo": "Limpopo",
}

LogLevel = Literal["success", "error", "info"]


def province_for_agent(agent_name: str) -> str:
    return PROVINCE_BY_AGENT.get(agent_name, DEFAULT_PROVINCE)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class CollectionLogEntry:
    message: str
    level: LogLevel
    details: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:9])


class CollectionWorkflow:
    """Router and SIM scan slots committed together as one collection."""

    def __init__(
        self,
        gateway: Gateway,
        ledger: LedgerRepository,
        agent_name: str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.gateway = gateway
        self.ledger = ledger
        self.agent_name = agent_name
        self._clock = clock
        self.router: Optional[Device] = None
        self.sim: Optional[Device] = None
        self.log: list[CollectionLogEntry] = []

    @property
    def ready(self) -> bool:
        return self.router is not None or self.sim is not None

    def _record(self, message: str, level: LogLevel, details: Optional[str] = None) -> None:
        # newest first
        self.log.insert(0, CollectionLogEntry(message=message, level=level, details=details, timestamp=self._clock()))
        if level == "error":
            logger.warning(f"{message} {details or ''}".strip())
        else:
            logger.info(message)

    def scan_router(self, scanned: str) -> Device:
        try:
            device = resolve_device(scanned, self.gateway.get_inventory())
            if device.is_sim:
                raise ValidationFailedError(
                    f"Scanned item ({device.device_id}) appears to be a SIM, not a Router."
                )
        except Exception as exc:
            self._record(f"Router Scan Error: {exc}", "error")
            raise
        self.router = device
        return device

    def scan_sim(self, scanned: str) -> Device:
        # Any device is accepted in the SIM slot.
        try:
            device = resolve_device(scanned, self.gateway.get_inventory())
        except Exception as exc:
            self._record(f"SIM Scan Error: {exc}", "error")
            raise
        self.sim = device
        return device

    def clear_router(self) -> None:
        self.router = None

    def clear_sim(self) -> None:
        self.sim = None

    def _customer_name(self, customer_id: str) -> str:
        customer = self.gateway.get_customer(customer_id)
        if customer is None:
            return UNKNOWN_NAME
        return customer.display_name

    def commit(self) -> CollectionRecord:
        """Return the scanned items and write one collection record.

        Steps already applied are not undone when a later one fails, no ledger
        row is written for the failure, and both slots keep their devices.
        """
        if not self.ready:
            raise ValidationFailedError("Scan a router or a SIM before processing the collection.")

        router, sim = self.router, self.sim
        customer_id = ""
        if router and router.customer_id:
            customer_id = router.customer_id
        elif sim and sim.customer_id:
            customer_id = sim.customer_id

        try:
            customer_name = self._customer_name(customer_id) if customer_id else UNKNOWN_NAME

            if router:
                self._record(f"Processing Router: {router.device_id}...", "info")
                self.gateway.return_device(router.id)
                self._record(f"Router ({router.device_id}) marked as RETURNED.", "success")
                if router.customer_id:
                    self.gateway.disable_customer(router.customer_id)
                    self._record(f"Customer (ID: {router.customer_id}) status set to DISABLED.", "success")
                else:
                    self._record(f"No customer linked to Router {router.device_id}.", "info")

            if sim:
                self._record(f"Processing SIM: {sim.device_id}...", "info")
                self.gateway.return_device(sim.id)
                self._record(f"SIM ({sim.device_id}) marked as RETURNED.", "success")

            record = CollectionRecord(
                customer_id=customer_id or NO_CUSTOMER,
                full_name=customer_name,
                barcode=router.ledger_label if router else "",
                sim=sim.ledger_label if sim else "",
                agent=self.agent_name,
                province=province_for_agent(self.agent_name),
                date=self._clock().isoformat(timespec="milliseconds"),
            )
            self.ledger.record_collection_transaction(record)
            self._record("Transaction logged to Collection History.", "success")
        except Exception as exc:
            self._record("Transaction Failed", "error", str(exc))
            raise CollectionCommitError(f"Collection failed: {exc}") from exc

        self.router = None
        self.sim = None
        self._record("Collection transaction completed successfully.", "success")
        return record
