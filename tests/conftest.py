from collections import defaultdict
from datetime import datetime, timezone
from typing import Optional

import pytest

from swapdesk.config import Settings
from swapdesk.gateway.base import Gateway
from swapdesk.models.domain import Customer, Device
from swapdesk.persistence.ledger import LedgerRepository


class FakeAPIError(Exception):
    """Mimics postgrest's APIError, which carries ``message`` and ``code``."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.rows_to_insert = None
        self.filters = []
        self.order_by = None
        self.max_rows = None

    def insert(self, rows):
        self.rows_to_insert = rows
        return self

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.max_rows = count
        return self

    def execute(self):
        error = self.db.errors.get(self.table)
        if error is not None:
            raise error
        rows = self.db.tables[self.table]
        if self.rows_to_insert is not None:
            inserted = []
            for row in self.rows_to_insert:
                stored = {"id": len(rows) + 1, **row}
                rows.append(stored)
                inserted.append(stored)
            return FakeResponse(inserted)

        result = [row for row in rows if all(row.get(col) == val for col, val in self.filters)]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self.max_rows is not None:
            result = result[: self.max_rows]
        return FakeResponse(result)


class FakeSupabase:
    """In-memory stand-in for the supabase-py query builder."""

    def __init__(self):
        self.tables = defaultdict(list)
        self.errors = {}

    def table(self, name):
        return FakeQuery(self, name)


class RecordingGateway(Gateway):
    """Gateway double that serves fixed data and records mutation calls."""

    def __init__(self, customers=(), inventory=()):
        self.customers = list(customers)
        self.inventory = list(inventory)
        self.calls = []
        self.failures = {}

    def _maybe_fail(self, name):
        error = self.failures.get(name)
        if error is not None:
            raise error

    def get_customers(self):
        self._maybe_fail("get_customers")
        return list(self.customers)

    def get_customer(self, customer_id) -> Optional[Customer]:
        return next((c for c in self.customers if c.id == customer_id), None)

    def get_inventory(self):
        self._maybe_fail("get_inventory")
        return list(self.inventory)

    def return_device(self, device_id):
        self.calls.append(("return_device", device_id))
        self._maybe_fail("return_device")

    def assign_device(self, device_id, customer_key):
        self.calls.append(("assign_device", device_id, customer_key))
        self._maybe_fail("assign_device")

    def disable_customer(self, customer_key):
        self.calls.append(("disable_customer", customer_key))
        self._maybe_fail("disable_customer")


def fixed_clock() -> datetime:
    return datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        inventory_token=None,
        mock_read_latency_seconds=0,
        mock_write_latency_seconds=0,
        supabase_url=None,
        supabase_key=None,
    )


@pytest.fixture
def customers() -> list[Customer]:
    return [
        Customer(id="cust_1", customer_Id="CUST-0001", first_name="John", last_name="Doe", email="john@example.com"),
        Customer(id="cust_2", first_name="Jane", last_name="Smith", email="jane@test.com"),
        Customer(id="cust_3", name="Alice Holdings", email="alice@company.net"),
    ]


@pytest.fixture
def inventory() -> list[Device]:
    return [
        Device(id="inv_1", device_id="RTR-001", status="assigned", customer_id="cust_1", model="Router X1", barcode="RTR-001"),
        Device(id="inv_2", device_id="RTR-002", status="in_stock", model="Router X1", serial_number="SN-2002"),
        Device(id="inv_3", device_id="8927000000000000001", status="assigned", customer_id="cust_1", model="SIM Card", iccid="8927000000000000001"),
        Device(id="inv_4", device_id="RTR-004", status="defective", model="Router X1"),
        Device(id="inv_5", device_id="RTR-005", status="assigned", customer_id="cust_2", model="Modem Z2", imei="356938035643809"),
        Device(id="inv_6", device_id="RTR-006", status="returned", customer_id="cust_1", model="Router X1"),
    ]


@pytest.fixture
def gateway(customers, inventory) -> RecordingGateway:
    return RecordingGateway(customers=customers, inventory=inventory)


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def ledger(supabase, test_settings) -> LedgerRepository:
    return LedgerRepository(supabase, test_settings)
