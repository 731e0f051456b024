import pytest

from conftest import FakeAPIError, fixed_clock
from swapdesk.errors import CollectionCommitError, DeviceNotFoundError, RemoteError, ValidationFailedError
from swapdesk.models.domain import Device
from swapdesk.services.collection import CollectionWorkflow, province_for_agent


def _workflow(gateway, ledger, agent="Sipho Dlamini") -> CollectionWorkflow:
    return CollectionWorkflow(gateway, ledger, agent_name=agent, clock=fixed_clock)


def _collections(supabase):
    return supabase.tables["Collection_History"]


@pytest.mark.parametrize(
    "agent, province",
    [
        ("Neo", "Limpopo"),
        ("Ngoako David Railo", "Limpopo"),
        ("neo", "Gauteng"),
        ("Sipho Dlamini", "Gauteng"),
        ("", "Gauteng"),
    ],
)
def test_province_for_agent(agent, province):
    assert province_for_agent(agent) == province


def test_router_slot_rejects_sims(gateway, ledger):
    workflow = _workflow(gateway, ledger)

    with pytest.raises(ValidationFailedError, match="appears to be a SIM"):
        workflow.scan_router("8927000000000000001")

    assert workflow.router is None
    assert workflow.log[0].level == "error"
    assert workflow.log[0].message.startswith("Router Scan Error:")


def test_router_slot_rejects_sim_model_without_iccid(gateway, ledger):
    gateway.inventory.append(Device(id="inv_9", device_id="SIM-9", status="assigned", model="Vodacom SIM"))
    workflow = _workflow(gateway, ledger)

    with pytest.raises(ValidationFailedError):
        workflow.scan_router("sim-9")


def test_sim_slot_accepts_any_device(gateway, ledger):
    workflow = _workflow(gateway, ledger)

    device = workflow.scan_sim("RTR-002")

    assert device.id == "inv_2"
    assert workflow.sim is device
    assert workflow.ready


def test_unknown_scan_reports_not_found(gateway, ledger):
    workflow = _workflow(gateway, ledger)

    with pytest.raises(DeviceNotFoundError):
        workflow.scan_sim("ghost")

    assert workflow.log[0].message.startswith("SIM Scan Error:")


def test_commit_requires_a_scanned_item(gateway, ledger):
    with pytest.raises(ValidationFailedError):
        _workflow(gateway, ledger).commit()


def test_router_with_customer_disables_customer(gateway, ledger, supabase):
    workflow = _workflow(gateway, ledger, agent="Neo")
    workflow.scan_router("rtr-001")
    workflow.scan_sim("8927000000000000001")

    record = workflow.commit()

    assert gateway.calls == [
        ("return_device", "inv_1"),
        ("disable_customer", "cust_1"),
        ("return_device", "inv_3"),
    ]
    rows = _collections(supabase)
    assert len(rows) == 1
    assert rows[0]["Customer ID"] == "cust_1"
    assert rows[0]["Full Name"] == "John Doe"
    assert rows[0]["Barcode"] == "RTR-001"
    assert rows[0]["SIM"] == "8927000000000000001"
    assert rows[0]["Agent"] == "Neo"
    assert rows[0]["Province"] == "Limpopo"
    assert record.province == "Limpopo"
    assert workflow.router is None and workflow.sim is None
    assert workflow.log[0].message == "Collection transaction completed successfully."


def test_sim_only_commit_never_disables_customer(gateway, ledger, supabase):
    workflow = _workflow(gateway, ledger)
    workflow.scan_sim("8927000000000000001")

    workflow.commit()

    assert gateway.calls == [("return_device", "inv_3")]
    row = _collections(supabase)[0]
    assert row["Customer ID"] == "cust_1"
    assert row["Barcode"] == ""
    assert row["Province"] == "Gauteng"


def test_router_without_customer_logs_na(gateway, ledger, supabase):
    workflow = _workflow(gateway, ledger)
    workflow.scan_router("RTR-002")

    workflow.commit()

    assert gateway.calls == [("return_device", "inv_2")]
    row = _collections(supabase)[0]
    assert row["Customer ID"] == "N/A"
    assert row["Full Name"] == "Unknown"
    assert row["SIM"] == ""


def test_missing_customer_name_falls_back_to_unknown(gateway, ledger, supabase):
    gateway.inventory.append(Device(id="inv_7", device_id="RTR-007", status="assigned", customer_id="cust_gone"))
    workflow = _workflow(gateway, ledger)
    workflow.scan_router("RTR-007")

    workflow.commit()

    assert ("disable_customer", "cust_gone") in gateway.calls
    assert _collections(supabase)[0]["Full Name"] == "Unknown"


def test_failure_keeps_slots_and_writes_nothing(gateway, ledger, supabase):
    gateway.failures["disable_customer"] = RemoteError(500, "boom")
    workflow = _workflow(gateway, ledger)
    router = workflow.scan_router("RTR-001")
    sim = workflow.scan_sim("8927000000000000001")

    with pytest.raises(CollectionCommitError, match="boom"):
        workflow.commit()

    # the router return already went through and is not undone
    assert gateway.calls == [("return_device", "inv_1"), ("disable_customer", "cust_1")]
    assert _collections(supabase) == []
    assert workflow.router is router and workflow.sim is sim
    assert workflow.log[0].message == "Transaction Failed"
    assert "boom" in workflow.log[0].details


def test_ledger_failure_is_reported_and_slots_kept(gateway, ledger, supabase):
    supabase.errors["Collection_History"] = FakeAPIError("null value in column", code="23502")
    workflow = _workflow(gateway, ledger)
    workflow.scan_router("RTR-002")

    with pytest.raises(CollectionCommitError, match="23502"):
        workflow.commit()

    assert workflow.router is not None
