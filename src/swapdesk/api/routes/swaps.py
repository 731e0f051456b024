"""Device swap wizard endpoints."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ...errors import SwapDeskError
from ...models.domain import AdminIdentity
from ...schemas.inventory import CustomerModel, DeviceModel
from ...schemas.workflows import (
    ScanRequest,
    SearchRequest,
    SelectCustomerRequest,
    SelectDeviceRequest,
    SwapRecordModel,
    SwapSessionResponse,
)
from ...services.swap import SwapWorkflow
from ..dependencies import ServiceContainer, get_container, get_identity, http_error

router = APIRouter(prefix="/swaps", tags=["swaps"])


@contextmanager
def _session(session_id: str, container: ServiceContainer) -> Iterator[SwapWorkflow]:
    """Hold the swap session for one request and map domain errors to HTTP."""
    try:
        with container.sessions.swaps.checkout(session_id) as workflow:
            yield workflow
    except SwapDeskError as exc:
        raise http_error(exc) from exc


def _to_response(session_id: str, workflow: SwapWorkflow) -> SwapSessionResponse:
    return SwapSessionResponse(
        session_id=session_id,
        step=workflow.step.value,
        customer=CustomerModel.from_domain(workflow.customer) if workflow.customer else None,
        old_device=DeviceModel.from_domain(workflow.old_device) if workflow.old_device else None,
        new_device=DeviceModel.from_domain(workflow.new_device) if workflow.new_device else None,
        search_term=workflow.search_term,
        search_results=[CustomerModel.from_domain(c) for c in workflow.search_results],
        customer_devices=[DeviceModel.from_domain(d) for d in workflow.customer_devices],
        last_error=workflow.last_error,
    )


@router.post("", response_model=SwapSessionResponse, status_code=status.HTTP_201_CREATED)
def start_swap(
    identity: AdminIdentity = Depends(get_identity),
    container: ServiceContainer = Depends(get_container),
) -> SwapSessionResponse:
    workflow = SwapWorkflow(container.gateway, container.ledger, identity.id, identity.name)
    session_id = container.sessions.swaps.add(workflow)
    return _to_response(session_id, workflow)


@router.get("/{session_id}", response_model=SwapSessionResponse)
def get_swap(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> SwapSessionResponse:
    workflow = container.sessions.swaps.get(session_id)
    if workflow is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Swap session {session_id} not found.")
    return _to_response(session_id, workflow)


@router.post("/{session_id}/search", response_model=SwapSessionResponse)
def search_customers(
    payload: SearchRequest,
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> SwapSessionResponse:
    with _session(session_id, container) as workflow:
        workflow.search_customers(payload.term)
        return _to_response(session_id, workflow)


@router.post("/{session_id}/customer", response_model=SwapSessionResponse)
def select_customer(
    payload: SelectCustomerRequest,
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> SwapSessionResponse:
    with _session(session_id, container) as workflow:
        customer = next((c for c in workflow.customers if c.id == payload.customer_id), None)
        if customer is None:
            customer = container.gateway.get_customer(payload.customer_id)
        if customer is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Customer {payload.customer_id} not found.",
            )
        workflow.select_customer(customer)
        return _to_response(session_id, workflow)


@router.post("/{session_id}/old-device", response_model=SwapSessionResponse)
def select_old_device(
    payload: SelectDeviceRequest,
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> SwapSessionResponse:
    with _session(session_id, container) as workflow:
        device = next((d for d in workflow.customer_devices if d.id == payload.device_id), None)
        if device is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Device {payload.device_id} is not assigned to the selected customer.",
            )
        workflow.select_old_device(device)
        return _to_response(session_id, workflow)


@router.post("/{session_id}/scan", response_model=SwapSessionResponse)
def scan_new_device(
    payload: ScanRequest,
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> SwapSessionResponse:
    with _session(session_id, container) as workflow:
        workflow.scan_new_device(payload.scanned)
        return _to_response(session_id, workflow)


@router.post("/{session_id}/confirm", response_model=SwapRecordModel)
def confirm_swap(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> SwapRecordModel:
    with _session(session_id, container) as workflow:
        record = workflow.confirm()
    return SwapRecordModel(id=record.id, **record.to_row())


@router.post("/{session_id}/reset", response_model=SwapSessionResponse)
def reset_swap(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> SwapSessionResponse:
    with _session(session_id, container) as workflow:
        workflow.reset()
        return _to_response(session_id, workflow)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def discard_swap(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> None:
    if not container.sessions.swaps.discard(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Swap session {session_id} not found.")
