"""Device collection endpoints."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ...errors import SwapDeskError
from ...models.domain import AdminIdentity
from ...schemas.inventory import DeviceModel
from ...schemas.workflows import (
    CollectionLogModel,
    CollectionRecordModel,
    CollectionSessionResponse,
    ScanRequest,
)
from ...services.collection import CollectionWorkflow
from ..dependencies import ServiceContainer, get_container, get_identity, http_error

router = APIRouter(prefix="/collections", tags=["collections"])


@contextmanager
def _session(session_id: str, container: ServiceContainer) -> Iterator[CollectionWorkflow]:
    """Hold the collection session for one request and map domain errors to HTTP."""
    try:
        with container.sessions.collections.checkout(session_id) as workflow:
            yield workflow
    except SwapDeskError as exc:
        raise http_error(exc) from exc


def _to_response(session_id: str, workflow: CollectionWorkflow) -> CollectionSessionResponse:
    return CollectionSessionResponse(
        session_id=session_id,
        agent=workflow.agent_name,
        router=DeviceModel.from_domain(workflow.router) if workflow.router else None,
        sim=DeviceModel.from_domain(workflow.sim) if workflow.sim else None,
        ready=workflow.ready,
        log=[
            CollectionLogModel(
                id=entry.id,
                timestamp=entry.timestamp,
                message=entry.message,
                level=entry.level,
                details=entry.details,
            )
            for entry in workflow.log
        ],
    )


@router.post("", response_model=CollectionSessionResponse, status_code=status.HTTP_201_CREATED)
def start_collection(
    identity: AdminIdentity = Depends(get_identity),
    container: ServiceContainer = Depends(get_container),
) -> CollectionSessionResponse:
    workflow = CollectionWorkflow(container.gateway, container.ledger, identity.name)
    session_id = container.sessions.collections.add(workflow)
    return _to_response(session_id, workflow)


@router.get("/{session_id}", response_model=CollectionSessionResponse)
def get_collection(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> CollectionSessionResponse:
    workflow = container.sessions.collections.get(session_id)
    if workflow is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Collection session {session_id} not found.",
        )
    return _to_response(session_id, workflow)


@router.post("/{session_id}/router", response_model=CollectionSessionResponse)
def scan_router(
    payload: ScanRequest,
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> CollectionSessionResponse:
    with _session(session_id, container) as workflow:
        workflow.scan_router(payload.scanned)
        return _to_response(session_id, workflow)


@router.post("/{session_id}/sim", response_model=CollectionSessionResponse)
def scan_sim(
    payload: ScanRequest,
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> CollectionSessionResponse:
    with _session(session_id, container) as workflow:
        workflow.scan_sim(payload.scanned)
        return _to_response(session_id, workflow)


@router.delete("/{session_id}/router", response_model=CollectionSessionResponse)
def clear_router(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> CollectionSessionResponse:
    with _session(session_id, container) as workflow:
        workflow.clear_router()
        return _to_response(session_id, workflow)


@router.delete("/{session_id}/sim", response_model=CollectionSessionResponse)
def clear_sim(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> CollectionSessionResponse:
    with _session(session_id, container) as workflow:
        workflow.clear_sim()
        return _to_response(session_id, workflow)


@router.post("/{session_id}/commit", response_model=CollectionRecordModel)
def commit_collection(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> CollectionRecordModel:
    with _session(session_id, container) as workflow:
        record = workflow.commit()
    return CollectionRecordModel.model_validate(record.to_row())


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def discard_collection(
    session_id: str = Path(...),
    container: ServiceContainer = Depends(get_container),
) -> None:
    if not container.sessions.collections.discard(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Collection session {session_id} not found.",
        )
