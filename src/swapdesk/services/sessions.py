"""In-memory registry of workflow sessions driven over HTTP."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, Optional, TypeVar

from ..errors import SessionNotFoundError, WorkflowStateError
from .collection import CollectionWorkflow
from .swap import SwapWorkflow

logger = logging.getLogger(__name__)

W = TypeVar("W")

DEFAULT_SESSION_TTL_SECONDS = 3600.0


@dataclass
class _Session(Generic[W]):
    workflow: W
    touched: float
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore(Generic[W]):
    """Workflows keyed by an opaque session id. Lost on restart.

    Sessions idle for longer than ``ttl_seconds`` are dropped. A session is
    used by one request at a time; ``checkout`` refuses a second caller
    instead of queueing it.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._items: dict[str, _Session[W]] = {}
        self._lock = threading.RLock()

    def add(self, workflow: W) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self.sweep()
            self._items[session_id] = _Session(workflow=workflow, touched=self._clock())
        return session_id

    def _entry(self, session_id: str) -> _Session[W]:
        with self._lock:
            entry = self._items.get(session_id)
            if entry is None or self._expired(entry):
                raise SessionNotFoundError(f"Session {session_id} not found.")
            entry.touched = self._clock()
            return entry

    def get(self, session_id: str) -> Optional[W]:
        try:
            return self._entry(session_id).workflow
        except SessionNotFoundError:
            return None

    @contextmanager
    def checkout(self, session_id: str) -> Iterator[W]:
        """Hold the session for the duration of one operation.

        Raises:
            SessionNotFoundError: unknown or expired session.
            WorkflowStateError: another request is using the session.
        """
        entry = self._entry(session_id)
        if not entry.lock.acquire(blocking=False):
            raise WorkflowStateError(f"Session {session_id} is busy with another request.")
        try:
            yield entry.workflow
        finally:
            entry.touched = self._clock()
            entry.lock.release()

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._items.pop(session_id, None) is not None

    def _expired(self, entry: _Session[W]) -> bool:
        return self._clock() - entry.touched > self.ttl_seconds

    def sweep(self) -> int:
        """Drop idle sessions and return how many were removed."""
        with self._lock:
            stale = [
                session_id
                for session_id, entry in self._items.items()
                if self._expired(entry) and not entry.lock.locked()
            ]
            for session_id in stale:
                del self._items[session_id]
        if stale:
            logger.info(f"Evicted {len(stale)} idle session(s)")
        return len(stale)

    def __len__(self) -> int:
        return len(self._items)


class WorkflowRegistry:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.swaps: SessionStore[SwapWorkflow] = SessionStore(ttl_seconds, clock)
        self.collections: SessionStore[CollectionWorkflow] = SessionStore(ttl_seconds, clock)
