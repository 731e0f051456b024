import pytest

from swapdesk.errors import SessionNotFoundError, WorkflowStateError
from swapdesk.services.sessions import SessionStore, WorkflowRegistry


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_add_get_and_discard():
    store = SessionStore()
    session_id = store.add("workflow")

    assert store.get(session_id) == "workflow"
    assert store.discard(session_id) is True
    assert store.get(session_id) is None
    assert store.discard(session_id) is False


def test_idle_sessions_are_evicted_on_add():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    stale = store.add("old")
    clock.now += 30
    fresh = store.add("recent")

    clock.now += 45
    store.add("newest")

    assert len(store) == 2
    assert store.get(stale) is None
    assert store.get(fresh) == "recent"


def test_access_keeps_a_session_alive():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    session_id = store.add("workflow")

    for _ in range(3):
        clock.now += 50
        assert store.get(session_id) == "workflow"

    assert store.sweep() == 0


def test_expired_session_is_not_found_even_before_sweep():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    session_id = store.add("workflow")
    clock.now += 61

    assert store.get(session_id) is None
    with pytest.raises(SessionNotFoundError):
        with store.checkout(session_id):
            pass


def test_checkout_refuses_a_second_caller():
    store = SessionStore()
    session_id = store.add("workflow")

    with store.checkout(session_id) as workflow:
        assert workflow == "workflow"
        with pytest.raises(WorkflowStateError, match="busy"):
            with store.checkout(session_id):
                pass

    with store.checkout(session_id) as workflow:
        assert workflow == "workflow"


def test_checkout_releases_after_an_error():
    store = SessionStore()
    session_id = store.add("workflow")

    with pytest.raises(RuntimeError):
        with store.checkout(session_id):
            raise RuntimeError("boom")

    with store.checkout(session_id):
        pass


def test_busy_sessions_survive_a_sweep():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    session_id = store.add("workflow")

    with store.checkout(session_id):
        clock.now += 120
        assert store.sweep() == 0

    assert store.get(session_id) == "workflow"


def test_registry_applies_ttl_to_both_stores():
    registry = WorkflowRegistry(ttl_seconds=5)

    assert registry.swaps.ttl_seconds == 5
    assert registry.collections.ttl_seconds == 5
