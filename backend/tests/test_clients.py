from hostel.clients import ClientRegistry
from hostel.crud.backend import build_sql_backend

from conftest import FakeClock


def make_registry(session_factory, clock, idle_timeout_s=60):
    return ClientRegistry(
        lambda: build_sql_backend(session_factory),
        secret_key="test-secret",
        idle_timeout_s=idle_timeout_s,
        clock=clock,
    )


def test_lookup_never_registers(session_factory):
    registry = make_registry(session_factory, FakeClock())
    assert registry.lookup(None) is None
    assert registry.lookup("not-a-token") is None
    assert registry.lookup(registry.sign("unknown-id")) is None
    assert len(registry) == 0


def test_cookie_round_trip(session_factory):
    registry = make_registry(session_factory, FakeClock())
    state = registry.get_or_create(None)
    cookie = registry.sign(state.client_id)
    assert registry.lookup(cookie) is state
    assert registry.get_or_create(cookie) is state
    assert len(registry) == 1


def test_drop_forgets_the_state(session_factory):
    registry = make_registry(session_factory, FakeClock())
    state = registry.get_or_create(None)
    registry.drop(state.client_id)
    registry.drop(state.client_id)
    assert registry.lookup(registry.sign(state.client_id)) is None
    assert len(registry) == 0


def test_idle_states_are_evicted(session_factory):
    clock = FakeClock()
    registry = make_registry(session_factory, clock, idle_timeout_s=60)
    idle = registry.get_or_create(None)
    busy = registry.get_or_create(None)

    clock.advance(45)
    assert registry.lookup(registry.sign(busy.client_id)) is busy
    clock.advance(30)

    assert registry.sweep() == 1
    assert registry.lookup(registry.sign(idle.client_id)) is None
    assert registry.lookup(registry.sign(busy.client_id)) is busy
