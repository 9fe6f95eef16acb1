def test_ids_increase_and_order_is_insertion(toasts):
    a = toasts.add("one")
    b = toasts.success("two")
    c = toasts.error("three")
    assert a.id < b.id < c.id
    assert [t.content for t in toasts.active()] == ["one", "two", "three"]
    assert [t.type for t in toasts.active()] == ["info", "success", "error"]


def test_default_duration_expires(toasts, clock):
    toasts.add("bye")
    clock.advance(4.9)
    assert len(toasts.active()) == 1
    clock.advance(0.2)
    assert toasts.active() == []


def test_per_message_duration_overrides_default(toasts, clock):
    toasts.success("long", duration_ms=10000)
    toasts.add("short")
    clock.advance(6)
    assert [t.content for t in toasts.active()] == ["long"]


def test_dismiss(toasts):
    t = toasts.warning("careful")
    assert toasts.dismiss(t.id) is True
    assert toasts.dismiss(t.id) is False
    assert toasts.active() == []


def test_unknown_type_becomes_info(toasts):
    assert toasts.add("x", type="shout").type == "info"


def test_to_dict(toasts):
    t = toasts.error("bad", duration_ms=1234)
    assert t.to_dict() == {"id": t.id, "content": "bad", "type": "error", "duration": 1234}
