import pytest

from lattice.devclient import Reload, Stop
from lattice.frame import (
    EngineState,
    Modifiers,
    PointerDown,
    PointerMove,
    PointerType,
    PointerUp,
    Wheel,
)
from lattice.geometry import WH, Rect
from lattice.runtime import (
    EventRouter,
    FrameRendered,
    KeyDown,
    KeyUp,
    Quit,
    Resize,
    WindowBlur,
    WindowFocus,
    key_payload,
    next_source,
    resize_payload,
)


def attached_router(**kwargs):
    router = EventRouter(**kwargs)
    events = []
    state = EngineState()
    router.attach(lambda name, payload: events.append((name, payload)), state)
    return router, events, state


def test_resize_payload_edges():
    safe = Rect(10, 20, 100, 50)
    payload = resize_payload(WH(800, 600), safe, 2.0)
    assert payload["width"] == 800
    assert payload["height"] == 600
    assert payload["displayScale"] == 2.0
    assert payload["safeArea"]["top"] == safe.y
    assert payload["safeArea"]["left"] == safe.x
    assert payload["safeArea"]["right"] == safe.right()
    assert payload["safeArea"]["bottom"] == safe.bottom()


def test_key_payload():
    payload = key_payload("a", "KeyA", Modifiers(ctrl=True))
    assert payload == {
        "key": "a",
        "code": "KeyA",
        "shiftKey": False,
        "ctrlKey": True,
        "altKey": False,
        "metaKey": False,
    }


def test_next_source():
    assert next_source(Reload("new()"), "default()") == "new()"
    assert next_source(Stop(), "default()") == "default()"
    with pytest.raises(TypeError):
        next_source("reload", "default()")


def test_quit_exits():
    router = EventRouter()
    with pytest.raises(SystemExit):
        router.handle(Quit())


def test_focus_and_blur():
    router, events, _ = attached_router()
    router.handle(WindowFocus())
    router.handle(WindowBlur())
    assert events == [("windowFocus", {}), ("windowBlur", {})]


def test_resize_updates_platform_and_emits():
    router, events, _ = attached_router()
    safe = Rect(0, 5, 300, 200)
    router.handle(Resize(WH(300, 210), safe, 2.0))
    assert router.platform.window_size == (300.0, 210.0)
    assert router.platform.display_scale == 2.0
    assert router.platform.safe_area == safe
    assert router.platform.take_window_size_dirty() is True
    assert events == [("resize", resize_payload(WH(300, 210), safe, 2.0))]


def test_resize_without_engine_still_updates_platform():
    router = EventRouter()
    router.handle(Resize(WH(10, 20), Rect(), 1.0))
    assert router.platform.window_size == (10.0, 20.0)
    assert router.emit is None


def test_pointer_events_update_state_and_queue():
    router, _, state = attached_router()
    mods = Modifiers(alt=True)
    move = PointerMove(1, PointerType.MOUSE, 3.0, 4.0, mods)
    down = PointerDown(1, PointerType.MOUSE, 0, 5.0, 6.0, mods)
    router.handle(move)
    router.handle(down)
    assert router.input_state.pointers() == [((PointerType.MOUSE, 1), (5.0, 6.0))]
    assert router.input_state.modifiers == mods
    assert state.drain_input() == [move, down]


def test_touch_up_removes_pointer_mouse_up_keeps_it():
    router, _, state = attached_router()
    router.handle(PointerUp(2, PointerType.TOUCH, 0, 1.0, 1.0))
    router.handle(PointerUp(0, PointerType.MOUSE, 0, 7.0, 8.0))
    assert router.input_state.pointers() == [((PointerType.MOUSE, 0), (7.0, 8.0))]
    assert len(state.drain_input()) == 2


def test_wheel_queues_without_moving_pointer():
    router, _, state = attached_router()
    wheel = Wheel(0, PointerType.MOUSE, 9.0, 9.0, 0.0, 1.0, Modifiers(shift=True))
    router.handle(wheel)
    assert router.input_state.pointers() == []
    assert router.input_state.modifiers == Modifiers(shift=True)
    assert state.drain_input() == [wheel]


def test_keys_emit_payloads():
    router, events, _ = attached_router()
    mods = Modifiers(meta=True)
    router.handle(KeyDown("b", "KeyB", mods))
    router.handle(KeyUp("b", "KeyB", mods))
    assert events == [
        ("keydown", key_payload("b", "KeyB", mods)),
        ("keyup", key_payload("b", "KeyB", mods)),
    ]
    assert router.input_state.modifiers == mods


def test_frame_rendered_sets_fps_and_reports_time():
    ticks = iter([100.0, 102.5])
    router, events, _ = attached_router(clock=lambda: next(ticks))
    router.handle(FrameRendered(frame=12, fps=60))
    assert router.platform.fps == 60
    assert events == [("render", {"frame": 12, "time": 2.5})]


def test_attach_replaces_engine_state():
    router, _, first = attached_router()
    second = EngineState()
    router.attach(lambda name, payload: None, second)
    move = PointerMove(0, PointerType.PEN, 1.0, 2.0)
    router.handle(move)
    assert first.drain_input() == []
    assert second.drain_input() == [move]


def test_unknown_event_rejected():
    router = EventRouter()
    with pytest.raises(TypeError):
        router.handle("resize")