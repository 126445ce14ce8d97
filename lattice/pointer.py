"""Per-frame pointer dispatch: queued input, hover tracking and drawing."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from lattice.composite import LayoutFn, composite
from lattice.displaylist import DisplayListBuilder
from lattice.frame import (
    EngineState,
    InputState,
    Modifiers,
    PointerDown,
    PointerMove,
    PointerType,
    PointerUp,
    Wheel,
)
from lattice.geometry import XY
from lattice.hit import hit_test
from lattice.platform import PlatformContext
from lattice.tree import RenderTree

Emit = Callable[[str, dict[str, Any]], Any]


def pointer_payload(
    pointer_id: int,
    pointer_type: PointerType,
    x: float,
    y: float,
    modifiers: Modifiers,
    targets: Sequence[int],
) -> dict[str, Any]:
    """The event object scripts receive for a pointer event."""
    return {
        "targets": list(targets),
        "pointerId": pointer_id,
        "pointerType": pointer_type.as_str(),
        "clientX": x,
        "clientY": y,
        "shiftKey": modifiers.shift,
        "ctrlKey": modifiers.ctrl,
        "altKey": modifiers.alt,
        "metaKey": modifiers.meta,
    }


def _hit_ids(tree: RenderTree, x: float, y: float) -> list[int]:
    return [entry.node_id for entry in hit_test(tree, XY(x, y))]


def dispatch_input(tree: RenderTree, engine_state: EngineState, emit: Emit) -> None:
    """Hit-test every queued input event and emit it to the script."""
    for event in engine_state.drain_input():
        ids = _hit_ids(tree, event.x, event.y)
        payload = pointer_payload(
            event.pointer_id, event.pointer_type, event.x, event.y, event.modifiers, ids
        )
        if isinstance(event, PointerMove):
            emit("pointerMove", payload)
        elif isinstance(event, PointerDown):
            if not ids:
                continue
            payload["button"] = event.button
            emit("pointerDown", payload)
        elif isinstance(event, PointerUp):
            payload["button"] = event.button
            emit("pointerUp", payload)
            # A touch pointer ends at release: leave whatever it still hovers
            # and forget its hover path so it cannot leak into later touches.
            if event.pointer_type is PointerType.TOUCH:
                key = (event.pointer_type, event.pointer_id)
                old_ids = engine_state.hovered_path(key)
                if old_ids:
                    emit(
                        "pointerLeave",
                        pointer_payload(
                            event.pointer_id,
                            event.pointer_type,
                            event.x,
                            event.y,
                            event.modifiers,
                            list(reversed(old_ids)),
                        ),
                    )
                engine_state.remove_hovered_path(key)
        elif isinstance(event, Wheel):
            payload["deltaX"] = event.delta_x
            payload["deltaY"] = event.delta_y
            emit("wheel", payload)


def update_hover(
    tree: RenderTree, input_state: InputState, engine_state: EngineState, emit: Emit
) -> None:
    """Emit pointerLeave and pointerEnter for every pointer whose hover path changed."""
    modifiers = input_state.modifiers
    for (pointer_type, pointer_id), (px, py) in input_state.pointers():
        new_ids = _hit_ids(tree, px, py)
        key = (pointer_type, pointer_id)
        old_ids = engine_state.hovered_path(key)

        if new_ids != old_ids:
            diverge = 0
            for old, new in zip(old_ids, new_ids):
                if old != new:
                    break
                diverge += 1

            left = list(reversed(old_ids[diverge:]))
            if left:
                emit(
                    "pointerLeave",
                    pointer_payload(pointer_id, pointer_type, px, py, modifiers, left),
                )
            entered = new_ids[diverge:]
            if entered:
                emit(
                    "pointerEnter",
                    pointer_payload(pointer_id, pointer_type, px, py, modifiers, entered),
                )

        engine_state.set_hovered_path(key, new_ids)


def draw_frame(
    tree: RenderTree,
    platform: PlatformContext,
    input_state: InputState,
    engine_state: EngineState,
    emit: Emit,
    submit: Callable[[Any], Any],
    compute_layout: Optional[LayoutFn] = None,
) -> None:
    """Draw one frame, deliver its input and hover changes, and submit the display list."""
    builder = DisplayListBuilder()
    scale = platform.display_scale
    builder.scale(scale, scale)
    composite(builder, tree, platform, compute_layout)

    dispatch_input(tree, engine_state, emit)
    update_hover(tree, input_state, engine_state, emit)

    submit(builder.build())