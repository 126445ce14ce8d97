"""Hit testing: which elements lie under a point, from the root down."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lattice.element import PointerEvents
from lattice.geometry import WH, XY
from lattice.path import Path
from lattice.rectangle import Rectangle
from lattice.span import Span
from lattice.tree import RenderTree
from lattice.view import View


@dataclass(frozen=True)
class HitEntry:
    """A hit element with the point in its parent's space and in its own."""

    node_id: int
    point: XY
    local: XY


def transform_to_local(kind: Any, point: XY, size: WH) -> XY:
    """Map a parent-space point into the element's own space."""
    if isinstance(kind, View):
        return kind.transform_to_local(point, size)
    return point


def is_in_bounds(kind: Any, point: XY, size: WH) -> bool:
    """Whether a local point hits the element."""
    if isinstance(kind, (Rectangle, Path)):
        return kind.is_in_bounds(point, size)
    if isinstance(kind, Span):
        return False
    return 0.0 <= point.x < size.w and 0.0 <= point.y < size.h


def hit_test(tree: RenderTree, point: XY) -> list[HitEntry]:
    """The path of hit elements from the root to the deepest hit, topmost child first."""
    if tree.root is None:
        return []
    root = tree.node(tree.root)
    size = (
        WH(root.layout.computed.size.w, root.layout.computed.size.h)
        if root.layout is not None
        else WH()
    )
    path: list[HitEntry] = []
    _hit_recursive(tree, tree.root, point, size, path)
    return path


def _hit_recursive(
    tree: RenderTree, node_id: int, point: XY, size: WH, path: list[HitEntry]
) -> bool:
    element = tree.node(node_id)
    pointer_events = (
        element.interaction.pointer_events
        if element.interaction is not None
        else PointerEvents.AUTO
    )
    local = transform_to_local(element.kind, point, size)

    if pointer_events is PointerEvents.AUTO and not is_in_bounds(element.kind, local, size):
        return False

    my_index = len(path)
    path.append(HitEntry(node_id, point, local))

    if pointer_events is PointerEvents.ALL and is_in_bounds(element.kind, local, size):
        return True

    for child_id in reversed(element.children):
        child = tree.node(child_id)
        if child.layout is not None:
            computed = child.layout.computed
            child_size = WH(computed.size.w, computed.size.h)
            child_pos = XY(computed.location.x, computed.location.y)
        else:
            child_size = size
            child_pos = XY()
        child_point = XY(local.x - child_pos.x, local.y - child_pos.y)
        if _hit_recursive(tree, child_id, child_point, child_size, path):
            if pointer_events is PointerEvents.NONE:
                del path[my_index]
            return True

    if pointer_events is PointerEvents.NONE:
        path.pop()
        return False
    return True