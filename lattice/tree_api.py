"""The node-manipulation interface that scripts use to build the render tree."""

from __future__ import annotations

from typing import Any, Callable, Optional

from lattice.element import Element
from lattice.path import Path
from lattice.rectangle import Rectangle
from lattice.span import Span
from lattice.style import set_style_property
from lattice.text import Text
from lattice.tree import RenderTree
from lattice.view import View
from lattice.window import Window

_KINDS: dict[str, Callable[[], Element]] = {
    "view": lambda: Element.with_layout(View()),
    "rect": lambda: Element.with_layout(Rectangle()),
    "d-rect": lambda: Element.no_layout(Rectangle()),
    "path": lambda: Element.with_layout(Path()),
    "d-path": lambda: Element.no_layout(Path()),
    "text": lambda: Element.with_layout(Text()),
    "span": lambda: Element.no_layout(Span()),
}


def make_element(kind: str) -> Element:
    """A fresh element for a node kind name; the window is made by create_root."""
    if kind == "window":
        raise ValueError("use createRoot to create the root Window node")
    try:
        factory = _KINDS[kind]
    except KeyError:
        raise ValueError(f"unknown node kind: {kind}") from None
    return factory()


def _ignore(command: Any) -> None:
    return None


class TreeApi:
    """Creates, links and configures render-tree nodes by id."""

    def __init__(
        self,
        tree: Optional[RenderTree] = None,
        send_command: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self.tree = tree if tree is not None else RenderTree()
        self.send_command = send_command if send_command is not None else _ignore

    def create_root(self, node_id: int) -> None:
        self.tree.create_node(node_id, Element.with_layout(Window()))
        self.tree.root = node_id

    def create_node(self, node_id: int, kind: str) -> None:
        self.tree.create_node(node_id, make_element(kind))

    def delete_node(self, parent_id: int, node_id: int) -> None:
        self.tree.delete_node(parent_id, node_id)

    def insert_node(self, parent_id: int, node_id: int, anchor_id: Optional[int] = None) -> None:
        self.tree.insert_node(parent_id, node_id, anchor_id)

    def set_property(self, node_id: int, prop: str, value: Any) -> None:
        """Set a property on the element's kind, paint or layout style, in that order."""
        element = self.tree.node(node_id)
        kind = element.kind
        if isinstance(kind, Window):
            result = kind.set_property(prop, value, self.send_command)
        else:
            result = kind.set_property(prop, value)
        if result is None:
            paint = element.paint()
            if paint is not None:
                result = paint.set_property(prop, value)
        if result is None:
            style = element.style()
            if style is not None:
                result = set_style_property(style, prop, value)
        if result is None:
            raise ValueError(f"unknown property '{prop}'")
        if result:
            self.tree.invalidate_cache(node_id)

    def as_ffi(self) -> dict[str, Callable[..., Any]]:
        """The functions under the names scripts call them by."""
        return {
            "createRoot": self.create_root,
            "createNode": self.create_node,
            "deleteNode": self.delete_node,
            "insertNode": self.insert_node,
            "setProperty": self.set_property,
        }