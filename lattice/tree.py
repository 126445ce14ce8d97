"""The render tree: elements keyed by id, with parent and child links."""

from __future__ import annotations

from typing import Iterator, Optional

from lattice.element import Element


class RenderTree:
    """Owns every element of one engine's scene, keyed by node id."""

    def __init__(self) -> None:
        self._nodes: dict[int, Element] = {}
        self.root: Optional[int] = None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[int]:
        return iter(self._nodes)

    def create_node(self, node_id: int, element: Element) -> int:
        """Add a detached element; ids must be unique."""
        if node_id in self._nodes:
            raise ValueError(f"duplicate node id {node_id}")
        self._nodes[node_id] = element
        return node_id

    def node(self, node_id: int) -> Element:
        """The element with this id."""
        try:
            return self._nodes[node_id]
        except KeyError:
            raise KeyError(f"node {node_id} not found") from None

    def insert_node(self, parent_id: int, node_id: int, anchor_id: Optional[int] = None) -> None:
        """Attach node_id under parent_id, before anchor_id if given and present, else last."""
        child = self.node(node_id)
        child.parent = parent_id
        child_has_layout = child.has_layout()

        parent = self.node(parent_id)
        parent.children = [cid for cid in parent.children if cid != node_id]
        if parent.layout is not None:
            parent.layout.layout_children = [
                cid for cid in parent.layout.layout_children if cid != node_id
            ]

        def place(ids: list[int]) -> None:
            if anchor_id is not None and anchor_id in ids:
                ids.insert(ids.index(anchor_id), node_id)
            else:
                ids.append(node_id)

        place(parent.children)
        if child_has_layout and parent.layout is not None:
            place(parent.layout.layout_children)

        self.invalidate_cache(parent_id)

    def delete_node(self, parent_id: int, node_id: int) -> None:
        """Detach node_id from its parent and drop it with all its descendants."""
        parent = self.node(parent_id)
        parent.children = [cid for cid in parent.children if cid != node_id]
        if parent.layout is not None:
            parent.layout.layout_children = [
                cid for cid in parent.layout.layout_children if cid != node_id
            ]
        self._delete_recursive(node_id)
        self.invalidate_cache(parent_id)

    def _delete_recursive(self, node_id: int) -> None:
        element = self._nodes.get(node_id)
        if element is None:
            return
        for child_id in list(element.children):
            self._delete_recursive(child_id)
        self._nodes.pop(node_id, None)

    def invalidate_cache(self, node_id: int) -> None:
        """Clear layout caches from node_id upwards, stopping at the first empty cache."""
        current: Optional[int] = node_id
        while current is not None:
            element = self.node(current)
            if element.layout is None:
                current = element.parent
                continue
            if not element.layout.cache:
                break
            element.layout.cache.clear()
            current = element.parent