"""Lay out the render tree and record it into a display list."""

from __future__ import annotations

from typing import Callable, Optional

from lattice.displaylist import DisplayListBuilder
from lattice.element import BuildContext
from lattice.geometry import WH, XY
from lattice.platform import PlatformContext
from lattice.span import Span
from lattice.text import Text
from lattice.tree import RenderTree
from lattice.view import View

LayoutFn = Callable[[RenderTree, int, float, float], None]


def _gather_text(tree: RenderTree, node_id: int) -> None:
    element = tree.node(node_id)
    if isinstance(element.kind, Text):
        element.kind.computed_text = "".join(
            tree.node(cid).kind.text
            for cid in element.children
            if isinstance(tree.node(cid).kind, Span)
        )
        return
    for child_id in element.children:
        _gather_text(tree, child_id)


def composite(
    builder: DisplayListBuilder,
    tree: RenderTree,
    platform: PlatformContext,
    compute_layout: Optional[LayoutFn] = None,
) -> None:
    """Lay out the tree in the window and draw every element into builder.

    compute_layout(tree, root_id, width, height) fills in each element's
    computed layout box; without it the boxes already stored are used.
    """
    root_id = tree.root
    if root_id is None:
        return
    width, height = platform.window_size

    if platform.take_window_size_dirty():
        tree.invalidate_cache(root_id)
    tree.invalidate_cache(root_id)

    _gather_text(tree, root_id)
    if compute_layout is not None:
        compute_layout(tree, root_id, width, height)

    ctx = BuildContext(platform, size=WH(width, height))
    _build_recursive(tree, root_id, ctx, builder)


def _build_recursive(
    tree: RenderTree, node_id: int, ctx: BuildContext, builder: DisplayListBuilder
) -> None:
    element = tree.node(node_id)
    is_view = isinstance(element.kind, View)
    if is_view:
        builder.save()

    element.build(ctx, builder)

    # Text children are spans, which are not drawn on their own.
    if isinstance(element.kind, Text):
        return

    for child_id in element.children:
        child = tree.node(child_id)
        pos = child.layout.computed.location if child.layout is not None else XY()

        ctx.origin.x += pos.x
        ctx.origin.y += pos.y
        builder.translate(pos.x, pos.y)

        if child.layout is not None:
            layout = child.layout.computed
            ctx.size = WH(
                layout.size.w - layout.padding_left - layout.padding_right,
                layout.size.h - layout.padding_top - layout.padding_bottom,
            )
            ctx.origin.x += layout.padding_left
            ctx.origin.y += layout.padding_top
            _build_recursive(tree, child_id, ctx, builder)
            ctx.origin.x -= layout.padding_left
            ctx.origin.y -= layout.padding_top
        else:
            if element.layout is not None:
                ctx.size = WH(element.layout.computed.size.w, element.layout.computed.size.h)
            _build_recursive(tree, child_id, ctx, builder)

        ctx.origin.x -= pos.x
        ctx.origin.y -= pos.y
        builder.translate(-pos.x, -pos.y)

    if is_view:
        builder.restore()