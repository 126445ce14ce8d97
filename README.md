# lattice

`lattice` is the retained-mode core of a small UI runtime. A script builds a
render tree through five calls: create the root, create nodes, insert them,
delete them, and set properties on them. `lattice` stores that tree and turns
layout properties into a style model. It hit-tests pointer positions against
the tree and tracks which nodes each pointer hovers. Each frame is recorded as
a display list of drawing operations.

## Modules

- `lattice.tree.RenderTree` holds elements keyed by integer id. Children are
  ordered. `insert_node` places a node before an anchor, or at the end when the
  anchor is missing. `delete_node` removes a node and all its descendants.
  `invalidate_cache` clears layout caches upward from a node and stops at the
  first cache that is already empty. Duplicate ids raise `ValueError` and
  unknown ids raise `KeyError`.
- `lattice.element` provides `Element`, which combines a kind with children, a
  parent, optional `LayoutData` and a `HitConfig`. The same module defines
  `PointerEvents` (`AUTO`, `NONE`, `ALL`), `Layout` and `BuildContext`.
- Element kinds:
  - `lattice.window.Window` has a title and a fullscreen flag. Setting either
    sends a `SetTitle` or `SetFullscreen` command.
  - `lattice.view.View` translates, scales and rotates around its centre.
    Rotation is in radians.
  - `lattice.rectangle.Rectangle` takes per-corner radii.
  - `lattice.path.Path` takes SVG path data, including smooth curves and
    elliptical arcs, plus an x/y offset and a fill rule.
  - `lattice.text.Text` has a font size, a weight and a line limit.
  - `lattice.span.Span` carries the text runs of a `Text`.
- `lattice.paint.PaintState` holds the colour, given as a packed `0xRRGGBBAA`
  number, the draw style, the stroke width, cap, join and miter, and the blend
  mode.
- `lattice.style` and `lattice.units` cover the layout properties:
  - size, min size and max size
  - padding, margin and gap
  - `flex`, grow, shrink and basis
  - alignment and justification
  - position and inset
  - overflow
  - grid templates, auto tracks and lines

  Values are numbers or strings such as `"50%"`, `"auto"` or `"1fr 200px"`.
- `lattice.hit.hit_test(tree, point)` returns the `HitEntry` path from the
  root to the deepest node hit, visiting the topmost child first. It takes
  account of view transforms, rounded corners, stroke widths, path fill rules
  and the pointer-events modes.
- `lattice.composite.composite(builder, tree, platform, compute_layout)` draws
  the tree into a `lattice.displaylist.DisplayListBuilder`. Before drawing it
  gathers the text of each `Text` from its spans. Calling `build()` on the
  builder returns the recorded operations, each with the transform that was
  current when it was recorded.
- `lattice.frame` provides the pointer events `PointerMove`, `PointerDown`,
  `PointerUp` and `Wheel`. It also provides `InputState`, which holds pointer
  positions and modifiers and is kept across reloads, and `EngineState`, which
  holds the hover paths and the input queue of one tree.
- `lattice.pointer` has three functions:
  - `dispatch_input` turns queued input into `pointerMove`, `pointerDown`,
    `pointerUp` and `wheel` events. It emits `pointerDown` only when something
    was hit.
  - `update_hover` emits `pointerLeave` and `pointerEnter` when a pointer's
    hover path changes.
  - `draw_frame` does all of this for one frame and passes the display list to
    `submit`.
- `lattice.runtime.EventRouter.handle` applies host events (`Resize`,
  `WindowFocus`, `WindowBlur`, `KeyDown`, `KeyUp`, `FrameRendered`, pointer
  events and `Quit`) to the platform and input state, then forwards them to
  the attached engine. A touch pointer is forgotten when it is released.
  `Quit` raises `SystemExit(0)`.
- `lattice.devclient` talks to a development server:
  - `discover_server()` sends UDP broadcasts on port 15194 until a server
    replies.
  - `listen(address, on_command)` follows a WebSocket and passes on the
    `Reload` and `Stop` commands it receives. It reconnects when the
    connection drops.
  - `run(on_command)` does both steps.

  The greeting reports the version found in the `SOLIDRT_VERSION` environment
  variable, or `0.0.0-dev` when it is not set.

## Building a tree

```python
from lattice.tree_api import TreeApi

commands = []
api = TreeApi(send_command=commands.append)
ffi = api.as_ffi()  # {"createRoot": ..., "createNode": ..., ...}

ffi["createRoot"](1)
ffi["createNode"](2, "rect")
ffi["insertNode"](1, 2, None)
ffi["setProperty"](2, "color", 0xFF0000FF)
ffi["setProperty"](2, "width", "50%")
ffi["setProperty"](2, "radius", [8, 8, 0, 0])
ffi["setProperty"](1, "title", "Demo")   # commands now holds SetTitle("Demo")
```

`setProperty` looks for a property first on the element's kind, then on its
paint, then on its layout style. An unknown node kind, an unknown property or
a value of the wrong type raises an exception.

## Parsing layout values

```python
from lattice.units import parse_dimension, parse_grid_template

parse_dimension("25%")    # Length(Unit.PERCENT, 0.25)
parse_dimension(120)      # Length(Unit.LENGTH, 120.0)
parse_dimension("auto")   # Length(Unit.AUTO, 0.0)
parse_grid_template("1fr 200px auto")
```

## Hit testing

```python
from lattice.geometry import WH, XY
from lattice.hit import hit_test

api.tree.node(1).layout.computed.size = WH(800.0, 600.0)
for entry in hit_test(api.tree, XY(40.0, 12.0)):
    print(entry.node_id, entry.point, entry.local)
```

## Live reload

```python
import asyncio
from lattice.devclient import run
from lattice.runtime import next_source

asyncio.run(run(lambda cmd: print(next_source(cmd, "default source"))))
```

## What the package does not do

- **No layout solver.** `composite` reads the layout boxes stored on each
  element. To get fresh boxes, pass a `compute_layout(tree, root_id, width,
  height)` callable that computes them.
- **No font shaping or text measurement.** A `Text` measures to its known
  dimensions only.
- **No window, rasteriser or script engine.** The display list is a record of
  operations. Events go to whatever `emit` callable you supply.
- **No command-line program.**

## Requirements

Python 3.10 or newer. The only runtime dependency is `websockets`.