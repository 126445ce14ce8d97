"""SVG path elements: parsing, bounds, measuring and hit testing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator, Optional, Sequence

from lattice.geometry import WH, XY
from lattice.paint import DrawStyle, PaintState, _number, _string

Point = tuple[float, float]

_EPSILON = 1.1920929e-07
_FILL_TOLERANCE = 0.1
_STROKE_TOLERANCE = 0.5

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = " \t\n\r\f"
_NUMBER_START = "0123456789+-."
_ARGS = {
    "M": "nn",
    "L": "nn",
    "T": "nn",
    "H": "n",
    "V": "n",
    "C": "nnnnnn",
    "S": "nnnn",
    "Q": "nnnn",
    "A": "nnnffnn",
    "Z": "",
}


class FillType(Enum):
    NON_ZERO = "nonZero"
    ODD = "evenOdd"


class _ParseError(Exception):
    pass


class _Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos]

    def skip_ws(self) -> None:
        while not self.at_end() and self.peek() in _WHITESPACE:
            self.pos += 1

    def skip_separator(self) -> None:
        self.skip_ws()
        if not self.at_end() and self.peek() == ",":
            self.pos += 1
            self.skip_ws()

    def number(self) -> float:
        self.skip_ws()
        match = _NUMBER_RE.match(self.text, self.pos)
        if match is None:
            raise _ParseError
        self.pos = match.end()
        self.skip_separator()
        return float(match.group())

    def flag(self) -> bool:
        self.skip_ws()
        if self.at_end() or self.peek() not in "01":
            raise _ParseError
        value = self.peek() == "1"
        self.pos += 1
        self.skip_separator()
        return value


def _parse_path_data(text: str) -> Iterator[tuple[str, tuple[Any, ...]]]:
    """Yield (command letter, arguments) until the data ends or is malformed."""
    scanner = _Scanner(text)
    previous: Optional[str] = None
    while True:
        scanner.skip_ws()
        if scanner.at_end():
            return
        ch = scanner.peek()
        if ch.upper() in _ARGS and ch.isalpha():
            command = ch
            scanner.pos += 1
        elif previous is not None and previous.upper() != "Z" and ch in _NUMBER_START:
            command = {"M": "L", "m": "l"}.get(previous, previous)
        else:
            return
        if previous is None and command not in "Mm":
            return
        try:
            args = tuple(
                scanner.flag() if kind == "f" else scanner.number()
                for kind in _ARGS[command.upper()]
            )
        except _ParseError:
            return
        if not args:
            scanner.skip_ws()
        yield command, args
        previous = command


def _arc_to_cubics(
    start: Point,
    end: Point,
    rx: float,
    ry: float,
    x_rotation_deg: float,
    large_arc: bool,
    sweep: bool,
) -> list[tuple[Point, Point, Point]]:
    """Approximate an SVG elliptical arc with cubic curves (cp1, cp2, end)."""
    rx, ry = abs(rx), abs(ry)
    if rx <= _EPSILON or ry <= _EPSILON or start == end:
        return [(start, end, end)]

    phi = math.fmod(math.radians(x_rotation_deg), 2 * math.pi)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)
    hd_x = (start[0] - end[0]) / 2
    hd_y = (start[1] - end[1]) / 2
    hs_x = (start[0] + end[0]) / 2
    hs_y = (start[1] + end[1]) / 2
    px = cos_phi * hd_x + sin_phi * hd_y
    py = -sin_phi * hd_x + cos_phi * hd_y

    rf = px * px / (rx * rx) + py * py / (ry * ry)
    if rf > 1:
        s = math.sqrt(rf)
        rx *= s
        ry *= s

    rxry = rx * ry
    rxpy = rx * py
    rypx = ry * px
    sum_sq = rxpy * rxpy + rypx * rypx
    sign = -1.0 if large_arc == sweep else 1.0
    coe = sign * math.sqrt(abs((rxry * rxry - sum_sq) / sum_sq))
    tcx = coe * rxpy / ry
    tcy = -coe * rypx / rx
    cx = cos_phi * tcx - sin_phi * tcy + hs_x
    cy = sin_phi * tcx + cos_phi * tcy + hs_y

    start_angle = math.atan2((py - tcy) / ry, (px - tcx) / rx)
    end_angle = math.atan2((-py - tcy) / ry, (-px - tcx) / rx)
    sweep_angle = math.fmod(end_angle - start_angle, 2 * math.pi)
    if sweep and sweep_angle < 0:
        sweep_angle += 2 * math.pi
    elif not sweep and sweep_angle > 0:
        sweep_angle -= 2 * math.pi

    total = min(abs(sweep_angle), 2 * math.pi)
    steps = math.ceil(total / (math.pi / 2))
    if steps == 0:
        return []
    step = total / steps * math.copysign(1.0, sweep_angle)

    def sample(a: float) -> Point:
        ex, ey = rx * math.cos(a), ry * math.sin(a)
        return (cx + ex * cos_phi - ey * sin_phi, cy + ex * sin_phi + ey * cos_phi)

    def tangent(a: float) -> Point:
        vx, vy = -rx * math.sin(a), ry * math.cos(a)
        return (vx * cos_phi - vy * sin_phi, vx * sin_phi + vy * cos_phi)

    curves = []
    for i in range(steps):
        a1 = start_angle + step * i
        a2 = start_angle + step * (i + 1)
        d = a2 - a1
        alpha = math.sin(d) * (math.sqrt(4 + 3 * math.tan(d / 2) ** 2) - 1) / 3
        p1, p2 = sample(a1), sample(a2)
        t1, t2 = tangent(a1), tangent(a2)
        cp1 = (p1[0] + t1[0] * alpha, p1[1] + t1[1] * alpha)
        cp2 = (p2[0] - t2[0] * alpha, p2[1] - t2[1] * alpha)
        curves.append((cp1, cp2, p2))
    return curves


def _lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def _second_difference(a: Point, b: Point, c: Point) -> float:
    return math.hypot(a[0] - 2 * b[0] + c[0], a[1] - 2 * b[1] + c[1])


@dataclass
class _Subpath:
    start: Point
    segments: list[tuple[Any, ...]] = field(default_factory=list)
    closed: bool = False

    def flattened(self, tolerance: float) -> list[Point]:
        """The subpath as a polyline whose chords stay within tolerance of the curves."""
        points = [self.start]
        current = self.start
        for seg in self.segments:
            kind, *pts = seg
            if kind == "line":
                points.append(pts[0])
            elif kind == "quad":
                cp, to = pts
                dd = _second_difference(current, cp, to)
                n = max(1, math.ceil(math.sqrt(dd / (4 * tolerance))))
                for i in range(1, n):
                    t = i / n
                    points.append(_lerp(_lerp(current, cp, t), _lerp(cp, to, t), t))
                points.append(to)
            else:
                c1, c2, to = pts
                dd = max(_second_difference(current, c1, c2), _second_difference(c1, c2, to))
                n = max(1, math.ceil(math.sqrt(0.75 * dd / tolerance)))
                for i in range(1, n):
                    t = i / n
                    ab, bc, cd = _lerp(current, c1, t), _lerp(c1, c2, t), _lerp(c2, to, t)
                    points.append(_lerp(_lerp(ab, bc, t), _lerp(bc, cd, t), t))
                points.append(to)
            current = points[-1]
        return points


@dataclass(frozen=True)
class _Built:
    commands: tuple[tuple[Any, ...], ...]
    subpaths: tuple[_Subpath, ...]
    bounds: Optional[tuple[float, float, float, float]]
    fill_type: FillType


def _reflect(cursor: Point, previous: Optional[Point]) -> Point:
    if previous is None:
        return cursor
    return (2 * cursor[0] - previous[0], 2 * cursor[1] - previous[1])


def _build_path(d: str, ox: float, oy: float, fill_type: FillType) -> _Built:
    commands: list[tuple[Any, ...]] = []
    subpaths: list[_Subpath] = []
    included: list[Point] = []
    current: Optional[_Subpath] = None
    cursor: Point = (ox, oy)
    subpath_start = cursor
    last_cubic: Optional[Point] = None
    last_quad: Optional[Point] = None

    def resolve(absolute: bool, x: float, y: float) -> Point:
        if absolute:
            return (ox + x, oy + y)
        return (cursor[0] + x, cursor[1] + y)

    for command, args in _parse_path_data(d):
        kind = command.upper()
        absolute = command.isupper()

        if kind == "M":
            if current is not None:
                subpaths.append(current)
            pt = resolve(absolute, *args)
            included.append(pt)
            commands.append(("move", pt))
            current = _Subpath(pt)
            cursor = subpath_start = pt
            last_cubic = last_quad = None
            continue

        if kind == "Z":
            commands.append(("close",))
            if current is not None:
                current.closed = True
                subpaths.append(current)
                current = None
            cursor = subpath_start
            last_cubic = last_quad = None
            continue

        if current is None:
            current = _Subpath(cursor)

        if kind in "LHV":
            if kind == "L":
                pt = resolve(absolute, *args)
            elif kind == "H":
                pt = (resolve(absolute, args[0], 0.0)[0], cursor[1])
            else:
                pt = (cursor[0], resolve(absolute, 0.0, args[0])[1])
            included.append(pt)
            commands.append(("line", pt))
            current.segments.append(("line", pt))
            cursor = pt
            last_cubic = last_quad = None
        elif kind in "CS":
            if kind == "C":
                cp1 = resolve(absolute, args[0], args[1])
                rest = args[2:]
            else:
                cp1 = _reflect(cursor, last_cubic)
                rest = args
            cp2 = resolve(absolute, rest[0], rest[1])
            end = resolve(absolute, rest[2], rest[3])
            included.extend((cp1, cp2, end))
            commands.append(("cubic", cp1, cp2, end))
            current.segments.append(("cubic", cp1, cp2, end))
            cursor = end
            last_cubic, last_quad = cp2, None
        elif kind in "QT":
            if kind == "Q":
                cp = resolve(absolute, args[0], args[1])
                end = resolve(absolute, args[2], args[3])
            else:
                cp = _reflect(cursor, last_quad)
                end = resolve(absolute, *args)
            included.extend((cp, end))
            commands.append(("quad", cp, end))
            current.segments.append(("quad", cp, end))
            cursor = end
            last_quad, last_cubic = cp, None
        else:
            rx, ry, rotation, large_arc, sweep, x, y = args
            end = resolve(absolute, x, y)
            for cp1, cp2, to in _arc_to_cubics(cursor, end, rx, ry, rotation, large_arc, sweep):
                included.extend((cp1, cp2, to))
                commands.append(("cubic", cp1, cp2, to))
                current.segments.append(("cubic", cp1, cp2, to))
            cursor = end
            last_cubic = last_quad = None

    if current is not None:
        subpaths.append(current)

    bounds = None
    if included:
        xs = [p[0] for p in included]
        ys = [p[1] for p in included]
        bounds = (min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
    return _Built(tuple(commands), tuple(subpaths), bounds, fill_type)


def dist_sq_to_segment(p: Point, a: Point, b: Point) -> float:
    """Squared distance from point p to the segment a-b."""
    dx, dy = b[0] - a[0], b[1] - a[1]
    len_sq = dx * dx + dy * dy
    if len_sq == 0.0:
        ex, ey = p[0] - a[0], p[1] - a[1]
        return ex * ex + ey * ey
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / len_sq
    t = min(1.0, max(0.0, t))
    ex = p[0] - (a[0] + t * dx)
    ey = p[1] - (a[1] + t * dy)
    return ex * ex + ey * ey


def point_near_path(
    point: Point, subpaths: Sequence[tuple[Sequence[Point], bool]], max_dist: float
) -> bool:
    """Whether point lies within max_dist of any polyline given as (points, closed)."""
    max_dist_sq = max_dist * max_dist
    for points, closed in subpaths:
        if any(
            dist_sq_to_segment(point, a, b) <= max_dist_sq
            for a, b in zip(points, points[1:])
        ):
            return True
        if closed and points and dist_sq_to_segment(point, points[-1], points[0]) <= max_dist_sq:
            return True
    return False


def _winding(point: Point, polyline: Sequence[Point]) -> int:
    px, py = point
    winding = 0
    for (ax, ay), (bx, by) in zip(polyline, [*polyline[1:], *polyline[:1]]):
        if ay <= py < by:
            if ax + (py - ay) * (bx - ax) / (by - ay) < px:
                winding += 1
        elif by <= py < ay:
            if ax + (py - ay) * (bx - ax) / (by - ay) < px:
                winding -= 1
    return winding


@dataclass
class Path:
    """A path element drawn from SVG path data, offset by x and y."""

    d: str = ""
    x: Optional[float] = None
    y: Optional[float] = None
    paint: PaintState = field(default_factory=PaintState)
    fill_rule: FillType = FillType.NON_ZERO
    _built: Optional[_Built] = field(default=None, init=False, repr=False, compare=False)

    def _ensure_built(self) -> Optional[_Built]:
        if self._built is None and self.d:
            ox = self.x if self.x is not None else 0.0
            oy = self.y if self.y is not None else 0.0
            self._built = _build_path(self.d, ox, oy, self.fill_rule)
        return self._built

    def invalidate(self) -> None:
        """Drop the cached geometry so it is rebuilt from the current fields."""
        self._built = None

    def bounds(self) -> Optional[tuple[float, float, float, float]]:
        """Bounding box (x, y, width, height) over points and control points."""
        built = self._ensure_built()
        return built.bounds if built else None

    def segments(self) -> tuple[tuple[Any, ...], ...]:
        """The drawing commands: move, line, quad, cubic and close."""
        built = self._ensure_built()
        return built.commands if built else ()

    def set_property(self, prop: str, value: Any) -> Optional[bool]:
        """Apply a path property; True if layout is affected, None if unknown."""
        if prop == "d":
            self.d = _string(value, "d")
            result = True
        elif prop == "x":
            self.x = _number(value, "x")
            result = True
        elif prop == "y":
            self.y = _number(value, "y")
            result = True
        elif prop == "fillRule":
            text = _string(value, "fillRule")
            try:
                self.fill_rule = FillType(text)
            except ValueError:
                raise ValueError(f"unknown fillRule '{text}'") from None
            result = False
        else:
            return None
        self.invalidate()
        return result

    def measure(self, known_width: Optional[float], known_height: Optional[float]) -> WH:
        if known_width is not None and known_height is not None:
            return WH(known_width, known_height)
        bounds = self.bounds()
        if bounds is None:
            return WH(0.0, 0.0)
        _, _, w, h = bounds
        return WH(
            known_width if known_width is not None else w,
            known_height if known_height is not None else h,
        )

    def is_in_bounds(self, point: XY, size: WH) -> bool:
        built = self._ensure_built()
        if built is None or built.bounds is None:
            return False
        x, y, w, h = built.bounds
        half = self.paint.stroke_width / 2.0
        if point.x < x - half or point.x > x + w + half or point.y < y - half or point.y > y + h + half:
            return False
        pt = (point.x, point.y)

        def filled() -> bool:
            total = sum(_winding(pt, sp.flattened(_FILL_TOLERANCE)) for sp in built.subpaths)
            if self.fill_rule is FillType.ODD:
                return total % 2 != 0
            return total != 0

        def stroked() -> bool:
            polylines = [(sp.flattened(_STROKE_TOLERANCE), sp.closed) for sp in built.subpaths]
            return point_near_path(pt, polylines, half)

        if self.paint.draw_style is DrawStyle.FILL:
            return filled()
        if self.paint.draw_style is DrawStyle.STROKE:
            return stroked()
        return filled() or stroked()

    def build(self, ctx: Any, builder: Any) -> None:
        built = self._ensure_built()
        if built is None:
            return
        builder.draw_path(built, replace(self.paint))