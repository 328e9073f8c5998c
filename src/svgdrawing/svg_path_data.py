# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Path data and point list mini-languages.

https://www.w3.org/TR/SVG11/paths.html#PathData
https://www.w3.org/TR/SVG11/shapes.html#PointsBNF
"""

import re
from typing import Generator, List, Optional, Tuple
from svgdrawing import svg_meta
from svgdrawing.geometric_types import Point, Size
from svgdrawing.svg_meta import SVGCommand, SVGCommandGen, cmd_coords
from svgdrawing.svg_types import (
    ArcSegment,
    BezierSegment,
    LineSegment,
    PathFigure,
    PathSegment,
    QuadraticBezierSegment,
)

_CMD_RE = re.compile(f'([{"".join(svg_meta.cmds())}])')
_SEPARATOR_RE = re.compile("[, \t\r\n]+")
_FLOAT_RE = re.compile(
    r"[-+]?"  # optional sign
    r"(?:"
    r"(?:0|[1-9][0-9]*)(?:\.[0-9]+)?"  # int or float
    r"|"
    r"(?:\.[0-9]+)"  # float with leading dot (e.g. '.42')
    r")"
    r"(?:[eE][-+]?[0-9]+)?"  # optional scientific notiation
)
_BOOL_RE = re.compile("^[01]")
_ARC_ARGUMENT_TYPES = (
    (float, _FLOAT_RE),  # rx
    (float, _FLOAT_RE),  # ry
    (float, _FLOAT_RE),  # x-axis-rotation
    (int, _BOOL_RE),  # large-arc-flag
    (int, _BOOL_RE),  # sweep-flag
    (float, _FLOAT_RE),  # x
    (float, _FLOAT_RE),  # y
)

# If a moveto is followed by multiple pairs of coordinates,
# the subsequent pairs are treated as implicit lineto commands
_IMPLICIT_REPEAT_CMD = {"m": "l", "M": "L"}

_SHORT_TO_LONG = {"S": "C", "T": "Q"}


def _parse_args(cmd: str, args: str) -> Generator[float, None, None]:
    raw_args = [s for s in _SEPARATOR_RE.split(args) if s]
    if not raw_args:
        return

    if cmd.upper() == "A":
        arg_types = _ARC_ARGUMENT_TYPES
    else:
        arg_types = ((float, _FLOAT_RE),)
    n = len(arg_types)

    i = j = 0
    while j < len(raw_args):
        arg = raw_args[j]
        # modulo to wrap around
        converter, regex = arg_types[i % n]
        m = regex.match(arg)
        if not m:
            raise ValueError(f"Invalid argument #{i} for '{cmd}': {arg!r}")

        start, end = m.span()
        yield converter(arg[start:end])

        if end < len(arg):
            raw_args[j] = arg[end:]
        else:
            j += 1
        i += 1


def parse_svg_path(svg_path: str) -> SVGCommandGen:
    """Parses an svg path into exploded commands.

    When params repeat each step is reported as its own command, so
    "M1,1 2,2 3,3" yields a moveto and two linetos.

    Raises ValueError for text that isn't valid path data.
    """
    parts = _CMD_RE.split(svg_path)
    if parts[0].strip():
        raise ValueError(f"Path data must start with a command: {svg_path!r}")
    parts = parts[1:]
    for i in range(0, len(parts), 2):
        cmd = parts[i]
        args = tuple(_parse_args(cmd, parts[i + 1].strip()))

        args_per_cmd = svg_meta.check_cmd(cmd, args)
        if args_per_cmd == 0:
            yield (cmd, args)
            continue
        if not args:
            raise ValueError(f"{cmd} requires arguments")
        for j in range(len(args) // args_per_cmd):
            if j > 0:
                cmd = _IMPLICIT_REPEAT_CMD.get(cmd, cmd)
            yield (cmd, args[j * args_per_cmd : (j + 1) * args_per_cmd])


def _relative_to_absolute(curr_pos: Point, cmd: str, args) -> SVGCommand:
    if cmd.isupper():
        return cmd, tuple(args)
    x_coord_idxs, y_coord_idxs = cmd_coords(cmd)
    args = list(args)  # we'd like to mutate 'em
    for x_coord_idx in x_coord_idxs:
        args[x_coord_idx] += curr_pos.x
    for y_coord_idx in y_coord_idxs:
        args[y_coord_idx] += curr_pos.y
    return cmd.upper(), tuple(args)


def absolute_commands(svg_path: str) -> SVGCommandGen:
    """Yields only absolute M, L, C, Q, A and Z commands.

    Relative commands are made absolute, H/V become L and the S/T
    shorthands are expanded to explicit curves.
    """
    curr_pos = subpath_start = Point()
    prev_cmd: Optional[str] = None
    prev_args: Tuple[float, ...] = ()

    for idx, (cmd, args) in enumerate(parse_svg_path(svg_path)):
        if idx == 0 and cmd not in "mM":
            raise ValueError(f"Path data must start with a moveto: {svg_path!r}")
        if cmd in "zZ":
            cmd = "Z"
        else:
            cmd, args = _relative_to_absolute(curr_pos, cmd, args)

        if cmd == "H":
            cmd, args = "L", (args[0], curr_pos.y)
        elif cmd == "V":
            cmd, args = "L", (curr_pos.x, args[0])
        elif cmd in _SHORT_TO_LONG:
            long_cmd = _SHORT_TO_LONG[cmd]
            # no suitable previous curve, control point coincident current
            control = tuple(curr_pos)
            if prev_cmd == long_cmd:
                # reflect previous control point over curr_pos
                control = (
                    2 * curr_pos.x - prev_args[-4],
                    2 * curr_pos.y - prev_args[-3],
                )
            cmd, args = long_cmd, control + args

        yield cmd, args

        if cmd == "Z":
            curr_pos = subpath_start
        else:
            curr_pos = Point(*args[-2:])
        if cmd == "M":
            subpath_start = curr_pos
        prev_cmd, prev_args = cmd, args


def _segment(cmd: str, args: Tuple[float, ...]) -> PathSegment:
    if cmd == "L":
        return LineSegment(Point(*args))
    if cmd == "C":
        return BezierSegment(Point(*args[0:2]), Point(*args[2:4]), Point(*args[4:6]))
    if cmd == "Q":
        return QuadraticBezierSegment(Point(*args[0:2]), Point(*args[2:4]))
    if cmd == "A":
        rx, ry, rotation, large, sweep, x, y = args
        return ArcSegment(Point(x, y), Size(rx, ry), rotation, bool(large), bool(sweep))
    raise ValueError(f"No path segment for {cmd}")


def parse_path_data(svg_path: str) -> Tuple[PathFigure, ...]:
    """Parse a path 'd' attribute into figures, one per subpath.

    Raises ValueError for malformed path data.
    """
    figures: List[PathFigure] = []
    start: Optional[Point] = None
    segments: List[PathSegment] = []
    in_figure = False

    def finish(closed: bool):
        if in_figure:
            figures.append(PathFigure(start, tuple(segments), is_closed=closed))
        segments.clear()

    for cmd, args in absolute_commands(svg_path):
        if cmd == "M":
            finish(closed=False)
            start, in_figure = Point(*args), True
        elif cmd == "Z":
            finish(closed=True)
            # a drawing command after Z starts a new figure at the same point
            in_figure = False
        else:
            in_figure = True
            segments.append(_segment(cmd, args))
    finish(closed=False)
    return tuple(figures)


def parse_points(points: str) -> Tuple[Point, ...]:
    """Parse a polyline/polygon 'points' attribute.

    An odd trailing coordinate is dropped. Raises ValueError if a
    coordinate isn't a number.
    """
    coords = [float(n) for n in svg_meta.split_numbers(points)]
    return tuple(Point(x, y) for x, y in zip(coords[0::2], coords[1::2]))
