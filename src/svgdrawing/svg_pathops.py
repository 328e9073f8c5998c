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

"""Geometry <=> skia-pathops constructs, used to measure drawings."""
import pathops  # pytype: disable=import-error
from typing import Optional
from svgdrawing.arc_to_cubic import arc_to_cubic
from svgdrawing.geometric_types import Point, Rect, Size
from svgdrawing.svg_meta import SVGCommandSeq
from svgdrawing.svg_transform import Affine2D
from svgdrawing.svg_types import (
    ArcSegment,
    BezierSegment,
    FillRule,
    Pen,
    PenLineCap,
    PenLineJoin,
)


# Absolutes coords assumed
# A is converted to cubics as we go
_SVG_CMD_TO_SKIA_FN = {
    "M": pathops.Path.moveTo,
    "L": pathops.Path.lineTo,
    "Q": pathops.Path.quadTo,
    "Z": pathops.Path.close,
    "C": pathops.Path.cubicTo,
}

_LINE_CAP_TO_SKIA = {
    PenLineCap.FLAT: pathops.LineCap.BUTT_CAP,
    PenLineCap.ROUND: pathops.LineCap.ROUND_CAP,
    PenLineCap.SQUARE: pathops.LineCap.SQUARE_CAP,
}

_LINE_JOIN_TO_SKIA = {
    PenLineJoin.MITER: pathops.LineJoin.MITER_JOIN,
    PenLineJoin.ROUND: pathops.LineJoin.ROUND_JOIN,
    PenLineJoin.BEVEL: pathops.LineJoin.BEVEL_JOIN,
}

_FILL_RULE_TO_SKIA_FILL_TYPE = {
    FillRule.NONZERO: pathops.FillType.WINDING,
    FillRule.EVENODD: pathops.FillType.EVEN_ODD,
}


def _arc_to(sk_path: pathops.Path, curr_pos: Point, args) -> None:
    rx, ry, rotation, large, sweep, x, y = args
    segment = ArcSegment(Point(x, y), Size(rx, ry), rotation, bool(large), bool(sweep))
    for cubic in arc_to_cubic(curr_pos, segment):
        if isinstance(cubic, BezierSegment):
            sk_path.cubicTo(*cubic.point1, *cubic.point2, *cubic.point3)
        else:
            sk_path.lineTo(*cubic.point)


def skia_path(svg_cmds: SVGCommandSeq, fill_rule: FillRule) -> pathops.Path:
    try:
        fill_type = _FILL_RULE_TO_SKIA_FILL_TYPE[fill_rule]
    except KeyError:
        raise ValueError(f"Invalid fill rule: {fill_rule!r}")
    sk_path = pathops.Path(fillType=fill_type)
    curr_pos = subpath_start = Point()
    for cmd, args in svg_cmds:
        if cmd == "A":
            _arc_to(sk_path, curr_pos, args)
        elif cmd in _SVG_CMD_TO_SKIA_FN:
            _SVG_CMD_TO_SKIA_FN[cmd](sk_path, *args)
        else:
            raise ValueError(f'No mapping to Skia for "{cmd} {args}"')

        if cmd == "Z":
            curr_pos = subpath_start
        else:
            curr_pos = Point(*args[-2:])
        if cmd == "M":
            subpath_start = curr_pos
    return sk_path


def transform(sk_path: pathops.Path, affine: Affine2D) -> pathops.Path:
    if affine == Affine2D.identity():
        return sk_path
    return sk_path.transform(*affine)


def stroke(sk_path: pathops.Path, pen: Pen) -> pathops.Path:
    """Replace sk_path, in place, with its outline stroked with pen.

    The result may self-intersect and should be filled "nonzero".
    """
    # skia has a single cap for both ends
    cap = _LINE_CAP_TO_SKIA[pen.start_line_cap]
    join = _LINE_JOIN_TO_SKIA[pen.line_join]
    dash_array = list(pen.dash_array)
    # https://www.w3.org/TR/SVG11/painting.html#StrokeDasharrayProperty
    # an odd list repeats to get an even one
    if len(dash_array) % 2 != 0:
        dash_array.extend(dash_array)
    sk_path.stroke(
        pen.thickness, cap, join, pen.miter_limit, dash_array, pen.dash_offset
    )
    return sk_path


def bounding_box(
    svg_cmds: SVGCommandSeq,
    geometry_affine: Affine2D = Affine2D.identity(),
    pen: Optional[Pen] = None,
    outer_affine: Affine2D = Affine2D.identity(),
) -> Optional[Rect]:
    """Bounds of a painted geometry, None if it has no commands.

    The geometry's own transform applies first, the pen widens the result
    and outer_affine maps it into the caller's space.
    """
    svg_cmds = list(svg_cmds)
    if not svg_cmds:
        return None
    sk_path = transform(skia_path(svg_cmds, FillRule.NONZERO), geometry_affine)
    if pen is not None and pen.thickness > 0:
        sk_path = stroke(sk_path, pen)
    sk_path = transform(sk_path, outer_affine)
    return Rect.from_bounds(*sk_path.bounds)
