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
import pytest
from svgdrawing import svg_pathops
from svgdrawing.geometric_types import Point, Rect
from svgdrawing.svg_transform import Affine2D
from svgdrawing.svg_types import (
    EllipseGeometry,
    FillRule,
    LineGeometry,
    PathFigure,
    PathGeometry,
    LineSegment,
    Pen,
    PenLineCap,
    RectangleGeometry,
)


def _round(pt, digits):
    return tuple(round(v, digits) for v in pt)


@pytest.mark.parametrize(
    "geometry, expected_segments",
    [
        # path
        (
            PathGeometry(
                figures=(PathFigure(Point(1, 1), (LineSegment(Point(2, 2)),), True),)
            ),
            (("moveTo", ((1.0, 1.0),)), ("lineTo", ((2.0, 2.0),)), ("closePath", ())),
        ),
        # rect
        (
            RectangleGeometry(x=4, y=4, width=6, height=16),
            (
                ("moveTo", ((4.0, 4.0),)),
                ("lineTo", ((10.0, 4.0),)),
                ("lineTo", ((10.0, 20.0),)),
                ("lineTo", ((4.0, 20.0),)),
                ("lineTo", ((4.0, 4.0),)),
                ("closePath", ()),
            ),
        ),
        (
            EllipseGeometry(center=Point(5, 5), radius_x=4, radius_y=4),
            (
                ("moveTo", ((9.0, 5.0),)),
                ("curveTo", ((9.0, 7.2091), (7.2091, 9.0), (5.0, 9.0))),
                ("curveTo", ((2.7909, 9.0), (1.0, 7.2091), (1.0, 5.0))),
                ("curveTo", ((1.0, 2.7909), (2.7909, 1.0), (5.0, 1.0))),
                ("curveTo", ((7.2091, 1.0), (9.0, 2.7909), (9.0, 5.0))),
                ("closePath", ()),
            ),
        ),
        # open line
        (
            LineGeometry(start_point=Point(1, 2), end_point=Point(3, 4)),
            (("moveTo", ((1.0, 2.0),)), ("lineTo", ((3.0, 4.0),)), ("endPath", ())),
        ),
    ],
)
def test_skia_path(geometry, expected_segments):
    # We round to 4 decimal places to confirm custom value works
    skia_path = svg_pathops.skia_path(geometry.as_cmd_seq(), FillRule.NONZERO)
    rounded_segments = list(skia_path.segments)
    for idx, (cmd, points) in enumerate(rounded_segments):
        rounded_segments[idx] = (cmd, tuple(_round(pt, 4) for pt in points))
    assert tuple(rounded_segments) == expected_segments


def test_skia_path_invalid_fill_rule():
    with pytest.raises(ValueError):
        svg_pathops.skia_path((("M", (0, 0)),), "bogus")


def test_skia_path_unknown_command():
    with pytest.raises(ValueError):
        svg_pathops.skia_path((("M", (0, 0)), ("H", (5,))), FillRule.NONZERO)


_RECT = RectangleGeometry(x=0, y=0, width=10, height=20)


@pytest.mark.parametrize(
    "cmds, geometry_affine, pen, outer_affine, expected",
    [
        # nothing to measure
        ((), Affine2D.identity(), None, Affine2D.identity(), None),
        (
            _RECT.as_cmd_seq(),
            Affine2D.identity(),
            None,
            Affine2D.identity(),
            Rect(0, 0, 10, 20),
        ),
        # stroke adds half the thickness on every side
        (
            _RECT.as_cmd_seq(),
            Affine2D.identity(),
            Pen(thickness=2),
            Affine2D.identity(),
            Rect(-1, -1, 12, 22),
        ),
        # a zero width pen changes nothing
        (
            _RECT.as_cmd_seq(),
            Affine2D.identity(),
            Pen(thickness=0),
            Affine2D.identity(),
            Rect(0, 0, 10, 20),
        ),
        (
            _RECT.as_cmd_seq(),
            Affine2D.identity().translate(5, 5),
            None,
            Affine2D.identity(),
            Rect(5, 5, 10, 20),
        ),
        # the outer transform scales the stroke too
        (
            _RECT.as_cmd_seq(),
            Affine2D.identity(),
            Pen(thickness=2),
            Affine2D.identity().scale(2),
            Rect(-2, -2, 24, 44),
        ),
        # square caps extend an open line
        (
            LineGeometry(Point(0, 0), Point(10, 0)).as_cmd_seq(),
            Affine2D.identity(),
            Pen(
                thickness=2,
                start_line_cap=PenLineCap.SQUARE,
                end_line_cap=PenLineCap.SQUARE,
            ),
            Affine2D.identity(),
            Rect(-1, -1, 12, 2),
        ),
    ],
)
def test_bounding_box(cmds, geometry_affine, pen, outer_affine, expected):
    actual = svg_pathops.bounding_box(cmds, geometry_affine, pen, outer_affine)
    if expected is None:
        assert actual is None
    else:
        assert actual == pytest.approx(expected)


def test_transform_identity_is_noop():
    sk_path = svg_pathops.skia_path(_RECT.as_cmd_seq(), FillRule.NONZERO)
    assert svg_pathops.transform(sk_path, Affine2D.identity()) is sk_path
