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
import dataclasses
import pytest
from svgdrawing.drawing import (
    DrawingGroup,
    DrawingImage,
    GeometryDrawing,
    accumulated_transform,
    replace_fill_brush,
    replace_stroke_brush,
)
from svgdrawing.geometric_types import Point, Rect
from svgdrawing.svg_transform import (
    ScaleTransform,
    TransformGroup,
    TranslateTransform,
)
from svgdrawing.svg_types import (
    Color,
    GradientStop,
    LinearGradientBrush,
    LineGeometry,
    Pen,
    PenLineCap,
    RectangleGeometry,
    SolidColorBrush,
)
from svg_test_helpers import *


_RED = SolidColorBrush(Color(255, 0, 0))
_GREEN = SolidColorBrush(Color(0, 128, 0))
_BLUE = SolidColorBrush(Color(0, 0, 255))


def test_bounds_of_stroked_rect_include_half_thickness():
    rect = GeometryDrawing(
        RectangleGeometry(0, 0, 10, 20), _RED, Pen(_BLUE, thickness=4)
    )
    assert rect.bounds() == pytest.approx(Rect(-2, -2, 14, 24))


def test_bounds_without_pen():
    rect = GeometryDrawing(RectangleGeometry(0, 0, 10, 20), _RED)
    assert rect.bounds() == pytest.approx(Rect(0, 0, 10, 20))


def test_bounds_apply_geometry_and_group_transforms():
    rect = GeometryDrawing(
        RectangleGeometry(0, 0, 10, 10, transform=TranslateTransform(5, 0)), _RED
    )
    group = DrawingGroup((rect,), ScaleTransform(2, 2))
    assert group.bounds() == pytest.approx(Rect(10, 0, 20, 20))
    assert DrawingImage(DrawingGroup((group,))).bounds() == pytest.approx(
        Rect(10, 0, 20, 20)
    )


def test_empty_image_has_no_bounds():
    assert DrawingImage().bounds() is None
    assert DrawingImage(DrawingGroup((DrawingGroup(),))).bounds() is None


def test_bounds_from_document():
    image = drawing(
        "<rect x='10' y='10' width='10' height='10' stroke='red' stroke-width='2'/>",
        "<g transform='translate(100,0)'><line x1='0' y1='0' x2='10' y2='0'"
        " stroke='blue' stroke-width='2' stroke-linecap='square'/></g>",
    )
    assert image.bounds() == pytest.approx(Rect(9, -1, 102, 22))


@pytest.mark.parametrize(
    "dash_array, expected_bounds",
    [
        # odd lists repeat: 5 => 5,5 and 5,3,2 => 5,3,2,5,3,2
        ("5", Rect(0, -1, 15, 2)),
        ("5,3,2", Rect(0, -1, 18, 2)),
        ("5 5", Rect(0, -1, 15, 2)),
    ],
)
def test_bounds_of_dashed_line(dash_array, expected_bounds):
    image = drawing(
        "<line x1='0' y1='0' x2='20' y2='0' stroke='red'"
        f" stroke-width='2' stroke-dasharray='{dash_array}'/>"
    )
    assert image.bounds() == pytest.approx(expected_bounds)


def test_bounds_of_rect_with_odd_dash_array():
    image = drawing(
        '<rect width="10" height="10" stroke="red" stroke-width="2"'
        ' stroke-dasharray="5"/>'
    )
    bounds = image.bounds()
    assert bounds is not None
    assert Rect(-1, -1, 12, 12).union(bounds) == pytest.approx(Rect(-1, -1, 12, 12))


def test_traversal_order():
    a = GeometryDrawing(LineGeometry(Point(0, 0), Point(1, 1)))
    b = GeometryDrawing(LineGeometry(Point(0, 0), Point(2, 2)))
    c = GeometryDrawing(LineGeometry(Point(0, 0), Point(3, 3)))
    inner = DrawingGroup((b,))
    image = DrawingImage(DrawingGroup((a, inner, c)))

    assert [ctx.drawing for ctx in image.depth_first()] == [
        image.drawing,
        a,
        inner,
        b,
        c,
    ]
    assert [ctx.drawing for ctx in image.breadth_first()] == [
        image.drawing,
        a,
        inner,
        c,
        b,
    ]


def test_accumulated_transform_skips_groups_without_transform():
    outer = DrawingGroup((), TranslateTransform(1, 2))
    plain = DrawingGroup()
    inner = DrawingGroup((), ScaleTransform(3, 3))

    assert accumulated_transform((outer, plain, inner)) == TransformGroup(
        (ScaleTransform(3, 3), TranslateTransform(1, 2))
    )
    assert accumulated_transform(()) == TransformGroup()


def _colors_image():
    return drawing(
        "<rect width='1' height='1' fill='red' stroke='blue' stroke-width='3'/>",
        "<g><circle r='1' fill='red' fill-opacity='0.5'/></g>",
        "<rect width='1' height='1' fill='green' stroke='red'/>",
    )


def test_replace_fill_brush():
    image = _colors_image()
    before = dataclasses.replace(image)

    recolored = replace_fill_brush(image, _RED, _GREEN)

    fills = [s.brush for s in shapes(recolored)]
    # circle's 50% red doesn't match opaque red
    assert fills == [_GREEN, SolidColorBrush(Color(255, 0, 0, 128)), _GREEN]
    # strokes are left alone
    assert [s.pen.brush for s in shapes(recolored) if s.pen] == [_BLUE, _RED]
    # the input is untouched
    assert image == before


def test_replace_fill_brush_keeps_opacity():
    image = _colors_image()
    faded_red = SolidColorBrush(Color(255, 0, 0, 128))

    recolored = replace_fill_brush(image, faded_red, _BLUE)

    assert shapes(recolored)[1].brush == SolidColorBrush(Color(0, 0, 255, 128))
    assert shapes(recolored)[0].brush == _RED


def test_replace_stroke_brush_keeps_pen():
    image = _colors_image()
    before = dataclasses.replace(image)

    recolored = replace_stroke_brush(image, _BLUE, _GREEN)

    pen = shapes(recolored)[0].pen
    assert pen.brush == _GREEN
    assert pen.thickness == 3
    assert pen.start_line_cap == PenLineCap.FLAT
    assert shapes(recolored)[2].pen.brush == _RED
    assert [s.brush for s in shapes(recolored)] == [s.brush for s in shapes(image)]
    assert image == before


def test_replace_without_match_shares_tree():
    image = _colors_image()
    recolored = replace_fill_brush(image, SolidColorBrush(Color(1, 2, 3)), _BLUE)
    assert recolored.drawing is image.drawing


def test_replace_gradient_by_stops():
    gradient = LinearGradientBrush(stops=(GradientStop(Color(255, 0, 0), 0.0),))
    same_stops = LinearGradientBrush(
        start_point=Point(0, 1), stops=(GradientStop(Color(255, 0, 0), 0.0),)
    )
    image = DrawingImage(
        DrawingGroup((GeometryDrawing(RectangleGeometry(0, 0, 1, 1), gradient),))
    )

    recolored = replace_fill_brush(image, same_stops, _BLUE)

    assert shapes(recolored)[0].brush == _BLUE
