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
from svgdrawing.geometric_types import Point, Size
from svgdrawing.svg_types import (
    ArcSegment,
    BezierSegment,
    Color,
    EllipseGeometry,
    LineSegment,
    PathFigure,
    PathGeometry,
    Pen,
    PolyLineSegment,
    QuadraticBezierSegment,
    RectangleGeometry,
    path_from_points,
)


def test_color():
    assert Color(1, 2, 3) == Color(1, 2, 3, 255)
    assert Color(1, 2, 3).with_alpha(4) == Color(1, 2, 3, 4)
    assert Color.TRANSPARENT.a == 0
    assert Color.BLACK == Color(0, 0, 0, 255)


@pytest.mark.parametrize("miter_limit, expected", [(0.5, 1.0), (1.0, 1.0), (4, 4)])
def test_pen_miter_limit_at_least_1(miter_limit, expected):
    assert Pen(miter_limit=miter_limit).miter_limit == expected


@pytest.mark.parametrize(
    "rect, expected_cmds",
    [
        (
            RectangleGeometry(1, 2, 3, 4),
            (
                ("M", (1, 2)),
                ("L", (4, 2)),
                ("L", (4, 6)),
                ("L", (1, 6)),
                ("L", (1, 2)),
                ("Z", ()),
            ),
        ),
        # only one radius: sharp corners
        (
            RectangleGeometry(0, 0, 4, 4, radius_x=1),
            (
                ("M", (0, 0)),
                ("L", (4, 0)),
                ("L", (4, 4)),
                ("L", (0, 4)),
                ("L", (0, 0)),
                ("Z", ()),
            ),
        ),
        # radii are clamped to half the size
        (
            RectangleGeometry(0, 0, 4, 2, radius_x=3, radius_y=3),
            (
                ("M", (2, 0)),
                ("L", (2, 0)),
                ("A", (2, 1, 0, 0, 1, 4, 1)),
                ("L", (4, 1)),
                ("A", (2, 1, 0, 0, 1, 2, 2)),
                ("L", (2, 2)),
                ("A", (2, 1, 0, 0, 1, 0, 1)),
                ("L", (0, 1)),
                ("A", (2, 1, 0, 0, 1, 2, 0)),
                ("Z", ()),
            ),
        ),
    ],
)
def test_rect_as_cmd_seq(rect, expected_cmds):
    assert tuple(rect.as_cmd_seq()) == expected_cmds


def test_ellipse_as_cmd_seq():
    assert tuple(EllipseGeometry(Point(5, 5), 4, 2).as_cmd_seq()) == (
        ("M", (9, 5)),
        ("A", (4, 2, 0, 1, 1, 1, 5)),
        ("A", (4, 2, 0, 1, 1, 9, 5)),
        ("Z", ()),
    )


def test_path_as_cmd_seq():
    figure = PathFigure(
        Point(0, 0),
        (
            LineSegment(Point(1, 0)),
            PolyLineSegment((Point(2, 0), Point(2, 2))),
            BezierSegment(Point(3, 3), Point(4, 4), Point(5, 5)),
            QuadraticBezierSegment(Point(6, 6), Point(7, 7)),
            ArcSegment(Point(8, 8), Size(1, 2), 30, True, False),
        ),
        is_closed=True,
    )
    assert tuple(PathGeometry(figures=(figure, figure)).as_cmd_seq()) == 2 * (
        ("M", (0, 0)),
        ("L", (1, 0)),
        ("L", (2, 0)),
        ("L", (2, 2)),
        ("C", (3, 3, 4, 4, 5, 5)),
        ("Q", (6, 6, 7, 7)),
        ("A", (1, 2, 30, 1, 0, 8, 8)),
        ("Z", ()),
    )
    assert figure.points() == (
        Point(0, 0),
        Point(1, 0),
        Point(2, 0),
        Point(2, 2),
        Point(5, 5),
        Point(7, 7),
        Point(8, 8),
    )


@pytest.mark.parametrize(
    "segment, expected_end",
    [
        (LineSegment(Point(1, 2)), Point(1, 2)),
        (BezierSegment(Point(0, 1), Point(2, 3), Point(4, 5)), Point(4, 5)),
        (QuadraticBezierSegment(Point(0, 1), Point(2, 3)), Point(2, 3)),
        # the last field of an arc is its sweep flag, not its end point
        (ArcSegment(Point(8, 8), Size(1, 2)), Point(8, 8)),
        (ArcSegment(Point(8, 8), Size(1, 2), 0, False, True), Point(8, 8)),
    ],
)
def test_figure_points_end_of_each_segment(segment, expected_end):
    figure = PathFigure(Point(0, 0), (segment,))
    assert figure.points() == (Point(0, 0), expected_end)

def test_path_from_points():
    assert path_from_points((), closed=True) == PathGeometry()

    (figure,) = path_from_points([Point(1, 1)], closed=False).figures
    assert figure == PathFigure(Point(1, 1), (), is_closed=False)

    (figure,) = path_from_points([Point(1, 1), Point(2, 2)], closed=True).figures
    assert figure == PathFigure(
        Point(1, 1), (PolyLineSegment((Point(2, 2),)),), is_closed=True
    )
