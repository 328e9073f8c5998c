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

"""Value types that make up a drawing: colors, brushes, pens and geometry.

Everything here is immutable. Use dataclasses.replace to derive a modified
copy; nothing in the package edits these in place.
"""

import dataclasses
import enum
from svgdrawing.geometric_types import Point, Size
from svgdrawing.svg_meta import SVGCommandGen
from svgdrawing.svg_transform import Transform
from typing import Iterable, NamedTuple, Optional, Tuple, Union


class Color(NamedTuple):
    """8-bit RGBA, not premultiplied."""

    r: int
    g: int
    b: int
    a: int = 255

    def with_alpha(self, alpha: int) -> "Color":
        return self._replace(a=alpha)


Color.TRANSPARENT = Color(0, 0, 0, 0)
Color.BLACK = Color(0, 0, 0, 255)


class FillRule(enum.Enum):
    NONZERO = "nonzero"
    EVENODD = "evenodd"


class PenLineCap(enum.Enum):
    FLAT = "butt"
    ROUND = "round"
    SQUARE = "square"


class PenLineJoin(enum.Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class SpreadMethod(enum.Enum):
    PAD = "pad"
    REFLECT = "reflect"
    REPEAT = "repeat"


class MappingMode(enum.Enum):
    ABSOLUTE = "userSpaceOnUse"
    RELATIVE_TO_BOUNDING_BOX = "objectBoundingBox"


@dataclasses.dataclass(frozen=True)
class SolidColorBrush:
    color: Color = Color.BLACK


class GradientStop(NamedTuple):
    color: Color = Color.BLACK
    offset: float = 0.0


# https://www.w3.org/TR/SVG11/pservers.html#LinearGradients
@dataclasses.dataclass(frozen=True)
class LinearGradientBrush:
    start_point: Point = Point(0.0, 0.0)
    end_point: Point = Point(1.0, 1.0)
    stops: Tuple[GradientStop, ...] = ()
    spread_method: SpreadMethod = SpreadMethod.PAD
    mapping_mode: MappingMode = MappingMode.RELATIVE_TO_BOUNDING_BOX
    transform: Transform = Transform.identity()


# https://www.w3.org/TR/SVG11/pservers.html#RadialGradients
@dataclasses.dataclass(frozen=True)
class RadialGradientBrush:
    center: Point = Point(0.5, 0.5)
    gradient_origin: Point = Point(0.5, 0.5)
    radius_x: float = 0.5
    radius_y: float = 0.5
    stops: Tuple[GradientStop, ...] = ()
    spread_method: SpreadMethod = SpreadMethod.PAD
    mapping_mode: MappingMode = MappingMode.RELATIVE_TO_BOUNDING_BOX
    transform: Transform = Transform.identity()


GradientBrush = Union[LinearGradientBrush, RadialGradientBrush]
Brush = Union[SolidColorBrush, LinearGradientBrush, RadialGradientBrush]


@dataclasses.dataclass(frozen=True)
class Pen:
    brush: Brush = SolidColorBrush()
    thickness: float = 1.0
    start_line_cap: PenLineCap = PenLineCap.FLAT
    end_line_cap: PenLineCap = PenLineCap.FLAT
    line_join: PenLineJoin = PenLineJoin.MITER
    miter_limit: float = 10.0
    dash_array: Tuple[float, ...] = ()
    dash_offset: float = 0.0

    def __post_init__(self):
        # https://www.w3.org/TR/SVG11/painting.html#StrokeMiterlimitProperty
        if self.miter_limit < 1.0:
            object.__setattr__(self, "miter_limit", 1.0)


# Path figures, https://www.w3.org/TR/SVG11/paths.html
# Segment end points are absolute.


class LineSegment(NamedTuple):
    point: Point


class PolyLineSegment(NamedTuple):
    points: Tuple[Point, ...]


class BezierSegment(NamedTuple):
    point1: Point
    point2: Point
    point3: Point


class QuadraticBezierSegment(NamedTuple):
    point1: Point
    point2: Point


class ArcSegment(NamedTuple):
    point: Point
    size: Size
    rotation_angle: float = 0.0
    is_large_arc: bool = False
    # svg sweep-flag=1
    clockwise: bool = False


PathSegment = Union[
    LineSegment, PolyLineSegment, BezierSegment, QuadraticBezierSegment, ArcSegment
]


def _segment_commands(segment: PathSegment) -> SVGCommandGen:
    if isinstance(segment, LineSegment):
        yield ("L", tuple(segment.point))
    elif isinstance(segment, PolyLineSegment):
        for pt in segment.points:
            yield ("L", tuple(pt))
    elif isinstance(segment, BezierSegment):
        yield ("C", (*segment.point1, *segment.point2, *segment.point3))
    elif isinstance(segment, QuadraticBezierSegment):
        yield ("Q", (*segment.point1, *segment.point2))
    elif isinstance(segment, ArcSegment):
        rx, ry = segment.size
        yield (
            "A",
            (
                rx,
                ry,
                segment.rotation_angle,
                int(segment.is_large_arc),
                int(segment.clockwise),
            )
            + tuple(segment.point),
        )
    else:
        raise ValueError(f"Unknown path segment {segment!r}")


def _end_point(segment: PathSegment) -> Point:
    if isinstance(segment, (LineSegment, ArcSegment)):
        return segment.point
    elif isinstance(segment, BezierSegment):
        return segment.point3
    elif isinstance(segment, QuadraticBezierSegment):
        return segment.point2
    raise ValueError(f"Unknown path segment {segment!r}")


@dataclasses.dataclass(frozen=True)
class PathFigure:
    start_point: Point = Point()
    segments: Tuple[PathSegment, ...] = ()
    is_closed: bool = False

    def points(self) -> Tuple[Point, ...]:
        """Start point followed by every segment end point."""
        result = [self.start_point]
        for segment in self.segments:
            if isinstance(segment, PolyLineSegment):
                result.extend(segment.points)
            else:
                result.append(_end_point(segment))
        return tuple(result)

    def as_cmd_seq(self) -> SVGCommandGen:
        yield ("M", tuple(self.start_point))
        for segment in self.segments:
            yield from _segment_commands(segment)
        if self.is_closed:
            yield ("Z", ())


# Geometries. Commands from as_cmd_seq are absolute and in the geometry's
# own coordinate space, ie the transform is not applied.


@dataclasses.dataclass(frozen=True)
class PathGeometry:
    figures: Tuple[PathFigure, ...] = ()
    fill_rule: FillRule = FillRule.NONZERO
    transform: Optional[Transform] = None

    def as_cmd_seq(self) -> SVGCommandGen:
        for figure in self.figures:
            yield from figure.as_cmd_seq()


# https://www.w3.org/TR/SVG11/shapes.html#RectElement
@dataclasses.dataclass(frozen=True)
class RectangleGeometry:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    radius_x: float = 0.0
    radius_y: float = 0.0
    transform: Optional[Transform] = None

    def as_cmd_seq(self) -> SVGCommandGen:
        x, y, w, h = self.x, self.y, self.width, self.height
        rx = min(abs(self.radius_x), w / 2)
        ry = min(abs(self.radius_y), h / 2)
        if not (rx > 0 and ry > 0):
            rx = ry = 0
        yield ("M", (x + rx, y))
        yield ("L", (x + w - rx, y))
        if rx > 0:
            yield ("A", (rx, ry, 0, 0, 1, x + w, y + ry))
        yield ("L", (x + w, y + h - ry))
        if rx > 0:
            yield ("A", (rx, ry, 0, 0, 1, x + w - rx, y + h))
        yield ("L", (x + rx, y + h))
        if rx > 0:
            yield ("A", (rx, ry, 0, 0, 1, x, y + h - ry))
        yield ("L", (x, y + ry))
        if rx > 0:
            yield ("A", (rx, ry, 0, 0, 1, x + rx, y))
        yield ("Z", ())


# https://www.w3.org/TR/SVG11/shapes.html#EllipseElement
@dataclasses.dataclass(frozen=True)
class EllipseGeometry:
    center: Point = Point()
    radius_x: float = 0.0
    radius_y: float = 0.0
    transform: Optional[Transform] = None

    def as_cmd_seq(self) -> SVGCommandGen:
        cx, cy = self.center
        rx, ry = self.radius_x, self.radius_y
        # arc doesn't seem to like being a complete shape, draw two halves.
        # Start at 3 o'clock and go clockwise.
        yield ("M", (cx + rx, cy))
        yield ("A", (rx, ry, 0, 1, 1, cx - rx, cy))
        yield ("A", (rx, ry, 0, 1, 1, cx + rx, cy))
        yield ("Z", ())


# https://www.w3.org/TR/SVG11/shapes.html#LineElement
@dataclasses.dataclass(frozen=True)
class LineGeometry:
    start_point: Point = Point()
    end_point: Point = Point()
    transform: Optional[Transform] = None

    def as_cmd_seq(self) -> SVGCommandGen:
        yield ("M", tuple(self.start_point))
        yield ("L", tuple(self.end_point))


Geometry = Union[PathGeometry, RectangleGeometry, EllipseGeometry, LineGeometry]


def path_from_points(points: Iterable[Point], closed: bool) -> PathGeometry:
    """A single figure polyline through points; no figures if points is empty."""
    points = tuple(points)
    if not points:
        return PathGeometry()
    figure = PathFigure(
        start_point=points[0],
        segments=(PolyLineSegment(points[1:]),) if len(points) > 1 else (),
        is_closed=closed,
    )
    return PathGeometry(figures=(figure,))
