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

"""Convert elliptical arc segments to cubic Bezier segments.

Adapted from FontTools fontTools/svgLib/path/arc.py, which in turn is adapted
from Blink's SVGPathNormalizer::DecomposeArcToCubic:
https://github.com/chromium/chromium/blob/93831f2/third_party/blink/renderer/core/svg/svg_path_parser.cc#L169-L278
"""
from math import atan2, ceil, cos, fabs, isfinite, pi, radians, sin, sqrt, tan
from typing import Iterator, NamedTuple, Union
from svgdrawing.geometric_types import Point, Vector
from svgdrawing.svg_transform import Affine2D
from svgdrawing.svg_types import ArcSegment, BezierSegment, LineSegment


TWO_PI = 2 * pi
PI_OVER_TWO = 0.5 * pi


class CenterParametrization(NamedTuple):
    theta1: float
    theta_arc: float
    center_point: Point


class EllipticalArc(NamedTuple):
    start_point: Point
    rx: float
    ry: float
    rotation: float
    large: bool
    sweep: bool
    end_point: Point

    @classmethod
    def from_segment(cls, start_point: Point, segment: ArcSegment) -> "EllipticalArc":
        # negative radii are taken as absolute values
        # http://www.w3.org/TR/SVG/implnote.html#ArcOutOfRangeParameters
        return cls(
            Point(*start_point),
            fabs(segment.size.width),
            fabs(segment.size.height),
            segment.rotation_angle,
            segment.is_large_arc,
            segment.clockwise,
            Point(*segment.point),
        )

    def is_straight_line(self) -> bool:
        return not (self.rx and self.ry)

    def is_zero_length(self) -> bool:
        return self.end_point == self.start_point

    def correct_out_of_range_radii(self) -> "EllipticalArc":
        # Scale radii up if they can't span the end points.
        # http://www.w3.org/TR/SVG/implnote.html#ArcCorrectionOutOfRangeRadii
        if self.is_straight_line() or self.is_zero_length():
            return self

        half_chord = (self.start_point - self.end_point) * 0.5
        # rotation is in degrees, Affine2D.rotate wants radians
        mid = Affine2D.identity().rotate(-radians(self.rotation)).map_vector(half_chord)

        radii_scale = (mid.x * mid.x) / (self.rx * self.rx) + (mid.y * mid.y) / (
            self.ry * self.ry
        )
        if radii_scale <= 1:
            return self
        factor = sqrt(radii_scale)
        return self._replace(rx=self.rx * factor, ry=self.ry * factor)

    # https://www.w3.org/TR/SVG/implnote.html#ArcConversionEndpointToCenter
    def end_to_center_parametrization(self) -> CenterParametrization:
        if self.is_straight_line() or self.is_zero_length():
            raise ValueError(f"Can't compute center parametrization for {self}")

        to_unit_circle = (
            Affine2D.identity()
            .scale(1 / self.rx, 1 / self.ry)
            .rotate(-radians(self.rotation))
        )
        p1 = to_unit_circle.map_point(self.start_point)
        p2 = to_unit_circle.map_point(self.end_point)
        delta = p2 - p1

        d = delta.x * delta.x + delta.y * delta.y
        scale_factor = sqrt(max(1 / d - 0.25, 0.0))
        if self.sweep == self.large:
            scale_factor = -scale_factor

        delta *= scale_factor
        center = p1 + (p2 - p1) * 0.5 + Vector(-delta.y, delta.x)
        v1 = p1 - center
        v2 = p2 - center

        theta1 = atan2(v1.y, v1.x)
        theta_arc = atan2(v2.y, v2.x) - theta1
        if theta_arc < 0 and self.sweep:
            theta_arc += TWO_PI
        elif theta_arc > 0 and not self.sweep:
            theta_arc -= TWO_PI

        return CenterParametrization(
            theta1, theta_arc, to_unit_circle.inverse().map_point(center)
        )

    def cubics(self) -> Iterator[BezierSegment]:
        arc = self.correct_out_of_range_radii()
        params = arc.end_to_center_parametrization()

        from_unit_circle = (
            Affine2D.identity()
            .translate(params.center_point.x, params.center_point.y)
            .rotate(radians(arc.rotation))
            .scale(arc.rx, arc.ry)
        )

        # atan2 isn't always exact enough; the 0.001 keeps us from emitting
        # one cubic too many.
        num_segments = int(ceil(fabs(params.theta_arc / (PI_OVER_TWO + 0.001))))
        step = params.theta_arc / num_segments
        for i in range(num_segments):
            start_theta = params.theta1 + i * step
            end_theta = start_theta + step

            t = (4 / 3) * tan(0.25 * step)
            if not isfinite(t):
                return

            control1 = Point(
                cos(start_theta) - t * sin(start_theta),
                sin(start_theta) + t * cos(start_theta),
            )
            end_point = Point(cos(end_theta), sin(end_theta))
            control2 = end_point + Vector(t * sin(end_theta), -t * cos(end_theta))

            yield BezierSegment(
                from_unit_circle.map_point(control1),
                from_unit_circle.map_point(control2),
                from_unit_circle.map_point(end_point),
            )


def arc_to_cubic(
    start_point: Point, segment: ArcSegment
) -> Iterator[Union[BezierSegment, LineSegment]]:
    """Convert an arc segment starting at start_point to cubic segments.

    If either radius is 0 the arc is a straight line to its end point and a
    single LineSegment is yielded. A zero length arc yields nothing.
    """
    arc = EllipticalArc.from_segment(start_point, segment)
    if arc.is_zero_length():
        return
    elif arc.is_straight_line():
        yield LineSegment(arc.end_point)
    else:
        yield from arc.cubics()
