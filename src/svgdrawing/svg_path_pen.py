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

import pathops  # pytype: disable=import-error
from typing import Any, List, Mapping, Optional, Tuple
from fontTools.pens.basePen import DecomposingPen
from svgdrawing.geometric_types import Point
from svgdrawing.svg_transform import Affine2D
from svgdrawing.svg_types import (
    BezierSegment,
    FillRule,
    LineSegment,
    PathFigure,
    PathGeometry,
    PathSegment,
    QuadraticBezierSegment,
)


# NOTE: the FontTools Pens API uses camelCase for the method names


class PathFigurePen(DecomposingPen):
    """A FontTools Pen that collects contours as PathFigures.

    The pen automatically decomposes components using the provided `glyphSet`
    mapping.

    Args:
        glyphSet: a mapping of {glyph_name: glyph} to be used for resolving
            component references when the pen's `addComponent` method is called.
            Can be set to empty dict if drawing simple contours.
        transform: applied to every point drawn, e.g. to go from font units
            to a y-down drawing space.
    """

    # makes DecomposingPen raise 'KeyError' when component base is missing
    skipMissingComponents = False

    def __init__(
        self,
        glyphSet: Mapping[str, Any],
        transform: Affine2D = Affine2D.identity(),
    ):
        super().__init__(glyphSet)
        self.transform = transform
        self.figures: List[PathFigure] = []
        self._start: Optional[Point] = None
        self._segments: List[PathSegment] = []

    def _map(self, pt: Tuple[float, float]) -> Point:
        return self.transform.map_point(pt)

    def _finish(self, closed: bool):
        if self._start is not None:
            self.figures.append(
                PathFigure(self._start, tuple(self._segments), is_closed=closed)
            )
        self._start = None
        self._segments = []

    def moveTo(self, pt):
        self._finish(closed=False)
        self._start = self._map(pt)

    def lineTo(self, pt):
        self._segments.append(LineSegment(self._map(pt)))

    def curveTo(self, *points):
        if len(points) != 3:
            raise ValueError(f"Only single cubic segments are supported: {points}")
        self._segments.append(BezierSegment(*(self._map(pt) for pt in points)))

    def qCurveTo(self, *points):
        # handle TrueType quadratic splines with implicit on-curve mid-points
        for control_pt, end_pt in pathops.decompose_quadratic_segment(points):
            self._segments.append(
                QuadraticBezierSegment(self._map(control_pt), self._map(end_pt))
            )

    def closePath(self):
        self._finish(closed=True)

    def endPath(self):
        self._finish(closed=False)

    def geometry(self) -> PathGeometry:
        self._finish(closed=False)
        return PathGeometry(figures=tuple(self.figures), fill_rule=FillRule.NONZERO)
