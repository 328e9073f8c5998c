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

"""The drawing tree produced by parsing, plus measuring and recoloring it.

Nodes are immutable; edits return a new tree that shares the untouched
parts of the old one.
"""

import dataclasses
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple, Union
from svgdrawing import colors
from svgdrawing import svg_pathops
from svgdrawing.geometric_types import Rect, union_all
from svgdrawing.svg_text import GlyphRun
from svgdrawing.svg_transform import Affine2D, Transform, TransformGroup
from svgdrawing.svg_types import Brush, Geometry, Pen


@dataclasses.dataclass(frozen=True)
class GeometryDrawing:
    geometry: Geometry
    brush: Optional[Brush] = None
    pen: Optional[Pen] = None

    def bounds(self, affine: Affine2D = Affine2D.identity()) -> Optional[Rect]:
        geometry_affine = Affine2D.identity()
        if self.geometry.transform is not None:
            geometry_affine = self.geometry.transform.matrix()
        return svg_pathops.bounding_box(
            self.geometry.as_cmd_seq(), geometry_affine, self.pen, affine
        )


@dataclasses.dataclass(frozen=True)
class GlyphRunDrawing:
    # None when no font could be found for the text
    glyph_run: Optional[GlyphRun]
    foreground_brush: Optional[Brush] = None

    def bounds(self, affine: Affine2D = Affine2D.identity()) -> Optional[Rect]:
        if self.glyph_run is None:
            return None
        geometry = self.glyph_run.build_geometry()
        return svg_pathops.bounding_box(geometry.as_cmd_seq(), outer_affine=affine)


@dataclasses.dataclass(frozen=True)
class DrawingGroup:
    children: Tuple["Drawing", ...] = ()
    transform: Optional[Transform] = None

    def child_affine(self, affine: Affine2D = Affine2D.identity()) -> Affine2D:
        """Maps child coordinates to the space affine maps into."""
        if self.transform is None:
            return affine
        return Affine2D.product(self.transform.matrix(), affine)

    def bounds(self, affine: Affine2D = Affine2D.identity()) -> Optional[Rect]:
        child_affine = self.child_affine(affine)
        return union_all(c.bounds(child_affine) for c in self.children)


Drawing = Union[GeometryDrawing, GlyphRunDrawing, DrawingGroup]


class DrawingTraverseContext(NamedTuple):
    drawing: Drawing
    # outermost first; excludes drawing itself
    ancestors: Tuple[DrawingGroup, ...]
    # maps drawing's coordinates to the image's
    transform: Affine2D

    def depth(self) -> int:
        return len(self.ancestors)


@dataclasses.dataclass(frozen=True)
class DrawingImage:
    drawing: DrawingGroup = DrawingGroup()

    def bounds(self) -> Optional[Rect]:
        """Bounds of everything painted, None for an empty image."""
        return self.drawing.bounds()

    def _traverse(self, next_fn, append_fn) -> Iterator[DrawingTraverseContext]:
        frontier = [DrawingTraverseContext(self.drawing, (), Affine2D.identity())]
        while frontier:
            context = next_fn(frontier)
            yield context

            group = context.drawing
            if not isinstance(group, DrawingGroup):
                continue
            ancestors = context.ancestors + (group,)
            child_affine = group.child_affine(context.transform)
            append_fn(
                frontier,
                [
                    DrawingTraverseContext(child, ancestors, child_affine)
                    for child in group.children
                ],
            )

    def depth_first(self) -> Iterator[DrawingTraverseContext]:
        # dfs will take from the back
        # reverse so this still yields in order (first child, second child, etc)
        yield from self._traverse(lambda f: f.pop(), lambda f, e: f.extend(reversed(e)))

    def breadth_first(self) -> Iterator[DrawingTraverseContext]:
        yield from self._traverse(lambda f: f.pop(0), lambda f, e: f.extend(e))


def accumulated_transform(ancestors: Sequence[DrawingGroup]) -> TransformGroup:
    """The transforms of a chain of groups, listed outermost first, as one group.

    Children are in application order, so the innermost group's transform
    comes first. Groups without a transform contribute nothing.
    """
    return TransformGroup(
        tuple(g.transform for g in reversed(ancestors) if g.transform is not None)
    )


def _replacement(existing: Brush, replacement: Brush) -> Brush:
    # keep the opacity the replaced brush had
    return colors.apply_opacity_to_brush(replacement, colors.brush_opacity(existing))


def _replace_in_group(group: DrawingGroup, replace_fn) -> DrawingGroup:
    children = []
    for child in group.children:
        if isinstance(child, DrawingGroup):
            child = _replace_in_group(child, replace_fn)
        elif isinstance(child, GeometryDrawing):
            child = replace_fn(child)
        children.append(child)
    children = tuple(children)
    if children == group.children:
        return group
    return dataclasses.replace(group, children=children)


def replace_fill_brush(
    image: DrawingImage, existing: Brush, replacement: Brush
) -> DrawingImage:
    """Returns a copy of image with fills matching existing by color replaced."""

    def replace_fn(drawing: GeometryDrawing) -> GeometryDrawing:
        if drawing.brush is None or not colors.brushes_equal_by_color(
            drawing.brush, existing
        ):
            return drawing
        return dataclasses.replace(drawing, brush=_replacement(existing, replacement))

    return DrawingImage(_replace_in_group(image.drawing, replace_fn))


def replace_stroke_brush(
    image: DrawingImage, existing: Brush, replacement: Brush
) -> DrawingImage:
    """Returns a copy of image with pens whose brush matches existing recolored.

    Everything else about the pen, thickness and caps included, is kept.
    """

    def replace_fn(drawing: GeometryDrawing) -> GeometryDrawing:
        pen = drawing.pen
        if pen is None or not colors.brushes_equal_by_color(pen.brush, existing):
            return drawing
        pen = dataclasses.replace(pen, brush=_replacement(existing, replacement))
        return dataclasses.replace(drawing, pen=pen)

    return DrawingImage(_replace_in_group(image.drawing, replace_fn))
