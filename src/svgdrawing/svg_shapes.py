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

"""Shape elements to drawings.

Every converter takes an ElementContext and returns a drawing. Paint comes
from the style cascade; geometry comes from the element's own attributes,
where a value that doesn't parse leaves the field at its default.
"""

import dataclasses
from absl import logging
from lxml import etree  # pytype: disable=import-error
from typing import Callable, Dict, NamedTuple, Optional, Union
from svgdrawing import svg_meta
from svgdrawing import svg_text
from svgdrawing.drawing import GeometryDrawing, GlyphRunDrawing
from svgdrawing.geometric_types import Point
from svgdrawing.options import ParseOptions
from svgdrawing.svg_defs import SVGDefinitions
from svgdrawing.svg_path_data import parse_path_data, parse_points
from svgdrawing.svg_style import (
    InheritedGroupState,
    Paint,
    parse_presentation_attributes,
    parse_style,
    resolve_paint,
    resolve_transform,
)
from svgdrawing.svg_types import (
    EllipseGeometry,
    Geometry,
    LinearGradientBrush,
    LineGeometry,
    PathGeometry,
    RadialGradientBrush,
    RectangleGeometry,
    path_from_points,
)


class ElementContext(NamedTuple):
    element: etree.Element
    definitions: SVGDefinitions
    inherited: InheritedGroupState
    options: ParseOptions
    fonts: svg_text.FontResolver

    def number(self, name: str, default: float = 0.0) -> float:
        value = svg_meta.try_parse_float(self.element.attrib.get(name))
        return default if value is None else value

    def paint(self, with_fill: bool = True, properties=None) -> Paint:
        style, attributes = properties or self.properties()
        return resolve_paint(
            style, attributes, self.inherited, self.definitions, with_fill
        )

    def properties(self):
        style = parse_style(
            self.element.attrib.get(svg_meta.STYLE, ""), self.definitions
        )
        attributes = parse_presentation_attributes(self.element, self.definitions)
        return style, attributes


def _geometry_drawing(
    context: ElementContext, geometry: Geometry, with_fill: bool = True
) -> GeometryDrawing:
    properties = context.properties()
    paint = context.paint(with_fill, properties)
    fill = paint.fill

    if isinstance(geometry, PathGeometry):
        geometry = dataclasses.replace(geometry, fill_rule=paint.fill_rule)

    transform = resolve_transform(*properties)
    if transform is not None:
        geometry = dataclasses.replace(geometry, transform=transform)
        # a gradient has to move with the shape it paints
        if isinstance(fill, (LinearGradientBrush, RadialGradientBrush)) and (
            not transform.is_identity()
        ):
            fill = dataclasses.replace(fill, transform=fill.transform.append(transform))

    return GeometryDrawing(geometry, fill, paint.pen)


# https://www.w3.org/TR/SVG11/shapes.html#RectElement
def parse_rect(context: ElementContext) -> GeometryDrawing:
    geometry = RectangleGeometry(
        x=context.number("x"),
        y=context.number("y"),
        width=max(0.0, context.number("width")),
        height=max(0.0, context.number("height")),
        radius_x=context.number("rx"),
        radius_y=context.number("ry"),
    )
    return _geometry_drawing(context, geometry)


# https://www.w3.org/TR/SVG11/shapes.html#CircleElement
def parse_circle(context: ElementContext) -> GeometryDrawing:
    r = context.number("r")
    geometry = EllipseGeometry(
        center=Point(context.number("cx"), context.number("cy")),
        radius_x=r,
        radius_y=r,
    )
    return _geometry_drawing(context, geometry)


# https://www.w3.org/TR/SVG11/shapes.html#EllipseElement
def parse_ellipse(context: ElementContext) -> GeometryDrawing:
    geometry = EllipseGeometry(
        center=Point(context.number("cx"), context.number("cy")),
        radius_x=context.number("rx"),
        radius_y=context.number("ry"),
    )
    return _geometry_drawing(context, geometry)


# https://www.w3.org/TR/SVG11/shapes.html#LineElement
def parse_line(context: ElementContext) -> GeometryDrawing:
    geometry = LineGeometry(
        start_point=Point(context.number("x1"), context.number("y1")),
        end_point=Point(context.number("x2"), context.number("y2")),
    )
    # lines have no interior
    return _geometry_drawing(context, geometry, with_fill=False)


def _points(context: ElementContext):
    try:
        return parse_points(context.element.attrib.get("points", ""))
    except ValueError as e:
        logging.warning("Ignoring points of <%s>: %s", _tag(context.element), e)
        return ()


# https://www.w3.org/TR/SVG11/shapes.html#PolylineElement
def parse_polyline(context: ElementContext) -> GeometryDrawing:
    geometry = path_from_points(_points(context), closed=False)
    return _geometry_drawing(context, geometry)


# https://www.w3.org/TR/SVG11/shapes.html#PolygonElement
def parse_polygon(context: ElementContext) -> GeometryDrawing:
    points = _points(context)
    if points and points[-1] != points[0]:
        points += (points[0],)
    geometry = path_from_points(points, closed=True)
    return _geometry_drawing(context, geometry)


# https://www.w3.org/TR/SVG11/paths.html#PathElement
def parse_path(context: ElementContext) -> GeometryDrawing:
    try:
        figures = parse_path_data(context.element.attrib.get("d", ""))
    except ValueError as e:
        logging.warning("Ignoring malformed path data: %s", e)
        figures = ()
    return _geometry_drawing(context, PathGeometry(figures=figures))


# https://www.w3.org/TR/SVG11/text.html#TextElement
def parse_text(context: ElementContext) -> GlyphRunDrawing:
    el = context.element
    options = context.options
    foreground = context.paint().fill

    families = options.default_font_family
    if svg_meta.FONT_FAMILY in el.attrib:
        families = f"{el.attrib[svg_meta.FONT_FAMILY]}, {families}"
    font_size = options.default_font_size
    if svg_meta.FONT_SIZE in el.attrib:
        font_size = svg_meta.parse_css_length(el.attrib[svg_meta.FONT_SIZE]) or font_size
    weight = svg_text.parse_font_weight(el.attrib.get(svg_meta.FONT_WEIGHT))
    italic = svg_text.parse_font_style(el.attrib.get(svg_meta.FONT_STYLE))

    face = context.fonts.resolve(families, weight, italic)
    if face is None:
        return GlyphRunDrawing(None, foreground)

    glyph_run = svg_text.layout(
        context.fonts.font(face),
        face,
        "".join(el.itertext()),
        font_size,
        Point(context.number("x"), context.number("y")),
        options.pixels_per_dip,
    )
    return GlyphRunDrawing(glyph_run, foreground)


def _tag(el: etree.Element) -> str:
    return svg_meta.strip_ns(el.tag)


ShapeDrawing = Union[GeometryDrawing, GlyphRunDrawing]

SHAPE_CONVERTERS: Dict[str, Callable[[ElementContext], ShapeDrawing]] = {
    svg_meta.PATH: parse_path,
    svg_meta.RECT: parse_rect,
    svg_meta.CIRCLE: parse_circle,
    svg_meta.ELLIPSE: parse_ellipse,
    svg_meta.LINE: parse_line,
    svg_meta.POLYLINE: parse_polyline,
    svg_meta.POLYGON: parse_polygon,
    svg_meta.TEXT: parse_text,
}


def from_element(context: ElementContext) -> Optional[ShapeDrawing]:
    """Drawing for a shape element, None if the tag isn't a shape we know."""
    converter = SHAPE_CONVERTERS.get(_tag(context.element))
    if converter is None:
        return None
    return converter(context)
