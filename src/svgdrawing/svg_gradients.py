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

"""<linearGradient> and <radialGradient> to gradient brushes.

https://www.w3.org/TR/SVG11/pservers.html
"""

from absl import logging
from lxml import etree  # pytype: disable=import-error
from typing import Callable, Dict, Optional, Tuple
from svgdrawing import colors
from svgdrawing import svg_meta
from svgdrawing.geometric_types import Point
from svgdrawing.svg_defs import SVGDefinitions
from svgdrawing.svg_style import (
    PropertyName,
    parse_presentation_attributes,
    parse_style,
)
from svgdrawing.svg_transform import parse_transform
from svgdrawing.svg_types import (
    Color,
    GradientBrush,
    GradientStop,
    LinearGradientBrush,
    MappingMode,
    RadialGradientBrush,
    SpreadMethod,
)


_SPREAD_METHODS = {s.value: s for s in SpreadMethod}

_GRADIENT_KINDS = (LinearGradientBrush, RadialGradientBrush)


def _float_attr(el: etree.Element, name: str) -> Optional[float]:
    return svg_meta.try_parse_float(el.attrib.get(name))


def _point_attrs(el: etree.Element, x_name: str, y_name: str, default: Point) -> Point:
    x = _float_attr(el, x_name)
    y = _float_attr(el, y_name)
    return Point(default.x if x is None else x, default.y if y is None else y)


def _offset(raw: Optional[str]) -> float:
    if raw is None:
        return 0.0
    raw = raw.strip()
    scale = 1.0
    if raw.endswith("%"):
        raw, scale = raw[:-1], 0.01
    offset = svg_meta.try_parse_float(raw)
    if offset is None:
        return 0.0
    return min(max(offset * scale, 0.0), 1.0)


def parse_stop(el: etree.Element, definitions: SVGDefinitions) -> GradientStop:
    """A <stop>: offset, stop-color and stop-opacity; style wins over attributes."""
    attributes = parse_presentation_attributes(el, definitions)
    style = parse_style(el.attrib.get(svg_meta.STYLE, ""), definitions)

    color = style.get(PropertyName.STOP_COLOR)
    if color is None:
        color = attributes.get(PropertyName.STOP_COLOR, Color.BLACK)
    opacity = style.get(PropertyName.STOP_OPACITY)
    if opacity is None:
        opacity = attributes.get(PropertyName.STOP_OPACITY, 1.0)
    # opacity applies after the color is settled
    color = colors.apply_opacity_to_color(color, opacity)

    return GradientStop(color, _offset(el.attrib.get(svg_meta.OFFSET)))


def _stops(el: etree.Element, definitions: SVGDefinitions) -> Tuple[GradientStop, ...]:
    return tuple(
        parse_stop(child, definitions)
        for child in el
        if isinstance(child.tag, str) and svg_meta.strip_ns(child.tag) == svg_meta.STOP
    )


def _referenced_gradient(
    el: etree.Element, definitions: SVGDefinitions
) -> Optional[GradientBrush]:
    href = next(
        (el.attrib[n] for n in svg_meta.href_attr_names() if n in el.attrib), None
    )
    if href is None:
        return None
    ref_id = svg_meta.href_id(href)
    gradient = definitions.get(ref_id, _GRADIENT_KINDS)
    if gradient is None:
        logging.warning("Gradient href to unknown gradient #%s", ref_id)
    return gradient


def _common_fields(el: etree.Element, definitions: SVGDefinitions) -> dict:
    """Fields shared by both kinds, as written on el."""
    fields = {"stops": _stops(el, definitions)}
    if svg_meta.GRADIENT_TRANSFORM in el.attrib:
        fields["transform"] = parse_transform(el.attrib[svg_meta.GRADIENT_TRANSFORM])
    if svg_meta.GRADIENT_UNITS in el.attrib:
        if el.attrib[svg_meta.GRADIENT_UNITS] == svg_meta.USER_SPACE_ON_USE:
            fields["mapping_mode"] = MappingMode.ABSOLUTE
        else:
            fields["mapping_mode"] = MappingMode.RELATIVE_TO_BOUNDING_BOX
    if svg_meta.SPREAD_METHOD in el.attrib:
        fields["spread_method"] = _SPREAD_METHODS.get(
            el.attrib[svg_meta.SPREAD_METHOD].strip(), SpreadMethod.PAD
        )
    return fields


def _inherit_common(fields: dict, referenced: GradientBrush) -> dict:
    # only what el doesn't say itself comes from the referenced gradient
    if not fields["stops"]:
        fields["stops"] = referenced.stops
    for name in ("transform", "mapping_mode", "spread_method"):
        fields.setdefault(name, getattr(referenced, name))
    return fields


def _unset(value, default_brush, name: str) -> bool:
    # an attribute written with its default value can't be told from one that
    # is absent; both take the referenced gradient's value
    return value == getattr(default_brush, name)


def parse_linear_gradient(
    el: etree.Element, definitions: SVGDefinitions
) -> LinearGradientBrush:
    defaults = LinearGradientBrush()
    fields = _common_fields(el, definitions)
    fields["start_point"] = _point_attrs(el, "x1", "y1", defaults.start_point)
    fields["end_point"] = _point_attrs(el, "x2", "y2", defaults.end_point)

    referenced = _referenced_gradient(el, definitions)
    if referenced is not None:
        fields = _inherit_common(fields, referenced)
        if isinstance(referenced, LinearGradientBrush):
            for name in ("start_point", "end_point"):
                if _unset(fields[name], defaults, name):
                    fields[name] = getattr(referenced, name)

    return LinearGradientBrush(**fields)


def parse_radial_gradient(
    el: etree.Element, definitions: SVGDefinitions
) -> RadialGradientBrush:
    defaults = RadialGradientBrush()
    fields = _common_fields(el, definitions)
    fields["center"] = _point_attrs(el, "cx", "cy", defaults.center)
    fields["gradient_origin"] = _point_attrs(el, "fx", "fy", defaults.gradient_origin)
    radius = _float_attr(el, "r")
    if radius is not None:
        fields["radius_x"] = fields["radius_y"] = radius

    referenced = _referenced_gradient(el, definitions)
    if referenced is not None:
        fields = _inherit_common(fields, referenced)
        if isinstance(referenced, RadialGradientBrush):
            for name in ("center", "gradient_origin"):
                if _unset(fields[name], defaults, name):
                    fields[name] = getattr(referenced, name)
            if radius is None:
                fields["radius_x"] = referenced.radius_x
                fields["radius_y"] = referenced.radius_y

    return RadialGradientBrush(**fields)


GRADIENT_CONVERTERS: Dict[
    str, Callable[[etree.Element, SVGDefinitions], GradientBrush]
] = {
    svg_meta.LINEAR_GRADIENT: parse_linear_gradient,
    svg_meta.RADIAL_GRADIENT: parse_radial_gradient,
}
