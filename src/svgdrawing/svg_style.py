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

"""Style cascade: style declarations, presentation attributes, inherited state.

Precedence, highest first, is the style attribute, then presentation
attributes on the element, then properties inherited from ancestor groups.
Opacities don't override one another; they multiply.

https://www.w3.org/TR/SVG11/styling.html
"""

import dataclasses
import enum
from absl import logging
from lxml import etree  # pytype: disable=import-error
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple
from svgdrawing import colors
from svgdrawing import svg_meta
from svgdrawing.errors import FormatError
from svgdrawing.svg_defs import SVGDefinitions
from svgdrawing.svg_transform import Transform, parse_transform
from svgdrawing.svg_types import (
    Brush,
    Color,
    FillRule,
    LinearGradientBrush,
    Pen,
    PenLineCap,
    PenLineJoin,
    RadialGradientBrush,
    SolidColorBrush,
)


class PropertyName(enum.Enum):
    FILL = svg_meta.FILL
    FILL_OPACITY = svg_meta.FILL_OPACITY
    FILL_RULE = svg_meta.FILL_RULE
    STROKE = svg_meta.STROKE
    STROKE_WIDTH = svg_meta.STROKE_WIDTH
    STROKE_LINECAP = svg_meta.STROKE_LINECAP
    STROKE_LINEJOIN = svg_meta.STROKE_LINEJOIN
    STROKE_MITERLIMIT = svg_meta.STROKE_MITERLIMIT
    STROKE_DASHARRAY = svg_meta.STROKE_DASHARRAY
    STROKE_DASHOFFSET = svg_meta.STROKE_DASHOFFSET
    STROKE_OPACITY = svg_meta.STROKE_OPACITY
    OPACITY = svg_meta.OPACITY
    STOP_COLOR = svg_meta.STOP_COLOR
    STOP_OPACITY = svg_meta.STOP_OPACITY
    TRANSFORM = svg_meta.TRANSFORM


PropertyMap = Dict[PropertyName, Any]


def _paint(value: str) -> Optional[Brush]:
    try:
        return colors.parse_brush(value)
    except FormatError as e:
        logging.warning("Ignoring paint %r: %s", value, e)
        return None


def _stop_color(value: str) -> Optional[Color]:
    try:
        return colors.parse_color(value)
    except FormatError as e:
        logging.warning("Ignoring stop-color %r: %s", value, e)
        return None


_FILL_RULES = {"nonzero": FillRule.NONZERO, "evenodd": FillRule.EVENODD}

_LINE_CAPS = {
    "butt": PenLineCap.FLAT,
    "round": PenLineCap.ROUND,
    "square": PenLineCap.SQUARE,
}

# miter-clip has no equivalent, use miter
_LINE_JOINS = {
    "miter": PenLineJoin.MITER,
    "miter-clip": PenLineJoin.MITER,
    "round": PenLineJoin.ROUND,
    "bevel": PenLineJoin.BEVEL,
}


def _keyword(table, default):
    def parse(value: str):
        return table.get(value.strip().lower(), default)

    return parse


def parse_fill_rule(value: str) -> FillRule:
    return _FILL_RULES.get(value.strip().lower(), FillRule.NONZERO)


def _miter_limit(value: float) -> float:
    return max(1.0, value)


def _miter_limit_literal(value: str) -> Optional[float]:
    limit = svg_meta.try_parse_float(value)
    return None if limit is None else _miter_limit(limit)


def _dash_array(value: str) -> Tuple[float, ...]:
    if value.strip() == svg_meta.NONE:
        return ()
    return tuple(svg_meta.try_parse_float(v) or 0.0 for v in svg_meta.split_numbers(value))


class _PropertyParser(NamedTuple):
    # literal text => value, None to ignore the declaration
    parse: Callable[[str], Any]
    # what a url(#id) reference must resolve to
    kind: Any
    # value used when a url(#id) reference doesn't resolve
    default: Any
    coerce: Callable[[Any], Any] = lambda v: v


_BRUSH_KINDS = (SolidColorBrush, LinearGradientBrush, RadialGradientBrush)
_BLACK = SolidColorBrush(Color.BLACK)

_PROPERTY_PARSERS: Dict[PropertyName, _PropertyParser] = {
    PropertyName.FILL: _PropertyParser(_paint, _BRUSH_KINDS, _BLACK),
    PropertyName.FILL_OPACITY: _PropertyParser(svg_meta.try_parse_float, float, 0.0),
    PropertyName.FILL_RULE: _PropertyParser(parse_fill_rule, FillRule, FillRule.NONZERO),
    PropertyName.STROKE: _PropertyParser(_paint, _BRUSH_KINDS, _BLACK),
    PropertyName.STROKE_WIDTH: _PropertyParser(svg_meta.try_parse_float, float, 0.0),
    PropertyName.STROKE_LINECAP: _PropertyParser(
        _keyword(_LINE_CAPS, PenLineCap.FLAT), PenLineCap, PenLineCap.FLAT
    ),
    PropertyName.STROKE_LINEJOIN: _PropertyParser(
        _keyword(_LINE_JOINS, PenLineJoin.MITER), PenLineJoin, PenLineJoin.MITER
    ),
    PropertyName.STROKE_MITERLIMIT: _PropertyParser(
        _miter_limit_literal, float, 0.0, _miter_limit
    ),
    PropertyName.STROKE_DASHARRAY: _PropertyParser(_dash_array, tuple, ()),
    PropertyName.STROKE_DASHOFFSET: _PropertyParser(
        svg_meta.try_parse_float, float, 0.0
    ),
    PropertyName.STROKE_OPACITY: _PropertyParser(svg_meta.try_parse_float, float, 0.0),
    PropertyName.OPACITY: _PropertyParser(svg_meta.try_parse_float, float, 0.0),
    PropertyName.STOP_COLOR: _PropertyParser(_stop_color, Color, Color.BLACK),
    PropertyName.STOP_OPACITY: _PropertyParser(svg_meta.try_parse_float, float, 0.0),
    PropertyName.TRANSFORM: _PropertyParser(
        parse_transform, Transform, Transform.identity()
    ),
}


def parse_property(
    name: PropertyName, value: str, definitions: SVGDefinitions
) -> Optional[Any]:
    """Parse one property value; None means ignore it.

    A url(#id) reference resolves against definitions; a reference to a
    missing id, or to an artifact of the wrong kind, gives the property's
    default. Raises FormatError only for a malformed transform.
    """
    parser = _PROPERTY_PARSERS[name]
    ref = svg_meta.reference_id(value)
    if ref is None:
        return parser.parse(value)
    artifact = definitions.get(ref, parser.kind)
    if artifact is None:
        logging.warning("Unresolved reference url(#%s) for %s", ref, name.value)
        return parser.default
    return parser.coerce(artifact)


def _declarations(style: str):
    for declaration in style.split(";"):
        declaration = declaration.strip(" \t\r\n,")
        if ":" not in declaration:
            continue
        key, value = declaration.split(":", 1)
        yield key.strip().lower(), value.strip()


_PROPERTY_NAMES = {p.value: p for p in PropertyName}


def parse_style(style: str, definitions: SVGDefinitions) -> PropertyMap:
    """Parse a style attribute into a map of the properties we understand.

    'fill: red; stroke-width: 2' => {FILL: SolidColorBrush(red), STROKE_WIDTH: 2.0}

    Unknown properties are ignored, as are values that don't parse.
    """
    result = {}
    for key, value in _declarations(style):
        name = _PROPERTY_NAMES.get(key)
        if name is None:
            continue
        parsed = parse_property(name, value, definitions)
        if parsed is not None:
            result[name] = parsed
    return result


def parse_presentation_attributes(
    el: etree.Element, definitions: SVGDefinitions
) -> PropertyMap:
    """Same as parse_style, reading from attributes such as fill="red"."""
    result = {}
    for name in PropertyName:
        value = el.attrib.get(name.value)
        if value is None:
            continue
        parsed = parse_property(name, value, definitions)
        if parsed is not None:
            result[name] = parsed
    return result


@dataclasses.dataclass(frozen=True)
class InheritedGroupState:
    """Properties a <g> passes down to its descendants.

    Values are kept as written and resolved by each element that uses them.
    """

    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    fill: Optional[str] = None
    fill_rule: Optional[str] = None
    opacity: float = 1.0

    def updated_from(self, el: etree.Element) -> "InheritedGroupState":
        """Returns a copy updated by the attributes present on el."""
        changes = {}
        attrib = el.attrib
        if svg_meta.STROKE in attrib:
            changes["stroke"] = attrib[svg_meta.STROKE]
        width = svg_meta.try_parse_float(attrib.get(svg_meta.STROKE_WIDTH))
        if width is not None:
            changes["stroke_width"] = width
        if svg_meta.FILL in attrib:
            changes["fill"] = attrib[svg_meta.FILL]
        if svg_meta.FILL_RULE in attrib:
            changes["fill_rule"] = attrib[svg_meta.FILL_RULE]
        opacity = svg_meta.try_parse_float(attrib.get(svg_meta.OPACITY))
        if opacity is not None:
            changes["opacity"] = self.opacity * min(max(opacity, 0.0), 1.0)
        if not changes:
            return self
        return dataclasses.replace(self, **changes)


class Paint(NamedTuple):
    fill: Optional[Brush]
    pen: Optional[Pen]
    fill_rule: FillRule


def _cascade(
    name: PropertyName, style: PropertyMap, attributes: PropertyMap
) -> Optional[Any]:
    if name in style:
        return style[name]
    return attributes.get(name)


def _inherited_paint(
    value: Optional[str], definitions: SVGDefinitions
) -> Optional[Brush]:
    if not value:
        return None
    return parse_property(PropertyName.FILL, value, definitions)


def _with_opacity(brush: Brush, opacity: float) -> Brush:
    # fill="none" stays transparent whatever opacity says
    if colors.is_transparent(brush):
        return brush
    return colors.apply_opacity_to_brush(brush, opacity)


def _resolve_pen(
    style: PropertyMap,
    attributes: PropertyMap,
    inherited: InheritedGroupState,
    definitions: SVGDefinitions,
    opacity: float,
) -> Optional[Pen]:
    brush = _cascade(PropertyName.STROKE, style, attributes)
    if brush is None:
        brush = _inherited_paint(inherited.stroke, definitions)
    if brush is None:
        return None

    thickness = _cascade(PropertyName.STROKE_WIDTH, style, attributes)
    if thickness is None:
        thickness = inherited.stroke_width
    if thickness == 0:
        # https://www.w3.org/TR/SVG11/painting.html#StrokeWidthProperty
        return None
    if thickness is None or thickness < 0:
        thickness = 1.0

    stroke_opacity = _cascade(PropertyName.STROKE_OPACITY, style, attributes)
    if stroke_opacity is not None:
        opacity *= stroke_opacity

    cap = _cascade(PropertyName.STROKE_LINECAP, style, attributes) or PenLineCap.FLAT
    dash_array = _cascade(PropertyName.STROKE_DASHARRAY, style, attributes) or ()
    dash_offset = 0.0
    if dash_array:
        dash_offset = _cascade(PropertyName.STROKE_DASHOFFSET, style, attributes) or 0.0
    miter_limit = _cascade(PropertyName.STROKE_MITERLIMIT, style, attributes)

    return Pen(
        brush=_with_opacity(brush, opacity),
        thickness=thickness,
        start_line_cap=cap,
        end_line_cap=cap,
        line_join=_cascade(PropertyName.STROKE_LINEJOIN, style, attributes)
        or PenLineJoin.MITER,
        miter_limit=10.0 if miter_limit is None else miter_limit,
        dash_array=dash_array,
        dash_offset=dash_offset,
    )


def resolve_paint(
    style: PropertyMap,
    attributes: PropertyMap,
    inherited: InheritedGroupState,
    definitions: SVGDefinitions,
    with_fill: bool = True,
) -> Paint:
    """Resolve the fill brush, pen and fill rule for an element.

    The effective opacity of each brush is its own fill/stroke-opacity times
    the element's opacity times the inherited group opacity. Without a fill
    anywhere in the chain the fill is opaque black (before opacity).

    with_fill=False skips fill resolution and yields no fill, for elements
    that can't be filled such as <line>.
    """
    opacity = inherited.opacity
    element_opacity = _cascade(PropertyName.OPACITY, style, attributes)
    if element_opacity is not None:
        opacity *= element_opacity

    if with_fill:
        fill = _cascade(PropertyName.FILL, style, attributes)
        if fill is None:
            fill = _inherited_paint(inherited.fill, definitions)
        if fill is None:
            fill = _BLACK
        fill_opacity = _cascade(PropertyName.FILL_OPACITY, style, attributes)
        if fill_opacity is not None:
            fill = _with_opacity(fill, opacity * fill_opacity)
        else:
            fill = _with_opacity(fill, opacity)
    else:
        fill = None

    fill_rule = _cascade(PropertyName.FILL_RULE, style, attributes)
    if fill_rule is None:
        fill_rule = parse_fill_rule(inherited.fill_rule or "")

    return Paint(
        fill,
        _resolve_pen(style, attributes, inherited, definitions, opacity),
        fill_rule,
    )


def resolve_transform(
    style: PropertyMap, attributes: PropertyMap
) -> Optional[Transform]:
    return _cascade(PropertyName.TRANSFORM, style, attributes)
