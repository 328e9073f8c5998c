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

"""Names, tokens and small scalar parsers shared by the svg readers."""

import re
from lxml import etree  # pytype: disable=import-error
from typing import Generator, Iterable, Optional, Tuple


SVGCommand = Tuple[str, Tuple[float, ...]]
SVGCommandSeq = Iterable[SVGCommand]
SVGCommandGen = Generator[SVGCommand, None, None]


def xlinkns():
    return "http://www.w3.org/1999/xlink"


def splitns(name):
    qn = etree.QName(name)
    return qn.namespace, qn.localname


def strip_ns(tagname):
    return splitns(tagname)[1]


# Element names
SVG = "svg"
G = "g"
DEFS = "defs"
PATH = "path"
RECT = "rect"
CIRCLE = "circle"
ELLIPSE = "ellipse"
LINE = "line"
POLYGON = "polygon"
POLYLINE = "polyline"
TEXT = "text"
LINEAR_GRADIENT = "linearGradient"
RADIAL_GRADIENT = "radialGradient"
STOP = "stop"

# Presentation attributes and style properties
ID = "id"
STYLE = "style"
TRANSFORM = "transform"
FILL = "fill"
FILL_OPACITY = "fill-opacity"
FILL_RULE = "fill-rule"
STROKE = "stroke"
STROKE_WIDTH = "stroke-width"
STROKE_LINECAP = "stroke-linecap"
STROKE_LINEJOIN = "stroke-linejoin"
STROKE_MITERLIMIT = "stroke-miterlimit"
STROKE_DASHARRAY = "stroke-dasharray"
STROKE_DASHOFFSET = "stroke-dashoffset"
STROKE_OPACITY = "stroke-opacity"
OPACITY = "opacity"
STOP_COLOR = "stop-color"
STOP_OPACITY = "stop-opacity"
OFFSET = "offset"

# Text
FONT_FAMILY = "font-family"
FONT_SIZE = "font-size"
FONT_WEIGHT = "font-weight"
FONT_STYLE = "font-style"

# Gradients
HREF = "href"
GRADIENT_TRANSFORM = "gradientTransform"
GRADIENT_UNITS = "gradientUnits"
SPREAD_METHOD = "spreadMethod"
USER_SPACE_ON_USE = "userSpaceOnUse"

# Keywords
NONE = "none"
RGB = "rgb"


def xlink_href_attr_name() -> str:
    return f"{{{xlinkns()}}}href"


# https://www.w3.org/TR/SVG11/paths.html#PathData
_CMD_ARGS = {
    "m": 2,
    "z": 0,
    "l": 2,
    "h": 1,
    "v": 1,
    "c": 6,
    "s": 4,
    "q": 4,
    "t": 2,
    "a": 7,
}
_CMD_ARGS.update({k.upper(): v for k, v in _CMD_ARGS.items()})


def check_cmd(cmd, args):
    cmd_args = num_args(cmd)
    if cmd_args == 0:
        if args:
            raise ValueError(f"{cmd} has no args, {len(args)} invalid")
    elif len(args) % cmd_args != 0:
        raise ValueError(f"{cmd} has sets of {cmd_args} args, {len(args)} invalid")
    return cmd_args


def num_args(cmd):
    if not cmd in _CMD_ARGS:
        raise ValueError(f'Invalid svg command "{cmd}"')
    return _CMD_ARGS[cmd]


def cmds():
    return _CMD_ARGS.keys()


# For each command iterable of x-coords and iterable of y-coords
_CMD_COORDS = {
    "m": ((0,), (1,)),
    "z": ((), ()),
    "l": ((0,), (1,)),
    "h": ((0,), ()),
    "v": ((), (0,)),
    "c": ((0, 2, 4), (1, 3, 5)),
    "s": ((0, 2), (1, 3)),
    "q": ((0, 2), (1, 3)),
    "t": ((0,), (1,)),
    "a": ((5,), (6,)),
}
_CMD_COORDS.update({k.upper(): v for k, v in _CMD_COORDS.items()})


def cmd_coords(cmd):
    if not cmd in _CMD_ARGS:
        raise ValueError(f'Invalid svg command "{cmd}"')
    return _CMD_COORDS[cmd]


def try_parse_float(s: Optional[str]) -> Optional[float]:
    """Lenient float parse; None for missing or malformed input.

    Used for geometry attributes, where a typo must not abort the document.
    """
    if s is None:
        return None
    try:
        return float(s.strip())
    except ValueError:
        return None


# Reference: https://www.w3.org/TR/css-values-3/#absolute-lengths
_CSS_UNITS_TO_PX = {
    "px": 1.0,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "mm": 96.0 / 25.4,
    "cm": 96.0 / 2.54,
    "in": 96.0,
}
_CSS_LENGTH_RE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)([a-zA-Z]*)$")


def parse_css_length(s: str) -> Optional[float]:
    """Parse a CSS absolute length ('12', '12px', '9pt') to device independent px.

    Returns None when the value is not a number with a known absolute unit.
    """
    match = _CSS_LENGTH_RE.match(s.strip())
    if not match:
        return None
    number, unit = match.groups()
    unit = unit.lower() or "px"
    if unit not in _CSS_UNITS_TO_PX:
        return None
    return float(number) * _CSS_UNITS_TO_PX[unit]


_URL_RE = re.compile(r"^\s*url\s*\(\s*#?([^)\s]*)\s*\)", re.IGNORECASE)


def reference_id(value: str) -> Optional[str]:
    """Return the id in 'url(#id)', or None if value isn't a url reference."""
    match = _URL_RE.match(value)
    if not match:
        return None
    return match.group(1)


def href_id(value: str) -> str:
    """Return the id an href ('#id') points at."""
    return value.strip().lstrip("#")


def split_numbers(s: str) -> Tuple[str, ...]:
    """Split a whitespace and/or comma separated list, dropping empty tokens."""
    return tuple(t for t in re.split(r"[\s,]+", s.strip()) if t)


# svgs are fond of not declaring xlink; such attributes are renamed to this
# before parsing
XLINK_HREF_TEMP = "xlink_href"


def href_attr_names() -> Tuple[str, ...]:
    return (HREF, xlink_href_attr_name(), XLINK_HREF_TEMP)
