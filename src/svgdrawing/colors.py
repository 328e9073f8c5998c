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

"""Paint values: colors, solid and gradient brushes, opacity.

https://www.w3.org/TR/SVG11/painting.html#SpecifyingPaint
"""

import dataclasses
import tinycss2.color3
from svgdrawing import svg_meta
from svgdrawing.errors import FormatError
from svgdrawing.svg_types import (
    Brush,
    Color,
    GradientStop,
    LinearGradientBrush,
    RadialGradientBrush,
    SolidColorBrush,
)


def _byte(component: str) -> int:
    # malformed or out of range components read as 0
    try:
        value = int(component.strip())
    except ValueError:
        return 0
    return value if 0 <= value <= 255 else 0


def _parse_rgb(value: str) -> Color:
    parts = value[len(svg_meta.RGB) + 1 :].rstrip(")").split(",")
    if len(parts) != 3:
        return Color.BLACK
    return Color(*(_byte(p) for p in parts))


def parse_color(value: str) -> Color:
    """Parse 'none', 'rgb(r,g,b)', '#rgb', '#rrggbb' or a CSS color name.

    Raises:
        FormatError if value is none of those.
    """
    value = value.strip()
    if value.startswith(svg_meta.NONE):
        return Color.TRANSPARENT
    if value.startswith(svg_meta.RGB):
        return _parse_rgb(value)
    rgba = tinycss2.color3.parse_color(value)
    if rgba is None or isinstance(rgba, str):
        # str is 'currentColor', which has nothing to refer to here
        raise FormatError(f"Unable to parse color {value!r}")
    return Color(
        *(int(round(c * 255)) for c in (rgba.red, rgba.green, rgba.blue, rgba.alpha))
    )


def parse_brush(value: str) -> SolidColorBrush:
    """Same rules as parse_color, wrapped in a solid brush."""
    return SolidColorBrush(parse_color(value))


def _clamp_opacity(opacity: float) -> float:
    return min(max(opacity, 0.0), 1.0)


def apply_opacity_to_color(color: Color, opacity: float) -> Color:
    if opacity >= 1.0:
        return color
    return color.with_alpha(int(round(color.a * _clamp_opacity(opacity))))


def apply_opacity_to_brush(brush: Brush, opacity: float) -> Brush:
    """Returns a copy of brush with opacity folded into its alpha.

    For gradients every stop is scaled; the input brush is left as is.
    """
    if opacity >= 1.0:
        return brush
    if isinstance(brush, SolidColorBrush):
        return SolidColorBrush(apply_opacity_to_color(brush.color, opacity))
    if isinstance(brush, (LinearGradientBrush, RadialGradientBrush)):
        stops = tuple(
            GradientStop(apply_opacity_to_color(s.color, opacity), s.offset)
            for s in brush.stops
        )
        return dataclasses.replace(brush, stops=stops)
    return brush


def is_transparent(brush: Brush) -> bool:
    return isinstance(brush, SolidColorBrush) and brush.color.a == 0


def brush_opacity(brush: Brush) -> float:
    """Opacity carried by a brush, 1.0 unless it is a solid color."""
    if isinstance(brush, SolidColorBrush):
        return brush.color.a / 255
    return 1.0


def brushes_equal_by_color(first: Brush, second: Brush) -> bool:
    """Solid brushes match on RGBA, gradients on their stops."""
    if isinstance(first, SolidColorBrush) and isinstance(second, SolidColorBrush):
        return first.color == second.color
    if type(first) is not type(second):
        return False
    return first.stops == second.stops
