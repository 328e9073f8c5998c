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
from svgdrawing import colors
from svgdrawing.errors import FormatError
from svgdrawing.svg_types import (
    Color,
    GradientStop,
    LinearGradientBrush,
    RadialGradientBrush,
    SolidColorBrush,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("none", Color(0, 0, 0, 0)),
        ("#FF0000", Color(255, 0, 0)),
        ("#ff0000", Color(255, 0, 0)),
        ("#f00", Color(255, 0, 0)),
        ("red", Color(255, 0, 0)),
        (" red ", Color(255, 0, 0)),
        ("cornflowerblue", Color(100, 149, 237)),
        ("black", Color(0, 0, 0)),
        ("rgb(1,2,3)", Color(1, 2, 3)),
        ("rgb(1, 2, 3)", Color(1, 2, 3)),
        # out of range components read as 0
        ("rgb(300,2,-3)", Color(0, 2, 0)),
        # wrong number of components
        ("rgb(1,2)", Color.BLACK),
    ],
)
def test_parse_color(value, expected):
    assert colors.parse_color(value) == expected


@pytest.mark.parametrize("value", ["notacolor", "#12", "currentColor", ""])
def test_parse_color_invalid(value):
    with pytest.raises(FormatError):
        colors.parse_color(value)


def test_parse_brush():
    assert colors.parse_brush("none") == SolidColorBrush(Color(0, 0, 0, 0))
    assert colors.parse_brush("#FF0000") == colors.parse_brush("red")
    assert colors.parse_brush("red") == SolidColorBrush(Color(255, 0, 0, 255))

    with pytest.raises(FormatError):
        colors.parse_brush("bogus")


@pytest.mark.parametrize(
    "color, opacity, expected",
    [
        (Color(255, 0, 0), 1.0, Color(255, 0, 0)),
        (Color(255, 0, 0), 0.5, Color(255, 0, 0, 128)),
        (Color(255, 0, 0), 0.25, Color(255, 0, 0, 64)),
        (Color(255, 0, 0, 128), 0.5, Color(255, 0, 0, 64)),
        (Color(255, 0, 0), 0.0, Color(255, 0, 0, 0)),
        # clamped
        (Color(255, 0, 0), -1.0, Color(255, 0, 0, 0)),
        (Color(255, 0, 0), 7.0, Color(255, 0, 0)),
    ],
)
def test_apply_opacity_to_color(color, opacity, expected):
    assert colors.apply_opacity_to_color(color, opacity) == expected


def test_apply_opacity_to_gradient_leaves_original_alone():
    gradient = LinearGradientBrush(
        stops=(
            GradientStop(Color(255, 0, 0), 0.0),
            GradientStop(Color(0, 0, 255, 200), 1.0),
        )
    )
    faded = colors.apply_opacity_to_brush(gradient, 0.5)

    assert faded.stops == (
        GradientStop(Color(255, 0, 0, 128), 0.0),
        GradientStop(Color(0, 0, 255, 100), 1.0),
    )
    assert gradient.stops[0].color.a == 255
    assert faded.start_point == gradient.start_point


def test_apply_full_opacity_is_identity():
    brush = SolidColorBrush(Color(1, 2, 3))
    assert colors.apply_opacity_to_brush(brush, 1.0) is brush


def test_is_transparent():
    assert colors.is_transparent(colors.parse_brush("none"))
    assert not colors.is_transparent(colors.parse_brush("red"))
    assert not colors.is_transparent(RadialGradientBrush())


def test_brush_opacity():
    assert colors.brush_opacity(SolidColorBrush(Color(0, 0, 0, 51))) == 0.2
    assert colors.brush_opacity(LinearGradientBrush()) == 1.0


@pytest.mark.parametrize(
    "first, second, expected",
    [
        (SolidColorBrush(Color(1, 2, 3)), SolidColorBrush(Color(1, 2, 3)), True),
        (SolidColorBrush(Color(1, 2, 3)), SolidColorBrush(Color(1, 2, 3, 4)), False),
        (SolidColorBrush(), LinearGradientBrush(), False),
        (
            LinearGradientBrush(stops=(GradientStop(Color(1, 2, 3), 0.5),)),
            LinearGradientBrush(
                start_point=(0, 1), stops=(GradientStop(Color(1, 2, 3), 0.5),)
            ),
            True,
        ),
        (
            LinearGradientBrush(stops=(GradientStop(Color(1, 2, 3), 0.5),)),
            LinearGradientBrush(stops=(GradientStop(Color(1, 2, 3), 0.6),)),
            False,
        ),
        (LinearGradientBrush(), RadialGradientBrush(), False),
    ],
)
def test_brushes_equal_by_color(first, second, expected):
    assert colors.brushes_equal_by_color(first, second) == expected
