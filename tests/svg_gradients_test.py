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
from lxml import etree
import pytest
from svgdrawing.geometric_types import Point
from svgdrawing.svg_defs import SVGDefinitions
from svgdrawing.svg_gradients import (
    parse_linear_gradient,
    parse_radial_gradient,
    parse_stop,
)
from svgdrawing.svg_transform import RotateTransform, Transform
from svgdrawing.svg_types import (
    Color,
    GradientStop,
    LinearGradientBrush,
    MappingMode,
    RadialGradientBrush,
    SpreadMethod,
)


def _el(xml):
    return etree.fromstring(xml)


_STOPS = (
    '<stop offset="0" stop-color="red"/>'
    '<stop offset="100%" stop-color="blue" stop-opacity="0.5"/>'
)
_EXPECTED_STOPS = (
    GradientStop(Color(255, 0, 0), 0.0),
    GradientStop(Color(0, 0, 255, 128), 1.0),
)


@pytest.mark.parametrize(
    "stop, expected",
    [
        ('<stop offset="0.25" stop-color="red"/>', GradientStop(Color(255, 0, 0), 0.25)),
        ('<stop offset="50%"/>', GradientStop(Color(0, 0, 0), 0.5)),
        # clamped to [0, 1]
        ('<stop offset="2"/>', GradientStop(Color(0, 0, 0), 1.0)),
        ('<stop offset="-1"/>', GradientStop(Color(0, 0, 0), 0.0)),
        # no or malformed offset is 0
        ("<stop/>", GradientStop(Color(0, 0, 0), 0.0)),
        ('<stop offset="abc"/>', GradientStop(Color(0, 0, 0), 0.0)),
        # style wins over attributes
        (
            '<stop offset="1" stop-color="red" style="stop-color:blue;stop-opacity:0.5"/>',
            GradientStop(Color(0, 0, 255, 128), 1.0),
        ),
        # a bad color leaves the default
        ('<stop stop-color="nope"/>', GradientStop(Color(0, 0, 0), 0.0)),
    ],
)
def test_parse_stop(stop, expected):
    assert parse_stop(_el(stop), SVGDefinitions()) == expected


def test_linear_gradient_defaults():
    gradient = parse_linear_gradient(_el("<linearGradient/>"), SVGDefinitions())
    assert gradient == LinearGradientBrush()
    assert gradient.mapping_mode == MappingMode.RELATIVE_TO_BOUNDING_BOX
    assert gradient.spread_method == SpreadMethod.PAD
    assert gradient.transform == Transform.identity()


def test_linear_gradient():
    gradient = parse_linear_gradient(
        _el(
            '<linearGradient x1="1" y1="2" x2="3" y2="4" gradientUnits="userSpaceOnUse"'
            ' spreadMethod="reflect" gradientTransform="rotate(30)">'
            + _STOPS
            + "</linearGradient>"
        ),
        SVGDefinitions(),
    )
    assert gradient == LinearGradientBrush(
        start_point=Point(1, 2),
        end_point=Point(3, 4),
        stops=_EXPECTED_STOPS,
        spread_method=SpreadMethod.REFLECT,
        mapping_mode=MappingMode.ABSOLUTE,
        transform=RotateTransform(30),
    )


def test_radial_gradient():
    gradient = parse_radial_gradient(
        _el(
            '<radialGradient cx="10" cy="20" fx="11" fy="21" r="5" spreadMethod="repeat">'
            + _STOPS
            + "</radialGradient>"
        ),
        SVGDefinitions(),
    )
    assert gradient == RadialGradientBrush(
        center=Point(10, 20),
        gradient_origin=Point(11, 21),
        radius_x=5,
        radius_y=5,
        stops=_EXPECTED_STOPS,
        spread_method=SpreadMethod.REPEAT,
    )


def test_radial_gradient_defaults():
    gradient = parse_radial_gradient(_el("<radialGradient/>"), SVGDefinitions())
    assert gradient == RadialGradientBrush()


@pytest.mark.parametrize(
    "href_attr", ["href", "xlink_href"],
)
def test_linear_href_inherits_unset_fields(href_attr):
    definitions = SVGDefinitions()
    definitions.register(
        "base",
        LinearGradientBrush(
            start_point=Point(5, 5),
            end_point=Point(6, 6),
            stops=_EXPECTED_STOPS,
            spread_method=SpreadMethod.REFLECT,
            mapping_mode=MappingMode.ABSOLUTE,
            transform=RotateTransform(45),
        ),
    )
    gradient = parse_linear_gradient(
        _el(f'<linearGradient {href_attr}="#base" x2="9"/>'), definitions
    )
    assert gradient == LinearGradientBrush(
        start_point=Point(5, 5),
        end_point=Point(9, 1),
        stops=_EXPECTED_STOPS,
        spread_method=SpreadMethod.REFLECT,
        mapping_mode=MappingMode.ABSOLUTE,
        transform=RotateTransform(45),
    )


def test_linear_href_explicit_default_point_is_overridden():
    definitions = SVGDefinitions()
    definitions.register("base", LinearGradientBrush(start_point=Point(5, 5)))
    # x1,y1 written as the default can't be told from absent
    gradient = parse_linear_gradient(
        _el('<linearGradient href="#base" x1="0" y1="0"/>'), definitions
    )
    assert gradient.start_point == Point(5, 5)


def test_href_own_fields_win():
    definitions = SVGDefinitions()
    definitions.register(
        "base",
        LinearGradientBrush(
            stops=_EXPECTED_STOPS,
            mapping_mode=MappingMode.ABSOLUTE,
            spread_method=SpreadMethod.REPEAT,
        ),
    )
    gradient = parse_linear_gradient(
        _el(
            '<linearGradient href="#base" gradientUnits="objectBoundingBox"'
            ' spreadMethod="pad"><stop offset="0.5" stop-color="red"/>'
            "</linearGradient>"
        ),
        definitions,
    )
    assert gradient.stops == (GradientStop(Color(255, 0, 0), 0.5),)
    assert gradient.mapping_mode == MappingMode.RELATIVE_TO_BOUNDING_BOX
    assert gradient.spread_method == SpreadMethod.PAD


def test_radial_href_inherits_from_radial():
    definitions = SVGDefinitions()
    definitions.register(
        "base",
        RadialGradientBrush(
            center=Point(1, 1), gradient_origin=Point(2, 2), radius_x=3, radius_y=3
        ),
    )
    gradient = parse_radial_gradient(_el('<radialGradient href="#base"/>'), definitions)
    assert gradient == RadialGradientBrush(
        center=Point(1, 1), gradient_origin=Point(2, 2), radius_x=3, radius_y=3
    )

    gradient = parse_radial_gradient(
        _el('<radialGradient href="#base" r="0.5"/>'), definitions
    )
    # radius is only inherited when the attribute is absent
    assert gradient.radius_x == gradient.radius_y == 0.5


def test_href_across_kinds_shares_common_fields_only():
    definitions = SVGDefinitions()
    definitions.register(
        "base",
        LinearGradientBrush(start_point=Point(7, 7), stops=_EXPECTED_STOPS),
    )
    gradient = parse_radial_gradient(_el('<radialGradient href="#base"/>'), definitions)
    assert gradient == RadialGradientBrush(stops=_EXPECTED_STOPS)


def test_href_to_unknown_gradient_is_ignored():
    gradient = parse_linear_gradient(
        _el('<linearGradient href="#missing" x1="3"/>'), SVGDefinitions()
    )
    assert gradient == LinearGradientBrush(start_point=Point(3, 0))
