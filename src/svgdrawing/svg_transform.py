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

"""Helpers for https://www.w3.org/TR/SVG11/coords.html#TransformAttribute.

The transform attribute is parsed into Transform values that keep the
structure of the source text: one primitive per command, or an ordered
TransformGroup when several commands are listed. Affine2D is the flattened
2x3 matrix form.
"""
import dataclasses
from functools import reduce
from math import cos, sin, radians, tan
import re
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple
from sys import float_info
from svgdrawing.errors import FormatError
from svgdrawing.geometric_types import Point, Vector
from svgdrawing import svg_meta


# 2D affine transform.
#
# View as vector of 6 values or matrix:
#
# a   c   e
# b   d   f
class Affine2D(NamedTuple):
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float

    @staticmethod
    def identity():
        return Affine2D._identity

    @staticmethod
    def degenerate():
        return Affine2D._degnerate

    @staticmethod
    def product(first: "Affine2D", second: "Affine2D") -> "Affine2D":
        """Returns the product of first x second.

        Order matters; meant to make that a bit more explicit.
        """
        return Affine2D(
            first.a * second.a + first.b * second.c,
            first.a * second.b + first.b * second.d,
            first.c * second.a + first.d * second.c,
            first.c * second.b + first.d * second.d,
            second.a * first.e + second.c * first.f + second.e,
            second.b * first.e + second.d * first.f + second.f,
        )

    def matrix(self, a, b, c, d, e, f):
        return Affine2D.product(Affine2D(a, b, c, d, e, f), self)

    # https://www.w3.org/TR/SVG11/coords.html#TranslationDefined
    def translate(self, tx, ty=0):
        if (0, 0) == (tx, ty):
            return self
        return self.matrix(1, 0, 0, 1, tx, ty)

    # https://www.w3.org/TR/SVG11/coords.html#ScalingDefined
    def scale(self, sx, sy=None):
        if sy is None:
            sy = sx
        return self.matrix(sx, 0, 0, sy, 0, 0)

    # https://www.w3.org/TR/SVG11/coords.html#RotationDefined
    # Note that rotation here is in radians
    def rotate(self, a):
        return self.matrix(cos(a), sin(a), -sin(a), cos(a), 0, 0)

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def is_degenerate(self) -> bool:
        """Return True if [a b c d] matrix is degenerate (determinant is 0)."""
        return abs(self.determinant()) <= float_info.epsilon

    def inverse(self):
        """Return the inverse Affine2D transformation.

        The inverse of a degenerate Affine2D is itself degenerate."""
        if self == self.identity():
            return self
        elif self.is_degenerate():
            return Affine2D.degenerate()
        a, b, c, d, e, f = self
        det = self.determinant()
        a, b, c, d = d / det, -b / det, -c / det, a / det
        e, f = -a * e - c * f, -b * e - d * f
        return self.__class__(a, b, c, d, e, f)

    def map_point(self, pt: Tuple[float, float]) -> Point:
        """Return Point (x, y) multiplied by Affine2D."""
        x, y = pt
        return Point(self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def map_vector(self, vec: Tuple[float, float]) -> Vector:
        """Return Vector (x, y) multiplied by Affine2D, treating translation as zero."""
        x, y = vec
        return Vector(self.a * x + self.c * y, self.b * x + self.d * y)

    @classmethod
    def compose_ltr(cls, affines: Sequence["Affine2D"]) -> "Affine2D":
        """Creates merged transform equivalent to applying transforms left-to-right order.

        Affines apply like functions - f(g(x)) - so we merge them in reverse order.
        """
        return reduce(
            lambda acc, a: cls.product(a, acc), reversed(affines), cls.identity()
        )


Affine2D._identity = Affine2D(1, 0, 0, 1, 0, 0)
Affine2D._degnerate = Affine2D(0, 0, 0, 0, 0, 0)


class Transform:
    """A 2D transform as written in the document.

    Subclasses are immutable values; compare them with ==.
    """

    def matrix(self) -> Affine2D:
        raise NotImplementedError("You should implement matrix")

    @staticmethod
    def identity() -> "MatrixTransform":
        return _IDENTITY

    def is_identity(self) -> bool:
        return self.matrix() == Affine2D.identity()

    def append(self, other: "Transform") -> "TransformGroup":
        """Group of self followed by other, dropping self if it is identity.

        Always returns a TransformGroup, even of a single child.
        """
        children = () if self.is_identity() else (self,)
        return TransformGroup(children + (other,))


@dataclasses.dataclass(frozen=True)
class MatrixTransform(Transform):
    affine: Affine2D = Affine2D.identity()

    def matrix(self) -> Affine2D:
        return self.affine


@dataclasses.dataclass(frozen=True)
class TranslateTransform(Transform):
    x: float = 0.0
    y: float = 0.0

    def matrix(self) -> Affine2D:
        return Affine2D.identity().translate(self.x, self.y)


@dataclasses.dataclass(frozen=True)
class ScaleTransform(Transform):
    scale_x: float = 1.0
    scale_y: float = 1.0

    def matrix(self) -> Affine2D:
        return Affine2D.identity().scale(self.scale_x, self.scale_y)


# Angles are in degrees, as written in svg
@dataclasses.dataclass(frozen=True)
class RotateTransform(Transform):
    angle: float = 0.0

    def matrix(self) -> Affine2D:
        return Affine2D.identity().rotate(radians(self.angle))


@dataclasses.dataclass(frozen=True)
class SkewTransform(Transform):
    angle_x: float = 0.0
    angle_y: float = 0.0

    def matrix(self) -> Affine2D:
        return Affine2D(1, tan(radians(self.angle_y)), tan(radians(self.angle_x)), 1, 0, 0)


@dataclasses.dataclass(frozen=True)
class TransformGroup(Transform):
    """Children apply in order: the first child is applied first."""

    children: Tuple[Transform, ...] = ()

    def matrix(self) -> Affine2D:
        return Affine2D.compose_ltr([t.matrix() for t in self.children])


_IDENTITY = MatrixTransform(Affine2D.identity())


_NUMBER_RE = re.compile(
    r"[-+]?"  # optional sign
    r"(?:"
    r"(?:[0-9]+)(?:\.[0-9]*)?"  # int or float
    r"|"
    r"(?:\.[0-9]+)"  # float with leading dot (e.g. '.42')
    r")"
    r"(?:[eE][-+]?[0-9]+)?"  # optional scientific notiation
)


def _number(raw: str) -> float:
    if not _NUMBER_RE.fullmatch(raw):
        raise FormatError(f"Invalid number in transform: {raw!r}")
    return float(raw)


def _single_number(params: str) -> float:
    # rotate/skew have no optional arguments; rotate(a, cx, cy) is not supported
    return _number(params.strip())


def _translate(params: str) -> Optional[Transform]:
    args = [_number(p) for p in svg_meta.split_numbers(params)]
    if len(args) == 1:
        return TranslateTransform(args[0], 0.0)
    if len(args) == 2:
        return TranslateTransform(*args)
    return None


def _scale(params: str) -> Optional[Transform]:
    args = [_number(p) for p in svg_meta.split_numbers(params)]
    if len(args) == 1:
        return ScaleTransform(args[0], args[0])
    if len(args) == 2:
        return ScaleTransform(*args)
    return None


def _rotate(params: str) -> Optional[Transform]:
    return RotateTransform(_single_number(params))


def _skew_x(params: str) -> Optional[Transform]:
    return SkewTransform(_single_number(params), 0.0)


def _skew_y(params: str) -> Optional[Transform]:
    return SkewTransform(0.0, _single_number(params))


def _matrix(params: str) -> Optional[Transform]:
    args = [_number(p) for p in svg_meta.split_numbers(params)]
    # anything but exactly six values is ignored, not rejected
    if len(args) != 6:
        return None
    return MatrixTransform(Affine2D(*args))


_TRANSFORM_COMMANDS: Dict[str, Callable[[str], Optional[Transform]]] = {
    "translate": _translate,
    "scale": _scale,
    "rotate": _rotate,
    "skewX": _skew_x,
    "skewY": _skew_y,
    "matrix": _matrix,
}


def _at_none(raw_transform: str, index: int) -> bool:
    end = index + len(svg_meta.NONE)
    if not raw_transform.startswith(svg_meta.NONE, index):
        return False
    return end == len(raw_transform) or not raw_transform[end].isalnum()


def parse_transform(raw_transform: str) -> Transform:
    """Parse an svg transform attribute.

    Returns identity for empty input or a none keyword anywhere in it, the
    primitive itself for a single command and a TransformGroup, in listed
    order, for several.

    Raises:
        FormatError for an unknown command, a missing ')' or a parameter
        that is not a number.
    """
    transforms: List[Transform] = []
    index = 0
    while index < len(raw_transform):
        while index < len(raw_transform) and (
            raw_transform[index].isspace() or raw_transform[index] == ","
        ):
            index += 1
        if _at_none(raw_transform, index):
            return Transform.identity()
        open_paren = raw_transform.find("(", index)
        if open_paren < 0:
            break
        close_paren = raw_transform.find(")", open_paren)
        if close_paren < 0:
            raise FormatError(f"Unterminated transform command in {raw_transform!r}")

        command = raw_transform[index:open_paren].strip()
        params = raw_transform[open_paren + 1 : close_paren]
        index = close_paren + 1

        if command not in _TRANSFORM_COMMANDS:
            raise FormatError(f"Invalid svg transform command: {command!r}")
        transform = _TRANSFORM_COMMANDS[command](params)
        if transform is not None:
            transforms.append(transform)

    if len(transforms) > 1:
        return TransformGroup(tuple(transforms))
    if len(transforms) == 1:
        return transforms[0]
    return Transform.identity()
