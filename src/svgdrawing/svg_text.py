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

"""<text> to a single glyph run, laid out on one baseline.

Fonts are found among the files named by ParseOptions. There is no
shaping: one glyph per character from the font's cmap, advanced by its
horizontal metrics.
"""

import dataclasses
import os
import sys
from absl import logging
from fontTools.ttLib import TTCollection, TTFont, TTLibError
from typing import Dict, Iterable, List, Optional, Tuple
from svgdrawing import svg_meta
from svgdrawing.geometric_types import Point
from svgdrawing.options import ParseOptions
from svgdrawing.svg_path_pen import PathFigurePen
from svgdrawing.svg_transform import Affine2D
from svgdrawing.svg_types import PathGeometry


_FONT_EXTENSIONS = (".ttf", ".otf", ".ttc", ".otc")

_NORMAL_WEIGHT = 400
_BOLD_WEIGHT = 700
_WEIGHT_KEYWORDS = {
    "normal": _NORMAL_WEIGHT,
    "bold": _BOLD_WEIGHT,
    "bolder": _BOLD_WEIGHT,
    "lighter": 300,
}


@dataclasses.dataclass(frozen=True)
class FontFace:
    """A font file, or one font in a collection, and what it's named."""

    path: str
    family_name: str
    weight: int = _NORMAL_WEIGHT
    italic: bool = False
    # index into a .ttc, -1 for a single font file
    font_number: int = -1

    def load(self) -> TTFont:
        return TTFont(self.path, fontNumber=self.font_number, lazy=True)


def _describe(font: TTFont) -> Tuple[str, int, bool]:
    name = font["name"]
    family = name.getDebugName(16) or name.getDebugName(1) or ""
    weight, italic = _NORMAL_WEIGHT, False
    if "OS/2" in font:
        os2 = font["OS/2"]
        weight = os2.usWeightClass
        italic = bool(os2.fsSelection & 0x1)
    elif "head" in font:
        italic = bool(font["head"].macStyle & 0x2)
    return family, weight, italic


def _faces_in_file(path: str, family: Optional[str] = None) -> List[FontFace]:
    if os.path.splitext(path)[1].lower() in (".ttc", ".otc"):
        fonts = list(enumerate(TTCollection(path, lazy=True).fonts))
    else:
        fonts = [(-1, TTFont(path, lazy=True))]
    faces = []
    for font_number, font in fonts:
        font_family, weight, italic = _describe(font)
        faces.append(
            FontFace(path, family or font_family, weight, italic, font_number)
        )
    return faces


def _font_files(font_dirs: Iterable[str]) -> Iterable[str]:
    for font_dir in font_dirs:
        for entry in sorted(os.listdir(font_dir)):
            if os.path.splitext(entry)[1].lower() in _FONT_EXTENSIONS:
                yield os.path.join(font_dir, entry)


def system_font_dirs() -> Tuple[str, ...]:
    """The platform's usual font directories that exist on this machine."""
    home = os.path.expanduser("~")
    if sys.platform == "win32":
        windir = os.environ.get("WINDIR", r"C:\Windows")
        candidates = [os.path.join(windir, "Fonts")]
        if "LOCALAPPDATA" in os.environ:
            candidates.append(
                os.path.join(os.environ["LOCALAPPDATA"], "Microsoft", "Windows", "Fonts")
            )
    elif sys.platform == "darwin":
        candidates = [
            "/System/Library/Fonts",
            "/Library/Fonts",
            os.path.join(home, "Library", "Fonts"),
        ]
    else:
        candidates = [
            "/usr/share/fonts",
            "/usr/local/share/fonts",
            os.path.join(home, ".local", "share", "fonts"),
            os.path.join(home, ".fonts"),
        ]
    return tuple(d for d in candidates if os.path.isdir(d))


def _font_files_below(font_dirs: Iterable[str]) -> Iterable[str]:
    for font_dir in font_dirs:
        for root, dirs, files in os.walk(font_dir):
            dirs.sort()
            for entry in sorted(files):
                if os.path.splitext(entry)[1].lower() in _FONT_EXTENSIONS:
                    yield os.path.join(root, entry)


def _system_faces() -> List[FontFace]:
    faces = []
    for path in _font_files_below(system_font_dirs()):
        try:
            faces.extend(_faces_in_file(path))
        except (TTLibError, OSError, KeyError) as e:
            logging.warning("Skipping unreadable font %s: %s", path, e)
    return faces


class FontResolver:
    """Finds and loads fonts for one parse.

    Faces come from font_files, then font_dirs, then, if use_system_fonts,
    the directories of system_font_dirs(). Files are only read when the first
    <text> asks for a font, and loaded fonts are kept for the rest of the
    parse.
    """

    def __init__(self, options: ParseOptions):
        self._options = options
        self._faces: Optional[List[FontFace]] = None
        self._fonts: Dict[FontFace, TTFont] = {}

    def faces(self) -> List[FontFace]:
        if self._faces is None:
            faces = []
            for family, path in self._options.font_files.items():
                faces.extend(_faces_in_file(path, family))
            for path in _font_files(self._options.font_dirs):
                faces.extend(_faces_in_file(path))
            if self._options.use_system_fonts:
                faces.extend(_system_faces())
            self._faces = faces
        return self._faces

    def resolve(self, families: str, weight: int, italic: bool) -> Optional[FontFace]:
        """Best face for a CSS font-family list, None if no family is known."""
        for family in families.split(","):
            family = family.strip().strip("'\"").lower()
            candidates = [f for f in self.faces() if f.family_name.lower() == family]
            if candidates:
                return min(
                    candidates,
                    key=lambda f: (f.italic != italic, abs(f.weight - weight)),
                )
        logging.warning("No font face found for font-family %r", families)
        return None

    def font(self, face: FontFace) -> TTFont:
        if face not in self._fonts:
            self._fonts[face] = face.load()
        return self._fonts[face]


@dataclasses.dataclass(frozen=True)
class GlyphRun:
    font_face: FontFace
    font_rendering_em_size: float
    pixels_per_dip: float
    glyph_indices: Tuple[int, ...]
    baseline_origin: Point
    advance_widths: Tuple[float, ...]
    glyph_offsets: Tuple[Point, ...]
    characters: str

    def build_geometry(self, font: Optional[TTFont] = None) -> PathGeometry:
        """Glyph outlines as a path, y down, positioned on the baseline."""
        if font is None:
            font = self.font_face.load()
        glyph_set = font.getGlyphSet()
        glyph_order = font.getGlyphOrder()
        scale = self.font_rendering_em_size / font["head"].unitsPerEm

        pen = PathFigurePen(glyph_set)
        x, y = self.baseline_origin
        for glyph_index, advance, offset in zip(
            self.glyph_indices, self.advance_widths, self.glyph_offsets
        ):
            # font units are y up
            pen.transform = (
                Affine2D.identity()
                .translate(x + offset.x, y + offset.y)
                .scale(scale, -scale)
            )
            glyph_set[glyph_order[glyph_index]].draw(pen)
            x += advance
        return pen.geometry()


def parse_font_weight(value: Optional[str]) -> int:
    if value is None:
        return _NORMAL_WEIGHT
    value = value.strip().lower()
    if value in _WEIGHT_KEYWORDS:
        return _WEIGHT_KEYWORDS[value]
    weight = svg_meta.try_parse_float(value)
    if weight is None:
        return _NORMAL_WEIGHT
    return int(min(max(weight, 1), 1000))


def parse_font_style(value: Optional[str]) -> bool:
    """True for italic (or oblique)."""
    return value is not None and value.strip().lower() in ("italic", "oblique")


def layout(
    font: TTFont,
    face: FontFace,
    text: str,
    font_size: float,
    origin: Point,
    pixels_per_dip: float,
) -> GlyphRun:
    cmap = font.getBestCmap() or {}
    hmtx = font["hmtx"]
    upem = font["head"].unitsPerEm
    glyph_order = font.getGlyphOrder()

    glyph_indices = []
    advance_widths = []
    for char in text:
        # missing characters map to .notdef
        glyph_name = cmap.get(ord(char), glyph_order[0])
        glyph_indices.append(font.getGlyphID(glyph_name))
        advance_widths.append(hmtx[glyph_name][0] / upem * font_size)

    return GlyphRun(
        font_face=face,
        font_rendering_em_size=font_size,
        pixels_per_dip=pixels_per_dip,
        glyph_indices=tuple(glyph_indices),
        baseline_origin=origin,
        advance_widths=tuple(advance_widths),
        glyph_offsets=tuple(Point() for _ in text),
        characters=text,
    )
