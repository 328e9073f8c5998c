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

import dataclasses
from types import MappingProxyType
from typing import Mapping, Sequence


# Device independent units are 1/96 inch
DEFAULT_DPI = 96.0


@dataclasses.dataclass(frozen=True)
class ParseOptions:
    """Knobs for turning an svg document into a drawing.

    Attributes:
        pixels_per_dip: device pixels per device independent pixel, recorded
            on every glyph run for the host renderer.
        font_files: explicit {family name: font file path} for text.
        font_dirs: directories searched for .ttf/.otf/.ttc files when a family
            is not in font_files.
        use_system_fonts: also search the platform font directories, see
            svg_text.system_font_dirs(). Turn off for reproducible output.
        default_font_family: used when <text> names no family, or none resolve.
        default_font_size: font size when <text> has no font-size.
    """

    pixels_per_dip: float = 1.0
    font_files: Mapping[str, str] = dataclasses.field(
        default_factory=lambda: MappingProxyType({})
    )
    font_dirs: Sequence[str] = ()
    use_system_fonts: bool = True
    default_font_family: str = "Arial"
    default_font_size: float = 12.0

    def __post_init__(self):
        if self.pixels_per_dip <= 0:
            raise ValueError(f"pixels_per_dip must be > 0, got {self.pixels_per_dip}")
        if self.default_font_size <= 0:
            raise ValueError(
                f"default_font_size must be > 0, got {self.default_font_size}"
            )

    @classmethod
    def for_dpi(cls, dpi: float, **kwargs) -> "ParseOptions":
        return cls(pixels_per_dip=dpi / DEFAULT_DPI, **kwargs)
