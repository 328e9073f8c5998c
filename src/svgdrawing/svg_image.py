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

"""An svg backed image that can be recolored and reset.

Loading is done here only as far as turning bytes into a drawing; where
the bytes come from is up to the caller.
"""

from absl import logging
from typing import BinaryIO, Callable, Optional
from svgdrawing import drawing
from svgdrawing.drawing import DrawingImage
from svgdrawing.errors import EmptyInputError
from svgdrawing.options import ParseOptions
from svgdrawing.svg import SVG
from svgdrawing.svg_types import Brush


# Returns the bytes at a uri, None if there's nothing there
UriLoader = Callable[[str], Optional[bytes]]


class SVGImage:
    """Holds the drawing for an svg document and edits to it.

    Edits made between begin_edit() and end_edit() are collected on a
    working copy and published together by end_edit(). Outside an edit
    session each replace_* call publishes immediately. reset() goes back to
    the drawing of the document as loaded.
    """

    def __init__(self, options: Optional[ParseOptions] = None):
        self.options = options or ParseOptions()
        self._source: Optional[DrawingImage] = None
        self._document: Optional[SVG] = None
        self._editing: Optional[DrawingImage] = None
        self._uri: Optional[str] = None
        self._loader: Optional[UriLoader] = None

    def _load(self, document: SVG):
        self._document = document
        self._source = document.to_drawing(self.options)

    @classmethod
    def from_file(cls, path, options: Optional[ParseOptions] = None) -> "SVGImage":
        """Raises InvalidDocumentError if the file's root isn't <svg>."""
        image = cls(options)
        image._load(SVG.parse(path))
        return image

    @classmethod
    def from_stream(
        cls, stream: Optional[BinaryIO], options: Optional[ParseOptions] = None
    ) -> "SVGImage":
        """Raises EmptyInputError for a None or empty stream."""
        if stream is None:
            raise EmptyInputError("No svg stream provided")
        raw_svg = stream.read()
        if not raw_svg:
            raise EmptyInputError("The svg stream is empty")
        image = cls(options)
        image._load(SVG.fromstring(raw_svg))
        return image

    @classmethod
    def from_uri(
        cls, uri: str, loader: UriLoader, options: Optional[ParseOptions] = None
    ) -> "SVGImage":
        """An image whose document is fetched by loader on first use."""
        image = cls(options)
        image._uri = uri
        image._loader = loader
        return image

    @property
    def uri(self) -> Optional[str]:
        return self._uri

    @property
    def source(self) -> Optional[DrawingImage]:
        """The published drawing; None if nothing has been loaded."""
        if self._source is None and self._loader is not None:
            loader, self._loader = self._loader, None
            logging.debug("Loading svg from %s", self._uri)
            raw_svg = loader(self._uri)
            if not raw_svg:
                raise EmptyInputError(f"Nothing to load at {self._uri}")
            self._load(SVG.fromstring(raw_svg))
        return self._source

    def is_editing(self) -> bool:
        return self._editing is not None

    def begin_edit(self):
        if self._editing is not None:
            raise RuntimeError(
                "An edit is already in progress, end_edit() before starting another"
            )
        # trees are immutable, the working copy is just a reference
        self._editing = self.source

    def end_edit(self):
        if self._editing is None:
            raise RuntimeError("No edit in progress, begin_edit() first")
        self._source, self._editing = self._editing, None

    def reset(self):
        """Rebuild the drawing from the document as it was loaded."""
        if self._document is None and self._loader is not None:
            self.source  # loads the deferred document
        if self._document is None:
            raise RuntimeError("No svg document loaded, nothing to reset to")
        self._source = self._document.to_drawing(self.options)

    def _edit(self, edit_fn, existing: Brush, replacement: Brush):
        if self._editing is not None:
            self._editing = edit_fn(self._editing, existing, replacement)
        elif self.source is not None:
            self._source = edit_fn(self._source, existing, replacement)

    def replace_fill_brush(self, existing: Brush, replacement: Brush):
        self._edit(drawing.replace_fill_brush, existing, replacement)

    def replace_stroke_brush(self, existing: Brush, replacement: Brush):
        self._edit(drawing.replace_stroke_brush, existing, replacement)
