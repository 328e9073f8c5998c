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

"""Walks an svg document and builds its drawing tree."""

from absl import logging
from lxml import etree  # pytype: disable=import-error
from typing import List, Optional
from svgdrawing import svg_meta
from svgdrawing.drawing import Drawing, DrawingGroup, DrawingImage
from svgdrawing.errors import InvalidDocumentError
from svgdrawing.options import ParseOptions
from svgdrawing.svg_defs import SVGDefinitions
from svgdrawing.svg_gradients import GRADIENT_CONVERTERS
from svgdrawing.svg_shapes import SHAPE_CONVERTERS, ElementContext, from_element
from svgdrawing.svg_style import InheritedGroupState
from svgdrawing.svg_text import FontResolver
from svgdrawing.svg_transform import parse_transform


def _tag(el: etree.Element) -> Optional[str]:
    # comments and processing instructions have a non-str tag
    if not isinstance(el.tag, str):
        return None
    return svg_meta.strip_ns(el.tag)


class _DocumentWalker:
    """State for one pass over one document."""

    def __init__(self, options: ParseOptions):
        self.options = options
        self.definitions = SVGDefinitions()
        self.fonts = FontResolver(options)

    def _context(self, el: etree.Element, inherited: InheritedGroupState):
        return ElementContext(el, self.definitions, inherited, self.options, self.fonts)

    def _register_gradient(self, el: etree.Element, tag: str):
        el_id = el.attrib.get(svg_meta.ID)
        if el_id is None:
            # nothing could refer to it
            return
        self.definitions.register(el_id, GRADIENT_CONVERTERS[tag](el, self.definitions))

    def parse_definitions(self, defs: etree.Element, inherited: InheritedGroupState):
        for child in defs:
            tag = _tag(child)
            el_id = child.attrib.get(svg_meta.ID) if tag else None
            if el_id is None:
                continue
            if tag in GRADIENT_CONVERTERS:
                self._register_gradient(child, tag)
            elif tag in SHAPE_CONVERTERS:
                self.definitions.register(
                    el_id, from_element(self._context(child, inherited))
                )
            else:
                logging.debug("Skipping unsupported <%s id=%r> in defs", tag, el_id)
                continue
            logging.debug("Defined #%s from <%s>", el_id, tag)

    def parse_group(
        self, el: etree.Element, inherited: InheritedGroupState
    ) -> DrawingGroup:
        inherited = inherited.updated_from(el)

        transform = None
        if svg_meta.TRANSFORM in el.attrib:
            transform = parse_transform(el.attrib[svg_meta.TRANSFORM])

        children: List[Drawing] = []
        for child in el:
            tag = _tag(child)
            if tag is None:
                continue
            if tag == svg_meta.G:
                children.append(self.parse_group(child, inherited))
            elif tag == svg_meta.DEFS:
                self.parse_definitions(child, inherited)
            elif tag in GRADIENT_CONVERTERS:
                self._register_gradient(child, tag)
            elif tag in SHAPE_CONVERTERS:
                children.append(from_element(self._context(child, inherited)))
            else:
                logging.debug("Skipping unsupported <%s>", tag)

        return DrawingGroup(tuple(children), transform)


def parse_document(
    svg_root: Optional[etree.Element], options: Optional[ParseOptions] = None
) -> DrawingImage:
    """Build the drawing for an svg document.

    Raises:
        InvalidDocumentError if the root element is missing or isn't <svg>.
        FormatError for a malformed transform.
    """
    if svg_root is None or _tag(svg_root) != svg_meta.SVG:
        raise InvalidDocumentError(
            "Root element of an svg document must be <svg>, not "
            f"{None if svg_root is None else _tag(svg_root)!r}"
        )
    if options is None:
        options = ParseOptions()

    logging.debug("Parsing svg document")
    walker = _DocumentWalker(options)
    image = DrawingImage(walker.parse_group(svg_root, InheritedGroupState()))
    logging.debug("Parsed svg document, %d definitions", len(walker.definitions))
    return image


class SVG:
    """An svg document, as xml, ready to be turned into a drawing."""

    svg_root: etree.Element

    def __init__(self, svg_root):
        self.svg_root = svg_root

    def to_drawing(self, options: Optional[ParseOptions] = None) -> DrawingImage:
        return parse_document(self.svg_root, options)

    def tostring(self, pretty_print=False):
        return etree.tostring(self.svg_root, pretty_print=pretty_print).decode("utf-8")

    @classmethod
    def fromstring(cls, string):
        if isinstance(string, bytes):
            string = string.decode("utf-8")

        # svgs are fond of not declaring xlink
        # based on https://mailman-mail5.webfaction.com/pipermail/lxml/20100323/021184.html
        if "xlink:href" in string and "xmlns:xlink" not in string:
            string = string.replace("xlink:href", svg_meta.XLINK_HREF_TEMP)

        # encode because fromstring dislikes xml encoding decl if input is str
        parser = etree.XMLParser(remove_blank_text=True)
        tree = etree.fromstring(string.encode("utf-8"), parser)
        return cls(tree)

    @classmethod
    def parse(cls, file_or_path):
        if hasattr(file_or_path, "read"):
            raw_svg = file_or_path.read()
        else:
            with open(file_or_path, "rb") as f:
                raw_svg = f.read()
        return cls.fromstring(raw_svg)
