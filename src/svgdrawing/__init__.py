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

"""Parse a subset of svg into an immutable drawing tree."""

from svgdrawing.drawing import DrawingImage
from svgdrawing.errors import EmptyInputError, FormatError, InvalidDocumentError
from svgdrawing.options import ParseOptions
from svgdrawing.svg import SVG, parse_document
from svgdrawing.svg_image import SVGImage
