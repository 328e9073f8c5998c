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

"""Errors raised by svgdrawing.

Everything else (a typo in one attribute, a reference to a missing id) is a
soft failure: the value is dropped and parsing carries on.
"""


class FormatError(ValueError):
    """Malformed transform grammar, number or colour."""


class InvalidDocumentError(ValueError):
    """The document root is missing or is not an <svg> element."""


class EmptyInputError(ValueError):
    """A stream factory was handed None or a zero-length stream."""
