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

"""Registry of reusable artifacts declared in <defs>, looked up by id."""

from absl import logging
from typing import Any, Dict, Iterator, Optional, Tuple, Type, TypeVar, Union


T = TypeVar("T")


class SVGDefinitions:
    """Maps element id to the artifact parsed from it.

    An artifact may be a brush, a drawing, a geometry, a transform or a
    float. Artifacts are immutable so handing them out never risks a
    caller editing the registered value. Registering an id twice keeps
    the last artifact.
    """

    def __init__(self):
        self._artifacts: Dict[str, Any] = {}

    def register(self, id: str, artifact: Any):
        if id in self._artifacts:
            logging.debug("Redefinition of #%s replaces the previous one", id)
        self._artifacts[id] = artifact

    def get(
        self, id: str, kind: Union[Type[T], Tuple[Type, ...]] = object
    ) -> Optional[T]:
        """Returns the artifact for id if it is an instance of kind, else None."""
        artifact = self._artifacts.get(id)
        if artifact is None or not isinstance(artifact, kind):
            return None
        return artifact

    def ids(self) -> Iterator[str]:
        return iter(self._artifacts)

    def __contains__(self, id: str) -> bool:
        return id in self._artifacts

    def __len__(self) -> int:
        return len(self._artifacts)
