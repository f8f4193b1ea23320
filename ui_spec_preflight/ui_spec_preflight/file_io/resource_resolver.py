# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Resource existence checks for files referenced from spec documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Set, Union


class ResourceResolver(ABC):
    """Answers whether a path referenced by a document exists."""

    @abstractmethod
    def exists(self, relative_path: str) -> bool:
        """Return True if ``relative_path`` names an existing file."""


class FileSystemResolver(ResourceResolver):
    """Resolves referenced paths against a base directory on disk."""

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)

    def resolve(self, relative_path: str) -> Path:
        return self.base_dir / relative_path

    def exists(self, relative_path: str) -> bool:
        if not relative_path:
            return False
        return self.resolve(relative_path).is_file()


class StaticResolver(ResourceResolver):
    """Resolver backed by a fixed set of known paths."""

    def __init__(self, known_paths: Iterable[str] = ()):
        self.known_paths: Set[str] = {self._normalize(p) for p in known_paths}

    @staticmethod
    def _normalize(path: str) -> str:
        return Path(path).as_posix()

    def exists(self, relative_path: str) -> bool:
        if not relative_path:
            return False
        return self._normalize(relative_path) in self.known_paths
