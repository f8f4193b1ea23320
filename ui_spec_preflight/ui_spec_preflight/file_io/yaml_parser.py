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

"""YAML document loader with source line tracking."""

import yaml
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from ..exceptions import DocumentLoadError
from .source_location import SourceMap, lookup_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDocument:
    """One parsed YAML document and where its nodes came from."""

    path: Path
    data: Any
    source_map: SourceMap = field(default_factory=dict)

    def line_of(self, yaml_path: str, *, nearest: bool = True) -> Optional[int]:
        return lookup_source(self.source_map, yaml_path, nearest=nearest).line


class YamlParser:
    """YAML parser returning parsed data together with a source map.

    A parser holds no state between calls, so one instance may serve any
    number of spec trees.
    """

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map(cls, root: Optional[yaml.Node]) -> SourceMap:
        """Build a mapping from JSON-pointer-like paths to 1-based line/column.

        Works on PyYAML's node tree so locations are tracked without changing
        the data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    child_path = f"{path}/{cls._json_pointer_escape(str(key))}"
                    _walk(value_node, child_path)
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    @staticmethod
    def _describe_yaml_error(exc: yaml.YAMLError) -> str:
        """Single-line description: problem and 1-based position, no source excerpt."""
        problem = getattr(exc, "problem", None)
        if not problem:
            return " ".join(str(exc).split())

        context = getattr(exc, "context", None)
        message = f"{context}: {problem}" if context else problem
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            message += f" (line {mark.line + 1}, column {mark.column + 1})"
        return message

    @staticmethod
    def _read_text(path: Path) -> str:
        if not path.exists():
            raise DocumentLoadError("File not found")
        if not path.is_file():
            raise DocumentLoadError("Path is not a file")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read file: {exc}") from exc

    def load_document(self, file_path: Union[str, Path]) -> LoadedDocument:
        """Load a single-document YAML file.

        Raises:
            DocumentLoadError: If the file is missing, unreadable or not valid YAML.
        """
        path = Path(file_path)
        logger.debug(f"Loading YAML document: {path}")
        content = self._read_text(path)
        return self.load_document_from_string(content, path=path)

    def load_document_from_string(self, content: str, path: Union[str, Path] = "<string>") -> LoadedDocument:
        try:
            data = yaml.safe_load(content)
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Parse error: {self._describe_yaml_error(exc)}") from exc
        return LoadedDocument(path=Path(path), data=data, source_map=self._build_source_map(root))

    def load_documents(self, file_path: Union[str, Path]) -> List[LoadedDocument]:
        """Load every document of a (possibly multi-document) YAML stream.

        Raises:
            DocumentLoadError: If the file is missing, unreadable or not valid YAML.
        """
        path = Path(file_path)
        logger.debug(f"Loading YAML stream: {path}")
        content = self._read_text(path)
        return self.load_documents_from_string(content, path=path)

    def load_documents_from_string(self, content: str, path: Union[str, Path] = "<string>") -> List[LoadedDocument]:
        try:
            payloads = list(yaml.safe_load_all(content))
            roots = list(yaml.compose_all(content, Loader=yaml.SafeLoader))
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Parse error: {self._describe_yaml_error(exc)}") from exc

        documents = []
        for idx, data in enumerate(payloads):
            root = roots[idx] if idx < len(roots) else None
            documents.append(LoadedDocument(path=Path(path), data=data, source_map=self._build_source_map(root)))
        return documents


def load_mapping(parser: YamlParser, file_path: Union[str, Path]) -> LoadedDocument:
    """Load a document whose root must be a mapping (an empty file counts as ``{}``)."""
    document = parser.load_document(file_path)
    if document.data is None:
        return LoadedDocument(path=document.path, data={}, source_map=document.source_map)
    if not isinstance(document.data, dict):
        raise DocumentLoadError(
            f"Document root must be a mapping, got {type(document.data).__name__}"
        )
    return document

