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

"""Per-file loading that turns load failures into issues."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import DocumentLoadError
from ..file_io.source_location import SourceLocation, format_source
from ..file_io.yaml_parser import LoadedDocument, YamlParser, load_mapping
from .report import IssueReport

logger = logging.getLogger(__name__)


def relative_name(path: Path, spec_root: Path) -> str:
    """Spec-root relative name of ``path`` with POSIX separators."""
    try:
        return Path(path).relative_to(spec_root).as_posix()
    except ValueError:
        return Path(path).as_posix()


def load_checked_mapping(
    parser: YamlParser,
    path: Path,
    spec_root: Path,
    category: str,
    report: IssueReport,
) -> Optional[LoadedDocument]:
    """Load a mapping document, recording exactly one error if that fails.

    Returns None when the document must be treated as absent.
    """
    try:
        return load_mapping(parser, path)
    except DocumentLoadError as exc:
        report.add_error(category, relative_name(path, spec_root), str(exc))
        src = SourceLocation(file_path=Path(path))
        logger.warning(f"Could not load {path.name}: {exc}{format_source(src)}")
        return None
