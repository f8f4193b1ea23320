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

"""Breakpoint authority: meta.yml rules and the canonical breakpoint set.

Every other check compares against :meth:`BreakpointAuthority.canonical_breakpoints`
instead of hardcoding widths. Breakpoints are logically integers but are
compared in their textual form, because YAML mapping keys are text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from ..exceptions import CriticalSpecError, DocumentLoadError
from ..file_io.source_location import SourceLocation, format_source
from ..file_io.yaml_parser import LoadedDocument, YamlParser
from ..models.documents import MetaConfig
from ..models.issue import Category
from .report import IssueReport

logger = logging.getLogger(__name__)

META_FILE = "meta.yml"
EXPECTED_BREAKPOINTS: Tuple[str, ...] = ("360", "393", "430")
ACCEPTED_UNITS = "px"
ACCEPTED_COLOR_SPACE = "sRGB"


def _format_list(values) -> str:
    return "[" + ",".join(str(v) for v in values) + "]"


class BreakpointAuthority:
    """Owns meta.yml validation and the breakpoint set derived from it."""

    def __init__(self, meta: MetaConfig, document: Optional[LoadedDocument] = None):
        self.meta = meta
        self.document = document

    @classmethod
    def load(cls, parser: YamlParser, spec_root: Path, report: IssueReport) -> "BreakpointAuthority":
        """Load meta.yml from ``spec_root``.

        Raises:
            CriticalSpecError: If meta.yml is missing, unparseable, empty or
                not a mapping. One meta error is recorded first.
        """
        meta_path = Path(spec_root) / META_FILE
        try:
            document = parser.load_document(meta_path)
        except DocumentLoadError as exc:
            report.add_error(Category.META, META_FILE, str(exc))
            src = SourceLocation(file_path=meta_path)
            raise CriticalSpecError(f"{META_FILE} could not be loaded: {exc}{format_source(src)}") from exc

        if not isinstance(document.data, dict) or not document.data:
            message = "Document root must be a non-empty mapping"
            report.add_error(Category.META, META_FILE, message)
            raise CriticalSpecError(f"{META_FILE} is unusable: {message}")

        return cls(MetaConfig.from_dict(document.data), document)

    def canonical_breakpoints(self) -> Tuple[str, ...]:
        """Breakpoints declared in meta, as strings, in declaration order."""
        return tuple(str(bp) for bp in self.meta.breakpoints)

    def check(self, report: IssueReport) -> None:
        """Record meta.yml issues. The breakpoint comparison is order-sensitive."""
        logger.info(f"Validating {META_FILE}")
        scope = report.scope(Category.META, META_FILE, self.document)

        if self.meta.project is None:
            scope.error('Missing "project" field')
        if self.meta.units != ACCEPTED_UNITS:
            scope.error(f'Units must be "{ACCEPTED_UNITS}"', "/units")
        if self.meta.color_space != ACCEPTED_COLOR_SPACE:
            scope.error(f'ColorSpace must be "{ACCEPTED_COLOR_SPACE}"', "/colorSpace")

        actual = self.canonical_breakpoints()
        if actual != EXPECTED_BREAKPOINTS:
            scope.error(
                f"Breakpoints mismatch. Expected {_format_list(EXPECTED_BREAKPOINTS)}, "
                f"got {_format_list(actual)}",
                "/breakpoints",
            )
