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

"""Checks for the stand-alone design documents: tokens, grid and motion."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Sequence

from ..file_io.yaml_parser import LoadedDocument, YamlParser
from ..models.documents import GridConfig, MotionConfig, TokenSet, is_present
from ..models.issue import Category
from .loader import load_checked_mapping
from .report import IssueReport, IssueScope

logger = logging.getLogger(__name__)

EXPECTED_BRAND_COLORS = ("green", "green_alt", "purple", "black")
EXPECTED_GRID_COLUMNS = 12


class DocumentChecker(ABC):
    """Loads one top-level document and records its issues."""

    FILE_NAME: str
    CATEGORY: str

    def run(self, parser: YamlParser, spec_root: Path, report: IssueReport) -> Optional[Any]:
        """Load and check the document; returns the typed document or None if absent."""
        logger.info(f"Validating {self.FILE_NAME}")
        document = load_checked_mapping(
            parser, Path(spec_root) / self.FILE_NAME, Path(spec_root), self.CATEGORY, report
        )
        if document is None:
            return None
        scope = report.scope(self.CATEGORY, self.FILE_NAME, document)
        return self.check(document, scope)

    @abstractmethod
    def check(self, document: LoadedDocument, scope: IssueScope) -> Any:
        """Record issues for a loaded document and return its typed view."""


class TokensChecker(DocumentChecker):
    FILE_NAME = "tokens.yml"
    CATEGORY = Category.TOKENS

    def check(self, document: LoadedDocument, scope: IssueScope) -> TokenSet:
        tokens = TokenSet.from_dict(document.data)

        required = (
            (tokens.brand, "Missing colors.brand", "/colors/brand"),
            (tokens.surface, "Missing colors.surface", "/colors/surface"),
            (tokens.text, "Missing colors.text", "/colors/text"),
            (tokens.typography, "Missing typography section", None),
            (tokens.spacing, "Missing spacing scale", None),
            (tokens.radii, "Missing radii", None),
        )
        for value, message, yaml_path in required:
            if not is_present(value):
                scope.error(message, yaml_path)

        for color in EXPECTED_BRAND_COLORS:
            if not tokens.has_brand_color(color):
                scope.warning(f"Missing brand.{color} color", f"/colors/brand/{color}")
        return tokens


class GridChecker(DocumentChecker):
    FILE_NAME = "grid.yml"
    CATEGORY = Category.GRID

    def __init__(self, breakpoints: Sequence[str]):
        self.breakpoints = tuple(breakpoints)

    def check(self, document: LoadedDocument, scope: IssueScope) -> GridConfig:
        grid = GridConfig.from_dict(document.data)

        if grid.columns != EXPECTED_GRID_COLUMNS:
            scope.warning(f"Expected {EXPECTED_GRID_COLUMNS} columns, got {grid.columns}", "/columns")

        for bp in self.breakpoints:
            if bp not in grid.container_widths:
                scope.error(f"Missing container width for breakpoint {bp}", f"/container/widths/{bp}")
        return grid


class MotionChecker(DocumentChecker):
    FILE_NAME = "motion.yml"
    CATEGORY = Category.MOTION

    def check(self, document: LoadedDocument, scope: IssueScope) -> MotionConfig:
        motion = MotionConfig.from_dict(document.data)

        if not is_present(motion.defaults):
            scope.error("Missing defaults section")
        if not is_present(motion.duration):
            scope.error("Missing defaults.duration", "/defaults/duration")
        if not is_present(motion.easing):
            scope.error("Missing defaults.easing", "/defaults/easing")
        if not is_present(motion.policy):
            scope.error("Missing policy section")
        if not is_present(motion.presets):
            scope.warning("No motion presets defined")
        return motion
