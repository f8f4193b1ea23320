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

"""Route and slice validation against breakpoints and the asset catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..exceptions import DocumentLoadError, DocumentShapeError
from ..file_io.resource_resolver import ResourceResolver
from ..file_io.source_location import SourceLocation, format_source
from ..file_io.yaml_parser import YamlParser
from ..models.documents import Element, RouteInfo, RouteRegistry, Slice, is_present
from ..models.issue import Category
from .asset_index import AssetCatalog
from .loader import load_checked_mapping, relative_name
from .report import IssueReport, IssueScope

logger = logging.getLogger(__name__)

REGISTRY_FILE = "registry.yml"
ROUTES_DIR = "routes"
ROUTE_FILE = "route.yml"
SLICES_DIR = "slices"
OVERLAYS_DIR = "overlays"
SLICE_EXTENSION = ".yml"
OVERLAY_EXTENSION = ".png"

# Accepted typeStyle.family for elements that carry no text
PLACEHOLDER_TYPE_STYLE_FAMILY = "\u2014"  # em dash


@dataclass(frozen=True)
class RouteValidationResult:
    routes: Tuple[str, ...] = ()
    slices: int = 0
    planned: Tuple[str, ...] = ()
    undocumented: Tuple[str, ...] = ()


def list_route_directories(routes_dir: Path) -> List[str]:
    """Names of the implemented route directories, sorted."""
    if not routes_dir.is_dir():
        return []
    return sorted(entry.name for entry in routes_dir.iterdir() if entry.is_dir())


def list_files(directory: Path, extension: str) -> List[Path]:
    if not directory.is_dir():
        return []
    return sorted(
        (entry for entry in directory.iterdir() if entry.is_file() and entry.name.endswith(extension)),
        key=lambda entry: entry.name,
    )


def planned_routes(registry: RouteRegistry, route_names: Sequence[str]) -> Tuple[str, ...]:
    """Registry ids with no implementing directory, in registry order."""
    planned = []
    for entry in registry.entries:
        if entry.id is None:
            continue
        if not any(entry.matches(name) for name in route_names):
            planned.append(entry.id)
    return tuple(planned)


def load_registry(parser: YamlParser, spec_root: Path, report: IssueReport) -> Optional[RouteRegistry]:
    """Load registry.yml. Returns None if it could not be used at all."""
    logger.info(f"Validating {REGISTRY_FILE}")
    document = load_checked_mapping(parser, Path(spec_root) / REGISTRY_FILE, Path(spec_root), Category.REGISTRY, report)
    if document is None:
        return None

    scope = report.scope(Category.REGISTRY, REGISTRY_FILE, document)
    try:
        registry = RouteRegistry.from_dict(document.data)
    except DocumentShapeError as exc:
        scope.error(f"Invalid registry structure: {exc}", "/routes")
        return None

    if not registry.declares_routes:
        scope.error("No routes defined")
    return registry


class RouteValidator:
    """Validates every implemented route directory and its slices."""

    def __init__(self, resolver: ResourceResolver, breakpoints: Sequence[str], catalog: AssetCatalog):
        self.resolver = resolver
        self.breakpoints = tuple(breakpoints)
        self.catalog = catalog

    def validate(
        self,
        parser: YamlParser,
        spec_root: Path,
        registry: Optional[RouteRegistry],
        report: IssueReport,
    ) -> RouteValidationResult:
        logger.info("Validating routes")
        spec_root = Path(spec_root)
        route_names = list_route_directories(spec_root / ROUTES_DIR)

        slice_count = 0
        for route_name in route_names:
            slice_count += self._validate_route(parser, spec_root, route_name, report)

        planned: Tuple[str, ...] = ()
        undocumented: List[str] = []
        if registry is not None:
            planned = planned_routes(registry, route_names)
            if registry.declares_routes:
                for route_name in route_names:
                    if registry.find(route_name) is None:
                        undocumented.append(route_name)
                        report.add_warning(
                            Category.REGISTRY,
                            REGISTRY_FILE,
                            f"Route directory '{route_name}' is not declared in {REGISTRY_FILE}",
                        )

        logger.info(f"{len(route_names)} routes, {slice_count} slices validated")
        if planned:
            logger.info(f"{len(planned)} planned routes: {', '.join(planned)}")
        return RouteValidationResult(
            routes=tuple(route_names),
            slices=slice_count,
            planned=planned,
            undocumented=tuple(undocumented),
        )

    def _validate_route(self, parser: YamlParser, spec_root: Path, route_name: str, report: IssueReport) -> int:
        route_dir = spec_root / ROUTES_DIR / route_name

        route_file = route_dir / ROUTE_FILE
        if route_file.exists():
            document = load_checked_mapping(parser, route_file, spec_root, Category.ROUTE, report)
            if document is not None:
                try:
                    RouteInfo.from_dict(document.data)
                except DocumentShapeError as exc:
                    report.add_error(Category.ROUTE, relative_name(route_file, spec_root), f"Invalid route structure: {exc}")

        validated = 0
        for slice_file in list_files(route_dir / SLICES_DIR, SLICE_EXTENSION):
            rel_path = relative_name(slice_file, spec_root)
            try:
                document = parser.load_document(slice_file)
                slice_ = Slice.from_dict(document.data)
            except (DocumentLoadError, DocumentShapeError) as exc:
                report.add_error(Category.SLICE, rel_path, str(exc))
                src = SourceLocation(file_path=slice_file)
                logger.warning(f"Skipping slice {rel_path}: {exc}{format_source(src)}")
                continue

            self.validate_slice(slice_, report.scope(Category.SLICE, rel_path, document))
            validated += 1
        return validated

    def validate_slice(self, slice_: Slice, scope: IssueScope) -> None:
        """Record every issue of one parsed slice."""
        if slice_.slice_id is None:
            scope.error("Missing sliceId")
        if slice_.route is None:
            scope.error("Missing route")
        if slice_.overlays is None:
            scope.error("Missing overlays")
        if slice_.elements is None:
            scope.warning("No elements defined")

        if slice_.overlays is not None:
            self._check_overlays(slice_.overlays, scope)
        self._check_acceptance(slice_.acceptance_breakpoints, scope)
        for element in slice_.elements or ():
            self._check_element(element, scope)

    def _check_overlays(self, overlays, scope: IssueScope) -> None:
        for bp in self.breakpoints:
            yaml_path = f"/overlays/{bp}"
            if bp not in overlays:
                scope.error(f"Missing overlay for breakpoint {bp}", yaml_path)
                continue
            overlay_path = overlays[bp]
            if not is_present(overlay_path):
                scope.error(f"Overlay path for breakpoint {bp} is empty", yaml_path)
            elif not self.resolver.exists(str(overlay_path)):
                scope.error(f"Overlay file not found: {overlay_path}", yaml_path)

    def _check_acceptance(self, accepted: Optional[Tuple[str, ...]], scope: IssueScope) -> None:
        # Order matters: acceptance lists encode display priority.
        if accepted is None:
            scope.warning("Missing acceptance.breakpoints", "/acceptance")
        elif accepted != self.breakpoints:
            scope.error(
                f"acceptance.breakpoints [{','.join(accepted)}] doesn't match "
                f"meta.yml [{','.join(self.breakpoints)}]",
                "/acceptance/breakpoints",
            )

    def _check_element(self, element: Element, scope: IssueScope) -> None:
        base = f"/elements/{element.index}"
        label = element.label

        if element.box is not None:
            for bp in self.breakpoints:
                if bp not in element.box:
                    scope.error(f"{label}: missing box for breakpoint {bp}", f"{base}/box/{bp}")

        if element.asset is not None and element.asset not in self.catalog:
            scope.error(f'{label}: references unknown asset "{element.asset}"', f"{base}/asset")

        if element.type_style_family == PLACEHOLDER_TYPE_STYLE_FAMILY:
            scope.info(
                f'{label}: uses placeholder typeStyle.family "{PLACEHOLDER_TYPE_STYLE_FAMILY}" '
                "(acceptable for non-text elements)",
                f"{base}/typeStyle/family",
            )
