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

"""Build the UI-SPEC overview manifest (routes, assets, slices, readiness)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import MANIFEST_FILE_NAME, REPORT_FILE_NAME
from ..exceptions import DocumentLoadError, DocumentShapeError, ManifestError
from ..file_io.report_json import save_json
from ..file_io.source_location import SourceLocation, format_source
from ..file_io.yaml_parser import YamlParser, load_mapping
from ..models.documents import RouteInfo, RouteRegistry
from ..models.report_schema import ManifestRoutes, RouteDetail
from ..preflight.asset_index import ASSETS_FILE, KNOWN_ASSET_TYPES, load_asset_entries
from ..preflight.breakpoints import ACCEPTED_COLOR_SPACE, ACCEPTED_UNITS, META_FILE
from ..preflight.route_validator import (
    OVERLAY_EXTENSION,
    OVERLAYS_DIR,
    REGISTRY_FILE,
    ROUTE_FILE,
    ROUTES_DIR,
    SLICE_EXTENSION,
    SLICES_DIR,
    list_files,
    list_route_directories,
    planned_routes,
)

logger = logging.getLogger(__name__)

MANIFEST_VERSION = "1.0.0"
DEFAULT_PROJECT_NAME = "Proxy"
DEFAULT_BREAKPOINTS = [360, 393, 430]
DEFAULT_ROUTE_KIND = "screen"
CORE_FILES = [
    "meta.yml",
    "tokens.yml",
    "grid.yml",
    "motion.yml",
    "assets.yml",
    "registry.yml",
    "fonts.yml",
]

# Thresholds for code generation readiness
MIN_ROUTES_FOR_CODEGEN = 2
MIN_ASSETS_FOR_CODEGEN = 10

PREFLIGHT_COMMAND = "python -m ui_spec_preflight.preflight"


def _load_required(parser: YamlParser, path: Path) -> Dict[str, Any]:
    try:
        return load_mapping(parser, path).data
    except DocumentLoadError as exc:
        src = SourceLocation(file_path=path)
        raise ManifestError(f"Cannot read {path.name}: {exc}{format_source(src)}") from exc


def _route_info(parser: YamlParser, route_dir: Path) -> RouteInfo:
    route_file = route_dir / ROUTE_FILE
    if not route_file.exists():
        return RouteInfo()
    try:
        return RouteInfo.from_dict(load_mapping(parser, route_file).data)
    except (DocumentLoadError, DocumentShapeError) as exc:
        logger.warning(f"Could not parse {route_dir.name}/{ROUTE_FILE}: {exc}")
        return RouteInfo()


def _route_detail(parser: YamlParser, route_dir: Path, registry: RouteRegistry) -> RouteDetail:
    route_name = route_dir.name
    info = _route_info(parser, route_dir)
    entry = registry.find(route_name)

    return {
        "status": "implemented",
        "slices": len(list_files(route_dir / SLICES_DIR, SLICE_EXTENSION)),
        "overlays": len(list_files(route_dir / OVERLAYS_DIR, OVERLAY_EXTENSION)),
        "path": info.route or (entry.path if entry else None) or f"/{route_name}",
        "kind": (entry.kind if entry else None) or DEFAULT_ROUTE_KIND,
        "purpose": (entry.purpose if entry else None) or info.summary or "",
    }


def build_manifest(
    spec_root: Union[str, Path],
    generated_at: Optional[datetime] = None,
    parser: Optional[YamlParser] = None,
) -> Dict[str, Any]:
    """Build the manifest payload for the spec tree at ``spec_root``.

    Args:
        spec_root: UI-SPEC root directory
        generated_at: Timestamp to embed; now (UTC) by default
        parser: YAML loader; a fresh one by default

    Raises:
        ManifestError: If meta.yml, registry.yml or assets.yml cannot be read.
    """
    spec_root = Path(spec_root)
    parser = parser or YamlParser()

    meta = _load_required(parser, spec_root / META_FILE)
    try:
        registry = RouteRegistry.from_dict(_load_required(parser, spec_root / REGISTRY_FILE))
    except DocumentShapeError as exc:
        raise ManifestError(f"Invalid {REGISTRY_FILE}: {exc}") from exc
    try:
        assets = [entry.data for entry in load_asset_entries(parser, spec_root / ASSETS_FILE)]
    except DocumentLoadError as exc:
        raise ManifestError(f"Cannot read {ASSETS_FILE}: {exc}") from exc

    by_type = {asset_type: 0 for asset_type in KNOWN_ASSET_TYPES}
    for asset in assets:
        if isinstance(asset.get("type"), str) and asset["type"] in by_type:
            by_type[asset["type"]] += 1

    route_names = list_route_directories(spec_root / ROUTES_DIR)
    details: Dict[str, RouteDetail] = {
        name: _route_detail(parser, spec_root / ROUTES_DIR / name, registry) for name in route_names
    }
    planned: List[str] = list(planned_routes(registry, route_names))
    registered = registry.registered_ids()

    routes: ManifestRoutes = {
        "total": len(registered),
        "implemented": len(route_names),
        "planned": len(planned),
        "details": details,
        "plannedList": planned,
    }

    timestamp = generated_at or datetime.now(timezone.utc)
    return {
        "version": MANIFEST_VERSION,
        "generated": timestamp.isoformat(),
        "project": {
            "name": meta.get("project") or DEFAULT_PROJECT_NAME,
            "breakpoints": meta.get("breakpoints") or list(DEFAULT_BREAKPOINTS),
            "units": meta.get("units") or ACCEPTED_UNITS,
            "colorSpace": meta.get("colorSpace") or ACCEPTED_COLOR_SPACE,
        },
        "spec": {
            "root": f"{spec_root.name}/",
            "core": list(CORE_FILES),
        },
        "assets": {
            "total": len(assets),
            "byType": by_type,
            "catalog": ASSETS_FILE,
        },
        "routes": routes,
        "slices": {
            "total": sum(detail["slices"] for detail in details.values()),
            "perRoute": {name: detail["slices"] for name, detail in details.items()},
        },
        "overlays": {
            "total": sum(detail["overlays"] for detail in details.values()),
            "perRoute": {name: detail["overlays"] for name, detail in details.items()},
        },
        "readiness": {
            "codeGen": len(route_names) >= MIN_ROUTES_FOR_CODEGEN and len(assets) >= MIN_ASSETS_FOR_CODEGEN,
            "production": len(route_names) == len(registered),
            "coverage": f"{len(route_names)}/{len(registered)} routes",
        },
        "validation": {
            "command": f"{PREFLIGHT_COMMAND} {spec_root.name}",
            "report": REPORT_FILE_NAME,
        },
    }


def default_manifest_path(spec_root: Union[str, Path]) -> Path:
    return Path(spec_root) / MANIFEST_FILE_NAME


def save_manifest(output_path: Union[str, Path], manifest: Dict[str, Any]) -> None:
    save_json(output_path, manifest, label="manifest")
