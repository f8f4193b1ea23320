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

"""Asset catalog index built from assets.yml."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from ..exceptions import DocumentLoadError, DocumentShapeError
from ..file_io.resource_resolver import ResourceResolver
from ..file_io.source_location import SourceLocation, format_source
from ..file_io.yaml_parser import YamlParser
from ..models.documents import AssetRecord
from ..models.issue import Category
from .report import IssueReport

logger = logging.getLogger(__name__)

ASSETS_FILE = "assets.yml"

# Asset type -> kind of resource it holds
KNOWN_ASSET_TYPES: Dict[str, str] = {
    "svg": "vector",
    "png": "raster",
    "lottie": "animation",
}

# Trailing repeated extension only, e.g. "icons/home.svg.svg"; "v1.0.0.svg" is fine
_DOUBLED_EXTENSION_RE = re.compile(r"(\.[A-Za-z][A-Za-z0-9]*)\1$")


@dataclass(frozen=True)
class AssetEntry:
    """One raw record from assets.yml with its 1-based source line."""

    data: Dict[str, Any]
    line: Optional[int] = None


def load_asset_entries(parser: YamlParser, assets_path: Union[str, Path]) -> List[AssetEntry]:
    """Read every asset record from assets.yml.

    The catalog may be one document holding a list of records or a
    multi-document stream with one record (or list of records) per document.
    Both shapes are flattened here so every consumer sees the same records.

    Raises:
        DocumentLoadError: If the file is missing or not valid YAML.
    """
    entries: List[AssetEntry] = []
    for document in parser.load_documents(assets_path):
        data = document.data
        if isinstance(data, list):
            for idx, item in enumerate(data):
                if isinstance(item, dict):
                    entries.append(AssetEntry(item, document.line_of(f"/{idx}", nearest=False)))
        elif isinstance(data, dict):
            entries.append(AssetEntry(data, document.line_of("", nearest=False)))
    return entries


class AssetCatalog:
    """Read-only mapping from asset id to its first-seen record."""

    def __init__(self, records: Optional[Dict[str, AssetRecord]] = None):
        self._records: Dict[str, AssetRecord] = dict(records or {})

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def get(self, asset_id: str, default: Optional[AssetRecord] = None) -> Optional[AssetRecord]:
        return self._records.get(asset_id, default)

    def size(self) -> int:
        return len(self._records)


def find_doubled_extension(path: str) -> Optional[str]:
    """Return the doubled extension in ``path`` (e.g. ``.svg.svg``), if any."""
    match = _DOUBLED_EXTENSION_RE.search(path)
    if match is None:
        return None
    return match.group(1) * 2


class AssetIndexer:
    """Builds the asset catalog and records asset issues."""

    def __init__(self, resolver: ResourceResolver):
        self.resolver = resolver

    def index(self, parser: YamlParser, spec_root: Path, report: IssueReport) -> AssetCatalog:
        """Load assets.yml from ``spec_root`` and build the catalog.

        A load failure records one error and yields an empty catalog.
        """
        logger.info("Validating assets")
        assets_path = Path(spec_root) / ASSETS_FILE
        try:
            entries = load_asset_entries(parser, assets_path)
        except DocumentLoadError as exc:
            report.add_error(Category.ASSETS, ASSETS_FILE, str(exc))
            src = SourceLocation(file_path=assets_path)
            logger.warning(f"Could not load {ASSETS_FILE}: {exc}{format_source(src)}")
            return AssetCatalog()

        catalog = self.build(entries, report)
        logger.info(f"{catalog.size()} assets validated")
        return catalog

    def build(self, entries: Sequence[AssetEntry], report: IssueReport) -> AssetCatalog:
        """Build the catalog from raw entries in file order.

        Entries without an id are skipped. The first record wins for a
        duplicated id; every later duplicate is recorded as an error.
        """
        scope = report.scope(Category.ASSETS, ASSETS_FILE)
        records: Dict[str, AssetRecord] = {}

        for idx, entry in enumerate(entries):
            try:
                record = AssetRecord.from_dict(entry.data, line=entry.line)
            except DocumentShapeError as exc:
                report.add_error(Category.ASSETS, ASSETS_FILE, f"Asset entry {idx}: {exc}", entry.line)
                continue
            if record is None:
                continue

            if record.id in records:
                report.add_error(Category.ASSETS, ASSETS_FILE, f"Duplicate asset ID: {record.id}", record.line)
            else:
                records[record.id] = record

            self._check_record(record, report)

        if not records:
            scope.warning("No assets found - check file format")
        return AssetCatalog(records)

    def _check_record(self, record: AssetRecord, report: IssueReport) -> None:
        def error(message: str) -> None:
            report.add_error(Category.ASSETS, ASSETS_FILE, f"Asset {record.id}: {message}", record.line)

        def warning(message: str) -> None:
            report.add_warning(Category.ASSETS, ASSETS_FILE, f"Asset {record.id}: {message}", record.line)

        if record.type is None:
            error("missing type")
        elif record.type not in KNOWN_ASSET_TYPES:
            known = ", ".join(KNOWN_ASSET_TYPES)
            warning(f'unknown type "{record.type}" (expected one of {known})')
        if record.path is None:
            error("missing path")
        if record.intrinsic is None:
            warning("missing intrinsic dimensions")

        if record.path is not None:
            if not self.resolver.exists(record.path):
                error(f"file not found at {record.path}")
            doubled = find_doubled_extension(record.path)
            if doubled is not None:
                error(f"double {doubled} extension in path")
