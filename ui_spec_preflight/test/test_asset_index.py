"""
Tests for the asset catalog index.

Tests cover:
- First-wins duplicate handling
- Missing files staying in the catalog
- Doubled extensions, missing fields and unknown types
- List and multi-document catalog shapes
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from ui_spec_preflight.file_io.resource_resolver import StaticResolver
from ui_spec_preflight.file_io.yaml_parser import YamlParser
from ui_spec_preflight.preflight.asset_index import (
    AssetEntry,
    AssetIndexer,
    find_doubled_extension,
    load_asset_entries,
)
from ui_spec_preflight.preflight.report import IssueReport

from conftest import SpecTree


def _entries(*records: Dict[str, Any]) -> List[AssetEntry]:
    return [AssetEntry(dict(record), line=idx + 1) for idx, record in enumerate(records)]


# =============================================================================
# Catalog Construction
# =============================================================================


class TestCatalogBuild:
    """Building the catalog from raw records."""

    def test_duplicate_id_first_wins(self, report: IssueReport) -> None:
        resolver = StaticResolver(["assets/a.svg", "assets/b.svg"])
        catalog = AssetIndexer(resolver).build(
            _entries(
                {"id": "icon", "type": "svg", "path": "assets/a.svg", "intrinsic": {"w": 24, "h": 24}},
                {"id": "icon", "type": "svg", "path": "assets/b.svg", "intrinsic": {"w": 24, "h": 24}},
            ),
            report,
        )
        assert [e.message for e in report.errors] == ["Duplicate asset ID: icon"]
        assert report.errors[0].line == 2
        assert len(catalog) == 1
        assert catalog.get("icon").path == "assets/a.svg"

    def test_missing_file_keeps_record(self, report: IssueReport) -> None:
        """A record whose file is absent is reported but still indexed."""
        catalog = AssetIndexer(StaticResolver()).build(
            _entries({"id": "icon_home", "type": "svg", "path": "assets/icon_home.svg", "intrinsic": {"w": 24, "h": 24}}),
            report,
        )
        assert [e.message for e in report.errors] == ["Asset icon_home: file not found at assets/icon_home.svg"]
        assert "icon_home" in catalog

    def test_doubled_extension(self, report: IssueReport) -> None:
        resolver = StaticResolver(["icons/home.svg.svg"])
        AssetIndexer(resolver).build(
            _entries({"id": "home", "type": "svg", "path": "icons/home.svg.svg", "intrinsic": {"w": 24, "h": 24}}),
            report,
        )
        assert [e.message for e in report.errors] == ["Asset home: double .svg.svg extension in path"]

    def test_version_numbered_path_is_not_doubled(self, report: IssueReport) -> None:
        """Repeated numeric segments in a file name are not an extension defect."""
        resolver = StaticResolver(["assets/icons/v1.0.0.svg"])
        catalog = AssetIndexer(resolver).build(
            _entries({"id": "logo_v1", "type": "svg", "path": "assets/icons/v1.0.0.svg", "intrinsic": {"w": 24, "h": 24}}),
            report,
        )
        assert report.summarize()["total"] == 0
        assert "logo_v1" in catalog

    def test_missing_fields(self, report: IssueReport) -> None:
        AssetIndexer(StaticResolver()).build(_entries({"id": "bare"}), report)
        assert [e.message for e in report.errors] == ["Asset bare: missing type", "Asset bare: missing path"]
        assert [w.message for w in report.warnings] == ["Asset bare: missing intrinsic dimensions"]

    def test_unknown_type_is_a_warning(self, report: IssueReport) -> None:
        resolver = StaticResolver(["assets/clip.gif"])
        AssetIndexer(resolver).build(
            _entries({"id": "clip", "type": "gif", "path": "assets/clip.gif", "intrinsic": {"w": 10, "h": 10}}),
            report,
        )
        assert report.errors == []
        assert len(report.warnings) == 1
        assert report.warnings[0].message.startswith('Asset clip: unknown type "gif"')

    def test_records_without_id_are_skipped(self, report: IssueReport) -> None:
        catalog = AssetIndexer(StaticResolver()).build(_entries({"type": "svg", "path": "x.svg"}), report)
        assert len(catalog) == 0
        assert report.errors == []
        assert [w.message for w in report.warnings] == ["No assets found - check file format"]

    def test_numeric_ids_are_text(self, report: IssueReport) -> None:
        resolver = StaticResolver(["a.png"])
        catalog = AssetIndexer(resolver).build(
            _entries({"id": 7, "type": "png", "path": "a.png", "intrinsic": {"w": 1, "h": 1}}),
            report,
        )
        assert "7" in catalog


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("icons/home.svg.svg", ".svg.svg"),
        ("img/photo.png.png", ".png.png"),
        ("icons/home.svg", None),
        ("icons/home.svg.png", None),
        ("icons/a.svg.svgz", None),
        ("assets/icons/v1.0.0.svg", None),
        ("img/step.1.1.png", None),
        ("icons/home.svg.svg/readme.txt", None),
    ],
)
def test_find_doubled_extension(path: str, expected: Any) -> None:
    assert find_doubled_extension(path) == expected


# =============================================================================
# Catalog File Shapes
# =============================================================================


class TestCatalogShapes:
    """assets.yml as a list or as a document stream."""

    def test_list_and_stream_agree(self, spec_tree: SpecTree, parser: YamlParser) -> None:
        list_file = spec_tree.write("list.yml", "- id: a\n  type: svg\n- id: b\n  type: png\n")
        stream_file = spec_tree.write("stream.yml", "id: a\ntype: svg\n---\nid: b\ntype: png\n")
        as_list = [entry.data for entry in load_asset_entries(parser, list_file)]
        as_stream = [entry.data for entry in load_asset_entries(parser, stream_file)]
        assert as_list == as_stream

    def test_entry_lines(self, spec_tree: SpecTree, parser: YamlParser) -> None:
        path = spec_tree.write("assets.yml", "- id: a\n  type: svg\n- id: b\n  type: png\n")
        assert [entry.line for entry in load_asset_entries(parser, path)] == [1, 3]

    def test_index_baseline(self, baseline_tree: SpecTree, parser: YamlParser, report: IssueReport, resolver: StaticResolver) -> None:
        catalog = AssetIndexer(resolver).index(parser, baseline_tree.root, report)
        assert report.summarize()["total"] == 0
        assert sorted(catalog) == ["hero", "logo"]

    def test_index_unparseable_catalog(
        self, spec_tree: SpecTree, parser: YamlParser, report: IssueReport, resolver: StaticResolver
    ) -> None:
        spec_tree.write("assets.yml", "- id: [broken\n")
        catalog = AssetIndexer(resolver).index(parser, spec_tree.root, report)
        assert len(catalog) == 0
        assert len(report.errors) == 1
        assert report.errors[0].category == "assets"
        assert report.errors[0].file == "assets.yml"
