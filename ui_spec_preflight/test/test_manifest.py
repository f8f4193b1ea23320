"""
Tests for the manifest generator.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ui_spec_preflight.exceptions import ManifestError
from ui_spec_preflight.file_io.report_json import load_json
from ui_spec_preflight.manifest import build_manifest, default_manifest_path, save_manifest
from ui_spec_preflight.manifest.run_manifest import main

from conftest import SpecTree

GENERATED_AT = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestBuildManifest:
    """Manifest content for a spec tree."""

    def test_baseline_manifest(self, baseline_tree: SpecTree) -> None:
        manifest = build_manifest(baseline_tree.root, generated_at=GENERATED_AT)

        assert manifest["version"] == "1.0.0"
        assert manifest["generated"] == "2025-01-02T03:04:05+00:00"
        assert manifest["project"] == {
            "name": "Proxy",
            "breakpoints": [360, 393, 430],
            "units": "px",
            "colorSpace": "sRGB",
        }
        assert manifest["spec"]["root"] == "UI-SPEC/"
        assert manifest["assets"] == {
            "total": 2,
            "byType": {"svg": 1, "png": 1, "lottie": 0},
            "catalog": "assets.yml",
        }
        assert manifest["routes"] == {
            "total": 2,
            "implemented": 1,
            "planned": 1,
            "details": {
                "login": {
                    "status": "implemented",
                    "slices": 1,
                    "overlays": 3,
                    "path": "/login",
                    "kind": "screen",
                    "purpose": "Sign in with email",
                },
            },
            "plannedList": ["settings"],
        }
        assert manifest["slices"] == {"total": 1, "perRoute": {"login": 1}}
        assert manifest["overlays"] == {"total": 3, "perRoute": {"login": 3}}
        assert manifest["readiness"] == {"codeGen": False, "production": False, "coverage": "1/2 routes"}
        assert manifest["validation"] == {
            "command": "python -m ui_spec_preflight.preflight UI-SPEC",
            "report": "preflight-results.json",
        }

    def test_stream_catalog_counts_match_list(self, baseline_tree: SpecTree) -> None:
        """A multi-document assets.yml yields the same totals as the list form."""
        baseline_tree.write(
            "assets.yml",
            "id: logo\ntype: svg\npath: assets/logo.svg\n---\nid: hero\ntype: png\npath: assets/hero.png\n",
        )
        manifest = build_manifest(baseline_tree.root, generated_at=GENERATED_AT)
        assert manifest["assets"]["total"] == 2
        assert manifest["assets"]["byType"] == {"svg": 1, "png": 1, "lottie": 0}

    def test_route_without_registry_entry(self, baseline_tree: SpecTree) -> None:
        baseline_tree.write("routes/onboarding/slices/step1.yml", "sliceId: onboarding.step1\n")
        details = build_manifest(baseline_tree.root, generated_at=GENERATED_AT)["routes"]["details"]
        assert details["onboarding"] == {
            "status": "implemented",
            "slices": 1,
            "overlays": 0,
            "path": "/onboarding",
            "kind": "screen",
            "purpose": "",
        }

    def test_unparseable_route_yml_falls_back(self, baseline_tree: SpecTree) -> None:
        baseline_tree.write("routes/login/route.yml", "route: [/login\n")
        details = build_manifest(baseline_tree.root, generated_at=GENERATED_AT)["routes"]["details"]
        assert details["login"]["path"] == "/login"

    def test_readiness(self, baseline_tree: SpecTree) -> None:
        baseline_tree.write("registry.yml", "routes:\n  - id: auth.login\n  - id: home\n")
        baseline_tree.write("routes/home/route.yml", "route: /home\n")
        baseline_tree.write(
            "assets.yml",
            "".join(f"- id: icon{i}\n  type: svg\n  path: assets/icon{i}.svg\n" for i in range(10)),
        )
        readiness = build_manifest(baseline_tree.root, generated_at=GENERATED_AT)["readiness"]
        assert readiness == {"codeGen": True, "production": True, "coverage": "2/2 routes"}

    @pytest.mark.parametrize("missing", ["meta.yml", "registry.yml", "assets.yml"])
    def test_missing_required_document(self, baseline_tree: SpecTree, missing: str) -> None:
        baseline_tree.remove(missing)
        with pytest.raises(ManifestError):
            build_manifest(baseline_tree.root)


class TestManifestCli:
    """``python -m ui_spec_preflight.manifest``."""

    def test_writes_manifest(self, baseline_tree: SpecTree, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(baseline_tree.root), "--log-level", "WARNING"])
        assert exc_info.value.code == 0

        manifest = load_json(default_manifest_path(baseline_tree.root))
        assert manifest["routes"]["implemented"] == 1
        assert "Routes: 1/2 implemented" in capsys.readouterr().out

    def test_missing_meta_exits_one(self, baseline_tree: SpecTree) -> None:
        baseline_tree.remove("meta.yml")
        with pytest.raises(SystemExit) as exc_info:
            main([str(baseline_tree.root), "--log-level", "WARNING"])
        assert exc_info.value.code == 1

    def test_save_manifest_round_trip(self, baseline_tree: SpecTree) -> None:
        manifest = build_manifest(baseline_tree.root, generated_at=GENERATED_AT)
        path = baseline_tree.root.parent / "out" / "manifest.json"
        save_manifest(path, manifest)
        assert load_json(path) == manifest
