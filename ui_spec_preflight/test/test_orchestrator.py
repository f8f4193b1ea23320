"""
End-to-end tests for one preflight run over a spec tree on disk.

Tests cover:
- Exit codes for clean, failing and fatal runs
- Every stage running despite earlier errors
- Byte-identical reports across runs
"""

from __future__ import annotations

from pathlib import Path

from ui_spec_preflight.file_io.resource_resolver import ResourceResolver
from ui_spec_preflight.preflight import ExitCode, Stage, check_spec

from conftest import SpecTree


class ExplodingResolver(ResourceResolver):
    def exists(self, relative_path: str) -> bool:
        raise RuntimeError("disk on fire")


# =============================================================================
# Exit Codes
# =============================================================================


class TestExitCodes:
    """0 for clean runs, 1 for errors, 2 for fatal runs."""

    def test_clean_tree(self, baseline_tree: SpecTree) -> None:
        config = baseline_tree.config()
        outcome = check_spec(config)
        assert outcome.exit_code == ExitCode.OK
        assert outcome.stage == Stage.REPORTED
        assert outcome.summary["total"] == 0
        assert outcome.routes.planned == ("settings",)
        assert config.report_file.is_file()

    def test_warnings_do_not_fail(self, baseline_tree: SpecTree) -> None:
        baseline_tree.write("grid.yml", "columns: 8\ncontainer:\n  widths: {360: 328, 393: 361, 430: 398}\n")
        outcome = check_spec(baseline_tree.config())
        assert outcome.summary["warnings"] == 1
        assert outcome.exit_code == ExitCode.OK

    def test_errors_fail(self, baseline_tree: SpecTree) -> None:
        baseline_tree.remove("assets/logo.svg")
        outcome = check_spec(baseline_tree.config())
        assert outcome.exit_code == ExitCode.VALIDATION_ERRORS
        assert [e.message for e in outcome.report.errors] == ["Asset logo: file not found at assets/logo.svg"]

    def test_missing_meta_is_fatal(self, baseline_tree: SpecTree) -> None:
        baseline_tree.remove("meta.yml")
        config = baseline_tree.config()
        outcome = check_spec(config)
        assert outcome.exit_code == ExitCode.CRITICAL
        assert outcome.stage == Stage.FATAL
        assert "meta.yml" in outcome.fatal_message
        assert not config.report_file.exists()

    def test_unexpected_exception_is_fatal(self, baseline_tree: SpecTree) -> None:
        outcome = check_spec(baseline_tree.config(), resolver=ExplodingResolver())
        assert outcome.exit_code == ExitCode.CRITICAL
        assert outcome.fatal_message == "RuntimeError: disk on fire"


# =============================================================================
# Run Completeness
# =============================================================================


class TestRunCompleteness:
    """Every subsystem runs once regardless of earlier findings."""

    def test_short_meta_breakpoints_continue(self, baseline_tree: SpecTree) -> None:
        """Declaring [360, 393] is one meta error and the run still completes."""
        baseline_tree.write("meta.yml", "project: Proxy\nunits: px\ncolorSpace: sRGB\nbreakpoints: [360, 393]\n")
        outcome = check_spec(baseline_tree.config())
        meta_errors = [e for e in outcome.report.errors if e.category == "meta"]
        assert len(meta_errors) == 1
        assert outcome.stage == Stage.REPORTED
        assert outcome.exit_code == ExitCode.VALIDATION_ERRORS
        assert outcome.routes.slices == 1

    def test_every_document_missing(self, spec_tree: SpecTree) -> None:
        spec_tree.write("meta.yml", "project: Proxy\nunits: px\ncolorSpace: sRGB\nbreakpoints: [360, 393, 430]\n")
        outcome = check_spec(spec_tree.config())
        assert sorted(e.file for e in outcome.report.errors) == [
            "assets.yml",
            "grid.yml",
            "motion.yml",
            "registry.yml",
            "tokens.yml",
        ]
        assert outcome.routes.routes == ()

    def test_resource_root_override(self, baseline_tree: SpecTree, tmp_path: Path) -> None:
        """Referenced files resolve against the resource root when one is set."""
        outcome = check_spec(baseline_tree.config(resource_root=str(tmp_path / "elsewhere")))
        assert len(outcome.report.errors) == 5

    def test_no_report_written(self, baseline_tree: SpecTree) -> None:
        config = baseline_tree.config(write_report=False)
        outcome = check_spec(config)
        assert outcome.stage == Stage.REPORTED
        assert not config.report_file.exists()


class TestIdempotence:
    """Same tree, same bytes."""

    def test_reports_are_byte_identical(self, baseline_tree: SpecTree) -> None:
        baseline_tree.write("routes/login/slices/cta.yml", "sliceId: login.cta\nelements:\n  - asset: nope\n")
        config = baseline_tree.config()

        check_spec(config)
        first = config.report_file.read_bytes()
        check_spec(config)
        second = config.report_file.read_bytes()

        assert first == second
        assert b"nope" in first
