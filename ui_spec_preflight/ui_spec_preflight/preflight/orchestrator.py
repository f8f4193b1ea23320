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

"""Runs every preflight component once, in dependency order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import PreflightConfig
from ..exceptions import CriticalSpecError
from ..file_io.resource_resolver import FileSystemResolver, ResourceResolver
from ..file_io.yaml_parser import YamlParser
from ..models.report_schema import IssueSummary
from .asset_index import AssetIndexer
from .breakpoints import BreakpointAuthority
from .document_checks import GridChecker, MotionChecker, TokensChecker
from .report import IssueReport
from .route_validator import RouteValidationResult, RouteValidator, load_registry

logger = logging.getLogger(__name__)


class ExitCode:
    OK = 0
    VALIDATION_ERRORS = 1
    CRITICAL = 2


class Stage:
    INIT = "init"
    META_LOADED = "meta_loaded"
    FATAL = "fatal"
    DOCUMENTS_CHECKED = "documents_checked"
    ASSETS_INDEXED = "assets_indexed"
    ROUTES_VALIDATED = "routes_validated"
    REPORTED = "reported"


@dataclass
class PreflightOutcome:
    report: IssueReport
    routes: RouteValidationResult = field(default_factory=RouteValidationResult)
    stage: str = Stage.INIT
    exit_code: int = ExitCode.OK
    fatal_message: Optional[str] = None

    @property
    def summary(self) -> IssueSummary:
        return self.report.summarize()


def exit_code_for(report: IssueReport) -> int:
    """Errors fail the run; warnings and info are advisory."""
    if report.has_errors:
        return ExitCode.VALIDATION_ERRORS
    return ExitCode.OK


def check_spec(
    config: PreflightConfig,
    resolver: Optional[ResourceResolver] = None,
    parser: Optional[YamlParser] = None,
) -> PreflightOutcome:
    """Validate the spec tree described by ``config``.

    Every subsystem runs once regardless of how many errors earlier ones
    found. Only an unusable meta.yml, or an unexpected failure, stops the run
    early; both end in the fatal stage with exit code 2 and no report file.

    Args:
        config: Run configuration
        resolver: Existence checks for referenced files; defaults to the
            filesystem under ``config.resource_root_path``
        parser: YAML loader; a fresh one by default
    """
    outcome = PreflightOutcome(report=IssueReport())
    try:
        _run_stages(config, outcome, resolver or FileSystemResolver(config.resource_root_path), parser or YamlParser())
    except CriticalSpecError as exc:
        logger.critical(f"CRITICAL: {exc}. Cannot continue.")
        return _fatal(outcome, str(exc))
    except Exception as exc:
        logger.critical(f"CRITICAL ERROR: {exc}", exc_info=True)
        return _fatal(outcome, f"{type(exc).__name__}: {exc}")
    return outcome


def _fatal(outcome: PreflightOutcome, message: str) -> PreflightOutcome:
    outcome.stage = Stage.FATAL
    outcome.exit_code = ExitCode.CRITICAL
    outcome.fatal_message = message
    return outcome


def _run_stages(
    config: PreflightConfig,
    outcome: PreflightOutcome,
    resolver: ResourceResolver,
    parser: YamlParser,
) -> None:
    report = outcome.report
    spec_root = config.spec_root_path

    authority = BreakpointAuthority.load(parser, spec_root, report)
    outcome.stage = Stage.META_LOADED
    authority.check(report)
    breakpoints = authority.canonical_breakpoints()

    TokensChecker().run(parser, spec_root, report)
    GridChecker(breakpoints).run(parser, spec_root, report)
    MotionChecker().run(parser, spec_root, report)
    outcome.stage = Stage.DOCUMENTS_CHECKED

    catalog = AssetIndexer(resolver).index(parser, spec_root, report)
    outcome.stage = Stage.ASSETS_INDEXED

    registry = load_registry(parser, spec_root, report)
    outcome.routes = RouteValidator(resolver, breakpoints, catalog).validate(parser, spec_root, registry, report)
    outcome.stage = Stage.ROUTES_VALIDATED

    if config.write_report:
        report.persist(config.report_file)
    outcome.stage = Stage.REPORTED
    outcome.exit_code = exit_code_for(report)
