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

"""Preflight package: cross-document validation of a UI-SPEC tree."""

from .report import IssueReport, IssueScope
from .breakpoints import BreakpointAuthority, EXPECTED_BREAKPOINTS
from .document_checks import GridChecker, MotionChecker, TokensChecker
from .asset_index import AssetCatalog, AssetIndexer, load_asset_entries
from .route_validator import RouteValidationResult, RouteValidator, load_registry
from .orchestrator import ExitCode, PreflightOutcome, Stage, check_spec, exit_code_for

__all__ = [
    'check_spec',
    'exit_code_for',
    'ExitCode',
    'PreflightOutcome',
    'Stage',
    'IssueReport',
    'IssueScope',
    'BreakpointAuthority',
    'EXPECTED_BREAKPOINTS',
    'TokensChecker',
    'GridChecker',
    'MotionChecker',
    'AssetCatalog',
    'AssetIndexer',
    'load_asset_entries',
    'RouteValidationResult',
    'RouteValidator',
    'load_registry',
]
