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

"""Custom exceptions for the UI-SPEC preflight system."""


class SpecPreflightError(Exception):
    """Base exception for preflight related errors."""
    pass


class DocumentLoadError(SpecPreflightError):
    """Exception raised when a spec document cannot be read or parsed."""
    pass


class DocumentShapeError(SpecPreflightError):
    """Exception raised when a parsed document has the wrong container shape."""
    pass


class CriticalSpecError(SpecPreflightError):
    """Exception raised when a structurally required document is unusable.

    Every breakpoint-dependent check needs meta.yml, so this aborts the run.
    """
    pass


class ManifestError(SpecPreflightError):
    """Exception raised when the manifest cannot be generated."""
    pass
