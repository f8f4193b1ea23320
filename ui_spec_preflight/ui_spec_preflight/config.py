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

"""Configuration management for the preflight run."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .utils.logging_utils import configure_preflight_logging

ENV_PREFIX = "UI_SPEC_PREFLIGHT_"
REPORT_FILE_NAME = "preflight-results.json"
MANIFEST_FILE_NAME = "manifest.json"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class PreflightConfig:
    """Configuration class for one preflight invocation."""
    spec_root: str = "UI-SPEC"
    # Base directory for asset and overlay paths; the spec root when unset.
    resource_root: Optional[str] = None
    # Where the issue report is written; beside the spec root when unset.
    report_path: Optional[str] = None
    write_report: bool = True
    verbose: bool = False
    log_level: str = "INFO"
    print_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> 'PreflightConfig':
        """Create configuration from environment variables."""
        return cls(
            spec_root=os.getenv(f'{ENV_PREFIX}SPEC_ROOT', 'UI-SPEC'),
            resource_root=os.getenv(f'{ENV_PREFIX}RESOURCE_ROOT') or None,
            report_path=os.getenv(f'{ENV_PREFIX}REPORT_PATH') or None,
            verbose=_env_flag(f'{ENV_PREFIX}VERBOSE') or _env_flag('VERBOSE'),
            log_level=os.getenv(f'{ENV_PREFIX}LOG_LEVEL', 'INFO'),
            print_level=os.getenv(f'{ENV_PREFIX}PRINT_LEVEL', 'WARNING'),
        )

    @property
    def spec_root_path(self) -> Path:
        return Path(self.spec_root)

    @property
    def resource_root_path(self) -> Path:
        if self.resource_root:
            return Path(self.resource_root)
        return self.spec_root_path

    @property
    def report_file(self) -> Path:
        if self.report_path:
            return Path(self.report_path)
        return self.spec_root_path.resolve().parent / REPORT_FILE_NAME

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        return configure_preflight_logging(self.log_level, self.print_level)
