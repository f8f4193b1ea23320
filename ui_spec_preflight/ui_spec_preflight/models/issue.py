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

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .report_schema import IssueEntry


class Severity:
    """Issue severities, most severe first."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    # Report bucket name per severity
    BUCKETS = {
        ERROR: "errors",
        WARNING: "warnings",
        INFO: "info",
    }

    @classmethod
    def get_all(cls) -> List[str]:
        return [cls.ERROR, cls.WARNING, cls.INFO]

    @classmethod
    def bucket(cls, severity: str) -> str:
        try:
            return cls.BUCKETS[severity]
        except KeyError:
            raise ValueError(f"Unknown severity '{severity}'. Valid severities: {cls.get_all()}") from None


class Category:
    """Subsystem an issue belongs to."""
    META = "meta"
    TOKENS = "tokens"
    GRID = "grid"
    MOTION = "motion"
    ASSETS = "assets"
    REGISTRY = "registry"
    ROUTE = "route"
    SLICE = "slice"


@dataclass(frozen=True)
class Issue:
    severity: str
    category: str
    file: str
    message: str
    line: Optional[int] = None

    def to_entry(self) -> IssueEntry:
        entry: IssueEntry = {
            "category": self.category,
            "file": self.file,
            "message": self.message,
        }
        if self.line is not None:
            entry["line"] = self.line
        return entry
