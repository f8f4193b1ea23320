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

"""Issue accumulation and reporting for one preflight run."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..file_io.report_json import save_json
from ..file_io.yaml_parser import LoadedDocument
from ..models.issue import Issue, Severity
from ..models.report_schema import IssueReportPayload, IssueSummary


class IssueReport:
    """Append-only container for every issue found during a run.

    Issues are never merged or removed; a duplicate finding is recorded as
    a separate entry.
    """

    def __init__(self):
        self._buckets: Dict[str, List[Issue]] = {
            Severity.ERROR: [],
            Severity.WARNING: [],
            Severity.INFO: [],
        }

    @property
    def errors(self) -> List[Issue]:
        return list(self._buckets[Severity.ERROR])

    @property
    def warnings(self) -> List[Issue]:
        return list(self._buckets[Severity.WARNING])

    @property
    def info(self) -> List[Issue]:
        return list(self._buckets[Severity.INFO])

    @property
    def has_errors(self) -> bool:
        return bool(self._buckets[Severity.ERROR])

    def record(
        self,
        severity: str,
        category: str,
        file: str,
        message: str,
        line: Optional[int] = None,
    ) -> Issue:
        """Append an issue.

        Args:
            severity: One of ``error``, ``warning``, ``info``
            category: Subsystem the issue belongs to
            file: Spec-root relative path of the offending document
            message: Human readable description
            line: Optional 1-based line in ``file``
        """
        if severity not in self._buckets:
            raise ValueError(f"Unknown severity '{severity}'. Valid severities: {Severity.get_all()}")
        issue = Issue(severity=severity, category=category, file=file, message=message, line=line)
        self._buckets[severity].append(issue)
        return issue

    def add_error(self, category: str, file: str, message: str, line: Optional[int] = None) -> Issue:
        return self.record(Severity.ERROR, category, file, message, line)

    def add_warning(self, category: str, file: str, message: str, line: Optional[int] = None) -> Issue:
        return self.record(Severity.WARNING, category, file, message, line)

    def add_info(self, category: str, file: str, message: str, line: Optional[int] = None) -> Issue:
        return self.record(Severity.INFO, category, file, message, line)

    def scope(self, category: str, file: str, document: Optional[LoadedDocument] = None) -> "IssueScope":
        return IssueScope(self, category, file, document)

    def summarize(self) -> IssueSummary:
        errors = len(self._buckets[Severity.ERROR])
        warnings = len(self._buckets[Severity.WARNING])
        info = len(self._buckets[Severity.INFO])
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info,
            "total": errors + warnings + info,
        }

    def to_dict(self) -> IssueReportPayload:
        payload = {}
        for severity in Severity.get_all():
            payload[Severity.bucket(severity)] = [issue.to_entry() for issue in self._buckets[severity]]
        return payload

    def persist(self, path: Union[str, Path]) -> None:
        """Write the full structured issue list as JSON."""
        save_json(path, self.to_dict(), label="preflight report")


class IssueScope:
    """Records issues for one file, resolving lines from its source map."""

    def __init__(self, report: IssueReport, category: str, file: str, document: Optional[LoadedDocument] = None):
        self.report = report
        self.category = category
        self.file = file
        self.document = document

    def _line(self, yaml_path: Optional[str]) -> Optional[int]:
        if self.document is None or yaml_path is None:
            return None
        return self.document.line_of(yaml_path)

    def error(self, message: str, yaml_path: Optional[str] = None) -> Issue:
        return self.report.add_error(self.category, self.file, message, self._line(yaml_path))

    def warning(self, message: str, yaml_path: Optional[str] = None) -> Issue:
        return self.report.add_warning(self.category, self.file, message, self._line(yaml_path))

    def info(self, message: str, yaml_path: Optional[str] = None) -> Issue:
        return self.report.add_info(self.category, self.file, message, self._line(yaml_path))
