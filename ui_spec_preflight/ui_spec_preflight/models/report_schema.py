from __future__ import annotations

from typing import Dict, List, TypedDict


class IssueEntry(TypedDict, total=False):
    category: str
    file: str
    message: str
    line: int


class IssueReportPayload(TypedDict):
    errors: List[IssueEntry]
    warnings: List[IssueEntry]
    info: List[IssueEntry]


class IssueSummary(TypedDict):
    errors: int
    warnings: int
    info: int
    total: int


class RouteDetail(TypedDict):
    status: str
    slices: int
    overlays: int
    path: str
    kind: str
    purpose: str


class ManifestRoutes(TypedDict):
    total: int
    implemented: int
    planned: int
    details: Dict[str, RouteDetail]
    plannedList: List[str]
