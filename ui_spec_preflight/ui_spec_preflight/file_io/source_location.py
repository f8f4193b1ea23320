from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def _parent_pointer(yaml_path: str) -> Optional[str]:
    if not yaml_path:
        return None
    head, _, _ = yaml_path.rpartition("/")
    return head


def lookup_source(
    source_map: Optional[SourceMap],
    yaml_path: Optional[str],
    *,
    nearest: bool = False,
) -> SourceLocation:
    """Look up the location of ``yaml_path``.

    With ``nearest`` the lookup walks up to the closest recorded ancestor, so a
    key that is absent from the document still points at its parent mapping.
    The document root is never used as a fallback.
    """
    if not source_map or yaml_path is None:
        return SourceLocation(yaml_path=yaml_path)

    pointer: Optional[str] = yaml_path
    while pointer is not None:
        entry = source_map.get(pointer)
        if entry:
            return SourceLocation(
                yaml_path=yaml_path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        if not nearest:
            break
        pointer = _parent_pointer(pointer)
        if not pointer:
            break

    return SourceLocation(yaml_path=yaml_path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        if loc.line is not None:
            parts.append(f"source= {loc.file_path}:{loc.line} ")
        else:
            parts.append(f"source= {loc.file_path} ")

    if loc.yaml_path:
        parts.append(f"yaml_path= {loc.yaml_path} ")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
