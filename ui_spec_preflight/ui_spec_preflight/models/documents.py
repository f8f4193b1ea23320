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

"""Typed views over the UI-SPEC documents.

Every field that may be missing from the YAML is ``Optional`` and ``None``
means "absent". Breakpoint-keyed mappings always use string keys because
YAML reads ``360:`` as an integer while ``"360":`` stays a string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..exceptions import DocumentShapeError


def is_present(value: Any) -> bool:
    """A value counts as present unless it is null or an empty string."""
    return value is not None and value != ""


def _child(mapping: Any, key: str) -> Any:
    if isinstance(mapping, dict):
        return mapping.get(key)
    return None


def _optional_text(value: Any) -> Optional[str]:
    if not is_present(value):
        return None
    if isinstance(value, (dict, list)):
        raise DocumentShapeError(f"Expected a scalar, got {type(value).__name__}")
    return str(value)


def _breakpoint_mapping(value: Any, field_name: str) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise DocumentShapeError(f"'{field_name}' must be a mapping keyed by breakpoint")
    return {str(key): item for key, item in value.items()}


@dataclass(frozen=True)
class MetaConfig:
    project: Optional[str] = None
    units: Any = None
    color_space: Any = None
    breakpoints: Tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetaConfig":
        raw_breakpoints = data.get("breakpoints")
        if raw_breakpoints is None:
            breakpoints: Tuple[Any, ...] = ()
        elif isinstance(raw_breakpoints, list):
            breakpoints = tuple(raw_breakpoints)
        else:
            breakpoints = (raw_breakpoints,)
        return cls(
            project=data.get("project") if is_present(data.get("project")) else None,
            units=data.get("units"),
            color_space=data.get("colorSpace"),
            breakpoints=breakpoints,
        )


@dataclass(frozen=True)
class TokenSet:
    colors: Any = None
    brand: Any = None
    surface: Any = None
    text: Any = None
    typography: Any = None
    spacing: Any = None
    radii: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenSet":
        colors = data.get("colors")
        return cls(
            colors=colors,
            brand=_child(colors, "brand"),
            surface=_child(colors, "surface"),
            text=_child(colors, "text"),
            typography=data.get("typography"),
            spacing=data.get("spacing"),
            radii=data.get("radii"),
        )

    def has_brand_color(self, name: str) -> bool:
        return is_present(_child(self.brand, name))


@dataclass(frozen=True)
class GridConfig:
    columns: Any = None
    container_widths: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridConfig":
        widths = _child(data.get("container"), "widths")
        if not isinstance(widths, dict):
            widths = {}
        return cls(
            columns=data.get("columns"),
            container_widths={str(key): value for key, value in widths.items()},
        )


@dataclass(frozen=True)
class MotionConfig:
    defaults: Any = None
    duration: Any = None
    easing: Any = None
    policy: Any = None
    presets: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MotionConfig":
        defaults = data.get("defaults")
        return cls(
            defaults=defaults,
            duration=_child(defaults, "duration"),
            easing=_child(defaults, "easing"),
            policy=data.get("policy"),
            presets=data.get("presets"),
        )


@dataclass(frozen=True)
class AssetRecord:
    id: str
    type: Optional[str] = None
    path: Optional[str] = None
    intrinsic: Any = None
    line: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], line: Optional[int] = None) -> Optional["AssetRecord"]:
        """Build a record, or return None for entries without an ``id``."""
        asset_id = _optional_text(data.get("id"))
        if asset_id is None:
            return None
        return cls(
            id=asset_id,
            type=_optional_text(data.get("type")),
            path=_optional_text(data.get("path")),
            intrinsic=data.get("intrinsic") if is_present(data.get("intrinsic")) else None,
            line=line,
        )


@dataclass(frozen=True)
class RouteRegistryEntry:
    id: Optional[str] = None
    path: Optional[str] = None
    kind: Optional[str] = None
    purpose: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteRegistryEntry":
        return cls(
            id=_optional_text(data.get("id")),
            path=_optional_text(data.get("path")),
            kind=_optional_text(data.get("kind")),
            purpose=_optional_text(data.get("purpose")),
        )

    def matches(self, route_name: str) -> bool:
        """True if the route directory ``route_name`` implements this entry."""
        return (
            self.id == route_name
            or self.id == f"auth.{route_name}"
            or self.path == f"/{route_name}"
        )


@dataclass(frozen=True)
class RouteRegistry:
    entries: Tuple[RouteRegistryEntry, ...] = ()
    declares_routes: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteRegistry":
        routes = data.get("routes")
        if routes is None:
            return cls()
        if not isinstance(routes, list):
            raise DocumentShapeError("'routes' must be a list")
        entries = tuple(
            RouteRegistryEntry.from_dict(item) for item in routes if isinstance(item, dict)
        )
        return cls(entries=entries, declares_routes=True)

    def find(self, route_name: str) -> Optional[RouteRegistryEntry]:
        for entry in self.entries:
            if entry.matches(route_name):
                return entry
        return None

    def registered_ids(self) -> Tuple[str, ...]:
        return tuple(entry.id for entry in self.entries if entry.id is not None)


@dataclass(frozen=True)
class RouteInfo:
    route: Optional[str] = None
    summary: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteInfo":
        return cls(
            route=_optional_text(data.get("route")),
            summary=_optional_text(data.get("summary")),
        )


@dataclass(frozen=True)
class Element:
    index: int
    id: Optional[str] = None
    asset: Optional[str] = None
    box: Optional[Dict[str, Any]] = None
    type_style_family: Any = None

    @classmethod
    def from_dict(cls, data: Any, index: int) -> "Element":
        if not isinstance(data, dict):
            raise DocumentShapeError(f"element[{index}] must be a mapping")
        return cls(
            index=index,
            id=_optional_text(data.get("id")),
            asset=_optional_text(data.get("asset")),
            box=_breakpoint_mapping(data.get("box"), f"element[{index}].box"),
            type_style_family=_child(data.get("typeStyle"), "family"),
        )

    @property
    def label(self) -> str:
        return self.id if self.id is not None else f"element[{self.index}]"


@dataclass(frozen=True)
class Slice:
    slice_id: Optional[str] = None
    route: Optional[str] = None
    overlays: Optional[Dict[str, Any]] = None
    elements: Optional[Tuple[Element, ...]] = None
    acceptance_breakpoints: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Slice":
        if not isinstance(data, dict):
            raise DocumentShapeError("Slice document must be a mapping")

        raw_elements = data.get("elements")
        elements: Optional[Tuple[Element, ...]] = None
        if raw_elements is not None:
            if not isinstance(raw_elements, list):
                raise DocumentShapeError("'elements' must be a list")
            elements = tuple(Element.from_dict(item, idx) for idx, item in enumerate(raw_elements))

        raw_accept = _child(data.get("acceptance"), "breakpoints")
        acceptance: Optional[Tuple[str, ...]] = None
        if raw_accept is not None:
            if not isinstance(raw_accept, list):
                raise DocumentShapeError("'acceptance.breakpoints' must be a list")
            acceptance = tuple(str(bp) for bp in raw_accept)

        return cls(
            slice_id=_optional_text(data.get("sliceId")),
            route=_optional_text(data.get("route")),
            overlays=_breakpoint_mapping(data.get("overlays"), "overlays"),
            elements=elements,
            acceptance_breakpoints=acceptance,
        )
