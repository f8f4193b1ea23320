"""Data model for UI-SPEC documents and preflight issues."""

from .documents import (
    AssetRecord,
    Element,
    GridConfig,
    MetaConfig,
    MotionConfig,
    RouteInfo,
    RouteRegistry,
    RouteRegistryEntry,
    Slice,
    TokenSet,
    is_present,
)
from .issue import Category, Issue, Severity

__all__ = [
    "AssetRecord",
    "Element",
    "GridConfig",
    "MetaConfig",
    "MotionConfig",
    "RouteInfo",
    "RouteRegistry",
    "RouteRegistryEntry",
    "Slice",
    "TokenSet",
    "is_present",
    "Category",
    "Issue",
    "Severity",
]
