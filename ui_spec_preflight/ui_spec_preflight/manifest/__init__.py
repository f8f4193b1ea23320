"""Manifest package: machine-readable overview of a UI-SPEC tree."""

from .generator import build_manifest, default_manifest_path, save_manifest

__all__ = ['build_manifest', 'default_manifest_path', 'save_manifest']
