"""
Shared pytest fixtures for preflight tests.

Provides a builder that writes spec trees under ``tmp_path`` plus a fully
consistent baseline tree that individual tests then break on purpose.
"""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Iterable

import pytest

from ui_spec_preflight.config import PreflightConfig
from ui_spec_preflight.file_io.resource_resolver import StaticResolver
from ui_spec_preflight.file_io.yaml_parser import YamlParser
from ui_spec_preflight.preflight.report import IssueReport
from ui_spec_preflight.utils.logging_utils import LOGGER_NAME, remove_preflight_handlers


# =============================================================================
# Baseline Documents
# =============================================================================

META_YML = """\
project: Proxy
units: px
colorSpace: sRGB
breakpoints: [360, 393, 430]
"""

TOKENS_YML = """\
colors:
  brand:
    green: "#00C853"
    green_alt: "#00E676"
    purple: "#7C4DFF"
    black: "#000000"
  surface:
    base: "#FFFFFF"
  text:
    primary: "#111111"
typography:
  body:
    size: 16
spacing: [4, 8, 16, 24]
radii:
  sm: 4
  md: 8
"""

GRID_YML = """\
columns: 12
container:
  widths:
    360: 328
    393: 361
    430: 398
"""

MOTION_YML = """\
defaults:
  duration: 200
  easing: ease-out
policy:
  reduceMotion: respect
presets:
  fade:
    duration: 150
"""

ASSETS_YML = """\
- id: logo
  type: svg
  path: assets/logo.svg
  intrinsic: {w: 120, h: 32}
- id: hero
  type: png
  path: assets/hero.png
  intrinsic: {w: 360, h: 240}
"""

REGISTRY_YML = """\
routes:
  - id: auth.login
    path: /login
    kind: screen
    purpose: Sign in with email
  - id: settings
    path: /settings
    kind: screen
"""

LOGIN_ROUTE_YML = """\
route: /login
summary: Email login screen
"""

LOGIN_HEADER_SLICE_YML = """\
sliceId: login.header
route: /login
overlays:
  "360": routes/login/overlays/header-360.png
  "393": routes/login/overlays/header-393.png
  "430": routes/login/overlays/header-430.png
acceptance:
  breakpoints: [360, 393, 430]
elements:
  - id: logo
    asset: logo
    box:
      360: {x: 16, y: 24, w: 120, h: 32}
      393: {x: 16, y: 24, w: 120, h: 32}
      430: {x: 20, y: 24, w: 120, h: 32}
    typeStyle:
      family: Inter
"""

BASELINE_FILES = {
    "meta.yml": META_YML,
    "tokens.yml": TOKENS_YML,
    "grid.yml": GRID_YML,
    "motion.yml": MOTION_YML,
    "assets.yml": ASSETS_YML,
    "registry.yml": REGISTRY_YML,
    "routes/login/route.yml": LOGIN_ROUTE_YML,
    "routes/login/slices/header.yml": LOGIN_HEADER_SLICE_YML,
}

BASELINE_RESOURCES = [
    "assets/logo.svg",
    "assets/hero.png",
    "routes/login/overlays/header-360.png",
    "routes/login/overlays/header-393.png",
    "routes/login/overlays/header-430.png",
]


# =============================================================================
# Spec Tree Builder
# =============================================================================


class SpecTree:
    """Writes spec documents and resource files below one root directory."""

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, relative_path: str, content: str) -> Path:
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    def touch(self, relative_paths: Iterable[str]) -> None:
        for relative_path in relative_paths:
            path = self.root / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")

    def remove(self, relative_path: str) -> None:
        (self.root / relative_path).unlink()

    def populate_baseline(self) -> "SpecTree":
        for relative_path, content in BASELINE_FILES.items():
            self.write(relative_path, content)
        self.touch(BASELINE_RESOURCES)
        return self

    def config(self, **overrides) -> PreflightConfig:
        """Config for this tree with the report written beside it."""
        options = {
            "spec_root": str(self.root),
            "report_path": str(self.root.parent / "preflight-results.json"),
        }
        options.update(overrides)
        return PreflightConfig(**options)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def spec_tree(tmp_path: Path) -> SpecTree:
    """An empty spec root at ``<tmp>/UI-SPEC``."""
    return SpecTree(tmp_path / "UI-SPEC")


@pytest.fixture
def baseline_tree(spec_tree: SpecTree) -> SpecTree:
    """A spec tree that passes preflight with zero issues."""
    return spec_tree.populate_baseline()


@pytest.fixture
def parser() -> YamlParser:
    return YamlParser()


@pytest.fixture
def report() -> IssueReport:
    return IssueReport()


@pytest.fixture
def resolver() -> StaticResolver:
    """In-memory resolver that knows every baseline resource."""
    return StaticResolver(BASELINE_RESOURCES)


@pytest.fixture(autouse=True)
def restore_package_logging():
    """Drop the stream handlers a CLI test installs on the package logger."""
    package_logger = logging.getLogger(LOGGER_NAME)
    level = package_logger.level
    yield
    remove_preflight_handlers()
    package_logger.setLevel(level)
