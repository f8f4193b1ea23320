#!/usr/bin/env python3
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

"""CLI entry point for generating the UI-SPEC manifest.json."""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from ..config import PreflightConfig
from ..exceptions import ManifestError
from .generator import build_manifest, default_manifest_path, save_manifest

logger = logging.getLogger(__name__)


def format_summary(manifest: Dict[str, Any]) -> List[str]:
    by_type = manifest["assets"]["byType"]
    routes = manifest["routes"]
    return [
        f"Project: {manifest['project']['name']}",
        f"Assets: {manifest['assets']['total']} ({by_type['svg']} SVG, {by_type['png']} PNG, {by_type['lottie']} Lottie)",
        f"Routes: {routes['implemented']}/{routes['total']} implemented",
        f"Slices: {manifest['slices']['total']} total",
        f"Overlays: {manifest['overlays']['total']} PNG references",
        f"Code-gen ready: {'yes' if manifest['readiness']['codeGen'] else 'not yet'}",
    ]


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Generate manifest.json for a UI-SPEC tree')
    parser.add_argument(
        'spec_root',
        nargs='?',
        default=None,
        help='UI-SPEC root directory (default: $UI_SPEC_PREFLIGHT_SPEC_ROOT or ./UI-SPEC)',
    )
    parser.add_argument(
        '--output',
        default=None,
        help='Where to write the manifest (default: <spec root>/manifest.json)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: INFO)',
    )
    args = parser.parse_args(argv)

    config = PreflightConfig.from_env()
    if args.spec_root:
        config.spec_root = args.spec_root
    if args.log_level:
        config.log_level = args.log_level
    config.set_logging()

    output_path = args.output or default_manifest_path(config.spec_root_path)
    try:
        manifest = build_manifest(config.spec_root_path)
        save_manifest(output_path, manifest)
    except (ManifestError, OSError) as exc:
        logger.error(f"Error generating manifest: {exc}")
        sys.exit(1)

    print(f"Manifest generated: {output_path}")
    for line in format_summary(manifest):
        print(f"  {line}")
    sys.exit(0)


if __name__ == '__main__':
    main()
