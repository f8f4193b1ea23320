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

"""CLI entry point for the UI-SPEC preflight validation.

Exit codes: 0 = pass (warnings allowed), 1 = errors found, 2 = critical failure.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

try:
    from . import check_spec, PreflightOutcome
    from ..config import PreflightConfig
    from ..file_io.report_json import dump_json
    from ..file_io.template_renderer import TemplateRenderer
except ImportError:  # pragma: no cover
    # Allow direct execution: `python path/to/run_preflight.py ...`
    SCRIPT_DIR = Path(__file__).resolve().parent
    REPO_ROOT = SCRIPT_DIR.parent.parent
    if str(REPO_ROOT) not in sys.path:
        sys.path.insert(0, str(REPO_ROOT))

    from ui_spec_preflight.preflight import check_spec, PreflightOutcome
    from ui_spec_preflight.config import PreflightConfig
    from ui_spec_preflight.file_io.report_json import dump_json
    from ui_spec_preflight.file_io.template_renderer import TemplateRenderer


FORMATS = ['human', 'json', 'github-actions', 'markdown']


def escape_command_data(value: str) -> str:
    # "%" must be replaced first
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_command_property(value: str) -> str:
    return escape_command_data(value).replace(":", "%3A").replace(",", "%2C")


def render_github_actions(outcome: PreflightOutcome, spec_root: Path, verbose: bool = False) -> List[str]:
    lines = []
    payload = outcome.report.to_dict()
    commands = [('error', payload['errors']), ('warning', payload['warnings'])]
    if verbose:
        commands.append(('notice', payload['info']))
    for command, entries in commands:
        for entry in entries:
            file_path = escape_command_property((spec_root / entry['file']).as_posix())
            message = escape_command_data(f"[{entry['category']}] {entry['message']}")
            lines.append(f"::{command} file={file_path},line={entry.get('line', 1)}::{message}")
    return lines


def render_outcome(outcome: PreflightOutcome, output_format: str, spec_root: Path, verbose: bool = False) -> str:
    """Render a finished (non-fatal) run in the requested format."""
    if output_format == 'json':
        return dump_json(outcome.report.to_dict())
    if output_format == 'github-actions':
        lines = render_github_actions(outcome, spec_root, verbose)
        return "\n".join(lines) + ("\n" if lines else "")

    renderer = TemplateRenderer()
    context = {
        'summary': outcome.summary,
        'issues': outcome.report.to_dict(),
        'routes': outcome.routes,
        'verbose': verbose,
    }
    if output_format == 'markdown':
        return renderer.render_template('report.md.jinja2', **context)
    return renderer.render_template('report_human.txt.jinja2', **context)


def build_config(args: argparse.Namespace) -> PreflightConfig:
    config = PreflightConfig.from_env()
    if args.spec_root:
        config.spec_root = args.spec_root
    if args.resource_root:
        config.resource_root = args.resource_root
    if args.report:
        config.report_path = args.report
    if args.no_report:
        config.write_report = False
    if args.verbose:
        config.verbose = True
    if args.log_level:
        config.log_level = args.log_level
    elif args.format != 'human':
        # Keep stdout machine readable.
        config.log_level = 'WARNING'
    return config


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the preflight CLI."""
    parser = argparse.ArgumentParser(
        description='Validate a UI-SPEC tree for cross-document consistency',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'spec_root',
        nargs='?',
        default=None,
        help='UI-SPEC root directory (default: $UI_SPEC_PREFLIGHT_SPEC_ROOT or ./UI-SPEC)',
    )
    parser.add_argument(
        '--resource-root',
        default=None,
        help='Base directory for asset and overlay paths (default: the spec root)',
    )
    parser.add_argument(
        '--report',
        default=None,
        help='Where to write the JSON issue report (default: beside the spec root)',
    )
    parser.add_argument(
        '--no-report',
        action='store_true',
        help='Do not write the JSON issue report',
    )
    parser.add_argument(
        '--format',
        choices=FORMATS,
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Also print info-level issues',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: INFO, WARNING for machine formats)',
    )

    args = parser.parse_args(argv)
    config = build_config(args)
    config.set_logging()

    outcome = check_spec(config)
    if outcome.fatal_message is not None:
        print(f"CRITICAL: {outcome.fatal_message}", file=sys.stderr)
        sys.exit(outcome.exit_code)

    sys.stdout.write(render_outcome(outcome, args.format, config.spec_root_path, config.verbose))
    if args.format == 'human' and config.write_report:
        print(f"Full results saved to: {config.report_file}")
    sys.exit(outcome.exit_code)


if __name__ == '__main__':
    main()
