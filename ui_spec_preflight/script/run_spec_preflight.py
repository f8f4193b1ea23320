#!/usr/bin/env python3

import argparse
import sys
from pathlib import Path
from typing import List


SCRIPT_DIR = Path(__file__).resolve().parent
PACKAGE_ROOT = SCRIPT_DIR.parent
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from ui_spec_preflight.config import PreflightConfig  # noqa: E402
from ui_spec_preflight.exceptions import ManifestError  # noqa: E402
from ui_spec_preflight.manifest import build_manifest, default_manifest_path, save_manifest  # noqa: E402
from ui_spec_preflight.preflight import ExitCode, check_spec  # noqa: E402
from ui_spec_preflight.preflight.run_preflight import render_outcome  # noqa: E402


SPEC_DIR_NAME = "UI-SPEC"


def find_spec_roots(workspace: Path) -> List[Path]:
    """Find every UI-SPEC directory that holds a meta.yml below ``workspace``."""
    if (workspace / "meta.yml").is_file():
        return [workspace]
    return sorted(
        path.parent
        for path in workspace.rglob("meta.yml")
        if path.parent.name == SPEC_DIR_NAME and "node_modules" not in path.parts
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run UI-SPEC preflight for every spec tree in a workspace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "workspace",
        nargs="?",
        default=".",
        help="Workspace root or a spec root (default: current directory)",
    )
    parser.add_argument(
        "--format",
        choices=["human", "json", "github-actions", "markdown"],
        default="human",
        help="Output format (default: human)",
    )
    parser.add_argument(
        "--manifest",
        action="store_true",
        help="Regenerate manifest.json for every spec tree that passes",
    )

    args = parser.parse_args()

    workspace = Path(args.workspace or ".").resolve()
    spec_roots = find_spec_roots(workspace)
    if not spec_roots:
        print(f"No {SPEC_DIR_NAME} directory found under {workspace}.", file=sys.stderr)
        sys.exit(ExitCode.CRITICAL)

    worst = ExitCode.OK
    for spec_root in spec_roots:
        config = PreflightConfig.from_env()
        config.spec_root = str(spec_root)
        if args.format != "human":
            config.log_level = "WARNING"
        config.set_logging()

        outcome = check_spec(config)
        worst = max(worst, outcome.exit_code)
        if outcome.fatal_message is not None:
            print(f"{spec_root}: CRITICAL: {outcome.fatal_message}", file=sys.stderr)
            continue

        if args.format == "human":
            print(f"\n{spec_root}:")
        sys.stdout.write(render_outcome(outcome, args.format, spec_root, config.verbose))

        if args.manifest and outcome.exit_code == ExitCode.OK:
            try:
                save_manifest(default_manifest_path(spec_root), build_manifest(spec_root))
            except (ManifestError, OSError) as exc:
                print(f"{spec_root}: Error generating manifest: {exc}", file=sys.stderr)
                worst = max(worst, ExitCode.VALIDATION_ERRORS)

    sys.exit(worst)


if __name__ == "__main__":
    main()
