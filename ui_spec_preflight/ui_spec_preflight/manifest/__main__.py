"""Module entrypoint for `python -m ui_spec_preflight.manifest`."""

from .run_manifest import main


if __name__ == "__main__":
    main()
