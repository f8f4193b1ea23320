"""Module entrypoint for `python -m ui_spec_preflight.preflight`.

Delegates to the preflight CLI implementation.
"""

from .run_preflight import main


if __name__ == "__main__":
    main()
