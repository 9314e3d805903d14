"""Module entry point for `python -m openapi_builder`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
