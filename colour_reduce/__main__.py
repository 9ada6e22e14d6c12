"""Entry point for running colour_reduce as a module."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
