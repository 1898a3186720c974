"""Entry point for `python -m swedishswift`."""

from __future__ import annotations

from swedishswift.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
