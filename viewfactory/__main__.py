"""
Module entrypoint for the view factory CLI.

This file exists so that `python -m viewfactory ...` works without the
console-script wrapper installed.
"""

from __future__ import annotations

from viewfactory.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
