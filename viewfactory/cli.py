"""
Command-line interface for the view factory.

Notes
-----
The CLI is intentionally thin. It parses arguments and delegates to the
engine and GUI modules.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from factory_engine.factory import ViewFactory
from factory_engine.tags import TYPE_LEVEL_TAG
from gui.app import run_demo
from gui.themes import THEMES, build_theme


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="viewfactory",
        description="Tag-driven view styling registry",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    rules_p = sub.add_parser("rules", help="List the rules registered by a bundled theme")
    rules_p.add_argument("--theme", required=True, help=f"Theme name ({', '.join(THEMES)})")

    demo_p = sub.add_parser("demo", help="Launch the demo window")
    demo_p.add_argument(
        "--theme",
        default=None,
        help="Theme for widgets not styled explicitly. If omitted, the saved setting is used.",
    )
    demo_p.add_argument(
        "--data-root",
        default=None,
        help="Override the settings directory (primarily for testing).",
    )

    return parser


def render_rules(factory: ViewFactory) -> str:
    """
    Render one line per stored rule: index, view type and tag.

    Type-level rules show ``*`` in place of a tag.
    """
    lines = []
    for view_type, token, rule in factory.registered_rules():
        tag = "*" if token == TYPE_LEVEL_TAG else token
        lines.append(f"{rule.registration_index:>3}  {view_type.__name__:<16} {tag}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

    if args.command == "rules":
        try:
            factory = build_theme(args.theme)
        except KeyError as exc:
            print(f"ERROR: {exc.args[0]}")
            return 2
        print(render_rules(factory))
        return 0

    if args.command == "demo":
        if args.theme is not None and args.theme not in THEMES:
            print(f"ERROR: Unknown theme: {args.theme!r}")
            return 2

        data_root = Path(args.data_root) if args.data_root else None
        return run_demo(theme_name=args.theme, data_root=data_root)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
