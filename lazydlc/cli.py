"""Command-line front door for lazydlc.

Parses CLI options, resolves the catalog location for a title, and opens an
edit session. Then applies one command (show/add/toggle/remove/remove-all)
and saves unless ``--dry-run`` is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .catalog.store import catalog_path_for
from .catalog.types import parse_title_id
from .errors import CatalogFormatError, CatalogIOError
from .session import DlcEditSession
from .toggle_tree import ToggleTree, format_tree_rows
from .ui_theme import UITheme, available_theme_names, resolve_theme

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _title_id(value: str) -> int:
    """argparse type for hexadecimal title ids."""
    try:
        return parse_title_id(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def configure_logging(verbosity: int) -> None:
    """Send package logs to stderr: warnings by default, more with ``-v``/``-vv``."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("lazydlc")
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydlc",
        description="Inspect and edit the DLC catalog of one title.",
    )
    parser.add_argument("title_id", type=_title_id, help="Base title id (16 hex digits).")
    parser.add_argument("--title-name", default=None, help="Title name shown in the heading.")
    parser.add_argument("--catalog", type=Path, default=None, help="Catalog file (default: <games dir>/<title id>/dlc.json).")
    parser.add_argument("--games-dir", type=Path, default=None, help="Directory holding per-title catalogs.")
    parser.add_argument(
        "--full-scan",
        action="store_true",
        help="Keep scanning an archive after an entry of another title.",
    )
    parser.add_argument(
        "--strict-load",
        action="store_true",
        help="Fail instead of starting empty when the catalog is unreadable.",
    )
    parser.add_argument("--dry-run", action="store_true", help="Apply edits in memory only; do not save.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store this run's --full-scan, --strict-load, --theme and --games-dir as defaults.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity.")

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("show", help="Print the catalog tree (default).")
    add = commands.add_parser("add", help="Add DLC archives to the catalog.")
    add.add_argument("archives", nargs="+", help="Paths to .nsp archives.")
    toggle = commands.add_parser("toggle", help="Toggle rows by address (C or C.E).")
    toggle.add_argument("addresses", nargs="+")
    remove = commands.add_parser("remove", help="Remove rows by address (C or C.E).")
    remove.add_argument("addresses", nargs="+")
    commands.add_parser("remove-all", help="Remove every container.")
    return parser


def save_defaults(args: argparse.Namespace) -> None:
    """Persist scan and display options of this run to the user config."""
    config.save_full_scan(args.full_scan)
    config.save_strict_catalog_load(args.strict_load)
    if args.theme:
        config.save_theme_name(args.theme)
    if args.games_dir is not None:
        config.save_games_dir(args.games_dir)


def render_session(session: DlcEditSession, theme: UITheme) -> str:
    """Render the session heading and tree rows as text."""
    tree = session.tree if session.tree is not None else ToggleTree()
    lines = [f"{theme.heading}{session.heading}{theme.reset}"]
    rows = format_tree_rows(tree, theme)
    lines.extend(rows if rows else ["(no DLC containers)"])
    return "\n".join(lines) + "\n"


def _resolve_addresses(tree: ToggleTree, addresses: list[str]) -> list[int]:
    node_ids: list[int] = []
    for address in addresses:
        try:
            node_ids.append(tree.resolve_address(address))
        except KeyError:
            raise SystemExit(f"No such row: {address}") from None
    return node_ids


def _apply_command(args: argparse.Namespace, session: DlcEditSession, theme: UITheme) -> tuple[bool, int]:
    """Apply the edit command; returns ``(changed, exit_status)``."""
    tree = session.tree
    if args.command == "add":
        report = session.add_archives(args.archives)
        for _path, error in report.failures:
            sys.stderr.write(f"{theme.error}{error}{theme.reset}\n")
        for path in report.skipped:
            sys.stderr.write(f"Skipped {path}: not an existing .nsp file\n")
        return bool(report.added), 0 if report.ok else 1
    if args.command == "toggle":
        for node_id in _resolve_addresses(tree, args.addresses):
            tree.toggle(node_id)
        return True, 0
    if args.command == "remove":
        for node_id in _resolve_addresses(tree, args.addresses):
            try:
                tree.remove(node_id)
            except KeyError:
                # Already gone with a container removed earlier in this batch.
                continue
        return True, 0
    if args.command == "remove-all":
        tree.remove_all()
        return True, 0
    return False, 0


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run one command against a title's catalog.

    Returns the process exit status: ``0`` on success, ``1`` when an archive
    in ``add`` failed, ``2`` when the catalog could not be saved.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if args.save_defaults:
        save_defaults(args)

    games_dir = args.games_dir if args.games_dir is not None else config.load_games_dir()
    catalog_path = args.catalog if args.catalog is not None else catalog_path_for(args.title_id, games_dir)
    theme = resolve_theme(
        args.theme or config.load_theme_name(),
        no_color=args.no_color or not sys.stdout.isatty(),
    )
    session = DlcEditSession(
        args.title_id,
        catalog_path,
        title_name=args.title_name,
        full_scan=args.full_scan or config.load_full_scan(),
        strict_load=args.strict_load or config.load_strict_catalog_load(),
    )
    try:
        session.open()
    except (CatalogIOError, CatalogFormatError) as exc:
        raise SystemExit(f"Cannot load catalog: {exc}") from exc

    changed, status = _apply_command(args, session, theme)
    if changed and not args.dry_run:
        try:
            session.save()
        except CatalogIOError as exc:
            sys.stderr.write(f"{theme.error}Cannot save catalog: {exc}{theme.reset}\n")
            return 2
    sys.stdout.write(render_session(session, theme))
    return status


if __name__ == "__main__":
    sys.exit(main())
