"""CLI command handlers for hsm.

Implements the save, restore, rules, list, show and delete commands.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .. import __version__
from ..core.config import SessionManagerConfig, ensure_source_line, load_config
from ..core.errors import SessionManagerError
from ..core.hyprctl import HyprctlGateway
from ..core.persistence import DEFAULT_SESSION_NAME, SessionStore
from ..core.restore import SessionRestorer
from ..core.snapshot import SessionSnapshotReader
from .logging_config import get_logger, log_timing, setup_logging


logger = get_logger(__name__)


# ANSI color codes for output
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    BLUE = "\033[34m"
    GRAY = "\033[90m"


def print_success(message: str) -> None:
    """Print success message in green."""
    print(f"{Colors.GREEN}✓{Colors.RESET} {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    print(f"{Colors.RED}✗{Colors.RESET} {message}", file=sys.stderr)


def print_info(message: str) -> None:
    """Print info message in blue."""
    print(f"{Colors.BLUE}ℹ{Colors.RESET} {message}")


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    print(f"{Colors.YELLOW}⚠{Colors.RESET} {message}")


def print_error_with_remediation(error: str, remediation: str) -> None:
    """Print error with remediation steps.

    Format: "Error: <issue>. Remediation: <steps>"
    """
    print(f"{Colors.RED}✗ Error:{Colors.RESET} {error}", file=sys.stderr)
    print(f"{Colors.BLUE}  Remediation:{Colors.RESET} {remediation}", file=sys.stderr)


def _load_settings(args: argparse.Namespace) -> SessionManagerConfig:
    config_path = getattr(args, "config", None)
    return load_config(Path(config_path) if config_path else None)


# ============================================================================
# Commands
# ============================================================================


async def cmd_save(args: argparse.Namespace) -> int:
    """Capture the current session and save it.

    Returns:
        0 on success, 1 on error
    """
    try:
        settings = _load_settings(args)
        store = SessionStore(settings.sessions_dir)
        reader = SessionSnapshotReader(HyprctlGateway())

        with log_timing("Capture session", logger):
            session = await reader.capture()

        path = store.save(session, args.name)
        print_success(f"Saved {len(session.windows)} windows to {path}")

        missing = [w.window_class for w in session.windows if not w.cmdline]
        if missing:
            print_warning(f"No launch command recovered for: {', '.join(missing)}")

        if args.rules:
            rules_path = store.write_rules(session, args.name)
            print_success(f"Wrote window rules to {rules_path}")
            if ensure_source_line(settings.hyprland_config, rules_path):
                print_info(f"Added source line to {settings.hyprland_config}")

        return 0

    except SessionManagerError as e:
        print_error_with_remediation(str(e), "Make sure Hyprland is running and hyprctl is on PATH")
        return 1


async def cmd_restore(args: argparse.Namespace) -> int:
    """Restore a saved session.

    Returns:
        0 on success, 1 on error
    """
    try:
        settings = _load_settings(args)
        store = SessionStore(settings.sessions_dir)

        session = store.load(args.name)
        if session is None:
            print_error_with_remediation(
                f"Session not found: {args.name}",
                f"Save one first with: hsm save {args.name}",
            )
            return 1

        settle_delay = args.settle_delay if args.settle_delay is not None else settings.settle_delay
        restorer = SessionRestorer(
            HyprctlGateway(),
            settle_delay=settle_delay,
            resolve_missing_commands=settings.resolve_missing_commands or args.resolve_missing,
            class_overrides=settings.class_overrides,
        )

        with log_timing("Restore session", logger):
            report = await restorer.restore(session)

        if not session.windows:
            print_info("Session is empty - nothing to restore")
            return 0

        print_success(
            f"Restored session '{args.name}': {report.windows_launched} launched, "
            f"{report.windows_paired} positioned"
        )
        if report.windows_skipped:
            print_warning(f"{report.windows_skipped} windows could not be launched")
        if report.windows_unpaired:
            print_warning(f"{report.windows_unpaired} windows did not appear in time")
        if report.close_failures:
            print_warning(f"{report.close_failures} windows could not be closed")

        return 0

    except SessionManagerError as e:
        print_error_with_remediation(str(e), "Check that Hyprland is running, then retry")
        return 1


async def cmd_rules(args: argparse.Namespace) -> int:
    """Write static window rules for a saved session.

    Returns:
        0 on success, 1 on error
    """
    try:
        settings = _load_settings(args)
        store = SessionStore(settings.sessions_dir)

        session = store.load(args.name)
        if session is None:
            print_error(f"Session not found: {args.name}")
            return 1

        rules_path = store.write_rules(session, args.name)
        print_success(f"Wrote window rules to {rules_path}")

        if not args.no_source and ensure_source_line(settings.hyprland_config, rules_path):
            print_info(f"Added source line to {settings.hyprland_config}")

        return 0

    except SessionManagerError as e:
        print_error(str(e))
        return 1


async def cmd_list(args: argparse.Namespace) -> int:
    """List saved sessions.

    Returns:
        0 on success, 1 on error
    """
    try:
        settings = _load_settings(args)
        store = SessionStore(settings.sessions_dir)

        names = store.list_sessions()
        if not names:
            print_info("No saved sessions")
            print_info("Create one with: hsm save")
            return 0

        table = Table(title="Saved sessions")
        table.add_column("Name", style="bold")
        table.add_column("Windows", justify="right")
        table.add_column("Captured")

        for name in names:
            try:
                session = store.load(name)
            except SessionManagerError as e:
                table.add_row(name, "-", f"[red]unreadable: {e}[/red]")
                continue
            captured = session.captured_at.strftime("%Y-%m-%d %H:%M") if session.captured_at else "-"
            table.add_row(name, str(len(session.windows)), captured)

        Console().print(table)
        return 0

    except SessionManagerError as e:
        print_error(f"Error listing sessions: {e}")
        return 1


async def cmd_show(args: argparse.Namespace) -> int:
    """Show the windows of a saved session.

    Returns:
        0 on success, 1 on error
    """
    try:
        settings = _load_settings(args)
        session = SessionStore(settings.sessions_dir).load(args.name)
        if session is None:
            print_error(f"Session not found: {args.name}")
            return 1

        table = Table(title=f"Session '{args.name}'")
        table.add_column("Class", style="bold")
        table.add_column("Workspace")
        table.add_column("Position")
        table.add_column("Size")
        table.add_column("Floating")
        table.add_column("Command")

        for window in session.windows:
            table.add_row(
                window.window_class,
                window.workspace.name,
                f"{window.at[0]},{window.at[1]}",
                f"{window.size[0]}x{window.size[1]}",
                "yes" if window.floating else "",
                window.cmdline or "[yellow]unknown[/yellow]",
            )

        Console().print(table)
        return 0

    except SessionManagerError as e:
        print_error(str(e))
        return 1


async def cmd_delete(args: argparse.Namespace) -> int:
    """Delete a saved session.

    Returns:
        0 on success, 1 on error
    """
    try:
        settings = _load_settings(args)
        if not SessionStore(settings.sessions_dir).delete(args.name):
            print_error(f"Session not found: {args.name}")
            return 1

        print_success(f"Deleted session '{args.name}'")
        return 0

    except SessionManagerError as e:
        print_error(str(e))
        return 1


COMMANDS = {
    "save": cmd_save,
    "restore": cmd_restore,
    "rules": cmd_rules,
    "list": cmd_list,
    "show": cmd_show,
    "delete": cmd_delete,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hsm",
        description="Hyprland Session Manager - save and restore window layouts",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"hsm {__version__}",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level, includes verbose)",
    )
    parser.add_argument(
        "--config",
        help="Path to config.json (default: ~/.config/hyprland-session-manager/config.json)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # hsm save [name]
    parser_save = subparsers.add_parser("save", help="Save the current session")
    parser_save.add_argument("name", nargs="?", default=DEFAULT_SESSION_NAME, help="Session name")
    parser_save.add_argument(
        "--rules",
        action="store_true",
        help="Also write static window rules and source them from hyprland.conf",
    )

    # hsm restore [name]
    parser_restore = subparsers.add_parser("restore", help="Restore a saved session")
    parser_restore.add_argument("name", nargs="?", default=DEFAULT_SESSION_NAME, help="Session name")
    parser_restore.add_argument(
        "--settle-delay",
        type=float,
        default=None,
        help="Seconds to wait for relaunched applications (default: from config, 3)",
    )
    parser_restore.add_argument(
        "--resolve-missing",
        action="store_true",
        help="Guess launch commands from the window class when none was captured",
    )

    # hsm rules [name]
    parser_rules = subparsers.add_parser("rules", help="Generate static window rules for a session")
    parser_rules.add_argument("name", nargs="?", default=DEFAULT_SESSION_NAME, help="Session name")
    parser_rules.add_argument(
        "--no-source",
        action="store_true",
        help="Do not add a source line to hyprland.conf",
    )

    # hsm list
    subparsers.add_parser("list", help="List saved sessions")

    # hsm show [name]
    parser_show = subparsers.add_parser("show", help="Show windows in a saved session")
    parser_show.add_argument("name", nargs="?", default=DEFAULT_SESSION_NAME, help="Session name")

    # hsm delete <name>
    parser_delete = subparsers.add_parser("delete", help="Delete a saved session")
    parser_delete.add_argument("name", help="Session name")

    return parser


def cli_main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, debug=args.debug)

    if not args.command:
        parser.print_help()
        return 1

    return asyncio.run(COMMANDS[args.command](args))
