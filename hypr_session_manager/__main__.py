"""Entry point for the hsm CLI."""

import sys


def main() -> int:
    """Main entry point."""
    from hypr_session_manager.cli.commands import cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
