"""
Command Line Interface for tarutil.

Provides the `archive` and `extract` subcommands.
"""

import argparse
import sys
from typing import List, Optional

from tarutil._version import __version__
from tarutil.cli_commands import COMMANDS
from tarutil.common.config import TarutilSettings
from tarutil.common.constants import ExitCodes
from tarutil.common.logging_config import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='tarutil',
        description='Create and extract .tar / .tar.gz archives'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--log-level', default=None,
                        help='Logging level (overrides TARUTIL_LOG_LEVEL)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    # If no arguments provided, show help
    if not args:
        parser.print_help()
        sys.exit(ExitCodes.OK)

    parsed_args = parser.parse_args(args)
    settings = TarutilSettings()
    parsed_args.settings = settings
    configure_logging(parsed_args.log_level or settings.log_level())

    if hasattr(parsed_args, 'func'):
        parsed_args.func(parsed_args)
    else:
        parser.print_help()
        sys.exit(ExitCodes.OK)


if __name__ == '__main__':
    main()
