"""Registry for CLI subcommands."""

from .archive_command import ArchiveCommand
from .extract_command import ExtractCommand

COMMANDS = (
    ArchiveCommand,
    ExtractCommand,
)

__all__ = ["COMMANDS", "ArchiveCommand", "ExtractCommand"]
