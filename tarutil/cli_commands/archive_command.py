"""Archive command handling for the tarutil CLI."""

from tarutil.cli_helpers import report_failure
from tarutil.common.config import TarutilSettings
from tarutil.core.archiver import archive


class ArchiveCommand:
    """Handles archive creation."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add archive command parser to subparsers."""
        parser = subparsers.add_parser('archive', help='Create a .tar or .tar.gz archive')
        parser.add_argument('src', help='File or directory to archive')
        parser.add_argument('dst', help='Destination archive path (.tar or .tar.gz)')
        parser.add_argument('--exclude', action='append', default=[], metavar='SUBSTR',
                            help='Skip entries whose relative path contains SUBSTR (repeatable)')
        parser.set_defaults(func=ArchiveCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Create the archive."""
        settings = getattr(args, "settings", None)
        if not isinstance(settings, TarutilSettings):
            settings = TarutilSettings()
        excludes = settings.default_excludes() + list(args.exclude)

        try:
            archive(args.src, args.dst, *excludes)
        except Exception as exc:
            report_failure(exc, "Archive")
        print(f"Created {args.dst}")
