"""Extract command handling for the tarutil CLI."""

from tarutil.cli_helpers import report_failure
from tarutil.common.config import TarutilSettings
from tarutil.core.extractor import extract


class ExtractCommand:
    """Handles archive extraction."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add extract command parser to subparsers."""
        parser = subparsers.add_parser('extract', help='Extract a .tar or .tar.gz archive')
        parser.add_argument('src', help='Archive to extract (.tar or .tar.gz)')
        parser.add_argument('dst', nargs='?', default=None,
                            help='Destination directory (default: TARUTIL_EXTRACT_DIR or the current directory)')
        parser.set_defaults(func=ExtractCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Extract the archive."""
        settings = getattr(args, "settings", None)
        if not isinstance(settings, TarutilSettings):
            settings = TarutilSettings()
        dst = args.dst if args.dst is not None else settings.default_extract_dir()

        try:
            extract(args.src, dst)
        except Exception as exc:
            report_failure(exc, "Extract")
        print(f"Extracted {args.src} to {dst or '.'}")
