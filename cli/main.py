"""Main CLI entry point for lafite2mbox."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lafite2mbox import __version__
from lafite2mbox.config.config_loader import ConfigError, ConfigLoader
from lafite2mbox.models.debug import DebugCategory
from lafite2mbox.services.batch.file_converter import FileConverter
from lafite2mbox.storage.audit_log import AuditLog

USAGE_EPILOG = """
To convert a single file:
    lafite2mbox --laurel mailfile.mail --mbox mailfile.mbox

To convert an entire directory:
    lafite2mbox --indir /my/lafite/dir --outdir /my/mbox/dir

Using --indir, the Laurel/Lafite files are assumed to have names ending in '.mail';
using --outdir, each mbox file is named after its Lafite file with '.mbox' appended.
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lafite2mbox",
        description="Convert Laurel/Lafite mail files to mbox format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE_EPILOG,
    )
    parser.add_argument("--laurel", type=Path, metavar="FILE", help="Lafite file to convert")
    parser.add_argument("--mbox", type=Path, metavar="FILE", help="mbox file to write")
    parser.add_argument("--indir", type=Path, metavar="DIR", help="Directory of Lafite files")
    parser.add_argument("--outdir", type=Path, metavar="DIR", help="Directory for mbox files")
    parser.add_argument(
        "--debug",
        action="append",
        choices=[category.value for category in DebugCategory],
        default=[],
        help="Trace a category of conversion details (repeatable)",
    )
    parser.add_argument(
        "--no-escape-from",
        action="store_true",
        help="Do not prefix body lines starting with 'From ' with '>'",
    )
    parser.add_argument("--config", type=Path, help="Custom config file path")
    parser.add_argument("--audit-log", type=Path, help="Append conversion events to this file")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_file_converter(args: argparse.Namespace) -> FileConverter:
    """Build a FileConverter from the config file and command line overrides."""
    config = ConfigLoader(args.config).load_app_config()

    if args.debug:
        categories = list(config.conversion.debug)
        for value in args.debug:
            category = DebugCategory(value)
            if category not in categories:
                categories.append(category)
        config.conversion.debug = categories
    if args.no_escape_from:
        config.conversion.escape_from_lines = False
    if args.audit_log:
        config.storage.audit_log_path = str(args.audit_log)

    audit_log_path = config.storage.get_audit_log_path()
    audit_log = AuditLog(audit_log_path) if audit_log_path else None

    return FileConverter(config=config, audit_log=audit_log)


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Args:
        argv: Command line arguments. If None, uses sys.argv.

    Returns:
        Exit code: 0 on success, 1 if a conversion failed or both modes were
        requested, 2 for incomplete arguments or configuration errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger("lafite2mbox")

    if args.laurel is None and args.mbox is None and args.indir is None and args.outdir is None:
        parser.print_help()
        return 0

    if args.laurel is not None and args.indir is not None:
        logger.error("Can't handle both --indir and --laurel. Pick one.")
        return 1

    try:
        converter = build_file_converter(args)
    except (ConfigError, OSError) as e:
        logger.error("%s", e)
        return 2

    if args.laurel is not None:
        if args.mbox is None:
            logger.error("You must specify --laurel and --mbox")
            return 2
        result = converter.convert_file(args.laurel, args.mbox)
        if not result.success:
            return 1
        print(f"Converted {result.messages_converted} message(s) to {args.mbox}")
        return 0

    if args.mbox is not None:
        logger.error("You must specify --laurel and --mbox")
        return 2

    if args.indir is None or args.outdir is None:
        logger.error("You must specify --indir and --outdir")
        return 2

    try:
        batch = converter.convert_directory(args.indir, args.outdir)
    except OSError as e:
        logger.error("Could not convert %s: %s", args.indir, e)
        return 2

    print(f"Converted {batch.succeeded} of {batch.total} file(s) in {args.indir}")
    for result in batch.results:
        if not result.success:
            print(f"  - {result.input_path.name}: {result.fatal_issue.details}")
    return 0 if batch.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
