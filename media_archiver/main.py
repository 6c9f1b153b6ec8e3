import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, List

from . import config
from .core import MediaArchiverApp


class _BelowWarning(logging.Filter):
    def filter(self, record):
        return record.levelno < logging.WARNING


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """
    Progress goes to stdout, skips/duplicates/errors to stderr, and
    everything to log_file when one is given.
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowWarning())
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    handlers = [stdout_handler, stderr_handler]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format=config.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("hachoir").setLevel(logging.ERROR)


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        description="Media Archiver: move photos and videos into a dated, content-addressed archive"
    )

    p.add_argument("src", type=Path, help="Source directory to organize (kept even if left empty)")
    p.add_argument("dest", type=Path, help="Destination archive root")

    p.add_argument("--dry-run", action="store_true", help="Report planned moves without modifying disk")
    p.add_argument("--progress", action="store_true", help="Show a progress bar while organizing")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)

    src_root = args.src.resolve()
    dest_root = args.dest.resolve()

    setup_logging(args.verbose, args.log_file)

    if not src_root.is_dir():
        logging.error(f"Source {src_root} is not a directory")
        sys.exit(1)

    app = MediaArchiverApp(dry_run=args.dry_run, show_progress=args.progress)

    try:
        app.organize(src_root=src_root, dest_root=dest_root)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Fatal error during organization: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
