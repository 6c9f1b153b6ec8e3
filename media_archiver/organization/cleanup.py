import logging
from pathlib import Path
from typing import List

from ..scanning.filesystem import DiskScanner, is_dir_empty


class DirectoryPruner:
    """
    Removes directories left empty under a root. Best effort: every
    failure is a warning, nothing here aborts a run.
    """

    def __init__(self, scanner: DiskScanner, dry_run: bool = False):
        self.scanner = scanner
        self.dry_run = dry_run

    def prune(self, root: Path) -> List[Path]:
        """
        Single top-down pass; the root itself is kept.

        A parent is checked before its children, so a directory that only
        becomes empty once its empty children are gone survives until the
        next run.
        """
        removed = []
        for directory in self.scanner.iter_directories(root):
            try:
                empty = is_dir_empty(directory)
            except OSError as e:
                logging.warning(f"Could not determine if directory {directory} is empty: {e}")
                continue

            if not empty:
                continue

            if self.dry_run:
                logging.info(f"[DRY RUN] Would remove empty directory {directory}")
                removed.append(directory)
                continue

            try:
                directory.rmdir()
            except OSError as e:
                logging.warning(f"Directory {directory} cannot be removed: {e}")
                continue

            logging.info(f"Removed empty directory {directory}")
            removed.append(directory)

        return removed
