import os
import shutil
from pathlib import Path

from ..exceptions import FileOperationError
from ..models import FileOutcome, MOVED, PLANNED, DUPLICATE


class FileMover:
    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def place(self, src: Path, dest: Path) -> FileOutcome:
        """
        Moves src to dest unless something already sits at dest.

        An existing destination is reported as a duplicate and the source is
        left alone; it is never overwritten or deleted. Failing to create
        the parent directory or to move raises FileOperationError.
        """
        self.ensure_parent(dest)

        # lexists: a dangling symlink still occupies the name
        if os.path.lexists(dest):
            return FileOutcome(src, DUPLICATE, destination=dest)

        if self.dry_run:
            return FileOutcome(src, PLANNED, destination=dest)

        try:
            shutil.move(str(src), str(dest))
        except OSError as e:
            raise FileOperationError(f"Cannot move {src} to {dest}: {e}") from e
        return FileOutcome(src, MOVED, destination=dest)

    def ensure_parent(self, dest: Path):
        parent = dest.parent
        if parent.exists():
            if not parent.is_dir():
                raise FileOperationError(f"{parent} exists and is not a directory")
            return

        if self.dry_run:
            return

        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Cannot create directory {parent}: {e}") from e
