import os
import logging
from pathlib import Path
from typing import Iterator, Set, Optional, List, Tuple

from ..exceptions import FileOperationError
from ..models import MediaFile


class DiskScanner:
    def __init__(self, skip_dirs: Optional[Set[Path]] = None):
        # Subtrees never visited (e.g. a destination nested in the source)
        self.skip_dirs = skip_dirs or set()

    def scan(self, root: Path) -> Iterator[MediaFile]:
        """
        Generator that yields a MediaFile for every supported file in root.
        Unsupported extensions are not reported at all.
        """
        for path in self.iter_files(root):
            media = MediaFile.from_path(path)
            if media:
                yield media
            else:
                logging.debug(f"Ignoring {path}")

    def iter_files(self, root: Path) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir.
        An unreadable directory is fatal: the move pass must not silently
        cover only part of the tree.
        """
        stack = [root]
        while stack:
            current = stack.pop()
            if self._is_skipped(current):
                continue

            try:
                dirs, files = self._list_dir(current)
            except OSError as e:
                raise FileOperationError(f"Cannot read directory {current}: {e}") from e

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

            for f in files:
                yield f

    def iter_directories(self, root: Path) -> Iterator[Path]:
        """
        Top-down walk yielding every directory below root, parent first.

        Children are listed only after the parent has been yielded, so a
        consumer may remove the directory it was handed. Listing failures
        are logged and the subtree is skipped.
        """
        stack = [root]
        while stack:
            current = stack.pop()
            if self._is_skipped(current):
                continue
            if current != root:
                yield current

            try:
                dirs, _ = self._list_dir(current)
            except FileNotFoundError:
                # Removed by the consumer
                continue
            except OSError as e:
                logging.warning(f"Cannot list directory {current}: {e}")
                continue

            for d in reversed(dirs):
                stack.append(d)

    def _list_dir(self, directory: Path) -> Tuple[List[Path], List[Path]]:
        with os.scandir(directory) as it:
            entries = list(it)

        # Sort for stable traversal order
        entries.sort(key=lambda e: e.name)

        dirs = []
        files = []
        for e in entries:
            if e.is_dir(follow_symlinks=False):
                dirs.append(Path(e.path))
            elif e.is_file(follow_symlinks=False):
                files.append(Path(e.path))
        return dirs, files

    def _is_skipped(self, path: Path) -> bool:
        return any(sd == path or sd in path.parents for sd in self.skip_dirs)


def is_dir_empty(path: Path) -> bool:
    with os.scandir(path) as it:
        return next(it, None) is None
