from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from . import config
from .organization.rules import normalize_extension

# FileOutcome statuses
MOVED = 'moved'
PLANNED = 'planned'          # dry run: would have been moved
DUPLICATE = 'duplicate'
NO_METADATA = 'no_metadata'
FAILED = 'failed'


@dataclass(frozen=True)
class MediaFile:
    """
    A supported file found during a walk of the source tree.
    """
    path: Path
    category: str           # image/video
    ext: str                # lowercase, aliases collapsed

    @classmethod
    def from_path(cls, path: Path) -> Optional["MediaFile"]:
        ext = path.suffix.lower()
        category = config.EXT_TO_CATEGORY.get(ext)
        if category is None or path.name.startswith(config.IGNORED_PREFIXES):
            return None
        return cls(path=path, category=category, ext=normalize_extension(ext))


@dataclass
class Extraction:
    capture_datetime: Optional[datetime] = None
    digest: Optional[bytes] = None

    @property
    def has_timestamp(self) -> bool:
        return self.capture_datetime is not None and self.digest is not None


@dataclass
class FileOutcome:
    """
    Result of handling one file in the move pass.
    """
    source: Path
    status: str
    destination: Optional[Path] = None
    error: Optional[Exception] = None


@dataclass
class RunSummary:
    moved: int = 0
    planned: int = 0
    duplicates: int = 0
    no_metadata: int = 0
    failed: int = 0
    removed_dirs: int = 0

    def record(self, outcome: FileOutcome):
        if outcome.status == MOVED:
            self.moved += 1
        elif outcome.status == PLANNED:
            self.planned += 1
        elif outcome.status == DUPLICATE:
            self.duplicates += 1
        elif outcome.status == NO_METADATA:
            self.no_metadata += 1
        elif outcome.status == FAILED:
            self.failed += 1
        else:
            raise ValueError(f"Unknown outcome status: {outcome.status}")

    @property
    def processed(self) -> int:
        return self.moved + self.planned + self.duplicates + self.no_metadata + self.failed
