import logging
from pathlib import Path

from tqdm import tqdm

from . import config
from .exceptions import MetadataExtractionError
from .metadata.extract import MetadataExtractor
from .models import (
    MediaFile, FileOutcome, RunSummary,
    MOVED, PLANNED, DUPLICATE, NO_METADATA, FAILED,
)
from .organization.cleanup import DirectoryPruner
from .organization.mover import FileMover
from .organization.rules import derive_path
from .scanning.filesystem import DiskScanner


class MediaArchiverApp:
    def __init__(self, dry_run: bool = False, show_progress: bool = False):
        self.dry_run = dry_run
        self.show_progress = show_progress
        self.extractor = MetadataExtractor()
        self.mover = FileMover(dry_run=dry_run)

    def organize(self, src_root: Path, dest_root: Path) -> RunSummary:
        """
        Executes both passes over src_root.
        1. Classify & Move (into dest_root, skipping duplicates)
        2. Prune directories left empty

        Pass 2 only starts once pass 1 went through the whole tree. A
        FileOperationError from pass 1 propagates and ends the run; files
        moved before it stay moved.
        """
        # The archive may live inside the source tree; never re-walk it
        scanner = DiskScanner(skip_dirs={dest_root / d for d in config.CATEGORY_DIRS.values()})
        summary = RunSummary()

        # --- Pass 1: Classify & Move ---
        logging.info(f"Organizing {src_root} -> {dest_root} (DryRun={self.dry_run})")
        files = tqdm(scanner.scan(src_root), desc="Organizing", unit="file", disable=not self.show_progress)
        for media in files:
            outcome = self.process_file(media, dest_root)
            self._report(outcome)
            summary.record(outcome)

        # --- Pass 2: Prune ---
        pruner = DirectoryPruner(scanner, dry_run=self.dry_run)
        summary.removed_dirs = len(pruner.prune(src_root))

        logging.info(
            f"Done. Moved {summary.moved}, planned {summary.planned}, "
            f"duplicates {summary.duplicates}, no metadata {summary.no_metadata}, "
            f"failed {summary.failed}, removed {summary.removed_dirs} empty directories."
        )
        return summary

    def process_file(self, media: MediaFile, dest_root: Path) -> FileOutcome:
        """
        Handles one file. Soft failures come back as an outcome; only
        structural filesystem errors (FileOperationError) escape.
        """
        try:
            extraction = self.extractor.extract(media)
        except MetadataExtractionError as e:
            return FileOutcome(media.path, FAILED, error=e)

        if not extraction.has_timestamp:
            return FileOutcome(media.path, NO_METADATA)

        rel = derive_path(media.category, extraction.capture_datetime, extraction.digest, media.ext)
        return self.mover.place(media.path, dest_root / rel)

    def _report(self, outcome: FileOutcome):
        if outcome.status == MOVED:
            logging.info(f"Moved {outcome.source} to {outcome.destination}")
        elif outcome.status == PLANNED:
            logging.info(f"[DRY RUN] Would move {outcome.source} to {outcome.destination}")
        elif outcome.status == DUPLICATE:
            logging.warning(f"{outcome.source} has a duplicate at {outcome.destination}")
        elif outcome.status == NO_METADATA:
            logging.warning(f"No metadata for {outcome.source}")
        elif outcome.status == FAILED:
            logging.warning(f"Skipped: {outcome.error}")
