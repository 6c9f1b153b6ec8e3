"""
Custom exception hierarchy for the media archiver.

Per-file problems are raised as MetadataExtractionError and turned into
skip outcomes by the caller. FileOperationError is fatal for a run.
"""


class MediaArchiverError(Exception):
    """Base exception for all media archiver errors."""
    pass


class FileHashError(MediaArchiverError):
    """Raised when a content digest is misused (e.g. finalized twice)."""
    pass


class MetadataExtractionError(MediaArchiverError):
    """Raised when metadata cannot be extracted from a file."""
    pass


class FileOperationError(MediaArchiverError):
    """Raised when walking, directory creation or move operations fail."""
    pass
