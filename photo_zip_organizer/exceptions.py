"""
Custom exception hierarchy for the photo ZIP organizer.

Fatal errors (archive, output root) stop the run; metadata errors are
absorbed per entry.
"""


class PhotoZipOrganizerError(Exception):
    """Base exception for all photo ZIP organizer errors."""
    pass


class ArchiveReadError(PhotoZipOrganizerError):
    """Raised when the input archive or directory cannot be opened or read."""
    pass


class OutputWriteError(PhotoZipOrganizerError):
    """Raised when the output root cannot be created or written to."""
    pass


class MetadataExtractionError(PhotoZipOrganizerError):
    """Raised when metadata cannot be extracted from an entry's bytes."""
    pass
