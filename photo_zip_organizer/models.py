from collections import Counter
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

from . import config


class Action(Enum):
    KEEP = "keep"
    SKIP = "skip"


class SkipReason(Enum):
    DSLR_CAMERA = "DslrCamera"
    LIGHTROOM_SOFTWARE = "LightroomSoftware"
    GOOGLE_MIX_FILE = "GoogleMixFile"
    EDITED_ORIGINAL_EXISTS = "EditedOriginalExists"


class DateSource(Enum):
    EXIF = "exif"
    FILENAME = "filename"


@dataclass(frozen=True)
class ImageMetadata:
    """
    EXIF fields the organizer cares about. Values are raw tag strings;
    datetime_original is parsed later by the date extractor.
    """
    make: Optional[str] = None
    model: Optional[str] = None
    software: Optional[str] = None
    datetime_original: Optional[str] = None


@dataclass(frozen=True)
class ImportEntry:
    """
    One image pulled out of the source archive.
    """
    original_path: str      # full nested path inside the archive
    content: bytes = field(repr=False)
    metadata: Optional[ImageMetadata] = None

    @property
    def filename(self) -> str:
        # Archive names always use '/', but directory input on Windows may not.
        return PurePosixPath(self.original_path.replace('\\', '/')).name


@dataclass(frozen=True)
class CaptureDate:
    year: int
    month: int
    day: int
    time_of_day: Optional[time] = None
    source: DateSource = DateSource.FILENAME

    @property
    def calendar_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return self.calendar_date.isoformat()


@dataclass(frozen=True)
class Decision:
    action: Action
    reason: Optional[SkipReason] = None

    @classmethod
    def keep(cls) -> "Decision":
        return cls(Action.KEEP)

    @classmethod
    def skip(cls, reason: SkipReason) -> "Decision":
        return cls(Action.SKIP, reason)

    @property
    def is_keep(self) -> bool:
        return self.action is Action.KEEP


@dataclass(frozen=True)
class Placement:
    """
    Destination of a kept entry, relative to the output root.
    folder is None for the unknown-date bucket.
    """
    year: str
    folder: Optional[str]
    filename: str

    @property
    def relative_path(self) -> Path:
        if self.folder is None:
            return Path(self.year) / self.filename
        return Path(self.year) / self.folder / self.filename

    @property
    def is_unknown_date(self) -> bool:
        return self.year == config.UNKNOWN_DATE_FOLDER


@dataclass(frozen=True)
class EntryResult:
    entry: ImportEntry
    decision: Decision
    capture_date: Optional[CaptureDate] = None
    placement: Optional[Placement] = None


@dataclass
class OrganizeSummary:
    total_files: int = 0
    kept_files: int = 0
    skipped: Counter = field(default_factory=Counter)   # SkipReason -> count
    unknown_date_files: int = 0
    written_files: int = 0
    already_present: int = 0
    errors: List[str] = field(default_factory=list)
    orphaned_edits: List[str] = field(default_factory=list)

    @property
    def skipped_files(self) -> int:
        return sum(self.skipped.values())

    def skipped_by_reason(self) -> Dict[str, int]:
        return {reason.value: count for reason, count in self.skipped.items()}
