import logging
from collections import defaultdict
from pathlib import Path, PurePosixPath
from typing import Dict, Optional

from .. import config
from ..models import CaptureDate, Placement


def resolve(date: Optional[CaptureDate], filename: str) -> Placement:
    """
    Canonical destination for a kept entry: YYYY/YYYY-MM-DD/<basename>.
    Nested archive folders are flattened; unknown dates go to the
    unknown-date bucket.
    """
    name = PurePosixPath(filename.replace('\\', '/')).name
    if date is None:
        return Placement(config.UNKNOWN_DATE_FOLDER, None, name)

    year, folder = config.FOLDER_PATTERN.format(
        year=date.year, month=date.month, day=date.day
    ).split('/')
    return Placement(year, folder, name)


def index_existing_date_dirs(output_root: Path) -> Dict[str, str]:
    """
    Maps 'YYYY-MM-DD' -> existing folder name for dated folders already in
    the output root, e.g. '2025-10-28' -> '2025-10-28_special_event'.
    When several folders share a date, the alphabetically first wins.
    """
    existing: Dict[str, str] = {}
    if not output_root.is_dir():
        return existing

    for year_dir in sorted(output_root.iterdir()):
        if not (year_dir.is_dir() and year_dir.name.isdigit() and len(year_dir.name) == 4):
            continue
        for day_dir in sorted(year_dir.iterdir()):
            if not day_dir.is_dir():
                continue
            prefix = day_dir.name[:10]
            if prefix.startswith(f"{year_dir.name}-") and prefix not in existing:
                existing[prefix] = day_dir.name
    return existing


class DestinationPlanner:
    """
    Turns canonical placements into final ones for a single run:
    reuses existing dated folders and disambiguates colliding names.
    """

    def __init__(self, existing_date_dirs: Optional[Dict[str, str]] = None):
        self.existing_date_dirs = existing_date_dirs or {}
        # Cache used names to prevent collisions within a single run
        self.used_names = defaultdict(set)

    @classmethod
    def for_output_root(cls, output_root: Path) -> "DestinationPlanner":
        existing = index_existing_date_dirs(output_root)
        if existing:
            logging.info(f"Reusing {len(existing)} existing dated folder(s) in {output_root}")
        return cls(existing)

    def plan(self, date: Optional[CaptureDate], filename: str) -> Placement:
        placement = resolve(date, filename)

        folder = placement.folder
        if folder is not None:
            folder = self.existing_date_dirs.get(folder, folder)

        parent = (placement.year, folder)
        final_name = self._resolve_collision(parent, placement.filename)
        if final_name != placement.filename:
            logging.info(f"Name collision in {'/'.join(p for p in parent if p)}: "
                         f"{placement.filename} -> {final_name}")
        return Placement(placement.year, folder, final_name)

    def _resolve_collision(self, parent, filename: str) -> str:
        """Ensures filename is unique in the destination folder."""
        stem = PurePosixPath(filename).stem
        ext = PurePosixPath(filename).suffix
        candidate = filename
        counter = 1

        # Case-insensitive so that IMG.JPG and img.jpg cannot clobber each other
        while candidate.lower() in self.used_names[parent]:
            candidate = f"{stem}_{counter}{ext}"
            counter += 1

        self.used_names[parent].add(candidate.lower())
        return candidate
