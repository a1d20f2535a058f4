import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Tuple

from ..exceptions import OutputWriteError
from ..models import Placement


class FileWriter:
    """
    Writes kept entries below the output root.
    """

    def __init__(self, output_root: Path, dry_run: bool = False):
        self.output_root = Path(output_root)
        self.dry_run = dry_run

    def ensure_root(self):
        """Creates the output root; fatal if it cannot be created or written."""
        if self.dry_run:
            return
        try:
            self.output_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(f"Cannot create output directory {self.output_root}: {e}") from e
        if not os.access(self.output_root, os.W_OK):
            raise OutputWriteError(f"Output directory {self.output_root} is not writable")

    def full_path(self, placement: Placement) -> Path:
        return self.output_root / placement.relative_path

    @staticmethod
    def _same_content(path: Path, content: bytes) -> bool:
        if path.stat().st_size != len(content):
            return False
        return path.read_bytes() == content

    def write(self, placement: Placement, content: bytes) -> Tuple[Placement, bool]:
        """
        Writes content to the placement and returns (final placement, written).

        A file already on disk with the same bytes is left untouched and
        reported as not written, so re-running over the same export is safe.
        A different file under the same name is never overwritten: the entry
        goes to the first free or identical `stem_n.ext` next to it instead.
        Raises OSError on write failure.
        """
        stem, ext = os.path.splitext(placement.filename)
        target = placement
        counter = 1
        dest = self.full_path(target)
        while dest.exists():
            if dest.is_file() and self._same_content(dest, content):
                logging.debug(f"Already present, leaving as is: {dest}")
                return target, False
            target = replace(placement, filename=f"{stem}_{counter}{ext}")
            dest = self.full_path(target)
            counter += 1

        if target != placement:
            logging.info(f"{self.full_path(placement)} holds a different file, using {dest.name} instead")

        if self.dry_run:
            logging.info(f"[DRY RUN] Write {dest}")
            return target, True

        dest.parent.mkdir(parents=True, exist_ok=True)
        with open(dest, 'wb') as f:
            f.write(content)
        return target, True
