import logging
import re
from pathlib import PurePosixPath
from typing import AbstractSet, Iterable, List, Optional

from .. import config


class EditedFileLinker:
    """
    Pairs Google's edited copies ("IMG_1234-edited.jpg") with their originals
    ("IMG_1234.jpg") by name within one import batch.

    Google appends the marker to the stem and keeps any Takeout duplicate
    counter after it: "IMG_1234-edited(1).jpg" -> "IMG_1234(1).jpg".
    Localized exports use a different word, hence edited_word.
    """

    def __init__(self, edited_word: str = config.EDITED_WORD):
        self.edited_word = edited_word
        self._pattern = re.compile(
            r'^(?P<base>.+)-' + re.escape(edited_word) + r'(?P<counter>\(\d+\))?$',
            re.IGNORECASE,
        )

    def is_edited(self, filename: str) -> bool:
        return self._pattern.match(PurePosixPath(filename).stem) is not None

    def original_name(self, filename: str) -> Optional[str]:
        """Name the original would have, or None if filename is not an edited copy."""
        p = PurePosixPath(filename)
        m = self._pattern.match(p.stem)
        if not m:
            return None
        return f"{m.group('base')}{m.group('counter') or ''}{p.suffix}"

    def has_original(self, filename: str, filename_set: AbstractSet[str]) -> bool:
        original = self.original_name(filename)
        return original is not None and original in filename_set

    def find_orphaned_edits(self, filenames: Iterable[str]) -> List[str]:
        """
        Edited copies whose original is absent from the batch. These are kept,
        since they are the only copy of the photo in this export.
        """
        names = list(filenames)
        name_set = frozenset(names)
        orphans = [n for n in names if self.is_edited(n) and not self.has_original(n, name_set)]
        if orphans:
            logging.info(f"Found {len(orphans)} edited file(s) without originals; keeping them.")
        return orphans
