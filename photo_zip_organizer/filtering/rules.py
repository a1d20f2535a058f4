import re
from pathlib import PurePosixPath
from typing import AbstractSet, Callable, Iterable, List, NamedTuple, Sequence

from .. import config
from ..metadata.linking import EditedFileLinker
from ..models import Decision, ImportEntry, SkipReason

Predicate = Callable[[ImportEntry, AbstractSet[str]], bool]


class FilterRule(NamedTuple):
    """A named skip condition. The reason is only used for reporting."""
    reason: SkipReason
    matches: Predicate


def dslr_camera_rule(markers: Iterable[str] = config.DSLR_MARKERS) -> FilterRule:
    markers = tuple(m.upper() for m in markers)

    def matches(entry: ImportEntry, filename_set: AbstractSet[str]) -> bool:
        md = entry.metadata
        if md is None:
            return False
        for field in (md.make, md.model):
            if field and any(m in field.upper() for m in markers):
                return True
        return False

    return FilterRule(SkipReason.DSLR_CAMERA, matches)


def lightroom_rule() -> FilterRule:
    def matches(entry: ImportEntry, filename_set: AbstractSet[str]) -> bool:
        md = entry.metadata
        return bool(md and md.software and config.LIGHTROOM_MARKER in md.software.lower())

    return FilterRule(SkipReason.LIGHTROOM_SOFTWARE, matches)


def google_mix_rule() -> FilterRule:
    # "-MIX" right before the extension, Takeout counter allowed: "x-MIX(1).jpg"
    pattern = re.compile(r'-' + re.escape(config.MIX_MARKER) + r'(\(\d+\))?$', re.IGNORECASE)

    def matches(entry: ImportEntry, filename_set: AbstractSet[str]) -> bool:
        return pattern.search(PurePosixPath(entry.filename).stem) is not None

    return FilterRule(SkipReason.GOOGLE_MIX_FILE, matches)


def edited_original_rule(linker: EditedFileLinker = None) -> FilterRule:
    linker = linker or EditedFileLinker()

    def matches(entry: ImportEntry, filename_set: AbstractSet[str]) -> bool:
        return linker.has_original(entry.filename, filename_set)

    return FilterRule(SkipReason.EDITED_ORIGINAL_EXISTS, matches)


def build_rules(dslr_markers: Iterable[str] = config.DSLR_MARKERS,
                edited_word: str = config.EDITED_WORD) -> List[FilterRule]:
    """Default rule chain, in evaluation order."""
    return [
        dslr_camera_rule(dslr_markers),
        lightroom_rule(),
        google_mix_rule(),
        edited_original_rule(EditedFileLinker(edited_word)),
    ]


DEFAULT_RULES = build_rules()


def classify(entry: ImportEntry,
             filename_set: AbstractSet[str],
             filter_enabled: bool = True,
             rules: Sequence[FilterRule] = DEFAULT_RULES) -> Decision:
    """
    Decides whether an entry duplicates a photo already organized elsewhere.
    First matching rule wins; with filtering disabled everything is kept.
    """
    if not filter_enabled:
        return Decision.keep()

    for rule in rules:
        if rule.matches(entry, filename_set):
            return Decision.skip(rule.reason)
    return Decision.keep()
